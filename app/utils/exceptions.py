# app/utils/exceptions.py


class ScheduleValidationError(ValueError):
    """Malformed schedule input: bad day, bad time, or a non-positive duration."""


class ShareCodeError(ScheduleValidationError):
    """A share code that cannot be decoded into a schedule."""
