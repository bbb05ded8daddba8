from datetime import time
from typing import List, Union

from app.utils.exceptions import ScheduleValidationError

MIN_DAY = 1
MAX_DAY = 7
DAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

SECONDS_PER_DAY = 24 * 60 * 60

TimeLike = Union[time, str]


def validate_day(day) -> int:
    if isinstance(day, bool) or not isinstance(day, int) or not (MIN_DAY <= day <= MAX_DAY):
        raise ScheduleValidationError(f"Invalid day_of_week: {day!r} (expected {MIN_DAY}-{MAX_DAY})")
    return day


def day_name(day: int) -> str:
    return DAY_NAMES[validate_day(day)]


def parse_time(value: TimeLike) -> time:
    """
    "09:00" / "09:00:00" / time(9, 0) -> time(9, 0)
    """
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise ScheduleValidationError(f"Invalid time: {value!r}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isascii() and p.isdigit() for p in parts):
        raise ScheduleValidationError(f"Invalid time format: {value!r}")

    h, m = int(parts[0]), int(parts[1])
    s = int(parts[2]) if len(parts) == 3 else 0
    if not (0 <= h <= 23 and 0 <= m <= 59 and 0 <= s <= 59):
        raise ScheduleValidationError(f"Invalid time value: {value!r}")
    return time(h, m, s)


def to_seconds(value: TimeLike) -> int:
    t = parse_time(value)
    return t.hour * 3600 + t.minute * 60 + t.second


def from_seconds(seconds: int) -> time:
    if not (0 <= seconds < SECONDS_PER_DAY):
        raise ScheduleValidationError(f"Time out of day range: {seconds}s")
    h, rest = divmod(seconds, 3600)
    m, s = divmod(rest, 60)
    return time(h, m, s)


def validate_interval(start: TimeLike, end: TimeLike) -> tuple[time, time]:
    start_t, end_t = parse_time(start), parse_time(end)
    if to_seconds(end_t) <= to_seconds(start_t):
        raise ScheduleValidationError(
            f"end_time must be after start_time ({format_hhmm(start_t)} >= {format_hhmm(end_t)})"
        )
    return start_t, end_t


def format_hhmm(value: TimeLike) -> str:
    return parse_time(value).strftime("%H:%M")


def time_range_label(start: TimeLike, end: TimeLike) -> str:
    return f"{format_hhmm(start)} - {format_hhmm(end)}"


def generate_time_slots(start_hour: int, end_hour: int, step_minutes: int = 30) -> List[str]:
    """
    (7, 21, 30) -> ["07:00", "07:30", ..., "21:30"]
    end_hour 本身也包含進去（最後一格從 end_hour 開始）
    """
    if step_minutes <= 0 or 60 % step_minutes != 0:
        raise ScheduleValidationError(f"step_minutes must divide an hour: {step_minutes}")
    if not (0 <= start_hour <= end_hour <= 23):
        raise ScheduleValidationError(f"Invalid grid hours: {start_hour}-{end_hour}")

    slots = []
    for hour in range(start_hour, end_hour + 1):
        for minute in range(0, 60, step_minutes):
            slots.append(f"{hour:02d}:{minute:02d}")
    return slots
