from datetime import datetime, timedelta, timezone

from jose import jwt

from app.config import settings
from app.models.schedule import Schedule  # noqa: F401  relationship target must be registered
from app.models.schedule_block import ScheduleBlock
from app.utils.timeslots import parse_time


def make_block(id, course_code, day, start, end, color="", schedule_id=1):
    return ScheduleBlock(
        id=id,
        schedule_id=schedule_id,
        course_code=course_code,
        day_of_week=day,
        start_time=parse_time(start),
        end_time=parse_time(end),
        color=color,
    )


def make_token(sub, expires_minutes=60):
    # 正式環境的 token 由外部登入服務簽發
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": sub, "exp": expire}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
