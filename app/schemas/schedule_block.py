from typing import List, Optional
from datetime import time
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.utils.timeslots import MAX_DAY, MIN_DAY, validate_interval


class _IntervalMixin(BaseModel):
    @model_validator(mode="after")
    def _end_after_start(self):
        validate_interval(self.start_time, self.end_time)
        return self


class BlockCreate(_IntervalMixin):
    course_code: str = Field(min_length=1, max_length=32)
    course_title: Optional[str] = Field(None, max_length=255)
    section: Optional[str] = Field(None, max_length=20)
    room: Optional[str] = Field("TBD", max_length=50)
    day_of_week: int = Field(ge=MIN_DAY, le=MAX_DAY)
    start_time: time
    end_time: time
    # None -> 依課號自動配色
    color: Optional[str] = Field(None, max_length=50)
    font_color: str = Field("#000000", max_length=20)
    font_size: str = Field("text-xs", max_length=20)


class CourseAddIn(_IntervalMixin):
    """One course meeting on several days (e.g. M-TH 09:00-10:30)."""
    course_code: str = Field(min_length=1, max_length=32)
    course_title: Optional[str] = Field(None, max_length=255)
    section: Optional[str] = Field(None, max_length=20)
    room: Optional[str] = Field("TBD", max_length=50)
    days_of_week: List[int] = Field(min_length=1)
    start_time: time
    end_time: time
    color: Optional[str] = Field(None, max_length=50)

    @field_validator("days_of_week")
    @classmethod
    def _valid_days(cls, v):
        for d in v:
            if not (MIN_DAY <= d <= MAX_DAY):
                raise ValueError(f"day_of_week must be between {MIN_DAY} and {MAX_DAY}")
        # 去重 + 保持順序
        return list(dict.fromkeys(v))


class BlockUpdate(BaseModel):
    course_code: Optional[str] = Field(None, min_length=1, max_length=32)
    course_title: Optional[str] = Field(None, max_length=255)
    section: Optional[str] = Field(None, max_length=20)
    room: Optional[str] = Field(None, max_length=50)
    day_of_week: Optional[int] = Field(None, ge=MIN_DAY, le=MAX_DAY)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    color: Optional[str] = Field(None, max_length=50)
    font_color: Optional[str] = Field(None, max_length=20)
    font_size: Optional[str] = Field(None, max_length=20)
    # 顏色套用到同課號的所有時段
    apply_color_to_all: bool = False


class BlockMoveIn(BaseModel):
    day_of_week: int
    start_time: time
    confirm: bool = False


class BlockOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    schedule_id: int
    course_code: str
    course_title: Optional[str] = None
    section: Optional[str] = None
    room: Optional[str] = None
    day_of_week: int
    start_time: time
    end_time: time
    color: str
    font_color: str
    font_size: str
