from typing import List, Literal, Optional
from datetime import time
from pydantic import BaseModel, Field, model_validator

from app.utils.timeslots import MAX_DAY, MIN_DAY, validate_interval


class SharePaletteItem(BaseModel):
    course_code: str
    course_title: str
    section: Optional[str] = None
    required_count: int = 0
    is_manual: bool = False
    color: str


class ShareBlock(BaseModel):
    course_code: str = Field(min_length=1, max_length=32)
    course_title: Optional[str] = Field(None, max_length=255)
    section: str = Field("", max_length=20)
    room: str = Field("", max_length=50)
    day_of_week: int = Field(ge=MIN_DAY, le=MAX_DAY)
    start_time: time
    end_time: time
    color: str = Field(max_length=50)
    font_color: str = Field("#000000", max_length=20)
    font_size: str = Field("text-xs", max_length=20)
    text_align: str = "left"

    @model_validator(mode="after")
    def _end_after_start(self):
        validate_interval(self.start_time, self.end_time)
        return self


class SharePayload(BaseModel):
    v: Literal[1, 2] = 2
    name: str
    term: str
    palette: List[SharePaletteItem] = []
    blocks: List[ShareBlock] = []


class ShareCodeOut(BaseModel):
    code: str


class ShareImportIn(BaseModel):
    code: str = Field(min_length=1)
