from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ScheduleCreate(BaseModel):
    term_code: str = Field(min_length=1, max_length=20)
    # 沒給名字就用 "My Schedule N"
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class ScheduleRename(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class ScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    term_code: str
    name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
