from typing import List, Dict
from pydantic import BaseModel

from app.schemas.conflict import ConflictOut
from app.schemas.schedule import ScheduleOut
from app.schemas.schedule_block import BlockOut


class TimetableOut(BaseModel):
    schedule: ScheduleOut
    blocks: List[BlockOut]
    grid: Dict[str, List[BlockOut]]  # "1".."7"
    conflicts: List[ConflictOut]
    conflict_block_ids: List[int]


class TimeSlotsOut(BaseModel):
    start_hour: int
    end_hour: int
    step_minutes: int
    slots: List[str]
