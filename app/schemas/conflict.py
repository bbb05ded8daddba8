from typing import List, Optional
from datetime import time
from pydantic import BaseModel

from app.schemas.schedule_block import BlockOut


class ConflictOut(BaseModel):
    block_a_id: int
    block_b_id: int
    course_code_a: str
    course_code_b: str
    day_of_week: int
    overlap_start: time
    overlap_end: time
    message: str

    @classmethod
    def from_conflict(cls, c) -> "ConflictOut":
        return cls(
            block_a_id=c.block_a.id,
            block_b_id=c.block_b.id,
            course_code_a=c.block_a.course_code,
            course_code_b=c.block_b.course_code,
            day_of_week=c.day_of_week,
            overlap_start=c.overlap_start,
            overlap_end=c.overlap_end,
            message=c.message,
        )


class MoveConflictOut(BaseModel):
    course_code: str
    time_range_label: str
    block_id: Optional[int] = None

    @classmethod
    def from_conflict(cls, c) -> "MoveConflictOut":
        return cls(course_code=c.course_code, time_range_label=c.time_range_label, block_id=c.block_id)


class MoveDecisionOut(BaseModel):
    clear: bool
    day_of_week: int
    new_start: time
    new_end: time
    conflicts: List[MoveConflictOut] = []

    @classmethod
    def from_decision(cls, d) -> "MoveDecisionOut":
        return cls(
            clear=d.clear,
            day_of_week=d.day_of_week,
            new_start=d.new_start,
            new_end=d.new_end,
            conflicts=[MoveConflictOut.from_conflict(c) for c in d.conflicts],
        )


class MoveResultOut(BaseModel):
    block: BlockOut
    decision: MoveDecisionOut
    # True = 有衝堂但使用者確認後仍然移動
    forced: bool = False


class BlockCreatedOut(BaseModel):
    blocks: List[BlockOut]
    # 新增位置上的衝堂（僅提示，不阻擋）
    conflicts: List[MoveConflictOut] = []
