# app/utils/placement.py
"""
Drag-and-drop placement checks.

``validate_move`` answers "can this block go to (day, start)?" without touching
any state. The caller commits on ``clear`` and either rejects or asks the user
to confirm otherwise.
"""
from dataclasses import dataclass, field
from datetime import time
from typing import Iterable, List

from app.utils.conflict import overlaps
from app.utils.exceptions import ScheduleValidationError
from app.utils.timeslots import (
    SECONDS_PER_DAY, TimeLike, from_seconds, parse_time, time_range_label, to_seconds, validate_day,
)


@dataclass(frozen=True)
class MoveConflict:
    course_code: str
    time_range_label: str
    block_id: object = None


@dataclass(frozen=True)
class MoveDecision:
    clear: bool
    day_of_week: int
    new_start: time
    new_end: time
    conflicts: List[MoveConflict] = field(default_factory=list)


def block_duration(block) -> int:
    """Duration in seconds; must be positive."""
    duration = to_seconds(block.end_time) - to_seconds(block.start_time)
    if duration <= 0:
        raise ScheduleValidationError(
            f"Block {block.id} has non-positive duration ({block.start_time} -> {block.end_time})"
        )
    return duration


def check_placement(
    course_code: str,
    day: int,
    start: TimeLike,
    end: TimeLike,
    blocks: Iterable,
    exclude_id=None,
) -> List[MoveConflict]:
    """
    Blocks overlapping (day, start, end), skipping ``exclude_id`` and any block
    of the same course.
    """
    validate_day(day)
    out = []
    for b in blocks:
        if exclude_id is not None and b.id == exclude_id:
            continue
        if not overlaps(day, start, end, b.day_of_week, b.start_time, b.end_time):
            continue
        # 同一門課的其他時段不算衝堂
        if b.course_code == course_code:
            continue
        out.append(MoveConflict(
            course_code=b.course_code,
            time_range_label=time_range_label(b.start_time, b.end_time),
            block_id=b.id,
        ))
    out.sort(key=lambda c: (c.time_range_label, c.course_code, str(c.block_id)))
    return out


def validate_move(block, target_day: int, target_start: TimeLike, blocks: Iterable) -> MoveDecision:
    validate_day(target_day)
    duration = block_duration(block)

    start_s = to_seconds(parse_time(target_start))
    end_s = start_s + duration
    if end_s >= SECONDS_PER_DAY:
        raise ScheduleValidationError(
            f"Moving {block.course_code} to {parse_time(target_start)} would end past midnight"
        )

    new_start, new_end = from_seconds(start_s), from_seconds(end_s)
    conflicts = check_placement(
        block.course_code, target_day, new_start, new_end, blocks, exclude_id=block.id,
    )
    return MoveDecision(
        clear=not conflicts,
        day_of_week=target_day,
        new_start=new_start,
        new_end=new_end,
        conflicts=conflicts,
    )
