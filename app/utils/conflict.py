# app/utils/conflict.py
from dataclasses import dataclass
from datetime import time
from typing import Any, Dict, Iterable, List

from app.utils.timeslots import (
    TimeLike, day_name, from_seconds, format_hhmm, to_seconds, validate_day,
)


def overlaps(day_a: int, start_a: TimeLike, end_a: TimeLike,
             day_b: int, start_b: TimeLike, end_b: TimeLike) -> bool:
    """
    判斷是否衝堂：
    1. 星期相同
    2. 時間區間有重疊（半開區間，10:00 結束與 10:00 開始不算衝堂）
    """
    if validate_day(day_a) != validate_day(day_b):
        return False
    return to_seconds(start_a) < to_seconds(end_b) and to_seconds(start_b) < to_seconds(end_a)


def blocks_overlap(a, b) -> bool:
    return overlaps(a.day_of_week, a.start_time, a.end_time,
                    b.day_of_week, b.start_time, b.end_time)


@dataclass(frozen=True)
class Conflict:
    block_a: Any
    block_b: Any
    day_of_week: int
    overlap_start: time
    overlap_end: time
    message: str


def _block_key(block):
    return (to_seconds(block.start_time), to_seconds(block.end_time), block.course_code or "", str(block.id))


def _make_conflict(a, b) -> Conflict:
    if _block_key(b) < _block_key(a):
        a, b = b, a
    start = from_seconds(max(to_seconds(a.start_time), to_seconds(b.start_time)))
    end = from_seconds(min(to_seconds(a.end_time), to_seconds(b.end_time)))
    message = (
        f"{a.course_code} and {b.course_code} overlap on "
        f"{day_name(a.day_of_week)} {format_hhmm(start)}-{format_hhmm(end)}"
    )
    return Conflict(
        block_a=a,
        block_b=b,
        day_of_week=a.day_of_week,
        overlap_start=start,
        overlap_end=end,
        message=message,
    )


def detect_conflicts(blocks: Iterable) -> List[Conflict]:
    """
    blocks: objects with id / course_code / day_of_week / start_time / end_time
    (ORM rows or pydantic models)

    Returns every overlapping pair once. Same-course pairs are reported too.
    Output order: day, overlap start, then course codes.
    """
    by_day: Dict[int, list] = {}
    seen = set()
    for b in blocks:
        if b.id in seen:
            continue
        seen.add(b.id)
        by_day.setdefault(validate_day(b.day_of_week), []).append(b)

    out: List[Conflict] = []
    for day in sorted(by_day):
        bucket = sorted(by_day[day], key=_block_key)
        for i in range(len(bucket)):
            for j in range(i + 1, len(bucket)):
                a, b = bucket[i], bucket[j]
                if blocks_overlap(a, b):
                    out.append(_make_conflict(a, b))

    out.sort(key=lambda c: (
        c.day_of_week,
        to_seconds(c.overlap_start),
        c.block_a.course_code or "",
        c.block_b.course_code or "",
        str(c.block_a.id),
        str(c.block_b.id),
    ))
    return out


def conflicting_block_ids(conflicts: Iterable[Conflict]) -> set:
    ids = set()
    for c in conflicts:
        ids.add(c.block_a.id)
        ids.add(c.block_b.id)
    return ids
