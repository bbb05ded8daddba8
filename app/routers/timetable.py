from typing import Dict, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.services import schedule_service as svc
from app.routers.schedules import owned_schedule

from app.utils.conflict import detect_conflicts, conflicting_block_ids
from app.utils.timeslots import MIN_DAY, MAX_DAY, generate_time_slots

from app.schemas.conflict import ConflictOut
from app.schemas.schedule import ScheduleOut
from app.schemas.schedule_block import BlockOut
from app.schemas.timetable import TimetableOut, TimeSlotsOut

import logging
logger = logging.getLogger("app.timetable")

router = APIRouter(prefix="/timetable", tags=["Student - Timetable"])


@router.get("/slots", response_model=TimeSlotsOut)
def get_time_slots():
    return TimeSlotsOut(
        start_hour=settings.GRID_START_HOUR,
        end_hour=settings.GRID_END_HOUR,
        step_minutes=settings.GRID_STEP_MINUTES,
        slots=generate_time_slots(settings.GRID_START_HOUR, settings.GRID_END_HOUR, settings.GRID_STEP_MINUTES),
    )


@router.get("/{schedule_id}", response_model=TimetableOut)
def get_timetable(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    blocks = svc.list_blocks(db, schedule.id)
    conflicts = detect_conflicts(blocks)
    if conflicts:
        logger.info("schedule %s has %d conflict(s)", schedule.id, len(conflicts))

    block_outs = [BlockOut.model_validate(b) for b in blocks]
    grid: Dict[str, List[BlockOut]] = {str(d): [] for d in range(MIN_DAY, MAX_DAY + 1)}
    for b in block_outs:
        grid[str(b.day_of_week)].append(b)

    return TimetableOut(
        schedule=ScheduleOut.model_validate(schedule),
        blocks=block_outs,
        grid=grid,
        conflicts=[ConflictOut.from_conflict(c) for c in conflicts],
        conflict_block_ids=sorted(conflicting_block_ids(conflicts)),
    )


@router.get("/{schedule_id}/conflicts", response_model=list[ConflictOut])
def get_conflicts(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    return [ConflictOut.from_conflict(c) for c in detect_conflicts(svc.list_blocks(db, schedule.id))]
