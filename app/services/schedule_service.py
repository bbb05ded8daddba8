# app/services/schedule_service.py
from typing import List, Optional, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.schedule import Schedule
from app.models.schedule_block import ScheduleBlock
from app.schemas.schedule import ScheduleCreate
from app.schemas.schedule_block import BlockCreate, BlockUpdate, CourseAddIn
from app.schemas.share import SharePaletteItem, SharePayload, ShareBlock
from app.utils.color import assign_color
from app.utils.placement import MoveConflict, MoveDecision, check_placement, validate_move
from app.utils.timeslots import validate_day, validate_interval

logger = logging.getLogger("app.schedule")

NULLABLE_BLOCK_FIELDS = {"course_title", "section", "room"}


def _commit(db: Session):
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


# ---------------- schedules ----------------

def get_owned_schedule(db: Session, user_id: str, schedule_id: int) -> Optional[Schedule]:
    return (
        db.query(Schedule)
        .filter(Schedule.id == schedule_id, Schedule.user_id == user_id)
        .first()
    )


def list_schedules(db: Session, user_id: str, term_code: str) -> List[Schedule]:
    return (
        db.query(Schedule)
        .filter(Schedule.user_id == user_id, Schedule.term_code == term_code)
        .order_by(Schedule.created_at.asc(), Schedule.id.asc())
        .all()
    )


def _deactivate_term(db: Session, user_id: str, term_code: str, keep_id: Optional[int] = None):
    q = db.query(Schedule).filter(
        Schedule.user_id == user_id,
        Schedule.term_code == term_code,
        Schedule.is_active.is_(True),
    )
    if keep_id is not None:
        q = q.filter(Schedule.id != keep_id)
    q.update({Schedule.is_active: False}, synchronize_session="fetch")


def create_schedule(db: Session, user_id: str, payload: ScheduleCreate) -> Schedule:
    existing = db.query(Schedule).filter(
        Schedule.user_id == user_id, Schedule.term_code == payload.term_code
    ).count()

    # 新建的 schedule 直接變成該學期的 active
    _deactivate_term(db, user_id, payload.term_code)
    s = Schedule(
        user_id=user_id,
        term_code=payload.term_code,
        name=payload.name or f"My Schedule {existing + 1}",
        is_active=True,
    )
    db.add(s)
    _commit(db)
    db.refresh(s)
    logger.info("schedule created id=%s user=%s term=%s", s.id, user_id, s.term_code)
    return s


def rename_schedule(db: Session, schedule: Schedule, name: str) -> Schedule:
    schedule.name = name
    _commit(db)
    db.refresh(schedule)
    return schedule


def activate_schedule(db: Session, schedule: Schedule) -> Schedule:
    _deactivate_term(db, schedule.user_id, schedule.term_code, keep_id=schedule.id)
    db.flush()
    schedule.is_active = True
    _commit(db)
    db.refresh(schedule)
    return schedule


def delete_schedule(db: Session, schedule: Schedule) -> Optional[Schedule]:
    """Delete a schedule with its blocks; returns the schedule that is active afterwards."""
    user_id, term_code, was_active = schedule.user_id, schedule.term_code, schedule.is_active

    db.query(ScheduleBlock).filter(ScheduleBlock.schedule_id == schedule.id).delete(synchronize_session=False)
    db.delete(schedule)
    db.flush()

    remaining = list_schedules(db, user_id, term_code)
    active = next((s for s in remaining if s.is_active), None)
    if was_active and active is None and remaining:
        active = remaining[-1]
        active.is_active = True

    _commit(db)
    logger.info("schedule deleted user=%s term=%s", user_id, term_code)
    return active


# ---------------- blocks ----------------

def list_blocks(db: Session, schedule_id: int, lock: bool = False) -> List[ScheduleBlock]:
    q = (
        db.query(ScheduleBlock)
        .filter(ScheduleBlock.schedule_id == schedule_id)
        .order_by(ScheduleBlock.day_of_week.asc(), ScheduleBlock.start_time.asc(), ScheduleBlock.id.asc())
    )
    if lock:
        q = q.populate_existing().with_for_update()
    return q.all()


def get_owned_block(db: Session, user_id: str, block_id: int) -> Optional[ScheduleBlock]:
    return (
        db.query(ScheduleBlock)
        .join(Schedule, Schedule.id == ScheduleBlock.schedule_id)
        .filter(ScheduleBlock.id == block_id, Schedule.user_id == user_id)
        .first()
    )


def add_block(db: Session, schedule: Schedule, payload: BlockCreate) -> Tuple[ScheduleBlock, List[MoveConflict]]:
    existing = list_blocks(db, schedule.id)
    conflicts = check_placement(
        payload.course_code, payload.day_of_week, payload.start_time, payload.end_time, existing,
    )

    block = ScheduleBlock(
        schedule_id=schedule.id,
        course_code=payload.course_code,
        course_title=payload.course_title,
        section=payload.section,
        room=payload.room,
        day_of_week=payload.day_of_week,
        start_time=payload.start_time,
        end_time=payload.end_time,
        color=payload.color or assign_color(payload.course_code, existing),
        font_color=payload.font_color,
        font_size=payload.font_size,
    )
    db.add(block)
    _commit(db)
    db.refresh(block)

    if conflicts:
        logger.info("block %s added with %d conflict(s)", block.id, len(conflicts))
    return block, conflicts


def add_course(db: Session, schedule: Schedule, payload: CourseAddIn) -> Tuple[List[ScheduleBlock], List[MoveConflict]]:
    existing = list_blocks(db, schedule.id)
    color = payload.color or assign_color(payload.course_code, existing)

    conflicts: List[MoveConflict] = []
    to_insert = []
    for day in payload.days_of_week:
        conflicts.extend(check_placement(
            payload.course_code, day, payload.start_time, payload.end_time, existing,
        ))
        to_insert.append(ScheduleBlock(
            schedule_id=schedule.id,
            course_code=payload.course_code,
            course_title=payload.course_title,
            section=payload.section,
            room=payload.room,
            day_of_week=day,
            start_time=payload.start_time,
            end_time=payload.end_time,
            color=color,
        ))

    # 只 commit 一次
    db.add_all(to_insert)
    _commit(db)
    for b in to_insert:
        db.refresh(b)
    return to_insert, conflicts


def update_block(db: Session, block: ScheduleBlock, payload: BlockUpdate) -> ScheduleBlock:
    data = payload.model_dump(exclude_unset=True, exclude={"apply_color_to_all"})
    # course_title / section / room 可以清成 null，其餘欄位 NOT NULL，null 視為沒改
    data = {k: v for k, v in data.items() if v is not None or k in NULLABLE_BLOCK_FIELDS}

    start = data.get("start_time", block.start_time)
    end = data.get("end_time", block.end_time)
    validate_interval(start, end)
    if "day_of_week" in data:
        validate_day(data["day_of_week"])

    for k, v in data.items():
        setattr(block, k, v)

    if payload.apply_color_to_all and payload.color:
        (
            db.query(ScheduleBlock)
            .filter(
                ScheduleBlock.schedule_id == block.schedule_id,
                ScheduleBlock.course_code == block.course_code,
            )
            .update({ScheduleBlock.color: payload.color}, synchronize_session="fetch")
        )

    _commit(db)
    db.refresh(block)
    return block


def delete_block(db: Session, block: ScheduleBlock):
    db.delete(block)
    _commit(db)


def check_move(db: Session, block: ScheduleBlock, day: int, start) -> MoveDecision:
    return validate_move(block, day, start, list_blocks(db, block.schedule_id))


def move_block(db: Session, block: ScheduleBlock, day: int, start, confirm: bool = False) -> Tuple[MoveDecision, bool]:
    """
    Validate against a fresh locked snapshot, then apply.

    Returns (decision, applied). Nothing is written when the target conflicts
    and ``confirm`` is False.
    """
    # 鎖住整個 schedule 的 blocks，同一 block 的第二個 move 會等這次完成後再驗證
    snapshot = list_blocks(db, block.schedule_id, lock=True)
    current = next((b for b in snapshot if b.id == block.id), None)
    if current is None:
        db.rollback()
        raise LookupError(f"block {block.id} no longer exists")

    try:
        decision = validate_move(current, day, start, snapshot)
    except ValueError:
        db.rollback()
        raise

    if not decision.clear and not confirm:
        db.rollback()
        return decision, False

    current.day_of_week = decision.day_of_week
    current.start_time = decision.new_start
    current.end_time = decision.new_end
    _commit(db)
    db.refresh(current)

    if not decision.clear:
        logger.info(
            "block %s moved despite %d conflict(s) (confirmed)", current.id, len(decision.conflicts)
        )
    return decision, True


# ---------------- share ----------------

def build_share_payload(schedule: Schedule, blocks: List[ScheduleBlock]) -> SharePayload:
    palette = {}
    for b in blocks:
        item = palette.get(b.course_code)
        if item is None:
            palette[b.course_code] = SharePaletteItem(
                course_code=b.course_code,
                course_title=b.course_title or "",
                section=b.section,
                required_count=1,
                is_manual=False,
                color=b.color,
            )
        else:
            item.required_count += 1

    return SharePayload(
        v=2,
        name=schedule.name,
        term=schedule.term_code,
        palette=list(palette.values()),
        blocks=[
            ShareBlock(
                course_code=b.course_code,
                course_title=b.course_title,
                section=b.section or "",
                room=b.room or "",
                day_of_week=b.day_of_week,
                start_time=b.start_time,
                end_time=b.end_time,
                color=b.color,
                font_color=b.font_color,
                font_size=b.font_size,
            )
            for b in blocks
        ],
    )


def import_share(db: Session, schedule: Schedule, payload: SharePayload) -> List[ScheduleBlock]:
    to_insert = [
        ScheduleBlock(
            schedule_id=schedule.id,
            course_code=b.course_code,
            course_title=b.course_title,
            section=b.section,
            room=b.room,
            day_of_week=b.day_of_week,
            start_time=b.start_time,
            end_time=b.end_time,
            color=b.color,
            font_color=b.font_color,
            font_size=b.font_size,
        )
        for b in payload.blocks
    ]
    db.add_all(to_insert)
    _commit(db)
    for b in to_insert:
        db.refresh(b)
    logger.info("imported %d block(s) into schedule %s", len(to_insert), schedule.id)
    return to_insert
