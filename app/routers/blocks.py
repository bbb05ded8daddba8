from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import get_current_user
from app.services import schedule_service as svc
from app.routers.schedules import owned_schedule

from app.schemas.schedule_block import BlockCreate, BlockUpdate, BlockMoveIn, BlockOut, CourseAddIn
from app.schemas.conflict import (
    BlockCreatedOut, MoveConflictOut, MoveDecisionOut, MoveResultOut,
)

import logging
logger = logging.getLogger("app.blocks")


router = APIRouter(tags=["Student - Schedule Blocks"])


def owned_block(block_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    b = svc.get_owned_block(db, user.id, block_id)
    if not b:
        raise HTTPException(status_code=404, detail="Block not found")
    return b


@router.get("/schedules/{schedule_id}/blocks", response_model=list[BlockOut])
def list_blocks(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    return svc.list_blocks(db, schedule.id)


@router.post("/schedules/{schedule_id}/blocks", response_model=BlockCreatedOut, status_code=201)
def add_block(body: BlockCreate, schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    block, conflicts = svc.add_block(db, schedule, body)
    return BlockCreatedOut(
        blocks=[BlockOut.model_validate(block)],
        conflicts=[MoveConflictOut.from_conflict(c) for c in conflicts],
    )


# 從搜尋結果加入：同一門課多個星期，共用一個顏色
@router.post("/schedules/{schedule_id}/courses", response_model=BlockCreatedOut, status_code=201)
def add_course(body: CourseAddIn, schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    blocks, conflicts = svc.add_course(db, schedule, body)
    return BlockCreatedOut(
        blocks=[BlockOut.model_validate(b) for b in blocks],
        conflicts=[MoveConflictOut.from_conflict(c) for c in conflicts],
    )


@router.patch("/blocks/{block_id}", response_model=BlockOut)
def update_block(body: BlockUpdate, block=Depends(owned_block), db: Session = Depends(get_db)):
    return svc.update_block(db, block, body)


@router.delete("/blocks/{block_id}")
def delete_block(block=Depends(owned_block), db: Session = Depends(get_db)):
    svc.delete_block(db, block)
    return {"message": "Block deleted"}


@router.post("/blocks/{block_id}/move/check", response_model=MoveDecisionOut)
def check_move(body: BlockMoveIn, block=Depends(owned_block), db: Session = Depends(get_db)):
    decision = svc.check_move(db, block, body.day_of_week, body.start_time)
    return MoveDecisionOut.from_decision(decision)


@router.post("/blocks/{block_id}/move", response_model=MoveResultOut)
def move_block(body: BlockMoveIn, block=Depends(owned_block), db: Session = Depends(get_db)):
    try:
        decision, applied = svc.move_block(db, block, body.day_of_week, body.start_time, confirm=body.confirm)
    except LookupError:
        raise HTTPException(status_code=404, detail="Block not found")

    if not applied:
        logger.info("move of block %s rejected: %d conflict(s)", block.id, len(decision.conflicts))
        # 前端收到 409 會跳確認視窗，確認後帶 confirm=true 再送一次
        raise HTTPException(409, {
            "message": "Time conflict",
            "conflicts": [MoveConflictOut.from_conflict(c).model_dump() for c in decision.conflicts],
        })

    return MoveResultOut(
        block=BlockOut.model_validate(block),
        decision=MoveDecisionOut.from_decision(decision),
        forced=not decision.clear,
    )
