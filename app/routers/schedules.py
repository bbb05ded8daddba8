from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import get_current_user
from app.services import schedule_service as svc

from app.schemas.schedule import ScheduleCreate, ScheduleRename, ScheduleOut
from app.schemas.schedule_block import BlockOut
from app.schemas.share import ShareCodeOut, ShareImportIn
from app.utils.share_code import decode_share, encode_share
from app.utils.excel_export import blocks_to_rows, rows_to_xlsx_bytes, make_filename, content_disposition, EXPORT_HEADERS

router = APIRouter(prefix="/schedules", tags=["Student - Schedules"])


def owned_schedule(schedule_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    s = svc.get_owned_schedule(db, user.id, schedule_id)
    if not s:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return s


@router.get("", response_model=list[ScheduleOut])
def list_my_schedules(
    term: str = Query(..., description="term code e.g. 2025-1"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return svc.list_schedules(db, user.id, term)


@router.post("", response_model=ScheduleOut, status_code=201)
def create_schedule(body: ScheduleCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return svc.create_schedule(db, user.id, body)


@router.patch("/{schedule_id}", response_model=ScheduleOut)
def rename_schedule(body: ScheduleRename, schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    return svc.rename_schedule(db, schedule, body.name)


@router.post("/{schedule_id}/activate", response_model=ScheduleOut)
def activate_schedule(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    return svc.activate_schedule(db, schedule)


@router.delete("/{schedule_id}")
def delete_schedule(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    active = svc.delete_schedule(db, schedule)
    return {
        "message": "Schedule deleted",
        "active_schedule_id": active.id if active else None,
    }


@router.get("/{schedule_id}/share", response_model=ShareCodeOut)
def share_schedule(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    payload = svc.build_share_payload(schedule, svc.list_blocks(db, schedule.id))
    return ShareCodeOut(code=encode_share(payload))


@router.post("/{schedule_id}/import-share", response_model=list[BlockOut], status_code=201)
def import_share(body: ShareImportIn, schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    # ShareCodeError -> 422 (main.py)
    payload = decode_share(body.code)
    return svc.import_share(db, schedule, payload)


@router.get("/{schedule_id}/export")
def export_schedule(schedule=Depends(owned_schedule), db: Session = Depends(get_db)):
    rows = blocks_to_rows(svc.list_blocks(db, schedule.id))
    xlsx_bytes = rows_to_xlsx_bytes(rows, sheet_name=schedule.name, headers=EXPORT_HEADERS)
    filename = make_filename(f"{schedule.term_code}_{schedule.name}")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": content_disposition(filename)},
    )
