from __future__ import annotations
from typing import List, Dict, Any
from io import BytesIO
from datetime import datetime
from urllib.parse import quote

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment

from app.utils.timeslots import day_name, format_hhmm

EXPORT_HEADERS = ["Day", "Start", "End", "Course Code", "Course Title", "Section", "Room"]


def blocks_to_rows(blocks) -> List[Dict[str, Any]]:
    ordered = sorted(blocks, key=lambda b: (b.day_of_week, b.start_time, b.course_code or ""))
    return [
        {
            "Day": day_name(b.day_of_week),
            "Start": format_hhmm(b.start_time),
            "End": format_hhmm(b.end_time),
            "Course Code": b.course_code,
            "Course Title": b.course_title or "",
            "Section": b.section or "",
            "Room": b.room or "",
        }
        for b in ordered
    ]


def rows_to_xlsx_bytes(rows: List[Dict[str, Any]], sheet_name: str = "Schedule",
                       headers: List[str] | None = None) -> bytes:
    """
    rows: list of dict, each dict is a row
    """
    wb = Workbook()
    ws = wb.active
    # Excel sheet title 上限 31 字且不能有 []:*?/\
    ws.title = "".join(ch for ch in sheet_name if ch not in '[]:*?/\\')[:31] or "Schedule"

    headers = headers or (list(rows[0].keys()) if rows else EXPORT_HEADERS)
    ws.append(headers)

    header_font = Font(bold=True)
    for col_idx, _h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for r in rows:
        ws.append([r.get(h) for h in headers])

    # autosize columns
    for col_idx, h in enumerate(headers, start=1):
        max_len = len(str(h))
        for row_idx in range(2, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

    ws.freeze_panes = "A2"

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "schedule") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in prefix) or "schedule"
    return f"{safe}_{ts}.xlsx"


def content_disposition(filename: str) -> str:
    """
    attachment header; header 只能是 latin-1，所以另外帶 RFC 5987 的 filename*
    """
    fallback = "".join(ch if ch.isascii() and (ch.isalnum() or ch in "-_.") else "_" for ch in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
