import unittest
from io import BytesIO
from urllib.parse import quote

from openpyxl import load_workbook

from app.utils.excel_export import (
    EXPORT_HEADERS, blocks_to_rows, content_disposition, make_filename, rows_to_xlsx_bytes,
)

from helpers import make_block


class TestExcelExport(unittest.TestCase):
    def test_rows_sorted_by_day_then_time(self):
        blocks = [
            make_block(1, "MATH20", 3, "10:00", "11:00"),
            make_block(2, "CS101", 1, "13:00", "14:30"),
            make_block(3, "ENG5", 1, "08:00", "09:00"),
        ]
        rows = blocks_to_rows(blocks)
        self.assertEqual([r["Course Code"] for r in rows], ["ENG5", "CS101", "MATH20"])
        self.assertEqual(rows[1]["Day"], "Monday")
        self.assertEqual((rows[1]["Start"], rows[1]["End"]), ("13:00", "14:30"))

    def test_workbook_contents(self):
        rows = blocks_to_rows([make_block(1, "CS101", 2, "09:00", "10:30")])
        data = rows_to_xlsx_bytes(rows, sheet_name="Plan [A]/B", headers=EXPORT_HEADERS)
        ws = load_workbook(BytesIO(data)).active
        self.assertEqual(ws.title, "Plan AB")
        self.assertEqual([c.value for c in ws[1]], EXPORT_HEADERS)
        self.assertEqual(ws.cell(row=2, column=4).value, "CS101")

    def test_empty_schedule_still_has_header(self):
        ws = load_workbook(BytesIO(rows_to_xlsx_bytes([]))).active
        self.assertEqual([c.value for c in ws[1]], EXPORT_HEADERS)
        self.assertEqual(ws.max_row, 1)

    def test_filename(self):
        name = make_filename("2025-1_My Schedule/1")
        self.assertTrue(name.startswith("2025-1_My_Schedule_1_"))
        self.assertTrue(name.endswith(".xlsx"))

    def test_content_disposition_non_ascii(self):
        header = content_disposition("2025-1_我的課表_20250101_0900.xlsx")
        header.encode("latin-1")
        self.assertIn('filename="2025-1______20250101_0900.xlsx"', header)
        self.assertIn("filename*=UTF-8''" + quote("2025-1_我的課表_20250101_0900.xlsx"), header)


if __name__ == "__main__":
    unittest.main()
