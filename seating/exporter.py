"""
seating/exporter.py
Exports an allocation result as an Excel workbook, a flat seat list, or a
console grid.
"""

import os
import re
from typing import Dict, List
import openpyxl
import pandas as pd
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet
from .models import AllocationResult, HallRecord
from . import utils

# --- Styling Constants ---
HEADER_FILL = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
BANNER_FILL = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")
EMPTY_FILL = PatternFill(start_color=utils.EMPTY_SEAT_COLOR, end_color=utils.EMPTY_SEAT_COLOR, fill_type="solid")
EMPTY_FONT = Font(color="808080", size=9)
CENTER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER_SIDE = Side(style="thin", color="BFBFBF")
THIN_BORDER = Border(left=THIN_BORDER_SIDE, right=THIN_BORDER_SIDE, top=THIN_BORDER_SIDE, bottom=THIN_BORDER_SIDE)

SEAT_LIST_COLUMNS = ['Hall', 'Row', 'Col', 'Seat', 'Roll', 'Name', 'Branch', 'Subject', 'Tier']

# Excel rejects these in sheet titles and caps titles at 31 chars
INVALID_TITLE_CHARS = re.compile(r"[\\/?*:\[\]]")
MAX_TITLE_LENGTH = 31


def sheet_title(hall_id: str) -> str:
    return INVALID_TITLE_CHARS.sub("_", hall_id)[:MAX_TITLE_LENGTH] or "Hall"

def _text_cell(ws: Worksheet, row: int, col: int, value):
    """Writes record text as a plain string, never as a formula."""
    cell = ws.cell(row, col)
    cell.value = value
    if isinstance(value, str):
        cell.data_type = "s"
    return cell


class SeatingExporter:
    def __init__(self, result: AllocationResult):
        self.result = result
        self.subject_colors: Dict[str, str] = {}

    def export_excel(self, filename: str):
        """One grid sheet per hall, then Unplaced and Relaxations sheets."""
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)

        wb = openpyxl.Workbook()
        wb.remove(wb.active)

        for hall in self.result.halls:
            ws = wb.create_sheet(title=sheet_title(hall.hall_id))
            self._format_hall(ws, hall)

        self._write_unplaced(wb.create_sheet(title="Unplaced"))
        self._write_relaxations(wb.create_sheet(title="Relaxations"))

        wb.save(filename)
        print(f"  ✓ Exported: {filename}")

    def _format_hall(self, ws: Worksheet, hall: HallRecord):
        grid = self.result.grids[hall.hall_id]
        width = max(hall.cols, 1)
        last_col = get_column_letter(width)

        if width > 1:
            ws.merge_cells(f'A1:{last_col}1')
        cell = ws['A1']
        cell.value = f"Hall {hall.hall_id} ({hall.rows}x{hall.cols})"
        cell.font = Font(size=12, bold=True)
        cell.alignment = Alignment(horizontal='left')

        if width > 1:
            ws.merge_cells(f'A3:{last_col}3')
        cell = ws['A3']
        cell.value = "FRONT"
        cell.font = Font(size=11, bold=True)
        cell.alignment = CENTER_ALIGN
        cell.fill = BANNER_FILL

        for c in range(hall.cols):
            cell = ws.cell(4, c + 1, f"COL{c + 1}")
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = CENTER_ALIGN

        for r, row in enumerate(grid):
            for c, student in enumerate(row):
                if student is None:
                    cell = ws.cell(5 + r, c + 1, "Empty")
                    cell.fill = EMPTY_FILL
                    cell.font = EMPTY_FONT
                else:
                    cell = _text_cell(ws, 5 + r, c + 1,
                                      f"{student.roll}\n{student.branch} | {student.subject}")
                    color = utils.color_for_subject(student.subject, self.subject_colors)
                    cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
                cell.border = THIN_BORDER
                cell.alignment = CENTER_ALIGN

        for c in range(1, width + 1):
            ws.column_dimensions[get_column_letter(c)].width = 18

    def _write_header(self, ws: Worksheet, headers: List[str]):
        for col_idx, header in enumerate(headers, 1):
            cell = ws.cell(1, col_idx, header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            cell.alignment = CENTER_ALIGN
        ws.freeze_panes = 'A2'

    def _write_unplaced(self, ws: Worksheet):
        self._write_header(ws, ['Roll', 'Name', 'Branch', 'Subject'])
        for row, s in enumerate(self.result.unplaced, 2):
            for col, value in enumerate([s.roll, s.name, s.branch, s.subject], 1):
                _text_cell(ws, row, col, value).border = THIN_BORDER

    def _write_relaxations(self, ws: Worksheet):
        self._write_header(ws, ['Hall', 'Seat', 'Roll', 'Tier', 'Violations'])
        for row, event in enumerate(self.result.relaxations, 2):
            values = [
                event.hall_id,
                utils.seat_label(event.row, event.col),
                event.roll,
                event.tier,
                "; ".join(str(v) for v in event.violations),
            ]
            for col, value in enumerate(values, 1):
                _text_cell(ws, row, col, value).border = THIN_BORDER
        ws.column_dimensions['E'].width = 60

    def seat_list(self) -> pd.DataFrame:
        data = []
        for a in self.result.assignments():
            data.append({
                'Hall': a.hall_id,
                'Row': a.row + 1,
                'Col': a.col + 1,
                'Seat': a.label,
                'Roll': a.student.roll,
                'Name': a.student.name,
                'Branch': a.student.branch,
                'Subject': a.student.subject,
                'Tier': self.result.seat_tiers[(a.hall_id, a.row, a.col)],
            })
        return pd.DataFrame(data, columns=SEAT_LIST_COLUMNS)

    def export_seat_list(self, filename: str):
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.seat_list().to_csv(filename, index=False)
        print(f"  ✓ Exported: {filename}")

    def render_hall(self, hall_id: str) -> str:
        """Plain-text grid of one hall, one line per row."""
        grid = self.result.grids[hall_id]
        cells = [[s.roll if s is not None else "Empty" for s in row] for row in grid]
        width = max([len(text) for row in cells for text in row] + [5])
        lines = [f"Hall: {hall_id}"]
        for row in cells:
            lines.append(" | ".join(text.ljust(width) for text in row))
        return "\n".join(lines)
