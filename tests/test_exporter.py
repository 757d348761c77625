"""
tests/test_exporter.py

Tests for the Excel workbook, seat list and console grid exports.
"""
import openpyxl
import pandas as pd
import pytest
from seating.exporter import SeatingExporter, SEAT_LIST_COLUMNS, sheet_title
from seating.placer import allocate
from seating.models import HallRecord, StudentRecord


@pytest.fixture
def demo_result(sample_students, sample_hall):
    return allocate(sample_students, [sample_hall])


def test_export_excel_layout(tmp_path, demo_result):
    path = tmp_path / "plans" / "Seating_Plan.xlsx"
    SeatingExporter(demo_result).export_excel(str(path))

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ["Hall-101", "Unplaced", "Relaxations"]

    ws = wb["Hall-101"]
    assert ws["A1"].value == "Hall Hall-101 (5x2)"
    assert ws["A3"].value == "FRONT"
    assert ws.cell(4, 1).value == "COL1"
    assert ws.cell(5, 1).value.startswith("S004")
    assert ws.cell(7, 2).value == "Empty"

    relax = wb["Relaxations"]
    assert relax.max_row == 3
    assert relax.cell(2, 3).value == "S002"
    assert relax.cell(2, 4).value == "soft"

def test_export_excel_lists_unplaced(tmp_path, sample_students):
    result = allocate(sample_students, [HallRecord("H1", 1, 2)])
    path = tmp_path / "plan.xlsx"
    SeatingExporter(result).export_excel(str(path))

    ws = openpyxl.load_workbook(path)["Unplaced"]
    rolls = [ws.cell(r, 1).value for r in range(2, ws.max_row + 1)]
    assert rolls == [s.roll for s in result.unplaced]
    assert len(rolls) == 3

def test_seat_list_dataframe(demo_result):
    df = SeatingExporter(demo_result).seat_list()
    assert list(df.columns) == SEAT_LIST_COLUMNS
    assert len(df) == 5
    first = df.iloc[0]
    assert (first['Roll'], first['Seat'], first['Tier']) == ("S004", "R1C1", "hard")

def test_seat_list_empty_result():
    df = SeatingExporter(allocate([], [HallRecord("H1", 2, 2)])).seat_list()
    assert df.empty
    assert list(df.columns) == SEAT_LIST_COLUMNS

def test_export_seat_list_csv(tmp_path, demo_result):
    path = tmp_path / "Seat_List.csv"
    SeatingExporter(demo_result).export_seat_list(str(path))
    df = pd.read_csv(path)
    assert len(df) == 5
    assert df['Hall'].unique().tolist() == ["Hall-101"]

def test_render_hall(demo_result):
    text = SeatingExporter(demo_result).render_hall("Hall-101")
    lines = text.splitlines()
    assert lines[0] == "Hall: Hall-101"
    assert len(lines) == 6
    assert lines[1].split(" | ")[0].strip() == "S004"
    assert "Empty" in lines[3]

def test_sheet_title_replaces_forbidden_characters():
    assert sheet_title("Block A/101") == "Block A_101"
    assert sheet_title("Room[2]") == "Room_2_"
    assert sheet_title("a\\b?c*d:e") == "a_b_c_d_e"
    assert len(sheet_title("H" * 40)) == 31

def test_export_excel_with_awkward_hall_ids(tmp_path, sample_students):
    halls = [HallRecord("Block A/101", 1, 3), HallRecord("Room[2]", 1, 2)]
    result = allocate(sample_students, halls)
    path = tmp_path / "plan.xlsx"
    SeatingExporter(result).export_excel(str(path))

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ["Block A_101", "Room_2_", "Unplaced", "Relaxations"]
    assert wb["Block A_101"]["A1"].value == "Hall Block A/101 (1x3)"

def test_record_text_is_never_a_formula(tmp_path):
    students = [
        StudentRecord("=1+1", "=SUM(A1)", "CSE", 1, 1, "Math"),
        StudentRecord("=2+2", "Other", "ECE", 1, 1, "Physics"),
    ]
    result = allocate(students, [HallRecord("H1", 1, 1)])
    path = tmp_path / "plan.xlsx"
    SeatingExporter(result).export_excel(str(path))

    wb = openpyxl.load_workbook(path)
    seat = wb["H1"].cell(5, 1)
    assert seat.data_type == "s"
    assert seat.value.startswith("=1+1\n")

    unplaced = wb["Unplaced"]
    assert unplaced.cell(2, 1).data_type == "s"
    assert unplaced.cell(2, 1).value == "=2+2"
