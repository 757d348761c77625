"""
tests/test_validators.py

Tests for the post-allocation validation report.
"""
from seating.models import HallRecord, StudentRecord
from seating.placer import allocate
from seating.validators import (validate_allocation, _check_duplicate_placements,
                                _check_grid_dimensions, _check_conservation,
                                _check_empty_seats, _check_adjacency)


def test_valid_allocation_passes(sample_students, sample_hall, capsys):
    result = allocate(sample_students, [sample_hall])
    assert validate_allocation(result, sample_students) is True
    assert "Validation PASSED" in capsys.readouterr().out

def test_duplicate_placement_is_flagged(sample_students, sample_hall):
    result = allocate(sample_students, [sample_hall])
    result.grids["Hall-101"][4][1] = sample_students[0]

    errors = _check_duplicate_placements(result)
    assert len(errors) == 1
    assert "S001" in errors[0]
    assert validate_allocation(result) is False

def test_grid_size_mismatch_is_flagged(sample_students, sample_hall):
    result = allocate(sample_students, [sample_hall])
    result.grids["Hall-101"].pop()
    assert _check_grid_dimensions(result) == ["Grid Size Mismatch: Hall-101 declared 5x2"]

def test_conservation_against_roster(sample_students, sample_hall):
    result = allocate(sample_students, [sample_hall])
    extra = StudentRecord("S999", "Ghost", "CSE", 1, 1, "Art")

    assert _check_conservation(result, sample_students) == []
    errors = _check_conservation(result, sample_students + [extra])
    assert any("Conservation" in e for e in errors)
    assert any("Lost Student: S999" in e for e in errors)

def test_empty_seat_with_unplaced_students(sample_students):
    result = allocate(sample_students, [HallRecord("H1", 2, 2)])
    assert _check_empty_seats(result) == []

    result.grids["H1"][1][1] = None
    errors = _check_empty_seats(result)
    assert errors == ["Empty Seat: H1 R2C2 left empty with 1 students unplaced"]

def test_adjacency_conflicts_are_warnings(math_only_students):
    result = allocate(math_only_students, [HallRecord("H1", 2, 5)])

    warnings = _check_adjacency(result)
    # 4 left pairs per row x 2 rows + 5 above pairs, each sharing subject and branch
    assert len(warnings) == 26
    assert sum(w.startswith("Same Subject") for w in warnings) == 13
    assert sum(w.startswith("Same Branch") for w in warnings) == 13
    assert validate_allocation(result, math_only_students) is True

def test_adjacency_reports_branch_and_subject_separately():
    students = [
        StudentRecord("A1", "x", "CSE", 1, 1, "Math"),
        StudentRecord("A2", "y", "CSE", 1, 1, "Math"),
    ]
    result = allocate(students, [HallRecord("H1", 1, 2)])
    warnings = _check_adjacency(result)
    assert len(warnings) == 2
    assert warnings[0].startswith("Same Subject")
    assert warnings[1].startswith("Same Branch")
