"""
seating/validators.py

Post-allocation checks. Every _check_* helper returns a list of messages;
validate_allocation prints the report.
"""

from typing import List, Optional, Sequence, Set
from .models import AllocationResult, StudentRecord
from . import utils


def validate_allocation(result: AllocationResult,
                        students: Optional[Sequence[StudentRecord]] = None) -> bool:
    """
    Runs all validation checks and prints a report.
    Adjacency conflicts are warnings; everything else fails validation.
    """
    print("\n--- RUNNING POST-ALLOCATION VALIDATION ---")

    duplicate_errors = _check_duplicate_placements(result)
    dimension_errors = _check_grid_dimensions(result)
    conservation_errors = _check_conservation(result, students) if students is not None else []
    empty_seat_errors = _check_empty_seats(result)
    adjacency_warnings = _check_adjacency(result)

    errors = duplicate_errors + dimension_errors + conservation_errors + empty_seat_errors

    if adjacency_warnings:
        print(f"  ⚠ {len(adjacency_warnings)} adjacency conflicts (recorded relaxations).")
        for w in adjacency_warnings: print(f"    - {w}")

    if not errors:
        print("Validation PASSED: every student is seated at most once and all grids match their halls.")
        return True

    print("Validation FAILED:")
    if duplicate_errors:
        print(f"  Found {len(duplicate_errors)} duplicate placements.")
        for e in duplicate_errors: print(f"    - {e}")
    if dimension_errors:
        print(f"  Found {len(dimension_errors)} grid dimension errors.")
        for e in dimension_errors: print(f"    - {e}")
    if conservation_errors:
        print(f"  Found {len(conservation_errors)} conservation errors.")
        for e in conservation_errors: print(f"    - {e}")
    if empty_seat_errors:
        print(f"  Found {len(empty_seat_errors)} avoidable empty seats.")
        for e in empty_seat_errors: print(f"    - {e}")
    return False

def _check_duplicate_placements(result: AllocationResult) -> List[str]:
    errors = []
    seen: Set[str] = set()
    for assignment in result.assignments():
        roll = assignment.student.roll
        if roll in seen:
            errors.append(f"Duplicate Placement: {roll} again at {assignment.hall_id} {assignment.label}")
        seen.add(roll)
    for student in result.unplaced:
        if student.roll in seen:
            errors.append(f"Duplicate Placement: {student.roll} is both seated and unplaced")
    return errors

def _check_grid_dimensions(result: AllocationResult) -> List[str]:
    errors = []
    for hall in result.halls:
        grid = result.grids.get(hall.hall_id)
        if grid is None:
            errors.append(f"Missing Grid: {hall.hall_id}")
            continue
        expected_rows = max(hall.rows, 0)
        expected_cols = max(hall.cols, 0)
        if len(grid) != expected_rows or any(len(row) != expected_cols for row in grid):
            errors.append(f"Grid Size Mismatch: {hall.hall_id} declared {hall.rows}x{hall.cols}")
    return errors

def _check_conservation(result: AllocationResult, students: Sequence[StudentRecord]) -> List[str]:
    errors = []
    placed = len(result.assignments())
    if placed + len(result.unplaced) != len(students):
        errors.append(
            f"Conservation: {placed} placed + {len(result.unplaced)} unplaced "
            f"!= {len(students)} students"
        )
    if placed > result.total_seats:
        errors.append(f"Capacity: {placed} placed in {result.total_seats} seats")

    expected = {s.roll for s in students}
    actual = {a.student.roll for a in result.assignments()} | {s.roll for s in result.unplaced}
    for roll in sorted(actual - expected):
        errors.append(f"Unknown Student: {roll} is not in the roster")
    for roll in sorted(expected - actual):
        errors.append(f"Lost Student: {roll} is neither seated nor unplaced")
    return errors

def _check_empty_seats(result: AllocationResult) -> List[str]:
    """An empty seat is only allowed once nobody is left to place."""
    if not result.unplaced:
        return []
    errors = []
    for hall in result.halls:
        for r, row in enumerate(result.grids.get(hall.hall_id, [])):
            for c, student in enumerate(row):
                if student is None:
                    errors.append(
                        f"Empty Seat: {hall.hall_id} {utils.seat_label(r, c)} left empty "
                        f"with {len(result.unplaced)} students unplaced"
                    )
    return errors

def _check_adjacency(result: AllocationResult) -> List[str]:
    warnings = []
    for hall in result.halls:
        grid = result.grids.get(hall.hall_id, [])
        for r, row in enumerate(grid):
            for c, student in enumerate(row):
                if student is None:
                    continue
                for side, nr, nc in utils.grid_neighbors(r, c):
                    neighbor = grid[nr][nc]
                    if neighbor is None:
                        continue
                    if student.subject == neighbor.subject:
                        warnings.append(
                            f"Same Subject: {student.roll} and {side} neighbour {neighbor.roll} "
                            f"({student.subject}) in {hall.hall_id} {utils.seat_label(r, c)}"
                        )
                    if student.branch == neighbor.branch:
                        warnings.append(
                            f"Same Branch: {student.roll} and {side} neighbour {neighbor.roll} "
                            f"({student.branch}) in {hall.hall_id} {utils.seat_label(r, c)}"
                        )
    return warnings
