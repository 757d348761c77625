"""
seating/placer.py

Constrained seat placement and the validated allocation entry point.

Halls are filled one after another, row-major. For every seat the ranked
queue is scanned head-first for the first student who:

    hard     - differs in branch AND subject from the left and above neighbours
    soft     - differs in subject only (no hard candidate anywhere in the queue)
    fallback - anything left (no soft candidate either)

A seat stays empty only once the queue is exhausted.
"""

from collections import Counter
from typing import List, Optional, Sequence, Tuple
from .models import (StudentRecord, HallRecord, AllocationResult,
                     RelaxationEvent, Violation, Grid)
from .errors import ConfigurationError, DataIntegrityError
from .ranking import rank
from . import utils


def _filled_neighbors(grid: Grid, row: int, col: int) -> List[Tuple[str, StudentRecord]]:
    neighbors = []
    for side, r, c in utils.grid_neighbors(row, col):
        student = grid[r][c]
        if student is not None:
            neighbors.append((side, student))
    return neighbors

def _passes_hard(candidate: StudentRecord, neighbors) -> bool:
    return all(candidate.branch != n.branch and candidate.subject != n.subject
               for _, n in neighbors)

def _passes_soft(candidate: StudentRecord, neighbors) -> bool:
    return all(candidate.subject != n.subject for _, n in neighbors)

def _select_candidate(queue: List[StudentRecord], neighbors) -> Tuple[int, str]:
    """
    Returns (queue index, tier) of the student to seat. A single pass finds
    the first hard candidate while remembering the first soft one.
    """
    soft_index: Optional[int] = None
    for index, candidate in enumerate(queue):
        if _passes_hard(candidate, neighbors):
            return index, utils.TIER_HARD
        if soft_index is None and _passes_soft(candidate, neighbors):
            soft_index = index
    if soft_index is not None:
        return soft_index, utils.TIER_SOFT
    return 0, utils.TIER_FALLBACK

def _violations(student: StudentRecord, neighbors) -> Tuple[Violation, ...]:
    found = []
    for side, neighbor in neighbors:
        if student.subject == neighbor.subject:
            found.append(Violation(utils.CONSTRAINT_SUBJECT, side, neighbor.roll))
        if student.branch == neighbor.branch:
            found.append(Violation(utils.CONSTRAINT_BRANCH, side, neighbor.roll))
    return tuple(found)

def place(ranked_students: Sequence[StudentRecord],
          halls: Sequence[HallRecord]) -> AllocationResult:
    """
    Fills the halls from the ranked queue. The caller's sequence is copied,
    never consumed. Halls with a zero dimension produce an empty grid.
    """
    queue = list(ranked_students)
    result = AllocationResult(halls=list(halls))

    for hall in result.halls:
        grid = hall.empty_grid()
        result.grids[hall.hall_id] = grid

        for r, seats in enumerate(grid):
            for c in range(len(seats)):
                if not queue:
                    break
                neighbors = _filled_neighbors(grid, r, c)
                index, tier = _select_candidate(queue, neighbors)
                student = queue.pop(index)
                seats[c] = student
                result.seat_tiers[(hall.hall_id, r, c)] = tier

                if tier != utils.TIER_HARD:
                    result.relaxations.append(RelaxationEvent(
                        hall_id=hall.hall_id,
                        row=r,
                        col=c,
                        roll=student.roll,
                        tier=tier,
                        violations=_violations(student, neighbors),
                    ))

    result.unplaced = queue
    return result


def _duplicates(keys: Sequence[str]) -> List[str]:
    return sorted(key for key, count in Counter(keys).items() if count > 1)

def check_roster(students: Sequence[StudentRecord]):
    """Raises DataIntegrityError if any roll code appears more than once."""
    duplicated = _duplicates([s.roll for s in students])
    if duplicated:
        raise DataIntegrityError("roll codes", duplicated)

def split_halls(halls: Sequence[HallRecord]) -> Tuple[List[HallRecord], List[ConfigurationError]]:
    """
    Separates usable halls from ones with non-positive dimensions.
    Raises DataIntegrityError on duplicate hall codes.
    """
    duplicated = _duplicates([h.hall_id for h in halls])
    if duplicated:
        raise DataIntegrityError("hall codes", duplicated)

    usable: List[HallRecord] = []
    rejected: List[ConfigurationError] = []
    for hall in halls:
        try:
            hall.check()
        except ConfigurationError as e:
            rejected.append(e)
            continue
        usable.append(hall)
    return usable, rejected

def allocate(students: Sequence[StudentRecord],
             halls: Sequence[HallRecord],
             strict: bool = False) -> AllocationResult:
    """
    Validates the input, ranks the roster and places it.

    Duplicate roll or hall codes abort the run with DataIntegrityError.
    Halls with invalid dimensions are left out and reported on
    `result.rejected_halls`; with strict=True the first one is raised.
    """
    check_roster(students)
    usable, rejected = split_halls(halls)

    if rejected and strict:
        raise rejected[0]
    for error in rejected:
        print(f"  ⚠ Skipping hall: {error}")

    print(f"🔄 Allocating {len(students)} students across {len(usable)} halls...")
    result = place(rank(students), usable)
    result.rejected_halls = rejected

    print(f"  ✓ Placed {result.placed_count}/{len(students)} students "
          f"({len(result.unplaced)} unplaced, {len(result.relaxations)} relaxed seats)")
    return result
