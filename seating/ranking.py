"""
seating/ranking.py

Candidate ordering for the placer. Students are grouped by subject and the
groups are dealt out round-robin, so two students of the same subject are
as far apart in the queue as the roster allows.
"""

from typing import Dict, List, Sequence
from .models import StudentRecord


def rank_key(student: StudentRecord):
    return (student.subject, student.branch, student.roll)

def rank(students: Sequence[StudentRecord]) -> List[StudentRecord]:
    """
    Returns a new list ordered for placement.

    1. Stable sort by (subject, branch, roll).
    2. Interleave: one student from each subject group in turn, subjects in
       ascending order, until every group is empty.

    The input is not modified. Duplicate rolls are passed through untouched.
    """
    ordered = sorted(students, key=rank_key)

    groups: Dict[str, List[StudentRecord]] = {}
    for student in ordered:
        groups.setdefault(student.subject, []).append(student)

    # dict preserves insertion order, and insertion followed the sort
    queues = list(groups.values())
    ranked: List[StudentRecord] = []
    depth = 0
    while len(ranked) < len(ordered):
        for queue in queues:
            if depth < len(queue):
                ranked.append(queue[depth])
        depth += 1
    return ranked
