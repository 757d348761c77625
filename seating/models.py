"""
seating/models.py

Records consumed by the allocation engine and the result it produces.
"""

from typing import List, Optional, Dict, Tuple
from dataclasses import dataclass, field
from .errors import ConfigurationError
from . import utils

SeatKey = Tuple[str, int, int]
Grid = List[List[Optional["StudentRecord"]]]


@dataclass(frozen=True)
class StudentRecord:
    """
    A single exam-taker. The roll code is the identity key.
    """
    roll: str
    name: str
    branch: str
    semester: int
    year: int
    subject: str

    def __post_init__(self):
        """Cleans text fields. Frozen, so go through object.__setattr__."""
        for attr in ("roll", "name", "branch", "subject"):
            object.__setattr__(self, attr, str(getattr(self, attr)).strip())

    def __str__(self):
        return f"{self.roll} - {self.name}"

    def as_fields(self) -> List[str]:
        return [self.roll, self.name, self.branch,
                str(self.semester), str(self.year), self.subject]


@dataclass(frozen=True)
class HallRecord:
    """
    An exam hall laid out as a rows x cols grid of seats.
    """
    hall_id: str
    rows: int
    cols: int

    def __post_init__(self):
        object.__setattr__(self, "hall_id", str(self.hall_id).strip())

    def __str__(self):
        return f"{self.hall_id} ({self.rows}x{self.cols})"

    @property
    def capacity(self) -> int:
        if self.rows <= 0 or self.cols <= 0:
            return 0
        return self.rows * self.cols

    def is_valid(self) -> bool:
        return self.rows > 0 and self.cols > 0

    def check(self):
        """Raises ConfigurationError if the hall cannot hold a seat grid."""
        if not self.is_valid():
            raise ConfigurationError(self.hall_id, self.rows, self.cols)

    def empty_grid(self) -> Grid:
        return [[None for _ in range(max(self.cols, 0))] for _ in range(max(self.rows, 0))]


@dataclass(frozen=True)
class SeatAssignment:
    hall_id: str
    row: int
    col: int
    student: StudentRecord

    @property
    def label(self) -> str:
        return utils.seat_label(self.row, self.col)


@dataclass(frozen=True)
class Violation:
    """One adjacency rule broken by a placement."""
    constraint: str     # "branch" or "subject"
    side: str           # "left" or "above"
    neighbor_roll: str

    def __str__(self):
        return f"same {self.constraint} as {self.side} neighbour {self.neighbor_roll}"


@dataclass(frozen=True)
class RelaxationEvent:
    """
    A seat filled with a weaker-than-hard tier, kept for auditing.
    """
    hall_id: str
    row: int
    col: int
    roll: str
    tier: str
    violations: Tuple[Violation, ...] = ()

    def describe(self) -> str:
        reasons = "; ".join(str(v) for v in self.violations) or "no violation"
        return (f"{self.hall_id} {utils.seat_label(self.row, self.col)}: "
                f"{self.roll} placed at {self.tier} tier ({reasons})")


@dataclass
class AllocationResult:
    """
    Output of one allocation run. Built fresh per call; nothing is shared
    with the caller's input collections.
    """
    halls: List[HallRecord] = field(default_factory=list)
    grids: Dict[str, Grid] = field(default_factory=dict)
    unplaced: List[StudentRecord] = field(default_factory=list)
    relaxations: List[RelaxationEvent] = field(default_factory=list)
    seat_tiers: Dict[SeatKey, str] = field(default_factory=dict)
    rejected_halls: List[ConfigurationError] = field(default_factory=list)

    def grid(self, hall_id: str) -> Grid:
        return self.grids[hall_id]

    def assignments(self) -> List[SeatAssignment]:
        """All filled seats, in hall order then row-major."""
        filled = []
        for hall in self.halls:
            for r, row in enumerate(self.grids.get(hall.hall_id, [])):
                for c, student in enumerate(row):
                    if student is not None:
                        filled.append(SeatAssignment(hall.hall_id, r, c, student))
        return filled

    @property
    def placed_count(self) -> int:
        return len(self.seat_tiers)

    @property
    def total_seats(self) -> int:
        return sum(h.capacity for h in self.halls)

    @property
    def total_students(self) -> int:
        return self.placed_count + len(self.unplaced)

    def seat_of(self, roll: str) -> Optional[SeatAssignment]:
        for assignment in self.assignments():
            if assignment.student.roll == roll:
                return assignment
        return None

    def students_in_hall(self, hall_id: str) -> List[StudentRecord]:
        grid = self.grids.get(hall_id)
        if grid is None:
            return []
        return [s for row in grid for s in row if s is not None]

    def tier_counts(self) -> Dict[str, int]:
        counts = {tier: 0 for tier in utils.TIERS}
        for tier in self.seat_tiers.values():
            counts[tier] += 1
        return counts

    def utilization(self) -> float:
        """Percentage of seats filled (0.0 when there are no seats)."""
        if self.total_seats == 0:
            return 0.0
        return (self.placed_count / self.total_seats) * 100

    def summary(self) -> Dict[str, object]:
        counts = self.tier_counts()
        return {
            "halls": len(self.halls),
            "rejected_halls": len(self.rejected_halls),
            "total_seats": self.total_seats,
            "total_students": self.total_students,
            "placed": self.placed_count,
            "unplaced": len(self.unplaced),
            "utilization": round(self.utilization(), 1),
            "hard": counts[utils.TIER_HARD],
            "soft": counts[utils.TIER_SOFT],
            "fallback": counts[utils.TIER_FALLBACK],
        }
