"""
seating/utils.py
"""
from typing import Dict, List, Tuple

# --- Placement Tiers ---
TIER_HARD: str = "hard"
TIER_SOFT: str = "soft"
TIER_FALLBACK: str = "fallback"
TIERS: List[str] = [TIER_HARD, TIER_SOFT, TIER_FALLBACK]

# --- Adjacency ---
CONSTRAINT_BRANCH: str = "branch"
CONSTRAINT_SUBJECT: str = "subject"
SIDE_LEFT: str = "left"
SIDE_ABOVE: str = "above"

# --- Tagged Record Format ---
STUDENT_TAG: str = "STUDENT"
HALL_TAG: str = "HALL"
STUDENT_FIELD_COUNT: int = 7  # tag + roll, name, branch, semester, year, subject
HALL_FIELD_COUNT: int = 4     # tag + hall id, rows, cols

# --- Loader Defaults (used when a numeric field cannot be parsed) ---
DEFAULT_SEMESTER: int = 1
DEFAULT_YEAR: int = 2025
DEFAULT_HALL_ROWS: int = 5
DEFAULT_HALL_COLS: int = 6

DUPLICATE_SUFFIX: str = "_copy"

# --- Export Colours ---
SUBJECT_COLORS: Dict[str, str] = {
    "math": "C8E6FA",
    "physics": "FAC8C8",
    "chemistry": "C8FAC8",
}
FALLBACK_PALETTE: List[str] = [
    'FFF3E6', 'F3E6FF', 'FFE6F3', 'E6FFFF', 'FFFFE6',
    'FFE6CC', 'E6E6FF', 'CCFFE6', 'E6CCFF', 'FFCCFF',
]
EMPTY_SEAT_COLOR: str = "E6E6E6"


def seat_label(row: int, col: int) -> str:
    """Human-readable, 1-based seat label, e.g. (0, 2) -> 'R1C3'."""
    return f"R{row + 1}C{col + 1}"

def parse_int(value, default: int) -> int:
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return default

def parse_bool(value, default: bool = False) -> bool:
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off"):
        return False
    return default

def color_for_subject(subject: str, known: Dict[str, str]) -> str:
    """
    Returns a fill colour for a subject. Well-known subjects keep a fixed
    colour; others are assigned from the palette in first-seen order and
    remembered in `known`.
    """
    key = subject.strip().lower()
    if key in SUBJECT_COLORS:
        return SUBJECT_COLORS[key]
    if key not in known:
        known[key] = FALLBACK_PALETTE[len(known) % len(FALLBACK_PALETTE)]
    return known[key]

def grid_neighbors(row: int, col: int) -> List[Tuple[str, int, int]]:
    """The already-filled neighbours of a seat in row-major fill order."""
    neighbors = []
    if col > 0:
        neighbors.append((SIDE_LEFT, row, col - 1))
    if row > 0:
        neighbors.append((SIDE_ABOVE, row - 1, col))
    return neighbors
