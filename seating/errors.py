"""
seating/errors.py

Exceptions raised by the allocation engine and the roster book.
"""

from typing import Iterable, Tuple


class SeatingError(ValueError):
    """Base class for every error raised while preparing an allocation."""


class ConfigurationError(SeatingError):
    """A hall was declared with a non-positive row or column count."""

    def __init__(self, hall_id: str, rows: int, cols: int):
        self.hall_id = hall_id
        self.rows = rows
        self.cols = cols
        super().__init__(
            f"Hall '{hall_id}' has invalid dimensions {rows}x{cols}; "
            "rows and cols must both be positive."
        )


class DataIntegrityError(SeatingError):
    """Duplicate identity keys (roll codes or hall codes) in the input."""

    def __init__(self, kind: str, keys: Iterable[str]):
        self.kind = kind
        self.keys: Tuple[str, ...] = tuple(keys)
        super().__init__(f"Duplicate {kind}: {', '.join(self.keys)}")
