from __future__ import annotations

from dataclasses import dataclass

from .row_data import RowData

"""Derived row and interval models.

Both are outputs of a recomputation and have no lifecycle of their own; a new
list is produced whenever rows, rules, mode or column selection change.
"""

__all__ = [
    "ProcessedRow",
    "UnmappedInterval",
]


@dataclass(frozen=True)
class ProcessedRow:
    """A source row together with its matching outcome."""
    source: RowData
    patient_id: str = ""  # "" when excluded or unmatched
    excluded: bool = False  # Tube value blank, EMPTY or ERROR

    @property
    def is_mapped(self) -> bool:
        return not self.excluded and bool(self.patient_id)

    @property
    def is_unmapped(self) -> bool:
        return not self.excluded and not self.patient_id


@dataclass(frozen=True)
class UnmappedInterval:
    """Closed run of contiguous unmapped values, ``start <= end``."""
    start: int | float
    end: int | float

    @property
    def size(self) -> int:
        """Number of contiguous values covered by the interval."""
        return int(self.end - self.start) + 1

    def label(self) -> str:
        if self.start == self.end:
            return f"{self.start}"
        return f"{self.start}-{self.end}"
