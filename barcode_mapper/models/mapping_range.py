from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Mapping rule domain models.

A MappingRange is a user-declared closed interval of tube-number or plate
column values assigned to one patient identifier. The bounds are kept exactly
as entered; whether they are compared numerically or as text is decided per
comparison by the classifier service.
"""

__all__ = [
    "MatchMode",
    "MappingRange",
]


class MatchMode(Enum):
    """Which column of a row supplies the value compared against range bounds.

    - BY_TUBE_NUMBER: the tube number (barcode) column
    - BY_COLUMN: the plate column coordinate
    """
    BY_TUBE_NUMBER = "tube_number"
    BY_COLUMN = "column"

    @property
    def label(self) -> str:
        return "tube number" if self is MatchMode.BY_TUBE_NUMBER else "plate column"


@dataclass(frozen=True)
class MappingRange:
    """One mapping rule, scoped to a single mode.

    Store order is significant: the first matching rule wins.
    """
    start: str  # Raw lower bound as entered
    end: str  # Raw upper bound as entered (start <= end is not enforced)
    patient_id: str
    mode: MatchMode
    id: int  # Unique within a MappingState, assigned on add

    def describe(self) -> str:
        return f"{self.start}-{self.end} ({self.patient_id})"
