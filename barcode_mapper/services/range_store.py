from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..models.config_models import ColumnSelection
from ..models.mapping_range import MappingRange, MatchMode
from .overlap import find_overlap

"""Range store: the immutable mapping state and its command transitions.

The state holds the ordered rule collection together with the active mode and
column selection. Every command returns a new MappingState; a rejected
command raises and leaves the caller's state untouched.

Commands:
- add_range: validate, check same-mode overlap, append with a fresh id
- remove_range: drop by id (no error when absent), order of the rest kept
- set_mode / set_columns: pure configuration changes
"""

__all__ = [
    "MappingError",
    "OverlapError",
    "InvalidRangeError",
    "MappingState",
    "add_range",
    "remove_range",
    "set_mode",
    "set_columns",
    "rules_for",
]


class MappingError(Exception):
    """Base exception for rejected mapping commands."""
    error_type = "MAPPING_ERROR"


class OverlapError(MappingError):
    """Raised when a new rule overlaps an existing rule of the same mode."""
    error_type = "RANGE_OVERLAP"

    def __init__(self, candidate: MappingRange, conflict: MappingRange) -> None:
        self.candidate = candidate
        self.conflict = conflict
        super().__init__(
            f"range {candidate.start}-{candidate.end} overlaps "
            f"{conflict.mode.label} rule {conflict.describe()}"
        )


class InvalidRangeError(MappingError):
    """Raised when start, end or patient id is blank."""
    error_type = "INVALID_RANGE"


@dataclass(frozen=True)
class MappingState:
    """Snapshot of everything the matcher needs besides the rows."""
    ranges: tuple[MappingRange, ...] = ()
    mode: MatchMode = MatchMode.BY_TUBE_NUMBER
    columns: ColumnSelection = field(default_factory=ColumnSelection)
    next_id: int = 1

    def get(self, range_id: int) -> MappingRange | None:
        for rule in self.ranges:
            if rule.id == range_id:
                return rule
        return None


def rules_for(state: MappingState, mode: MatchMode | None = None) -> list[MappingRange]:
    """Rules usable in ``mode`` (default: the active mode), in store order."""
    wanted = state.mode if mode is None else mode
    return [r for r in state.ranges if r.mode is wanted]


def add_range(
    state: MappingState,
    start: str,
    end: str,
    patient_id: str,
    mode: MatchMode | None = None,
) -> MappingState:
    """Append a rule after validating it against same-mode rules.

    Raises:
        InvalidRangeError: start, end or patient_id is blank
        OverlapError: the rule intersects a stored rule of the same mode
    """
    start = "" if start is None else str(start)
    end = "" if end is None else str(end)
    patient_id = "" if patient_id is None else str(patient_id).strip()
    if not start.strip() or not end.strip() or not patient_id:
        raise InvalidRangeError(
            f"range requires start, end and patient id (got start={start!r}, "
            f"end={end!r}, patient_id={patient_id!r})"
        )

    candidate = MappingRange(
        start=start,
        end=end,
        patient_id=patient_id,
        mode=state.mode if mode is None else mode,
        id=state.next_id,
    )
    conflict = find_overlap(candidate, state.ranges)
    if conflict is not None:
        raise OverlapError(candidate, conflict)
    return replace(state, ranges=state.ranges + (candidate,), next_id=state.next_id + 1)


def remove_range(state: MappingState, range_id: int) -> MappingState:
    remaining = tuple(r for r in state.ranges if r.id != range_id)
    if len(remaining) == len(state.ranges):
        return state
    return replace(state, ranges=remaining)


def set_mode(state: MappingState, mode: MatchMode) -> MappingState:
    return replace(state, mode=mode)


def set_columns(state: MappingState, columns: ColumnSelection) -> MappingState:
    return replace(state, columns=columns)
