from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.config_models import ColumnSelection
from ..models.mapping_range import MatchMode
from ..models.processed_row import ProcessedRow, UnmappedInterval
from .classifier import parse_number

"""Unmapped range calculation.

Collects the numeric target values of rows that are neither excluded nor
mapped and merges them into maximal runs of consecutive values. Values that
do not parse as numbers cannot take part in a run and are dropped.
"""

__all__ = [
    "merge_points",
    "derive_unmapped_intervals",
]


def _as_reported(number: float) -> int | float:
    return int(number) if float(number).is_integer() else float(number)


def merge_points(values: Iterable[float]) -> list[UnmappedInterval]:
    """Merge numbers into sorted, disjoint, non-adjacent closed intervals.

    >>> [i.label() for i in merge_points([1004, 1000, 1005, 1004])]
    ['1000', '1004-1005']
    """
    points = sorted(set(values))
    if not points:
        return []
    intervals: list[UnmappedInterval] = []
    run_start = run_end = points[0]
    for value in points[1:]:
        if value == run_end + 1:
            run_end = value
            continue
        intervals.append(UnmappedInterval(_as_reported(run_start), _as_reported(run_end)))
        run_start = run_end = value
    intervals.append(UnmappedInterval(_as_reported(run_start), _as_reported(run_end)))
    return intervals


def derive_unmapped_intervals(
    processed: Sequence[ProcessedRow],
    mode: MatchMode,
    columns: ColumnSelection,
) -> list[UnmappedInterval]:
    target_column = columns.column_for(mode)
    values: list[float] = []
    for row in processed:
        if not row.is_unmapped:
            continue
        number = parse_number(row.source.get(target_column))
        if number is not None:
            values.append(number)
    return merge_points(values)
