from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from ..models.config_models import ColumnSelection
from ..models.mapping_range import MappingRange, MatchMode
from ..models.processed_row import ProcessedRow
from ..models.row_data import RowData
from .classifier import classify, compare_key, parse_number

"""Row matcher: exclusion and first-match-wins rule resolution.

derive_processed_rows is a pure function of its inputs and returns rows in
source order. display_order layers the plate-column sort used when reviewing
in column mode; it is presentation only.
"""

__all__ = [
    "EXCLUSION_SENTINELS",
    "normalize_tube_value",
    "is_excluded",
    "match_value",
    "derive_processed_rows",
    "display_order",
]

EXCLUSION_SENTINELS = frozenset({"", "EMPTY", "ERROR"})


def normalize_tube_value(value: str | None) -> str:
    return "" if value is None else str(value).strip().upper()


def is_excluded(row: RowData, columns: ColumnSelection) -> bool:
    """A row is excluded when its tube value is blank, EMPTY or ERROR.

    Always keyed on the tube column, whichever mode is active.
    """
    return normalize_tube_value(row.get(columns.tube)) in EXCLUSION_SENTINELS


def _in_range(rule: MappingRange, value: str) -> bool:
    comparison = classify(rule.start, rule.end, value)
    key = compare_key(value, comparison)
    return compare_key(rule.start, comparison) <= key <= compare_key(rule.end, comparison)


def match_value(value: str, ranges: Iterable[MappingRange], mode: MatchMode) -> MappingRange | None:
    """First rule of ``mode`` (in store order) whose bounds contain ``value``."""
    for rule in ranges:
        if rule.mode is not mode:
            continue
        if _in_range(rule, value):
            return rule
    return None


def derive_processed_rows(
    rows: Sequence[RowData],
    ranges: Sequence[MappingRange],
    mode: MatchMode,
    columns: ColumnSelection,
    on_row: Callable[[], None] | None = None,
) -> list[ProcessedRow]:
    """Classify every row as excluded, mapped or unmapped.

    Parameters
    ----------
    rows: source rows (never mutated)
    ranges: rules in store order; rules of other modes are skipped
    mode: active match mode, selects the target column
    columns: active column selection
    on_row: optional callback invoked once per processed row (progress)
    """
    target_column = columns.column_for(mode)
    processed: list[ProcessedRow] = []
    for row in rows:
        if is_excluded(row, columns):
            processed.append(ProcessedRow(source=row, patient_id="", excluded=True))
        else:
            rule = match_value(row.get(target_column), ranges, mode)
            processed.append(
                ProcessedRow(source=row, patient_id=rule.patient_id if rule else "", excluded=False)
            )
        if on_row is not None:
            on_row()
    return processed


def _column_sort_key(row: ProcessedRow, columns: ColumnSelection) -> tuple:
    raw = row.source.get(columns.column)
    number = parse_number(raw)
    # numeric plate columns first, then anything else in string order
    primary = (0, number, "") if number is not None else (1, 0.0, raw)
    return primary + (row.source.get(columns.row),)


def display_order(
    processed: Sequence[ProcessedRow],
    mode: MatchMode,
    columns: ColumnSelection,
) -> list[ProcessedRow]:
    """Order rows for review: column mode sorts by plate column, then row label."""
    if mode is not MatchMode.BY_COLUMN:
        return list(processed)
    return sorted(processed, key=lambda r: _column_sort_key(r, columns))
