from __future__ import annotations

import logging
import time
from dataclasses import replace
from pathlib import Path

from ..logging.rejected_rules import RejectedRuleLog
from ..models.config_models import ColumnSelection, MapperConfig
from ..models.mapping_range import MatchMode
from ..models.processed_row import ProcessedRow, UnmappedInterval
from ..models.processing_result import MappingResult, MappingSummary
from ..models.row_data import RowData
from ..tabular.reader import TableData, TableReadError, detect_default_columns, read_table
from ..tabular.writer import write_export
from .export_gate import build_export, can_export
from .matcher import derive_processed_rows, display_order
from .progress import ProgressTracker
from .range_store import MappingError, MappingState, add_range, set_columns, set_mode
from .summary import render_unmapped_interval
from .unmapped_ranges import derive_unmapped_intervals

logger = logging.getLogger(__name__)

"""Service orchestration for one mapping run.

Coordinates a run end to end: read the table, resolve the active columns,
build the mapping state from the configured rules (rejecting conflicting ones
individually), derive processed rows and unmapped intervals, and write the
export when every included row is mapped.
"""


class ProcessingError(Exception):
    """Fatal run error (unreadable input, unknown column)."""
    pass


def resolve_columns(
    table_columns: list[str],
    configured: ColumnSelection,
    override: ColumnSelection | None = None,
) -> ColumnSelection:
    """Detected defaults, overridden by config, overridden by CLI flags."""
    columns = detect_default_columns(table_columns).merged_with(configured)
    if override is not None:
        columns = columns.merged_with(override)
    return columns


def _check_columns(table_columns: list[str], columns: ColumnSelection, mode: MatchMode) -> None:
    known = set(table_columns)
    if columns.tube is None:
        raise ProcessingError("no tube number column available")
    for role, name in (("tube", columns.tube), ("column", columns.column), ("row", columns.row)):
        if name is not None and name not in known:
            raise ProcessingError(f"{role} column '{name}' not found in table columns {table_columns}")
    if columns.column_for(mode) is None:
        raise ProcessingError(f"mode '{mode.value}' has no target column selected")


def build_state(
    config: MapperConfig,
    columns: ColumnSelection,
    *,
    rejections: RejectedRuleLog | None = None,
) -> tuple[MappingState, list[str]]:
    """Apply the configured rules in order through the range store.

    A rejected rule is logged and skipped; later rules are still applied.

    Returns:
        The resulting state and the rejection messages
    """
    state = set_columns(set_mode(MappingState(), config.mode), columns)
    rejected: list[str] = []
    for index, spec in enumerate(config.ranges, start=1):
        try:
            state = add_range(state, spec.start, spec.end, spec.patient_id, spec.mode)
        except MappingError as e:
            logger.error(f"rule {index} rejected: {e}")
            rejected.append(str(e))
            if rejections is not None:
                rejections.reject(index, e)
            continue
        logger.debug(f"rule {index} added: {spec.start}-{spec.end} -> {spec.patient_id}")
    return state, rejected


def derive(
    rows: list[RowData],
    state: MappingState,
    tracker: ProgressTracker | None = None,
) -> tuple[list[ProcessedRow], list[UnmappedInterval]]:
    """Recompute every derivation for ``state`` (rows in display order)."""
    processed = derive_processed_rows(
        rows,
        state.ranges,
        state.mode,
        state.columns,
        on_row=tracker.advance if tracker is not None else None,
    )
    intervals = derive_unmapped_intervals(processed, state.mode, state.columns)
    return display_order(processed, state.mode, state.columns), intervals


def run_mapping(
    input_path: Path,
    config: MapperConfig,
    *,
    columns_override: ColumnSelection | None = None,
    mode_override: MatchMode | None = None,
    output_directory: Path | None = None,
    rejections: RejectedRuleLog | None = None,
) -> MappingResult:
    """Run the mapping for one input table.

    Raises:
        ProcessingError: the table cannot be read or a selected column is unknown
    """
    start = time.perf_counter()
    try:
        table: TableData = read_table(input_path)
    except TableReadError as e:
        raise ProcessingError(str(e)) from e
    logger.info(f"Loaded {len(table.rows)} rows from {table.file_name}")

    if mode_override is not None:
        config = replace(config, mode=mode_override)
    columns = resolve_columns(table.columns, config.columns, columns_override)
    _check_columns(table.columns, columns, config.mode)
    logger.info(
        f"mode={config.mode.value} tube_column={columns.tube} "
        f"column_column={columns.column} row_column={columns.row}"
    )

    state, rejected = build_state(config, columns, rejections=rejections)

    with ProgressTracker(len(table.rows)) as tracker:
        processed, intervals = derive(table.rows, state, tracker)
        tracker.set_postfix(
            mapped=sum(1 for r in processed if r.is_mapped),
            unmapped=sum(1 for r in processed if r.is_unmapped),
        )

    unit = "tube" if state.mode is MatchMode.BY_TUBE_NUMBER else "column"
    for interval in intervals:
        logger.warning(f"unmapped {render_unmapped_interval(interval, unit)}")

    exportable = can_export(processed)
    export_path: Path | None = None
    if exportable:
        directory = output_directory or Path(config.output_directory)
        export_rows = build_export(processed, state.columns)
        export_path = write_export(export_rows, table.columns, directory, table.file_name)
        logger.info(f"exported {len(export_rows)} rows to {export_path}")
    else:
        missing = sum(1 for r in processed if r.is_unmapped)
        logger.error(f"export blocked: {missing} included rows have no patient id")

    summary = MappingSummary.from_rows(
        processed,
        intervals,
        rejected_rules=len(rejected),
        exportable=exportable,
        elapsed_seconds=time.perf_counter() - start,
    )
    return MappingResult(
        processed=processed,
        unmapped=intervals,
        summary=summary,
        export_path=export_path,
        rejected=rejected,
    )
