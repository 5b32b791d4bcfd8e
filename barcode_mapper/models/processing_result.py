from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .processed_row import ProcessedRow, UnmappedInterval

"""Processing result models for a mapping run.

MappingSummary aggregates the counters printed on the SUMMARY line;
MappingResult carries the derived collections back to the CLI.
"""


@dataclass(frozen=True)
class MappingSummary:
    """Aggregated counters for one run."""
    total_rows: int
    excluded_rows: int
    mapped_rows: int
    unmapped_rows: int
    unmapped_ranges: int  # Number of merged unmapped intervals
    rejected_rules: int  # Config rules refused by the range store
    exportable: bool
    elapsed_seconds: float = 0.0

    @staticmethod
    def from_rows(
        processed: list[ProcessedRow],
        intervals: list[UnmappedInterval],
        rejected_rules: int,
        exportable: bool,
        elapsed_seconds: float = 0.0,
    ) -> MappingSummary:
        excluded = sum(1 for r in processed if r.excluded)
        mapped = sum(1 for r in processed if r.is_mapped)
        return MappingSummary(
            total_rows=len(processed),
            excluded_rows=excluded,
            mapped_rows=mapped,
            unmapped_rows=len(processed) - excluded - mapped,
            unmapped_ranges=len(intervals),
            rejected_rules=rejected_rules,
            exportable=exportable,
            elapsed_seconds=elapsed_seconds,
        )


@dataclass(frozen=True)
class MappingResult:
    """Everything a run derived, in display order."""
    processed: list[ProcessedRow]
    unmapped: list[UnmappedInterval]
    summary: MappingSummary
    export_path: Path | None = None  # Set only when the export was written
    rejected: list[str] = field(default_factory=list)  # Rejection messages
