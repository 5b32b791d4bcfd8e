from __future__ import annotations

from ..models.processed_row import UnmappedInterval
from ..models.processing_result import MappingSummary

"""Summary line rendering for the barcode mapper.

Format:
SUMMARY rows={n} excluded={e} mapped={m} unmapped={u} unmapped_ranges={k}
rejected_rules={r} exportable={yes|no} elapsed_sec={s}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for tiny values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_fields(summary: MappingSummary) -> str:
    """Key=value body of the SUMMARY line, without the label.

    The logger adds the ``SUMMARY`` label itself (see log_summary).
    """
    return (
        f"rows={summary.total_rows} "
        f"excluded={summary.excluded_rows} "
        f"mapped={summary.mapped_rows} "
        f"unmapped={summary.unmapped_rows} "
        f"unmapped_ranges={summary.unmapped_ranges} "
        f"rejected_rules={summary.rejected_rules} "
        f"exportable={'yes' if summary.exportable else 'no'} "
        f"elapsed_sec={_format_seconds(summary.elapsed_seconds)}"
    )


def render_summary_line(summary: MappingSummary) -> str:
    """Render the full SUMMARY line for a run.

    Examples:
        >>> s = MappingSummary(total_rows=6, excluded_rows=0, mapped_rows=3,
        ...     unmapped_rows=3, unmapped_ranges=2, rejected_rules=0,
        ...     exportable=False, elapsed_seconds=0.0)
        >>> render_summary_line(s)
        'SUMMARY rows=6 excluded=0 mapped=3 unmapped=3 unmapped_ranges=2 rejected_rules=0 exportable=no elapsed_sec=0'
    """
    return f"SUMMARY {render_summary_fields(summary)}"


def render_unmapped_interval(interval: UnmappedInterval, mode_unit: str = "tube") -> str:
    """``1004-1005 (2 tubes)`` / ``1000 (1 tube)``."""
    unit = mode_unit if interval.size == 1 else f"{mode_unit}s"
    return f"{interval.label()} ({interval.size} {unit})"
