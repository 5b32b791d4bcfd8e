from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..models.config_models import ColumnSelection
from ..models.processed_row import ProcessedRow
from .matcher import EXCLUSION_SENTINELS, normalize_tube_value

"""Export gate.

Export is only allowed once every included row carries a patient id; a
partial export is never produced. The export rows keep all source columns and
gain a ``Patient ID`` column.
"""

__all__ = [
    "PATIENT_ID_COLUMN",
    "BARCODE_COLUMN",
    "can_export",
    "build_export",
    "export_columns",
    "export_file_name",
]

PATIENT_ID_COLUMN = "Patient ID"
# A literal "Barcode" column is checked as well, independent of the tube column
BARCODE_COLUMN = "Barcode"


def can_export(processed: Sequence[ProcessedRow]) -> bool:
    return all(row.patient_id for row in processed if not row.excluded)


def _keep_for_export(row: ProcessedRow, columns: ColumnSelection) -> bool:
    if row.excluded:
        return False
    if normalize_tube_value(row.source.get(columns.tube)) == "":
        return False
    if BARCODE_COLUMN in row.source.values:
        barcode = normalize_tube_value(row.source.get(BARCODE_COLUMN))
        if barcode in EXCLUSION_SENTINELS - {""}:
            return False
    return True


def build_export(processed: Sequence[ProcessedRow], columns: ColumnSelection) -> list[dict[str, str]]:
    """Export rows for every included row, source column order preserved."""
    exported: list[dict[str, str]] = []
    for row in processed:
        if not _keep_for_export(row, columns):
            continue
        record = dict(row.source.values)
        record[PATIENT_ID_COLUMN] = row.patient_id or ""
        exported.append(record)
    return exported


def export_columns(source_columns: Sequence[str]) -> list[str]:
    """Header of the export file: source columns, then Patient ID once."""
    header = list(source_columns)
    if PATIENT_ID_COLUMN not in header:
        header.append(PATIENT_ID_COLUMN)
    return header


def export_file_name(original_name: str) -> str:
    """``processed_<name>``, always with a .csv suffix."""
    name = Path(original_name).name
    if Path(name).suffix.lower() != ".csv":
        name = f"{Path(name).stem}.csv"
    return f"processed_{name}"
