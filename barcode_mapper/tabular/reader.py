from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..models.config_models import ColumnSelection
from ..models.row_data import RowData

"""Tabular reader for specimen sheets.

The first line is the header; every later non-empty line becomes one RowData.
Cells are read as text so tube numbers keep their exact spelling (leading
zeros, trailing ".0" and the like are not reinterpreted by pandas).
"""

__all__ = [
    "TableReadError",
    "UnsupportedFileError",
    "TableData",
    "read_table",
    "rows_from_frame",
    "detect_default_columns",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


class TableReadError(Exception):
    """Raised when the source table cannot be read."""


class UnsupportedFileError(TableReadError):
    """Raised for file types other than .csv / .xlsx."""


@dataclass
class TableData:
    file_name: str
    columns: list[str]
    rows: list[RowData]


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    if suffix == ".xlsx":
        return pd.read_excel(path, dtype=str, keep_default_na=False)
    raise UnsupportedFileError(f"unsupported file type '{path.suffix}' (expected one of {SUPPORTED_SUFFIXES})")


def rows_from_frame(df: pd.DataFrame) -> tuple[list[str], list[RowData]]:
    """Normalize a raw DataFrame into trimmed column names and RowData.

    Every frame row becomes a RowData, even one whose cells are all blank
    (the matcher excludes it later). Blanks become "".
    """
    columns = [str(c).strip() for c in df.columns]
    rows: list[RowData] = []
    for raw in df.itertuples(index=False, name=None):
        values: dict[str, str] = {}
        for col, val in zip(columns, raw, strict=False):
            values[col] = "" if pd.isna(val) else str(val)
        rows.append(RowData(row_number=len(rows) + 1, values=values))
    return columns, rows


def read_table(path: Path) -> TableData:
    """Read a CSV or Excel table into RowData records.

    Raises:
        TableReadError: missing file or unparsable content
        UnsupportedFileError: unknown file suffix
    """
    if not path.exists():
        raise TableReadError(f"input file not found: {path}")
    try:
        df = _read_frame(path)
    except TableReadError:
        raise
    except (ValueError, OSError, pd.errors.ParserError) as e:
        raise TableReadError(f"failed to read {path.name}: {e}") from e
    columns, rows = rows_from_frame(df)
    return TableData(file_name=path.name, columns=columns, rows=rows)


def _first(columns: Sequence[str], predicate) -> str | None:
    for c in columns:
        if predicate(c.lower()):
            return c
    return None


def detect_default_columns(columns: Sequence[str]) -> ColumnSelection:
    """Guess the tube, plate column and plate row columns from header names.

    The tube column falls back to the first header when nothing looks like a
    tube number / id / vial column.
    """
    tube = _first(columns, lambda n: "tubenumber" in n or "id" in n or "vial" in n)
    if tube is None and columns:
        tube = columns[0]
    column = _first(columns, lambda n: n == "col" or "column" in n)
    row = _first(columns, lambda n: n.startswith("row"))
    return ColumnSelection(tube=tube, column=column, row=row)
