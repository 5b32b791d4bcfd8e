from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..services.export_gate import export_columns, export_file_name

"""CSV export writer: serializes export rows to processed_<name>."""

__all__ = [
    "write_export",
]


def write_export(
    rows: Sequence[dict[str, str]],
    source_columns: Sequence[str],
    directory: Path,
    original_name: str,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_file_name(original_name)
    df = pd.DataFrame(list(rows), columns=export_columns(source_columns))
    df.to_csv(path, index=False, encoding="utf-8")
    return path
