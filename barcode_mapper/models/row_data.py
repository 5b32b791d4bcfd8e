from __future__ import annotations

from dataclasses import dataclass

"""RowData model for the barcode mapper.

RowData represents a single specimen row as loaded from the source table.
The engine only ever reads it; derived collections wrap it instead of
mutating it.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single source row.

    Rows are identified only by position. ``row_number`` is the 1-based
    position among the non-empty data rows of the table.
    """
    row_number: int  # 1-based data row position
    values: dict[str, str]  # Column name -> raw cell text ("" for blank cells)

    def get(self, column: str | None) -> str:
        """Return the raw value for ``column``, treating missing as blank."""
        if column is None:
            return ""
        value = self.values.get(column)
        return "" if value is None else value
