from __future__ import annotations

from dataclasses import dataclass, field

from .mapping_range import MatchMode

"""Config dataclasses for the barcode mapper.

These model the validated contents of the mapping config file. The loader in
barcode_mapper/config/loader.py produces them; the orchestrator turns the
range specs into a MappingState through the range store.
"""


@dataclass(frozen=True)
class ColumnSelection:
    """Which table columns play the tube, plate column and plate row roles.

    Any role may be unset (None) when the table has no such column.
    """
    tube: str | None = None
    column: str | None = None
    row: str | None = None

    def column_for(self, mode: MatchMode) -> str | None:
        """Column that supplies the matching value in ``mode``."""
        if mode is MatchMode.BY_COLUMN:
            return self.column
        return self.tube

    def merged_with(self, override: ColumnSelection) -> ColumnSelection:
        """Return a selection where every role set in ``override`` wins."""
        return ColumnSelection(
            tube=override.tube or self.tube,
            column=override.column or self.column,
            row=override.row or self.row,
        )


@dataclass(frozen=True)
class RangeSpec:
    """A mapping rule as written in the config file, before validation."""
    start: str
    end: str
    patient_id: str
    mode: MatchMode | None = None  # None -> use the config's mode


@dataclass(frozen=True)
class MapperConfig:
    """Root configuration object for a mapping run."""
    mode: MatchMode = MatchMode.BY_TUBE_NUMBER
    columns: ColumnSelection = field(default_factory=ColumnSelection)
    output_directory: str = "."
    ranges: list[RangeSpec] = field(default_factory=list)
