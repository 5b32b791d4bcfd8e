"""Domain models for the biospecimen barcode mapper.

This package contains the domain model classes shared by the range-mapping
services, the tabular reader/writer and the CLI.
"""

from .config_models import ColumnSelection, MapperConfig, RangeSpec
from .mapping_range import MappingRange, MatchMode
from .processed_row import ProcessedRow, UnmappedInterval
from .row_data import RowData

__all__ = [
    # Configuration models
    "ColumnSelection",
    "MapperConfig",
    "RangeSpec",
    # Mapping models
    "MatchMode",
    "MappingRange",
    "RowData",
    "ProcessedRow",
    "UnmappedInterval",
]
