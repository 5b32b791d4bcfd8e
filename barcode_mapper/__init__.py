"""Biospecimen barcode mapper.

Assigns patient ids to rows of a specimen table by matching tube numbers or
plate columns against user-defined ranges, and reports unmapped intervals.
"""

__version__ = "0.1.0"
