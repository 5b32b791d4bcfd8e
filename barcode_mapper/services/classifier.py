from __future__ import annotations

import math
import re
from enum import Enum

"""Value classification for range comparisons.

Every comparison between range bounds and a row value is classified on its
own: it is numeric only when all participating values parse as finite
decimals, otherwise it falls back to plain string ordering. An unparsable
value is never an error, it only selects the lexicographic path.
"""

__all__ = [
    "Comparison",
    "parse_number",
    "classify",
    "compare_key",
]

# Signed decimal with optional fractional part. No exponent, no inf/nan.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


class Comparison(Enum):
    NUMERIC = "numeric"
    LEXICOGRAPHIC = "lexicographic"


def parse_number(value: str | None) -> float | None:
    """Parse ``value`` as a finite decimal, returning None when it is not one.

    Surrounding whitespace is ignored; a blank value does not parse.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not _DECIMAL_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def classify(*values: str) -> Comparison:
    """Decide how a group of values must be compared with each other.

    >>> classify("1001", "1003", " 1002 ")
    <Comparison.NUMERIC: 'numeric'>
    >>> classify("1001", "1003", "A12")
    <Comparison.LEXICOGRAPHIC: 'lexicographic'>
    """
    if values and all(parse_number(v) is not None for v in values):
        return Comparison.NUMERIC
    return Comparison.LEXICOGRAPHIC


def compare_key(value: str, comparison: Comparison) -> float | str:
    """Orderable key for ``value`` under an already classified comparison."""
    if comparison is Comparison.NUMERIC:
        number = parse_number(value)
        if number is None:
            raise ValueError(f"value is not numeric: {value!r}")
        return number
    return "" if value is None else str(value)
