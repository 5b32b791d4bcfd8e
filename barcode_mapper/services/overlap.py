from __future__ import annotations

from collections.abc import Iterable

from ..models.mapping_range import MappingRange
from .classifier import classify, compare_key

"""Overlap detection between mapping rules of the same mode."""

__all__ = [
    "overlaps",
    "find_overlap",
]


def overlaps(candidate: MappingRange, existing: MappingRange) -> bool:
    """True when both rules share a mode and their closed intervals intersect.

    The four bounds are classified together: a single non-numeric bound makes
    the whole check lexicographic.
    """
    if candidate.mode is not existing.mode:
        return False
    comparison = classify(candidate.start, candidate.end, existing.start, existing.end)
    c_start = compare_key(candidate.start, comparison)
    c_end = compare_key(candidate.end, comparison)
    e_start = compare_key(existing.start, comparison)
    e_end = compare_key(existing.end, comparison)
    return c_start <= e_end and c_end >= e_start


def find_overlap(candidate: MappingRange, existing: Iterable[MappingRange]) -> MappingRange | None:
    """Return the first stored rule ``candidate`` conflicts with, if any."""
    for rule in existing:
        if overlaps(candidate, rule):
            return rule
    return None
