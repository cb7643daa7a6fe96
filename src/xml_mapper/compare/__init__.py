"""Structural comparison of node trees: intersect, diff and equal."""

from .comparator import diff, equal, intersect

__all__ = [
    "diff",
    "equal",
    "intersect",
]
