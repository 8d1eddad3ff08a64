"""Utility functions for Gaussian gridding."""

from .complex import merge_parts, split_parts
from .grid import cell_to_knot, kernel_table, normalize_knots

__all__ = [
    "merge_parts",
    "split_parts",
    "kernel_table",
    "normalize_knots",
    "cell_to_knot",
]
