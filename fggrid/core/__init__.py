"""Gaussian-gridding convolution kernels."""

from .interp import interp_1d_impl, interp_2d_impl, interp_3d_impl
from .kernel import axis_factors, axis_weights, periodic_index, ratio_powers, tap_offsets
from .params import GridParams, check_shapes

__all__ = [
    "GridParams",
    "check_shapes",
    "interp_1d_impl",
    "interp_2d_impl",
    "interp_3d_impl",
    "axis_factors",
    "axis_weights",
    "periodic_index",
    "ratio_powers",
    "tap_offsets",
]
