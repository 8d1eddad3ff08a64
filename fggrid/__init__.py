"""
fggrid: fast Gaussian gridding for type-2 nonuniform FFTs in JAX.

Interpolates a uniformly sampled periodic complex grid at nonuniform knots
with the separable truncated Gaussian kernel of Greengard & Lee.
"""

from .convolution import fgg_convolution_3d_type2, interp
from .core import GridParams, interp_1d_impl, interp_2d_impl, interp_3d_impl
from .utils import cell_to_knot, kernel_table, normalize_knots

__version__ = "0.1.0"

__all__ = [
    "GridParams",
    "interp",
    "fgg_convolution_3d_type2",
    "interp_1d_impl",
    "interp_2d_impl",
    "interp_3d_impl",
    "kernel_table",
    "normalize_knots",
    "cell_to_knot",
]
