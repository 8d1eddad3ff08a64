"""Public entry points for Gaussian-gridding interpolation.

``interp`` takes arrays; ``fgg_convolution_3d_type2`` mirrors the flat
split real/imag calling convention of the classic gridding kernels.

Preconditions that are checked here, before any tracing:
    * 1 <= m_sp and 2 * m_sp <= min(n), every n even, every tau > 0
    * array lengths consistent with the parameters

Precondition that is NOT checked (values may be traced):
    * every knot coordinate lies in [0, 2*pi); use
      ``fggrid.utils.normalize_knots`` to map raw locations into range.
"""

import logging

import jax
import jax.numpy as jnp
from jax import Array

from .core.interp import interp_1d_impl, interp_2d_impl, interp_3d_impl
from .core.params import GridParams, check_shapes
from .utils.complex import merge_parts, split_parts


logger = logging.getLogger(__name__)

try:
    from .core.pallas_interp import interp_3d_pallas

    HAS_PALLAS = True
    _PALLAS_ERR = None
except ImportError as e:
    HAS_PALLAS = False
    _PALLAS_ERR = e

BACKENDS = ("auto", "jax", "pallas")


def _on_gpu() -> bool:
    return any(d.platform == "gpu" for d in jax.devices())


def _select_backend(backend: str, ndim: int, dtype) -> str:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}, expected one of {BACKENDS}.")
    if backend == "pallas":
        if not HAS_PALLAS:
            raise RuntimeError(f"Pallas backend requested but not available: {_PALLAS_ERR}")
        if ndim != 3:
            raise ValueError(f"Pallas backend only implements 3D gridding, got {ndim}D.")
        return "pallas"
    if backend == "auto" and ndim == 3 and HAS_PALLAS and _on_gpu():
        # The Pallas kernel computes in float32; keep double-precision grids on the JAX path.
        if jnp.dtype(dtype) in (jnp.dtype(jnp.complex64), jnp.dtype(jnp.float32)):
            return "pallas"
        logger.debug("Skipping Pallas backend for %s grid, the kernel is single precision", jnp.dtype(dtype))
    return "jax"


def interp(grid: Array, knots, tables, params: GridParams, backend: str = "auto") -> Array:
    """
    Interpolate a periodic uniform grid at nonuniform knots.

    Each knot receives the sum of the (2*m_sp)^d grid samples around it,
    weighted by the truncated Gaussian exp(-sum_i d_i^2 / (4*tau_i)).

    Args:
        grid: Complex grid samples, shape params.n reversed (z, y, x) or flat
            with x fastest
        knots: Per-axis knot coordinates in [0, 2*pi), shape (d, M) or a
            sequence of d arrays of shape (M,), ordered x, y, z
        tables: Per-axis kernel tables of length 2*m_sp, ordered x, y, z
        params: Gridding parameters, validated before use
        backend: "jax", "pallas" (3D on GPU only) or "auto"

    Returns:
        Complex values at the knots, shape (M,)
    """
    params.check()
    knots = tuple(jnp.asarray(k) for k in knots)
    tables = tuple(jnp.asarray(t) for t in tables)
    check_shapes(grid, knots, tables, params)
    grid = jnp.asarray(grid)

    chosen = _select_backend(backend, params.ndim, grid.dtype)
    logger.debug(
        "Gridding %d knots on %s grid with m_sp=%d via %s backend", knots[0].shape[0], params.n, params.m_sp, chosen
    )

    if chosen == "pallas":
        return interp_3d_pallas(*knots, grid, tables, params)
    if params.ndim == 1:
        return interp_1d_impl(knots[0], grid, tables, params)
    if params.ndim == 2:
        return interp_2d_impl(knots[0], knots[1], grid, tables, params)
    return interp_3d_impl(knots[0], knots[1], knots[2], grid, tables, params)


def fgg_convolution_3d_type2(f_real, f_imag, knots, e3x, e3y, e3z, scales, backend: str = "jax"):
    """
    Gridding convolution for a type-2 3D NUFFT on flat split arrays.

    Args:
        f_real, f_imag: Real and imaginary grid samples, length Nx*Ny*Nz,
            x fastest, then y, then z
        knots: Flat knot coordinates of length 3*M: all x, then all y,
            then all z
        e3x, e3y, e3z: Kernel tables of length 2*M_sp
        scales: [M_sp, tau_x, tau_y, tau_z, Nx, Ny, Nz]
        backend: See ``interp``

    Returns:
        (out_real, out_imag): freshly allocated arrays of length M
    """
    params = GridParams.from_vector(scales, ndim=3)
    knots = jnp.asarray(knots).reshape(-1)
    if knots.shape[0] % 3:
        raise ValueError(f"Knot array length {knots.shape[0]} is not a multiple of 3.")
    grid = merge_parts(f_real, f_imag)
    out = interp(grid, knots.reshape(3, -1), (e3x, e3y, e3z), params, backend=backend)
    return split_parts(out)
