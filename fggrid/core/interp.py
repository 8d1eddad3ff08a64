"""Gaussian-gridding interpolation (uniform grid -> nonuniform knots), pure JAX.

Each knot gathers a (2*m_sp)^d neighbourhood of the periodic grid and sums it
against the separable truncated Gaussian. Knots are independent, so every
operation below is vectorised over the knot axis; the only loop is the
static one over z taps in 3D, which keeps the gathered intermediate at
O(M * (2*m_sp)^2) instead of O(M * (2*m_sp)^3).

Grids are stored flat with x fastest: ``index = x + Nx*y + Nx*Ny*z``, i.e.
a C-ordered array of shape (Nz, Ny, Nx). Knots live in [0, 2*pi).
"""

from functools import partial

import jax
import jax.numpy as jnp
from jax import Array

from .kernel import axis_weights, periodic_index, tap_offsets
from .params import GridParams


def _axis(knot, table, params: GridParams, axis: int):
    """Weights and wrapped indices of all taps along one axis."""
    n = params.n[axis]
    m, e1, w = axis_weights(knot, table, n, params.tau[axis], params.m_sp)
    offsets = jnp.array(list(tap_offsets(params.m_sp)), dtype=jnp.int32)
    idx = periodic_index(m[:, None], offsets[None, :], n)
    return idx, e1, w


@partial(jax.jit, static_argnames=("params",))
def interp_1d_impl(x: Array, fw: Array, tables: tuple[Array], params: GridParams) -> Array:
    """1D interpolation.

    Args:
        x: Knot coordinates, shape (M,)
        fw: Grid samples, shape (Nx,)
        tables: (E3x,), each of shape (2*m_sp,)
        params: Static gridding parameters

    Returns:
        Complex values at the knots, shape (M,)
    """
    fw = fw.reshape(-1)
    ix, e1x, wx = _axis(x, tables[0], params, 0)
    return e1x * jnp.sum(fw[ix] * wx, axis=-1)


@partial(jax.jit, static_argnames=("params",))
def interp_2d_impl(x: Array, y: Array, fw: Array, tables: tuple[Array, Array], params: GridParams) -> Array:
    """2D interpolation; ``fw`` has Nx*Ny samples, x fastest."""
    nx = params.n[0]
    fw = fw.reshape(-1)
    ix, e1x, wx = _axis(x, tables[0], params, 0)
    iy, e1y, wy = _axis(y, tables[1], params, 1)

    flat_idx = iy[:, :, None] * nx + ix[:, None, :]
    w2d = wy[:, :, None] * wx[:, None, :]
    return e1x * e1y * jnp.sum(fw[flat_idx] * w2d, axis=(-2, -1))


@partial(jax.jit, static_argnames=("params",))
def interp_3d_impl(
    x: Array,
    y: Array,
    z: Array,
    fw: Array,
    tables: tuple[Array, Array, Array],
    params: GridParams,
) -> Array:
    """3D interpolation.

    Args:
        x, y, z: Knot coordinates per axis, each of shape (M,)
        fw: Grid samples, (Nz, Ny, Nx) or flat with x fastest
        tables: (E3x, E3y, E3z), each of shape (2*m_sp,)
        params: Static gridding parameters

    Returns:
        Complex values at the knots, shape (M,)
    """
    nx, ny, _ = params.n
    fw = fw.reshape(-1)
    ix, e1x, wx = _axis(x, tables[0], params, 0)
    iy, e1y, wy = _axis(y, tables[1], params, 1)
    iz, e1z, wz = _axis(z, tables[2], params, 2)

    # Separable factorization: the xy plane weights are shared by every z tap
    plane_idx = iy[:, :, None] * nx + ix[:, None, :]
    w2d = wy[:, :, None] * wx[:, None, :]

    acc = jnp.zeros(x.shape, dtype=jnp.result_type(fw.dtype, w2d.dtype))
    for j in range(params.width):
        flat_idx = iz[:, j, None, None] * (nx * ny) + plane_idx
        acc = acc + wz[:, j] * jnp.sum(fw[flat_idx] * w2d, axis=(-2, -1))
    return e1x * e1y * e1z * acc
