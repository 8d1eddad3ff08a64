"""Knot and kernel-table utilities for Gaussian gridding."""

import jax.numpy as jnp
from jax import Array


def kernel_table(m_sp: int, tau: float, n: int, dtype=None) -> Array:
    """
    Knot-independent Gaussian factors E3 for one axis.

    E3[l] = exp(-(pi * l / n)^2 / tau) for l = 1 - m_sp, ..., m_sp, i.e. the
    Gaussian exp(-x^2 / (4 * tau)) sampled at multiples of the lattice
    spacing 2 * pi / n. Only the m_sp positive taps are evaluated; the
    negative ones mirror them.

    Args:
        m_sp: Truncation half-width
        tau: Spreading width (> 0)
        n: Grid extent along the axis
        dtype: Output dtype (default: JAX default float)

    Returns:
        Table of shape (2 * m_sp,) with entry m_sp - 1 (offset 0) equal to 1
    """
    pos = jnp.exp(-((jnp.pi * jnp.arange(1, m_sp + 1, dtype=dtype) / n) ** 2) / tau)
    return jnp.concatenate([pos[: m_sp - 1][::-1], jnp.ones((1,), dtype=pos.dtype), pos])


def normalize_knots(knots: Array, n: int, scale: float = 1.0, shift: float = 0.0) -> Array:
    """
    Map knots given in grid units onto [0, 2*pi).

    The knot is first affinely rescaled, ``k' = scale * k + shift``, so that one
    unit is one grid cell, then wrapped: ``mod(2 * pi * k' / n, 2 * pi)``.

    Args:
        knots: Knot locations, any shape
        n: Grid extent along the axis
        scale: Multiplicative factor to grid units
        shift: Additive offset in grid units

    Returns:
        Angular knot coordinates in [0, 2*pi), same shape as ``knots``
    """
    k = scale * jnp.asarray(knots) + shift
    return jnp.mod(2.0 * jnp.pi * k / n, 2.0 * jnp.pi)


def cell_to_knot(index, n: int) -> Array:
    """
    Angular coordinate whose lattice point is grid cell ``index``.

    Grids keep the zero frequency at ``n // 2``, so cell ``index`` holds
    lattice point ``(index - n // 2) mod n``. A knot at the returned angle has
    zero sub-cell offset and its central tap lands exactly on ``index``.
    """
    return 2.0 * jnp.pi * jnp.mod(jnp.asarray(index) - n // 2, n) / n
