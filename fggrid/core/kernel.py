"""Per-axis Gaussian gridding weights (Greengard & Lee, SIAM Review 2004).

For a knot at sub-cell offset ``d`` from its lattice point and a tap ``l``
lattice spacings ``delta = 2*pi/N`` away, the truncated Gaussian factors as

    exp(-(d - l*delta)^2 / (4*tau)) = E1 * rho**l * E3[l]

with ``E1 = exp(-d^2 / (4*tau))``, ``rho = exp(d*pi / (N*tau))`` and the
knot-independent ``E3[l] = exp(-(l*delta)^2 / (4*tau))``. Only E1 and rho need
transcendental calls per knot; the powers of rho come from a recurrence.

All functions are elementwise jnp code so the same logic runs inside
``jax.jit`` and inside the Pallas kernels.
"""

import jax.numpy as jnp
from jax import Array


TWO_PI = 2.0 * jnp.pi


def ratio_powers(rho: Array, m_sp: int) -> list[Array]:
    """Powers ``rho**l`` for ``l = 1 - m_sp, ..., m_sp``.

    Built from ``rho**0 = 1`` by repeated multiplication (``l > 0``) and by
    repeated multiplication with ``1/rho`` (``l < 0``): one division instead
    of 2*m_sp calls to ``pow``.

    Args:
        rho: Per-knot ratio, any shape.
        m_sp: Truncation half-width (static).

    Returns:
        List of 2*m_sp arrays shaped like ``rho``; entry ``m_sp - 1`` is 1.
    """
    seq = [None] * (2 * m_sp)
    seq[m_sp - 1] = jnp.ones_like(rho)
    for j in range(m_sp, 2 * m_sp):
        seq[j] = seq[j - 1] * rho
    rho_inv = 1.0 / rho
    for j in range(m_sp - 2, -1, -1):
        seq[j] = seq[j + 1] * rho_inv
    return seq


def axis_factors(knot: Array, n: int, tau: float, m_sp: int):
    """Lattice cell, central factor and ratio powers along one axis.

    Args:
        knot: Knot coordinates in [0, 2*pi), shape (M,).
        n: Grid extent along this axis.
        tau: Spreading width along this axis.
        m_sp: Truncation half-width.

    Returns:
        (m, e1, seq): int32 lattice index below each knot, the Gaussian
        central factor and the list of ratio powers from ``ratio_powers``.
    """
    m = jnp.floor(n * knot / TWO_PI)
    d = knot - m * (TWO_PI / n)
    e1 = jnp.exp(-d * d / (4.0 * tau))
    rho = jnp.exp(d * jnp.pi / (n * tau))
    return m.astype(jnp.int32), e1, ratio_powers(rho, m_sp)


def axis_weights(knot: Array, table: Array, n: int, tau: float, m_sp: int):
    """Full per-tap weights along one axis, ``E1`` left unapplied.

    Returns:
        (m, e1, w) where ``w`` has shape (M, 2*m_sp) and
        ``w[:, j] = rho**(j + 1 - m_sp) * table[j]``.
    """
    m, e1, seq = axis_factors(knot, n, tau, m_sp)
    w = jnp.stack(seq, axis=-1) * table
    return m, e1, w


def periodic_index(m: Array, l, n: int) -> Array:
    """Wrapped grid index of tap ``l`` next to lattice point ``m``.

    The grid stores the zero frequency at ``n // 2``, so lattice point ``c``
    lives at ``c + n // 2`` once ``c`` is folded into ``[-n/2, n/2)``. A
    single fold is enough for ``-3n/2 <= m + l < 3n/2``, which holds for
    knots in [0, 2*pi) and ``2 * m_sp <= n``.
    """
    half = n // 2
    c = m + l
    c = jnp.where(c >= half, c - n, c)
    c = jnp.where(c < -half, c + n, c)
    return c + half


def tap_offsets(m_sp: int) -> range:
    """Offsets ``l`` covered by the truncated window, in table order."""
    return range(1 - m_sp, m_sp + 1)
