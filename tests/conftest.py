"""Shared fixtures and reference implementations for fggrid tests."""

import jax


jax.config.update("jax_enable_x64", True)

import numpy as np
import pytest

from fggrid.core.params import GridParams
from fggrid.utils.grid import kernel_table


def direct_interp(grid, knots, params: GridParams):
    """Reference gridding: exp() per tap, no separation, no recurrence.

    Evaluates exp(-sum_i dist_i^2 / (4 * tau_i)) directly for every tap of
    every knot and wraps indices with a modulo.
    """
    grid = np.asarray(grid).reshape(params.n[::-1])
    knots = [np.asarray(k, dtype=np.float64) for k in knots]
    offsets = np.arange(1 - params.m_sp, params.m_sp + 1)
    out = np.zeros(knots[0].shape[0], dtype=np.complex128)
    for j in range(out.shape[0]):
        idx_axes, sq_axes = [], []
        for axis, (n, tau) in enumerate(zip(params.n, params.tau)):
            k = knots[axis][j]
            m = np.floor(n * k / (2.0 * np.pi))
            dist = (m + offsets) * (2.0 * np.pi / n) - k
            idx_axes.append(((m + offsets + n // 2) % n).astype(int))
            sq_axes.append(dist**2 / (4.0 * tau))
        # grid axes are ordered (z, y, x)
        exponent = sum(np.meshgrid(*sq_axes[::-1], indexing="ij"))
        out[j] = np.sum(np.exp(-exponent) * grid[np.ix_(*idx_axes[::-1])])
    return out


def gaussian_tables(params: GridParams):
    return tuple(kernel_table(params.m_sp, tau, n) for tau, n in zip(params.tau, params.n))


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def random_grid(rng):
    def make(shape):
        return rng.standard_normal(shape) + 1j * rng.standard_normal(shape)

    return make
