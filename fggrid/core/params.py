"""Gridding parameters and caller preconditions.

The convolution kernels never validate anything; the checks here run once per
call on static (host-side) values before any tracing happens.
"""

from typing import NamedTuple

import numpy as np


class GridParams(NamedTuple):
    """Static parameters of one gridding call.

    Attributes:
        m_sp: Truncation half-width; each knot touches 2*m_sp cells per axis.
        tau: Gaussian spreading width per axis, (x,), (x, y) or (x, y, z).
        n: Grid extent per axis, same ordering as ``tau``. Must be even.
    """

    m_sp: int
    tau: tuple[float, ...]
    n: tuple[int, ...]

    @property
    def ndim(self) -> int:
        return len(self.n)

    @property
    def width(self) -> int:
        """Number of taps per axis (2 * m_sp)."""
        return 2 * self.m_sp

    @classmethod
    def from_vector(cls, scales, ndim: int = 3) -> "GridParams":
        """Parse a flat ``[M_sp, tau_1..tau_d, N_1..N_d]`` vector."""
        scales = np.asarray(scales, dtype=np.float64).ravel()
        if scales.shape[0] != 1 + 2 * ndim:
            raise ValueError(f"Expected {1 + 2 * ndim} scale entries for {ndim}D gridding, got {scales.shape[0]}.")
        m_sp = int(scales[0])
        tau = tuple(float(t) for t in scales[1 : 1 + ndim])
        n = tuple(int(v) for v in scales[1 + ndim :])
        return cls(m_sp=m_sp, tau=tau, n=n)

    def check(self) -> "GridParams":
        """Raise ValueError if the parameters violate the kernel's preconditions."""
        if len(self.tau) != len(self.n):
            raise ValueError(f"tau has {len(self.tau)} axes but n has {len(self.n)}.")
        if not 1 <= len(self.n) <= 3:
            raise ValueError(f"Only 1D, 2D and 3D grids are supported, got {len(self.n)} axes.")
        if self.m_sp < 1:
            raise ValueError(f"Truncation half-width must be positive, got m_sp={self.m_sp}.")
        for axis, t in enumerate(self.tau):
            if not np.isfinite(t) or t <= 0:
                raise ValueError(f"Spreading width must be strictly positive, got tau[{axis}]={t}.")
        for axis, nf in enumerate(self.n):
            if nf <= 0 or nf % 2:
                raise ValueError(f"Grid extents must be positive and even, got n[{axis}]={nf}.")
        # Wider windows would wrap onto cells that were already summed.
        if self.width > min(self.n):
            raise ValueError(f"2*m_sp={self.width} exceeds the smallest grid extent {min(self.n)}.")
        return self


def check_shapes(grid, knots, tables, params: GridParams):
    """Raise ValueError if array lengths disagree with ``params``.

    Args:
        grid: Grid samples, any shape with prod(params.n) elements.
        knots: Sequence of per-axis knot coordinate arrays, all of shape (M,).
        tables: Sequence of per-axis kernel tables, each of length 2*m_sp.
        params: Gridding parameters.
    """
    n_cells = int(np.prod(params.n))
    if int(np.size(grid)) != n_cells:
        raise ValueError(f"Grid has {np.size(grid)} samples, expected {n_cells} for extents {params.n}.")
    if len(knots) != params.ndim or len(tables) != params.ndim:
        raise ValueError(
            f"Expected {params.ndim} knot axes and kernel tables, got {len(knots)} and {len(tables)}."
        )
    m = np.shape(knots[0])
    for axis, k in enumerate(knots):
        if np.ndim(k) != 1 or np.shape(k) != m:
            raise ValueError(f"Knot axis {axis} has shape {np.shape(k)}, expected {m} (1D).")
    for axis, table in enumerate(tables):
        if np.shape(table) != (params.width,):
            raise ValueError(f"Kernel table {axis} has shape {np.shape(table)}, expected ({params.width},).")
