import numpy as np
import pytest

from fggrid.core.params import GridParams, check_shapes


def test_from_vector():
    params = GridParams.from_vector(np.array([4.0, 0.1, 0.2, 0.3, 16.0, 32.0, 8.0]))
    assert params == GridParams(m_sp=4, tau=(0.1, 0.2, 0.3), n=(16, 32, 8))
    assert params.ndim == 3
    assert params.width == 8
    assert isinstance(params.m_sp, int)
    assert all(isinstance(v, int) for v in params.n)


def test_from_vector_lower_dimension():
    assert GridParams.from_vector([2, 0.5, 8], ndim=1) == GridParams(m_sp=2, tau=(0.5,), n=(8,))


def test_from_vector_wrong_length():
    with pytest.raises(ValueError, match="Expected 7 scale entries"):
        GridParams.from_vector([2, 0.5, 0.5, 8, 8])


def test_params_are_hashable():
    params = GridParams(m_sp=2, tau=(0.5, 0.5, 0.5), n=(8, 8, 8))
    assert hash(params) == hash(GridParams.from_vector([2, 0.5, 0.5, 0.5, 8, 8, 8]))


def test_check_accepts_valid_params():
    params = GridParams(m_sp=2, tau=(1.0, 1.0, 1.0), n=(4, 4, 4))
    assert params.check() is params


@pytest.mark.parametrize(
    "params,message",
    [
        (GridParams(m_sp=0, tau=(1.0,), n=(4,)), "Truncation half-width"),
        (GridParams(m_sp=2, tau=(0.0, 1.0), n=(8, 8)), "strictly positive"),
        (GridParams(m_sp=2, tau=(1.0, -1.0), n=(8, 8)), "strictly positive"),
        (GridParams(m_sp=2, tau=(float("nan"),), n=(8,)), "strictly positive"),
        (GridParams(m_sp=2, tau=(1.0,), n=(7,)), "even"),
        (GridParams(m_sp=2, tau=(1.0,), n=(0,)), "even"),
        (GridParams(m_sp=3, tau=(1.0, 1.0), n=(8, 4)), "exceeds the smallest grid extent"),
        (GridParams(m_sp=2, tau=(1.0,), n=(8, 8)), "axes"),
        (GridParams(m_sp=1, tau=(1.0,) * 4, n=(4,) * 4), "Only 1D, 2D and 3D"),
    ],
)
def test_check_rejects_invalid_params(params, message):
    with pytest.raises(ValueError, match=message):
        params.check()


def test_check_shapes():
    params = GridParams(m_sp=2, tau=(1.0, 1.0), n=(4, 6))
    grid = np.zeros((6, 4))
    knots = (np.zeros(5), np.zeros(5))
    tables = (np.ones(4), np.ones(4))
    check_shapes(grid, knots, tables, params)

    with pytest.raises(ValueError, match="Grid has"):
        check_shapes(np.zeros(20), knots, tables, params)
    with pytest.raises(ValueError, match="Expected 2 knot axes"):
        check_shapes(grid, knots[:1], tables, params)
    with pytest.raises(ValueError, match="Knot axis 1"):
        check_shapes(grid, (np.zeros(5), np.zeros(4)), tables, params)
    with pytest.raises(ValueError, match="Kernel table 0"):
        check_shapes(grid, knots, (np.ones(3), np.ones(4)), params)
