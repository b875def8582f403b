import numpy as np
import pytest

from luxlab.models.distribution import PhotometricDistribution
from luxlab.photometry.interp import interpolate_candela, interpolate_candela_array


def _dist(v, h, cd):
    return PhotometricDistribution.from_lists(vertical_angles=v, horizontal_angles=h, candela=cd)


@pytest.fixture
def quadrant():
    return _dist([0, 45, 90], [0, 90], [[100, 50, 10], [120, 60, 15]])


def test_exact_nodes_return_table_values(quadrant):
    assert interpolate_candela(quadrant, 0, 0) == pytest.approx(100)
    assert interpolate_candela(quadrant, 0, 45) == pytest.approx(50)
    assert interpolate_candela(quadrant, 90, 90) == pytest.approx(15)


def test_midpoints_interpolate_linearly(quadrant):
    assert interpolate_candela(quadrant, 0, 22.5) == pytest.approx(75)
    assert interpolate_candela(quadrant, 45, 0) == pytest.approx(110)
    assert interpolate_candela(quadrant, 45, 22.5) == pytest.approx(82.5)


def test_out_of_range_clamps_to_edges(quadrant):
    assert interpolate_candela(quadrant, 0, 120) == pytest.approx(10)
    assert interpolate_candela(quadrant, 0, -10) == pytest.approx(100)
    # no wrap between the last plane and 360
    assert interpolate_candela(quadrant, 180, 0) == pytest.approx(120)


@pytest.mark.parametrize("h,expected", [(360, 100), (-90, 120), (450, 120), (720, 100)])
def test_horizontal_angle_normalized(quadrant, h, expected):
    assert interpolate_candela(quadrant, h, 0) == pytest.approx(expected)


def test_empty_tables_give_zero():
    empty = _dist([], [], [])
    assert interpolate_candela(empty, 10, 10) == 0.0
    out = interpolate_candela_array(empty, np.array([0.0, 10.0]), np.array([0.0, 5.0]))
    assert out.tolist() == [0.0, 0.0]


def test_single_plane_ignores_horizontal_angle():
    d = _dist([0, 90], [0], [[200, 0]])
    for h in (0, 45, 180, 300):
        assert interpolate_candela(d, h, 45) == pytest.approx(100)


def test_duplicate_angles_use_first_bracket():
    d = _dist([0, 45, 45, 90], [0], [[100, 80, 50, 10]])
    assert interpolate_candela(d, 0, 45) == pytest.approx(80)
    assert interpolate_candela(d, 0, 60) == pytest.approx(50 - 40 / 3)
    arr = interpolate_candela_array(d, np.array([0.0, 0.0]), np.array([45.0, 60.0]))
    assert arr.tolist() == pytest.approx([80, 50 - 40 / 3])


def test_array_matches_scalar(quadrant):
    rng = np.random.default_rng(7)
    h = rng.uniform(-200, 500, size=64)
    v = rng.uniform(-20, 120, size=64)
    arr = interpolate_candela_array(quadrant, h, v)
    expected = [interpolate_candela(quadrant, hh, vv) for hh, vv in zip(h, v)]
    assert arr.shape == (64,)
    assert arr.tolist() == pytest.approx(expected)


def test_array_preserves_shape(quadrant):
    h = np.zeros((2, 3))
    v = np.full((2, 3), 22.5)
    out = interpolate_candela_array(quadrant, h, v)
    assert out.shape == (2, 3)
    assert np.allclose(out, 75.0)


def test_from_lists_keeps_declared_axes_when_candela_empty():
    d = _dist([], [0, 90], [[], []])
    assert d.candela.shape == (2, 0)
    assert interpolate_candela(d, 45, 10) == 0.0
