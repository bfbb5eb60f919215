import numpy as np

from descentkit.optimize.utils import as_point, axis_step, norm, normalize, squared_norm


def test_as_point_flattens_and_copies():
    source = np.array([[1, 2, 3]])
    point = as_point(source)
    assert point.shape == (3,)
    assert point.dtype == float
    point[0] = 10.0
    assert source[0, 0] == 1


def test_norms():
    x = np.array([3.0, -4.0])
    assert norm(x) == 5.0
    assert squared_norm(x) == 25.0
    assert isinstance(norm(x), float)


def test_normalize_unit_length_and_zero_vector():
    assert np.allclose(normalize(np.array([3.0, 4.0])), [0.6, 0.8])
    zero = normalize(np.zeros(3))
    assert np.array_equal(zero, np.zeros(3))
    assert not np.any(np.isnan(zero))


def test_axis_step_moves_one_coordinate():
    x = np.array([1.0, 2.0, 3.0])
    moved = axis_step(x, 1, 0.5)
    assert np.array_equal(moved, [1.0, 2.5, 3.0])
    assert np.array_equal(x, [1.0, 2.0, 3.0])
