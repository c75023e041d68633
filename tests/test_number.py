import math

import numpy as np

from optsolvers.number import box_projection, infinity_norm


def test_box_projection_clips_to_bounds():
    result = box_projection([-5.0, 0.5, 7.0], [-1.0, 0.0, 0.0], [1.0, 1.0, 2.0])
    np.testing.assert_array_equal(result, np.array([-1.0, 0.5, 2.0]))


def test_box_projection_infinite_bounds_keep_point():
    x = np.array([180.0, -152.0])
    result = box_projection(x, np.full(2, -math.inf), np.full(2, math.inf))
    np.testing.assert_array_equal(result, x)


def test_box_projection_result_inside_box():
    rng = np.random.default_rng(0)
    x = rng.normal(size=20) * 10
    lower = np.full(20, -2.0)
    upper = np.full(20, 3.0)
    result = box_projection(x, lower, upper)
    assert result.min() >= -2.0
    assert result.max() <= 3.0
    inside = (x > -2.0) & (x < 3.0)
    np.testing.assert_array_equal(result[inside], x[inside])


def test_box_projection_is_idempotent():
    x = np.array([4.0, -4.0, 0.1])
    lower, upper = np.array([-1.0, -1.0, -1.0]), np.array([1.0, 1.0, 1.0])
    once = box_projection(x, lower, upper)
    np.testing.assert_array_equal(box_projection(once, lower, upper), once)


def test_infinity_norm_picks_largest_magnitude():
    assert infinity_norm([-3.0, 2.0, 1.0]) == 3.0


def test_infinity_norm_empty_is_zero():
    assert infinity_norm([]) == 0.0


def test_infinity_norm_ignores_nan():
    assert infinity_norm([math.nan, -2.0]) == 2.0