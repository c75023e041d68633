import numpy as np
import pytest

from optsolvers.backtracking import BackTracking
from optsolvers.func_eval import FuncEval
from optsolvers.more_thuente import MoreThuente
from optsolvers.newton import Newton

GAMMA = 1222.0


def oracle(x):
    f = 0.5 * (x[0] ** 2 + GAMMA * x[1] ** 2)
    g = np.array([x[0], GAMMA * x[1]])
    hessian = np.array([[1.0, 0.0], [0.0, GAMMA]])
    return FuncEval(f, g).with_hessian(hessian)


def test_newton_morethuente():
    nt = Newton(1e-8, np.array([1.0, 1.0]))
    nt.minimize(MoreThuente(), oracle, 1000, 100, None)
    assert abs(oracle(nt.x).f - 0.0) < 1e-6


def test_newton_backtracking():
    nt = Newton(1e-8, np.array([1.0, 1.0]))
    nt.minimize(BackTracking(1e-4, 0.5), oracle, 1000, 100, None)
    assert abs(oracle(nt.x).f - 0.0) < 1e-6


def test_not_converged_before_any_direction():
    nt = Newton(1e-8, np.array([1.0, 1.0]))
    assert nt.has_converged(oracle(nt.x)) is False


def test_direction_is_newton_step():
    nt = Newton(1e-8, np.array([2.0, 3.0]))
    direction = nt.compute_direction(oracle(nt.x))
    np.testing.assert_allclose(direction, [-2.0, -3.0])
    assert nt.decrement_squared is not None
    assert nt.decrement_squared > 0.0


def test_singular_hessian_falls_back_to_gradient():
    nt = Newton(1e-8, np.array([1.0, 2.0]))
    ev = FuncEval(1.0, np.array([3.0, 4.0])).with_hessian(np.zeros((2, 2)))
    direction = nt.compute_direction(ev)
    np.testing.assert_array_equal(direction, [-3.0, -4.0])
    assert nt.decrement_squared is None


def test_missing_hessian_raises():
    nt = Newton(1e-8, np.array([1.0, 2.0]))
    with pytest.raises(ValueError):
        nt.compute_direction(FuncEval(1.0, np.array([1.0, 1.0])))


def test_callback_sees_each_iterate():
    seen = []
    nt = Newton(1e-8, np.array([1.0, 1.0]))
    nt.minimize(BackTracking(1e-4, 0.5), oracle, 1000, 100, lambda s: seen.append(s.x.copy()))
    assert len(seen) == nt.k
    np.testing.assert_allclose(seen[-1], nt.x)