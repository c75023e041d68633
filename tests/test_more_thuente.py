import math

import numpy as np
import pytest

from optsolvers.func_eval import FuncEval
from optsolvers.more_thuente import (
    MoreThuente,
    cubic_minimizer,
    phi,
    quadratic_minimizer_1,
    quadratic_minimizer_2,
    update_interval,
)

GAMMA = 90.0


def oracle(x):
    f = 0.5 * (x[0] ** 2 + GAMMA * x[1] ** 2)
    return FuncEval(f, np.array([x[0], GAMMA * x[1]]))


def test_phi():
    # gradient descent with More-Thuente on an ill-conditioned quadratic
    ls = MoreThuente()
    x = np.array([180.0, 152.0])
    max_iter = 10000
    k = 1
    while k < max_iter:
        ev = oracle(x)
        if float(ev.g @ ev.g) < 1e-12:
            break
        d = -ev.g
        t = ls.compute_step_len(x, ev, d, oracle, max_iter)
        x = x + t * d
        k += 1
    assert abs(x[0] - 0.0) < 1e-6


def test_defaults():
    ls = MoreThuente()
    assert ls.c1 == 1e-4
    assert ls.c2 == 0.9
    assert ls.t_min == 0.0
    assert math.isinf(ls.t_max)
    assert (ls.delta_min, ls.delta, ls.delta_max) == (0.58333333, 0.66, 1.1)


def test_builders_return_self():
    ls = MoreThuente()
    assert ls.with_deltas(0.5, 0.6, 1.0) is ls
    assert ls.with_t_min(0.1).with_t_max(5.0) is ls
    assert (ls.t_min, ls.t_max) == (0.1, 5.0)
    assert (ls.delta_min, ls.delta, ls.delta_max) == (0.5, 0.6, 1.0)


@pytest.mark.parametrize("c1", [0.0, -1.0, 0.95])
def test_with_c1_rejects(c1):
    with pytest.raises(ValueError):
        MoreThuente().with_c1(c1)


@pytest.mark.parametrize("c2", [0.0, 1.0, 1e-5])
def test_with_c2_rejects(c2):
    with pytest.raises(ValueError):
        MoreThuente().with_c2(c2)


def test_with_c1_c2_accept():
    ls = MoreThuente().with_c1(0.01).with_c2(0.5)
    assert (ls.c1, ls.c2) == (0.01, 0.5)


def test_interpolants_exact_on_quadratic():
    # (t - 2)^2 sampled at 0 and 3
    assert cubic_minimizer(0.0, 3.0, 4.0, 1.0, -4.0, 2.0) == pytest.approx(2.0)
    assert quadratic_minimizer_1(0.0, 3.0, 4.0, 1.0, -4.0) == pytest.approx(2.0)
    assert quadratic_minimizer_2(0.0, 3.0, -4.0, 2.0) == pytest.approx(2.0)


def test_phi_directional_derivative():
    ev = FuncEval(3.0, np.array([1.0, 2.0]))
    p = phi(ev, np.array([-1.0, 0.5]))
    assert p.f == 3.0
    assert p.g == pytest.approx(0.0)


def test_psi():
    ls = MoreThuente()
    phi_0 = FuncEval(1.0, -2.0)
    phi_t = FuncEval(0.5, -1.0)
    psi = ls.psi(phi_0, phi_t, 2.0)
    assert psi.f == pytest.approx(0.5 - 1.0 + 1e-4 * 2.0 * 2.0)
    assert psi.g == pytest.approx(-1.0 + 1e-4 * 2.0)


def test_update_interval_cases():
    assert update_interval(1.0, 2.0, 0.0, 0.0, 1.0, 5.0) == (0.0, 1.0, False)
    assert update_interval(1.0, 0.5, -1.0, 0.0, 1.0, 5.0) == (1.0, 5.0, False)
    assert update_interval(1.0, 0.5, 1.0, 0.0, 1.0, 5.0) == (1.0, 0.0, False)
    assert update_interval(1.0, 0.5, 0.0, 0.0, 1.0, 5.0) == (0.0, 5.0, True)


def test_step_satisfies_strong_wolfe():
    ls = MoreThuente()
    x = np.array([180.0, 152.0])
    ev = oracle(x)
    d = -ev.g
    t = ls.compute_step_len(x, ev, d, oracle, 100)
    new = oracle(x + t * d)
    assert ls.strong_wolfe_conditions(ev.f, new.f, ev.g, new.g, t, d)


def test_step_respects_t_max():
    ls = MoreThuente().with_t_max(0.5)
    x = np.array([1.0, 0.0])
    ev = oracle(x)
    d = -ev.g
    t = ls.compute_step_len(x, ev, d, oracle, 20)
    assert 0.0 <= t <= 0.5