import math

import numpy as np
import pytest

from optsolvers.func_eval import FuncEval
from optsolvers.line_search import NoSearch
from optsolvers.solver import (
    AbnormalTermination,
    BoundedSolver,
    InvalidInputParams,
    LineSearchSolver,
    MaxIterReached,
    OutOfDomain,
    SolverError,
)


class _Steepest(LineSearchSolver):
    def __init__(self, x0, tol):
        super().__init__(x0)
        self.tol = tol
        self.setup_calls = 0

    def setup(self):
        self.setup_calls += 1

    def compute_direction(self, eval_x_k):
        return -eval_x_k.g

    def has_converged(self, eval_x_k):
        return np.linalg.norm(eval_x_k.g) < self.tol


class _Bounded(BoundedSolver):
    def compute_direction(self, eval_x_k):
        return -eval_x_k.g

    def has_converged(self, eval_x_k):
        return False


def _half_norm(x):
    return FuncEval(0.5 * float(x @ x), x.copy())


def test_minimize_converges_with_unit_step():
    solver = _Steepest([3.0, -4.0], 1e-9)
    solver.minimize(NoSearch(), _half_norm, 10, 10)
    np.testing.assert_allclose(solver.x, np.zeros(2))
    assert solver.k == 1
    assert solver.setup_calls == 1


def test_callback_sees_each_iterate():
    seen = []
    solver = _Steepest([1.0, 1.0], 1e-9)
    solver.minimize(NoSearch(), _half_norm, 10, 10, lambda s: seen.append(s.x.copy()))
    assert len(seen) == solver.k
    np.testing.assert_allclose(seen[-1], solver.x)


def test_max_iter_reached():
    def shifted(x):
        return FuncEval(float(x @ x), 2 * x)

    solver = _Steepest([1.0], 1e-12)
    with pytest.raises(MaxIterReached):
        solver.minimize(NoSearch(), shifted, 5, 10)
    assert solver.k == 5


def test_zero_iterations_raises_max_iter():
    solver = _Steepest([1.0], 1.0)
    with pytest.raises(MaxIterReached):
        solver.minimize(NoSearch(), _half_norm, 0, 10)


def test_out_of_domain():
    solver = _Steepest([1.0], 1e-6)
    with pytest.raises(OutOfDomain):
        solver.minimize(NoSearch(), lambda x: FuncEval(math.nan, x), 10, 10)


def test_error_hierarchy_and_messages():
    for cls in (MaxIterReached, OutOfDomain, InvalidInputParams, AbnormalTermination):
        assert issubclass(cls, SolverError)
    assert str(MaxIterReached()) == "Max iter reached"
    assert str(OutOfDomain()) == "Out of domain"


def test_abstract_solver_cannot_be_instantiated():
    with pytest.raises(TypeError):
        LineSearchSolver([0.0])


def test_projected_gradient_zeroes_blocked_components():
    solver = _Bounded([0.0, 1.0, 0.5], [0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    ev = FuncEval(0.0, [2.0, -3.0, 4.0])
    np.testing.assert_array_equal(
        solver.projected_gradient(ev), np.array([0.0, 0.0, 4.0])
    )


def test_projected_gradient_keeps_feasible_directions():
    solver = _Bounded([0.0, 1.0], [0.0, 0.0], [1.0, 1.0])
    ev = FuncEval(0.0, [-2.0, 3.0])
    np.testing.assert_array_equal(solver.projected_gradient(ev), ev.g)