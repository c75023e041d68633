"""Projected Newton method for box-constrained minimisation."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .func_eval import FuncEval
from .number import box_projection, infinity_norm
from .solver import BoundedSolver

logger = logging.getLogger(__name__)


def _cholesky_solve(hessian: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    try:
        lower = np.linalg.cholesky(hessian)
    except np.linalg.LinAlgError as exc:
        raise ValueError("Hessian is not positive definite") from exc
    y = np.linalg.solve(lower, rhs)
    return np.linalg.solve(lower.T, y)


class ProjectedNewton(BoundedSolver):
    """Newton steps projected onto the box ``[lower_bound, upper_bound]``.

    Stops when the step or the change in gradient becomes shorter than
    ``grad_tol``, or when the projected gradient vanishes.
    """

    def __init__(self, grad_tol: float, x0, lower_bound, upper_bound) -> None:
        x0 = box_projection(x0, lower_bound, upper_bound)
        super().__init__(x0, lower_bound, upper_bound)
        self.grad_tol = float(grad_tol)
        self.s_norm: Optional[float] = None
        self.y_norm: Optional[float] = None

    def next_iterate_too_close(self) -> bool:
        return self.s_norm is not None and self.s_norm < self.grad_tol

    def gradient_next_iterate_too_close(self) -> bool:
        return self.y_norm is not None and self.y_norm < self.grad_tol

    def compute_direction(self, eval_x_k: FuncEval) -> np.ndarray:
        if eval_x_k.hessian is None:
            raise ValueError("Hessian not available in the oracle")
        newton_step = _cholesky_solve(eval_x_k.hessian, np.asarray(eval_x_k.g, dtype=float))
        target = box_projection(self.x - newton_step, self.lower_bound, self.upper_bound)
        return target - self.x

    def has_converged(self, eval_x_k: FuncEval) -> bool:
        if self.next_iterate_too_close():
            logger.warning("Minimization completed: next iterate too close")
            return True
        if self.gradient_next_iterate_too_close():
            logger.warning("Minimization completed: gradient next iterate too close")
            return True
        return infinity_norm(self.projected_gradient(eval_x_k)) < self.grad_tol

    def update_next_iterate(
        self, line_search, eval_x_k, oracle, direction, max_iter_line_search
    ) -> None:
        step = line_search.compute_step_len(
            self.x, eval_x_k, direction, oracle, max_iter_line_search
        )
        next_iterate = self.x + step * direction
        logger.debug("ITERATE: %s + %s * %s = %s", self.x, step, direction, next_iterate)
        s = next_iterate - self.x
        self.s_norm = float(np.linalg.norm(s))
        y = np.asarray(oracle(next_iterate).g, dtype=float) - np.asarray(eval_x_k.g, dtype=float)
        self.y_norm = float(np.linalg.norm(y))
        self.x = next_iterate