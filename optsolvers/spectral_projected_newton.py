"""Spectral projected Newton method for box-constrained minimisation."""

from __future__ import annotations

import logging

import numpy as np

from .func_eval import FuncEval
from .number import box_projection, infinity_norm
from .solver import BoundedSolver

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` to ``[low, high]``; a NaN value yields a bound."""
    return float(np.fmax(np.fmin(np.float64(value), high), low))


def _cholesky_solve(hessian: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    try:
        lower = np.linalg.cholesky(hessian)
    except np.linalg.LinAlgError as exc:
        raise ValueError("Hessian is not positive definite") from exc
    return np.linalg.solve(lower.T, np.linalg.solve(lower, rhs))


class SpectralProjectedNewton(BoundedSolver):
    """Projected Newton steps scaled by a safeguarded Barzilai-Borwein factor.

    The scale ``lambda_`` is kept in ``[lambda_min, lambda_max]`` and is
    initialised from the projected gradient step at ``x0``. The method is
    typically paired with a non-monotone line search such as GLLQuadratic.
    """

    def __init__(self, grad_tol: float, x0, oracle, lower_bound, upper_bound) -> None:
        x0 = box_projection(x0, lower_bound, upper_bound)
        super().__init__(x0, lower_bound, upper_bound)
        self.grad_tol = float(grad_tol)
        self.lambda_min = 1e-3
        self.lambda_max = 1e3

        eval0 = oracle(self.x)
        target = box_projection(
            self.x - np.asarray(eval0.g, dtype=float), self.lower_bound, self.upper_bound
        )
        norm0 = infinity_norm(target - self.x)
        with np.errstate(divide="ignore", invalid="ignore"):
            inverse = float(np.float64(1.0) / np.float64(norm0))
        self.lambda_ = _clamp(inverse, self.lambda_min, self.lambda_max)

    def with_lambdas(self, lambda_min: float, lambda_max: float) -> "SpectralProjectedNewton":
        """Set the safeguard interval of the spectral scale."""
        self.lambda_min = float(lambda_min)
        self.lambda_max = float(lambda_max)
        return self

    def compute_direction(self, eval_x_k: FuncEval) -> np.ndarray:
        if eval_x_k.hessian is None:
            raise ValueError("Hessian not available in the oracle")
        newton_step = _cholesky_solve(eval_x_k.hessian, np.asarray(eval_x_k.g, dtype=float))
        target = box_projection(
            self.x - self.lambda_ * newton_step, self.lower_bound, self.upper_bound
        )
        return target - self.x

    def has_converged(self, eval_x_k: FuncEval) -> bool:
        return infinity_norm(self.projected_gradient(eval_x_k)) < self.grad_tol

    def update_next_iterate(
        self, line_search, eval_x_k, oracle, direction, max_iter_line_search
    ) -> None:
        step = line_search.compute_step_len(
            self.x, eval_x_k, direction, oracle, max_iter_line_search
        )
        x_k = self.x
        next_iterate = x_k + step * direction
        logger.debug("ITERATE: %s + %s * %s = %s", x_k, step, direction, next_iterate)

        s_k = next_iterate - x_k
        y_k = np.asarray(oracle(next_iterate).g, dtype=float) - np.asarray(
            eval_x_k.g, dtype=float
        )
        self.x = next_iterate

        skyk = float(s_k @ y_k)
        if skyk <= 0.0:
            logger.debug("skyk = %s <= 0. Resetting lambda to lambda_max", skyk)
            self.lambda_ = self.lambda_max
            return
        sksk = float(s_k @ s_k)
        self.lambda_ = _clamp(sksk / skyk, self.lambda_min, self.lambda_max)