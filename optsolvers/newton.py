"""Newton's method with a line search."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .func_eval import FuncEval
from .solver import LineSearchSolver

logger = logging.getLogger(__name__)


class Newton(LineSearchSolver):
    """Newton's method for unconstrained minimisation.

    The oracle must attach a Hessian to every evaluation. Convergence is
    declared once half the squared Newton decrement drops below ``tol``.
    """

    def __init__(self, tol: float, x0) -> None:
        super().__init__(x0)
        self.tol = float(tol)
        self.decrement_squared: Optional[float] = None

    def compute_direction(self, eval_x_k: FuncEval) -> np.ndarray:
        if eval_x_k.hessian is None:
            raise ValueError("Hessian not available in the oracle")
        g = np.asarray(eval_x_k.g, dtype=float)
        try:
            hessian_inv = np.linalg.inv(eval_x_k.hessian)
        except np.linalg.LinAlgError:
            logger.warning("Hessian is singular. Using gradient descent direction.")
            return -g
        direction = -(hessian_inv @ g)
        self.decrement_squared = float((hessian_inv @ direction) @ direction)
        return direction

    def has_converged(self, eval_x_k: FuncEval) -> bool:
        if self.decrement_squared is None:
            return False
        return self.decrement_squared * 0.5 < self.tol