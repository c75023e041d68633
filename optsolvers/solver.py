"""Line-search solver template and solver errors."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

from .func_eval import FuncEval

logger = logging.getLogger(__name__)

Oracle = Callable[[np.ndarray], FuncEval]


class SolverError(Exception):
    """Base class of all solver failures."""


class MaxIterReached(SolverError):
    def __init__(self, message: str = "Max iter reached") -> None:
        super().__init__(message)


class OutOfDomain(SolverError):
    def __init__(self, message: str = "Out of domain") -> None:
        super().__init__(message)


class InvalidInputParams(SolverError):
    def __init__(self, message: str = "Error in input parameters") -> None:
        super().__init__(message)


class AbnormalTermination(SolverError):
    def __init__(self, message: str = "Abnormal termination") -> None:
        super().__init__(message)


class LineSearchSolver(ABC):
    """Template for descent methods driven by a line search.

    Subclasses provide ``compute_direction`` and ``has_converged``; the rest
    of the iteration may be overridden as needed.
    """

    def __init__(self, x0) -> None:
        self.x = np.asarray(x0, dtype=float)
        self.k = 0

    @abstractmethod
    def compute_direction(self, eval_x_k: FuncEval) -> np.ndarray:
        """Descent direction at the current iterate."""

    @abstractmethod
    def has_converged(self, eval_x_k: FuncEval) -> bool:
        """Whether the current iterate satisfies the stopping rule."""

    def setup(self) -> None:
        """Hook run once before the iterations start."""

    def evaluate_x_k(self, oracle: Oracle) -> FuncEval:
        """Evaluate the oracle at the current iterate, rejecting non-finite values."""
        eval_x_k = oracle(self.x)
        if not math.isfinite(eval_x_k.f):
            logger.error("Minimization completed: next iterate is out of domain")
            raise OutOfDomain()
        return eval_x_k

    def update_next_iterate(
        self, line_search, eval_x_k, oracle, direction, max_iter_line_search
    ) -> None:
        """Take a line-search step along ``direction``."""
        step = line_search.compute_step_len(
            self.x, eval_x_k, direction, oracle, max_iter_line_search
        )
        self.x = self.x + step * direction

    def minimize(
        self,
        line_search,
        oracle: Oracle,
        max_iter_solver: int,
        max_iter_line_search: int,
        callback: Optional[Callable[["LineSearchSolver"], None]] = None,
    ) -> None:
        """Iterate until convergence; raise MaxIterReached otherwise."""
        self.k = 0
        self.setup()
        while self.k < max_iter_solver:
            eval_x_k = self.evaluate_x_k(oracle)
            if self.has_converged(eval_x_k):
                logger.info(
                    "Minimization completed: convergence in %d iterations", self.k
                )
                return
            direction = self.compute_direction(eval_x_k)
            logger.debug("Gradient: %s, Direction: %s", eval_x_k.g, direction)
            self.update_next_iterate(
                line_search, eval_x_k, oracle, direction, max_iter_line_search
            )
            logger.debug("Iterate: %s", self.x)
            logger.debug("Function eval: %s", eval_x_k)
            self.k += 1
            if callback is not None:
                callback(self)
        logger.warning("Minimization completed: max iter reached during minimization")
        raise MaxIterReached()


class BoundedSolver(LineSearchSolver):
    """Line-search solver constrained to a box."""

    def __init__(self, x0, lower_bound, upper_bound) -> None:
        super().__init__(x0)
        self.lower_bound = np.asarray(lower_bound, dtype=float)
        self.upper_bound = np.asarray(upper_bound, dtype=float)

    def projected_gradient(self, eval_x_k: FuncEval) -> np.ndarray:
        """Gradient with components blocked by active bounds set to zero."""
        g = np.array(eval_x_k.g, dtype=float)
        blocked = ((self.x == self.lower_bound) & (g > 0.0)) | (
            (self.x == self.upper_bound) & (g < 0.0)
        )
        g[blocked] = 0.0
        return g