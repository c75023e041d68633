"""Backtracking line searches with the Armijo rule."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .line_search import LineSearch, SufficientDecreaseCondition
from .number import box_projection

logger = logging.getLogger(__name__)


@dataclass
class BackTracking(SufficientDecreaseCondition, LineSearch):
    """Inexact line search shrinking the step by ``beta`` until Armijo holds.

    Recommended ranges: ``c1`` in [0.01, 0.3], ``beta`` in [0.1, 0.8].
    """

    c1: float
    beta: float

    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        t = 1.0
        i = 0
        while i < max_iter:
            x_kp1 = x_k + t * direction_k
            eval_kp1 = oracle(x_kp1)
            if not math.isfinite(eval_kp1.f):
                logger.debug(
                    "Step size too big: next iterate is out of domain (%s)", x_kp1
                )
                t *= self.beta
                continue
            if self.sufficient_decrease(
                eval_x_k.f, eval_kp1.f, eval_x_k.g, t, direction_k
            ):
                logger.debug("Sufficient decrease condition met with step %s", t)
                return t
            t *= self.beta
            i += 1
        logger.debug("Max iter reached. Early stopping.")
        return t


@dataclass
class BackTrackingB(LineSearch):
    """Backtracking for box-constrained solvers, projecting each trial point."""

    c1: float
    beta: float
    lower_bound: np.ndarray
    upper_bound: np.ndarray

    def __post_init__(self) -> None:
        self.lower_bound = np.asarray(self.lower_bound, dtype=float)
        self.upper_bound = np.asarray(self.upper_bound, dtype=float)

    def _sufficient_decrease_with_bounds(self, x0, x, f0, f, t) -> bool:
        diff = x - x0
        return f - f0 <= (-self.c1 / t) * float(diff @ diff)

    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        t = 1.0
        i = 0
        while i < max_iter:
            x_kp1 = box_projection(
                x_k + t * direction_k, self.lower_bound, self.upper_bound
            )
            eval_kp1 = oracle(x_kp1)
            if not math.isfinite(eval_kp1.f):
                logger.debug(
                    "Step size too big: next iterate is out of domain (%s)", x_kp1
                )
                t *= self.beta
                continue
            if self._sufficient_decrease_with_bounds(
                x_k, x_kp1, eval_x_k.f, eval_kp1.f, t
            ):
                logger.debug("Modified Armijo rule met with step %s at %d", t, i)
                return t
            t *= self.beta
            i += 1
        logger.debug("Max iter reached. Early stopping.")
        return t