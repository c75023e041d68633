"""Non-monotone line search with safeguarded quadratic interpolation."""

from __future__ import annotations

import logging
from collections import deque

import numpy as np

from .line_search import LineSearch, SufficientDecreaseCondition

logger = logging.getLogger(__name__)


def _div(a: float, b: float) -> float:
    """IEEE division: yields inf or nan instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(a) / np.float64(b))


class GLLQuadratic(SufficientDecreaseCondition, LineSearch):
    """Grippo-Lampariello-Lucidi non-monotone Armijo search.

    The Armijo test compares against the largest of the last ``m`` function
    values; ``m == 1`` gives the usual monotone Armijo search.
    """

    def __init__(self, c1: float, m: int) -> None:
        if m < 1:
            raise ValueError("m must be at least 1")
        self.c1 = float(c1)
        self.m = int(m)
        self.f_previous: deque[float] = deque(maxlen=self.m)
        self.sigma1 = 0.1
        self.sigma2 = 0.9

    def with_sigmas(self, sigma1: float, sigma2: float) -> "GLLQuadratic":
        """Set the safeguard bounds for interpolated steps."""
        self.sigma1 = float(sigma1)
        self.sigma2 = float(sigma2)
        return self

    def _f_max(self) -> float:
        return max(self.f_previous, default=float("-inf"))

    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        self.f_previous.append(float(eval_x_k.f))
        f_max = self._f_max()
        slope = float(np.dot(eval_x_k.g, direction_k))
        t = 1.0

        for _ in range(max_iter):
            with np.errstate(all="ignore"):
                x_kp1 = x_k + t * direction_k
            eval_kp1 = oracle(x_kp1)

            if self.sufficient_decrease(f_max, eval_kp1.f, eval_x_k.g, t, direction_k):
                logger.debug("Sufficient decrease condition met with step %s", t)
                return t

            if t <= 0.1:
                logger.debug("Step size too small: %s; bisecting", t)
                t *= 0.5
            else:
                t_tmp = _div(
                    -0.5 * t * t * slope, eval_kp1.f - eval_x_k.f - t * slope
                )
                if self.sigma1 < t_tmp < self.sigma2 * t:
                    logger.debug("Safeguarded step size: %s", t_tmp)
                    t = t_tmp
                else:
                    logger.debug(
                        "t_tmp = %s not in [%s, %s]; bisecting",
                        t_tmp,
                        self.sigma1,
                        self.sigma2 * t,
                    )
                    t = t_tmp * 0.5
        logger.debug("Max iter reached. Early stopping.")
        return t