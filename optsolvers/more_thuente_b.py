"""More-Thuente line search whose largest step keeps the iterate inside a box."""

from __future__ import annotations

import logging
import math

import numpy as np

from .more_thuente import MoreThuente

logger = logging.getLogger(__name__)


class MoreThuenteB(MoreThuente):
    """More-Thuente search for box-constrained problems.

    Before each search the upper step limit ``t_max`` is lowered to the
    largest step that keeps ``x_k + t * direction_k`` within the bounds.
    The lowered limit is kept for later searches.
    """

    def __init__(self, n: int) -> None:
        super().__init__()
        self.lower_bound = np.full(n, -math.inf)
        self.upper_bound = np.full(n, math.inf)

    def with_lower_bound(self, lower_bound) -> "MoreThuenteB":
        self.lower_bound = np.asarray(lower_bound, dtype=float)
        return self

    def with_upper_bound(self, upper_bound) -> "MoreThuenteB":
        self.upper_bound = np.asarray(upper_bound, dtype=float)
        return self

    def _max_feasible_step(self, x_k, direction_k) -> float:
        x_k = np.asarray(x_k, dtype=float)
        direction_k = np.asarray(direction_k, dtype=float)
        with np.errstate(all="ignore"):
            limits = np.where(
                direction_k > 0.0,
                (self.upper_bound - x_k) / direction_k,
                np.where(
                    direction_k < 0.0,
                    (self.lower_bound - x_k) / direction_k,
                    math.inf,
                ),
            )
        return float(np.fmin.reduce(limits, initial=math.inf))

    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        candidate = self._max_feasible_step(x_k, direction_k)
        logger.debug("t_max_candidate: %s", candidate)
        self.t_max = float(np.fmin(self.t_max, candidate))
        return super().compute_step_len(x_k, eval_x_k, direction_k, oracle, max_iter)