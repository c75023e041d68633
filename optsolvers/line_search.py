"""Line-search interface and step acceptance conditions."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class LineSearch(ABC):
    """Computes a step length along a search direction."""

    @abstractmethod
    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        """Return the scalar step size."""


class SufficientDecreaseCondition:
    """Armijo rule; the implementing class provides ``c1``."""

    c1: float

    def sufficient_decrease(self, f_k, f_kp1, grad_k, t, direction_k) -> bool:
        return f_kp1 - f_k <= self.c1 * t * float(np.dot(grad_k, direction_k))


class CurvatureCondition:
    """Curvature rules; the implementing class provides ``c2``."""

    c2: float

    def curvature_condition(self, grad_k, grad_kp1, direction_k) -> bool:
        return float(np.dot(grad_kp1, direction_k)) >= self.c2 * float(
            np.dot(grad_k, direction_k)
        )

    def strong_curvature_condition(self, grad_k, grad_kp1, direction_k) -> bool:
        return abs(float(np.dot(grad_kp1, direction_k))) <= self.c2 * abs(
            float(np.dot(grad_k, direction_k))
        )


class WolfeConditions(SufficientDecreaseCondition, CurvatureCondition):
    """Weak and strong Wolfe conditions."""

    def wolfe_conditions(self, f_k, f_kp1, grad_k, grad_kp1, t, direction_k) -> bool:
        return self.sufficient_decrease(
            f_k, f_kp1, grad_k, t, direction_k
        ) and self.curvature_condition(grad_k, grad_kp1, direction_k)

    def strong_wolfe_conditions(
        self, f_k, f_kp1, grad_k, grad_kp1, t, direction_k
    ) -> bool:
        return self.sufficient_decrease(
            f_k, f_kp1, grad_k, t, direction_k
        ) and self.strong_curvature_condition(grad_k, grad_kp1, direction_k)


class NoSearch(LineSearch):
    """Always takes the full step."""

    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        return 1.0