"""More-Thuente line search satisfying the strong Wolfe conditions."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .func_eval import FuncEval
from .line_search import LineSearch, WolfeConditions

logger = logging.getLogger(__name__)


def _fmax(a: float, b: float) -> float:
    """Maximum ignoring a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def _fmin(a: float, b: float) -> float:
    """Minimum ignoring a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def update_interval(f_tl, f_t, g_t, tl, t, tu):
    """Update the bracketing interval.

    Returns ``(tl, tu, converged)`` where ``converged`` tells that the
    interval collapsed to a point.
    """
    if f_t > f_tl:
        return tl, t, False
    if g_t * (tl - t) > 0.0:
        return t, tu, False
    if g_t * (tl - t) < 0.0:
        return t, tl, False
    return tl, tu, True


def cubic_minimizer(ta, tb, f_ta, f_tb, g_ta, g_tb) -> float:
    """Minimizer of the cubic interpolating values and slopes at ``ta`` and ``tb``."""
    with np.errstate(all="ignore"):
        ta, tb, f_ta, f_tb, g_ta, g_tb = map(np.float64, (ta, tb, f_ta, f_tb, g_ta, g_tb))
        s = 3.0 * (f_tb - f_ta) / (tb - ta)
        z = s - g_ta - g_tb
        w = np.sqrt(z * z - g_ta * g_tb)
        return float(ta + (tb - ta) * ((w - g_ta - z) / (g_tb - g_ta + 2.0 * w)))


def quadratic_minimizer_1(ta, tb, f_ta, f_tb, g_ta) -> float:
    """Minimizer of the quadratic through both values and the slope at ``ta``."""
    with np.errstate(all="ignore"):
        ta, tb, f_ta, f_tb, g_ta = map(np.float64, (ta, tb, f_ta, f_tb, g_ta))
        lin_int = (f_ta - f_tb) / (ta - tb)
        return float(ta - 0.5 * ((ta - tb) * g_ta / (g_ta - lin_int)))


def quadratic_minimizer_2(ta, tb, g_ta, g_tb) -> float:
    """Secant minimizer from the slopes at ``ta`` and ``tb``."""
    with np.errstate(all="ignore"):
        ta, tb, g_ta, g_tb = map(np.float64, (ta, tb, g_ta, g_tb))
        return float(ta - g_ta * ((ta - tb) / (g_ta - g_tb)))


def phi(eval_x: FuncEval, direction_k) -> FuncEval:
    """Restriction of an evaluation to the search ray: value and directional derivative."""
    return FuncEval(eval_x.f, float(np.dot(eval_x.g, direction_k)))


@dataclass
class MoreThuente(WolfeConditions, LineSearch):
    """Line search of More and Thuente (1994)."""

    c1: float = 1e-4
    c2: float = 0.9
    t_min: float = 0.0
    t_max: float = math.inf
    delta_min: float = 0.58333333
    delta: float = 0.66
    delta_max: float = 1.1

    def with_deltas(self, delta_min, delta, delta_max) -> "MoreThuente":
        self.delta_min = float(delta_min)
        self.delta = float(delta)
        self.delta_max = float(delta_max)
        return self

    def with_t_min(self, t_min) -> "MoreThuente":
        self.t_min = float(t_min)
        return self

    def with_t_max(self, t_max) -> "MoreThuente":
        self.t_max = float(t_max)
        return self

    def with_c1(self, c1) -> "MoreThuente":
        if not c1 > 0.0:
            raise ValueError("c1 must be positive")
        if not c1 < self.c2:
            raise ValueError("c1 must be less than c2")
        self.c1 = float(c1)
        return self

    def with_c2(self, c2) -> "MoreThuente":
        if not c2 > 0.0:
            raise ValueError("c2 must be positive")
        if not c2 < 1.0:
            raise ValueError("c2 must be less than 1")
        if not c2 > self.c1:
            raise ValueError("c2 must be greater than c1")
        self.c2 = float(c2)
        return self

    def psi(self, phi_0: FuncEval, phi_t: FuncEval, t) -> FuncEval:
        """Auxiliary function psi(t) = phi(t) - phi(0) - c1 * t * phi'(0)."""
        image = phi_t.f - phi_0.f - self.c1 * t * phi_0.g
        derivative = phi_t.g - self.c1 * phi_0.g
        return FuncEval(image, derivative)

    def _eval_along(self, oracle, x_k, t, direction_k, phi_0, use_modified):
        with np.errstate(all="ignore"):
            point = x_k + t * direction_k
        phi_s = phi(oracle(point), direction_k)
        if use_modified:
            return phi_s.f, phi_s.g
        psi_s = self.psi(phi_0, phi_s, t)
        return psi_s.f, psi_s.g

    def compute_step_len(self, x_k, eval_x_k, direction_k, oracle, max_iter) -> float:
        use_modified = False
        interval_converged = False

        t = _fmin(_fmax(1.0, self.t_min), self.t_max)
        tl = self.t_min
        tu = self.t_max
        eval_0 = eval_x_k
        phi_0 = phi(eval_0, direction_k)

        for i in range(max_iter):
            with np.errstate(all="ignore"):
                eval_t = oracle(x_k + t * direction_k)
            if self.strong_wolfe_conditions(
                eval_0.f, eval_t.f, eval_0.g, eval_t.g, t, direction_k
            ):
                logger.debug("Strong Wolfe conditions satisfied at iteration %d", i)
                return t
            if interval_converged:
                logger.debug("Interval converged at iteration %d", i)
                return t
            if t == tl:
                logger.debug("t is at the lower end at iteration %d", i)
                return t
            if t == tu:
                logger.debug("t is at the upper end at iteration %d", i)
                return t

            phi_t = phi(eval_t, direction_k)
            psi_t = self.psi(phi_0, phi_t, t)

            if not use_modified and psi_t.f <= 0.0 and phi_t.g > 0.0:
                use_modified = True

            f_tl, g_tl = self._eval_along(oracle, x_k, tl, direction_k, phi_0, use_modified)
            if use_modified:
                f_t, g_t = phi_t.f, phi_t.g
            else:
                f_t, g_t = psi_t.f, psi_t.g

            if f_t > f_tl:
                tc = cubic_minimizer(tl, t, f_tl, f_t, g_tl, g_t)
                tq = quadratic_minimizer_1(tl, t, f_tl, f_t, g_tl)
                logger.debug("Case 1: tc: %s, tq: %s", tc, tq)
                if abs(tc - tl) < abs(tq - tl):
                    t = tc
                else:
                    t = 0.5 * (tq + tc)
            elif g_t * g_tl < 0.0:
                tc = cubic_minimizer(tl, t, f_tl, f_t, g_tl, g_t)
                ts = quadratic_minimizer_2(tl, t, g_tl, g_t)
                logger.debug("Case 2: tc: %s, ts: %s", tc, ts)
                t = tc if abs(tc - t) >= abs(ts - t) else ts
            elif abs(g_t) <= abs(g_tl):
                tc = cubic_minimizer(tl, t, f_tl, f_t, g_tl, g_t)
                ts = quadratic_minimizer_2(tl, t, g_tl, g_t)
                logger.debug("Case 3: tc: %s, ts: %s", tc, ts)
                t_plus = tc if abs(tc - t) < abs(ts - t) else ts
                with np.errstate(all="ignore"):
                    bound = float(np.float64(t) + self.delta * (np.float64(tu) - t))
                if t > tl:
                    t = _fmin(t_plus, bound)
                else:
                    t = _fmax(t_plus, bound)
            else:
                f_tu, g_tu = self._eval_along(
                    oracle, x_k, tu, direction_k, phi_0, use_modified
                )
                logger.debug("Case 4: f_tu: %s, g_tu: %s", f_tu, g_tu)
                t = cubic_minimizer(tu, t, f_t, f_tu, g_t, g_tu)

            t = _fmin(_fmax(t, self.t_min), self.t_max)

            tl, tu, interval_converged = update_interval(f_tl, f_t, g_t, tl, t, tu)
        logger.debug("Line search did not converge in %d iterations", max_iter)
        return t