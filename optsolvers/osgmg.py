"""Online scaled gradient method with a ratio surrogate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class DiagonalPattern:
    """Diagonal scaling, stored as the vector of diagonal entries."""

    p: np.ndarray

    def __post_init__(self) -> None:
        self.p = np.array(self.p, dtype=float)


@dataclass
class DensePattern:
    """Full scaling matrix."""

    p: np.ndarray

    def __post_init__(self) -> None:
        self.p = np.array(self.p, dtype=float)


Pattern = Union[DiagonalPattern, DensePattern]


def _hessian_of(eval_x):
    if eval_x.hessian is None:
        raise ValueError("Hessian not provided")
    return np.asarray(eval_x.hessian, dtype=float)


def _norm(v) -> float:
    return float(np.linalg.norm(v))


def minimize_osgmg(x0, oracle, max_iter, pattern, adagrad_alpha, grad_tol) -> np.ndarray:
    """Run the scaled gradient method and return the final iterate.

    The scaling ``pattern.p`` is learnt online with AdaGrad steps. A trial
    point is accepted only if it lowers the gradient norm. Iteration stops
    once the gradient norm is below ``grad_tol`` or after ``max_iter`` steps.
    """
    x = np.array(x0, dtype=float)
    if isinstance(pattern, DiagonalPattern):
        p = pattern.p.copy()
        cap_g = np.zeros(len(x))
        with np.errstate(all="ignore"):
            for _ in range(max_iter):
                logger.debug("x: %s", x)
                g = np.asarray(oracle(x).g, dtype=float)
                nrmg = _norm(g)
                xtmp = x - p * g
                eval_tmp = oracle(xtmp)
                gtmp = np.asarray(eval_tmp.g, dtype=float)
                nrmgtmp = _norm(gtmp)
                hesstmp = _hessian_of(eval_tmp)

                gr = -((hesstmp @ gtmp) * g) / (nrmg * nrmgtmp)
                cap_g += gr * gr
                p += -adagrad_alpha * (gr * np.sqrt(cap_g + 1e-20))
                logger.debug("xtmp: %s", xtmp)
                if nrmgtmp < nrmg:
                    x = xtmp
                if nrmg < grad_tol:
                    break
        return x

    if isinstance(pattern, DensePattern):
        p = pattern.p.copy()
        n = len(x)
        cap_g = np.zeros((n, n))
        with np.errstate(all="ignore"):
            for _ in range(max_iter):
                g = np.asarray(oracle(x).g, dtype=float)
                nrmg = _norm(g)
                xtmp = x - p @ g
                eval_tmp = oracle(xtmp)
                gtmp = np.asarray(eval_tmp.g, dtype=float)
                hesstmp = _hessian_of(eval_tmp)
                nrmgtmp = _norm(gtmp)

                gr = -np.outer(hesstmp @ gtmp, g) / (nrmg * nrmgtmp)
                cap_g += gr * gr
                p += -adagrad_alpha * np.sqrt(gr + 1e-20)

                if nrmgtmp < nrmg:
                    x = xtmp
                if nrmg < grad_tol:
                    break
        return x

    raise TypeError(f"unsupported sparsity pattern: {type(pattern).__name__}")