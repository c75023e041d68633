"""Function evaluations returned by optimisation oracles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np


@dataclass
class FuncEval:
    """Value, gradient and optional Hessian of an objective at a point.

    For multivariate functions ``g`` is a 1-D array and ``hessian`` a 2-D
    array. For univariate functions both are plain floats.
    """

    f: float
    g: Any
    hessian: Optional[Any] = None

    def __post_init__(self) -> None:
        self.f = float(self.f)
        if np.isscalar(self.g):
            self.g = float(self.g)
        else:
            self.g = np.asarray(self.g, dtype=float)
        if self.hessian is not None and not np.isscalar(self.hessian):
            self.hessian = np.asarray(self.hessian, dtype=float)

    def with_hessian(self, hessian) -> "FuncEval":
        """Attach a Hessian and return this evaluation."""
        self.hessian = np.asarray(hessian, dtype=float)
        return self

    def take_hessian(self):
        """Remove the Hessian from this evaluation and return it."""
        if self.hessian is None:
            raise ValueError("hessian not available in this evaluation")
        hessian, self.hessian = self.hessian, None
        return hessian