"""Small vector helpers shared by the solvers."""

from __future__ import annotations

import numpy as np


def box_projection(x, lower_bound, upper_bound) -> np.ndarray:
    """Project ``x`` component-wise onto the box ``[lower_bound, upper_bound]``."""
    x = np.asarray(x, dtype=float)
    return np.minimum(np.maximum(x, lower_bound), upper_bound)


def infinity_norm(x) -> float:
    """Largest absolute component of ``x``; 0.0 for an empty vector. NaN entries are ignored."""
    values = np.abs(np.asarray(x, dtype=float))
    return float(np.fmax.reduce(values, initial=0.0))