"""
Numeric primitives: OLS slope, Pearson correlation, compliance rate.

All functions are pure transforms over numpy arrays. No store access,
no rounding, no side effects.
"""

from typing import Optional

import numpy as np


# ---------------------------------------------------------------------------
# OLS slope
# ---------------------------------------------------------------------------

def _ols_slope(y: np.ndarray) -> float:
    """
    Ordinary least-squares slope for evenly-spaced data.

    Uses the closed-form solution:  slope = Σ(x_c · y_c) / Σ(x_c²)
    where x is the sequence index 0..n-1 and x_c, y_c are mean-centered.
    """
    n = len(y)
    if n < 2:
        return 0.0
    x = np.arange(n, dtype=np.float64)
    x_c = x - x.mean()
    y_c = y - y.mean()
    denom = np.dot(x_c, x_c)
    if denom == 0.0:
        return 0.0
    return float(np.dot(x_c, y_c) / denom)


# ---------------------------------------------------------------------------
# Pearson correlation
# ---------------------------------------------------------------------------

def _pearson(x: np.ndarray, y: np.ndarray) -> Optional[float]:
    """
    Pearson coefficient  Σ(x_c · y_c) / sqrt(Σx_c² · Σy_c²).

    Returns None when the coefficient is undefined: mismatched lengths,
    fewer than two points, or a constant series (zero variance term).
    """
    if len(x) != len(y) or len(x) < 2:
        return None
    x_c = x - x.mean()
    y_c = y - y.mean()
    x_ss = np.dot(x_c, x_c)
    y_ss = np.dot(y_c, y_c)
    if x_ss == 0.0 or y_ss == 0.0:
        return None
    return float(np.dot(x_c, y_c) / np.sqrt(x_ss * y_ss))


# ---------------------------------------------------------------------------
# Compliance
# ---------------------------------------------------------------------------

def compliance_percentage(values: np.ndarray, low: float, high: float) -> float:
    """Percentage of values inside [low, high] inclusive; 0.0 for an empty array."""
    if len(values) == 0:
        return 0.0
    inside = np.count_nonzero((values >= low) & (values <= high))
    return float(inside) / len(values) * 100
