"""
Numeric primitives used by the forecasting, trend and anomaly components.

All functions are pure. Variance is the population variance (divide by n),
which is what the confidence band and z-scores are defined against.
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from project_analytics.utils.exceptions import DegenerateInputError


@dataclass(frozen=True)
class LinearFit:
    """Ordinary least squares line ``y = slope * x + intercept``."""
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def _as_array(values: Sequence[float], operation: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise DegenerateInputError(f"Cannot compute {operation} of an empty sequence")
    return arr


def _is_constant(arr: np.ndarray) -> bool:
    return bool(np.ptp(arr) == 0)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean. Raises on an empty sequence."""
    arr = _as_array(values, "mean")
    # np.mean of a repeated non-integer value can be off by one ulp
    if _is_constant(arr):
        return float(arr[0])
    return float(np.mean(arr))


def variance(values: Sequence[float]) -> float:
    """
    Population variance. Raises on an empty sequence.

    A constant series has variance exactly 0. A variance that overflows
    float range raises DegenerateInputError.
    """
    arr = _as_array(values, "variance")
    if _is_constant(arr):
        return 0.0

    with np.errstate(over="ignore", invalid="ignore"):
        result = float(np.var(arr))

    if not math.isfinite(result):
        raise DegenerateInputError(
            "Variance exceeds floating point range",
            details=[f"Largest magnitude: {float(np.max(np.abs(arr)))}"]
        )
    return result


def stddev(values: Sequence[float]) -> float:
    """Population standard deviation."""
    return math.sqrt(variance(values))


def fit_linear_regression(xs: Sequence[float], ys: Sequence[float]) -> LinearFit:
    """Fit a single-variable OLS line of ``ys`` over ``xs``."""
    if len(xs) != len(ys):
        raise DegenerateInputError(
            "Regression inputs must have the same length",
            details=[f"len(xs)={len(xs)}", f"len(ys)={len(ys)}"]
        )
    if len(xs) < 2:
        raise DegenerateInputError(
            "Regression requires at least 2 points",
            details=[f"Received points: {len(xs)}"]
        )

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if _is_constant(y) and not _is_constant(x):
        return LinearFit(slope=0.0, intercept=float(y[0]))

    x_mean = x.mean()
    y_mean = y.mean()

    sxx = float(np.sum((x - x_mean) ** 2))
    if sxx == 0:
        raise DegenerateInputError("Regression is undefined when all x values are equal")

    slope = float(np.sum((x - x_mean) * (y - y_mean))) / sxx
    intercept = float(y_mean) - slope * float(x_mean)
    return LinearFit(slope=slope, intercept=intercept)
