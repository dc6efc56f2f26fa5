"""
Custom validators shared by models and services.
"""

import math
from datetime import datetime, timezone
from typing import Any


def to_naive_utc(value: datetime) -> datetime:
    """Normalise a datetime to naive UTC so naive and aware values compare."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def validate_finite_amount(amount: Any) -> float:
    """Coerce an amount to float, rejecting NaN and infinities."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValueError(f"Amount must be numeric, got {amount!r}")

    if not math.isfinite(value):
        raise ValueError("Amount must be a finite number")

    return value


def validate_periods(periods: int, max_periods: int) -> int:
    """Validate a requested forecast horizon."""
    if periods < 1:
        raise ValueError("Periods must be at least 1")

    if periods > max_periods:
        raise ValueError(f"Periods cannot exceed {max_periods}")

    return periods


def validate_threshold(threshold: float) -> float:
    """Validate a z-score threshold."""
    if not math.isfinite(threshold) or threshold <= 0:
        raise ValueError("Threshold must be a positive number")

    return threshold
