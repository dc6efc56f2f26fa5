"""
Trend direction and seasonality heuristics over an ordered series.
"""

from typing import List, Sequence

from project_analytics.services import stats
from project_analytics.utils.constants import (
    QUARTER_LENGTH,
    SEASONALITY_MIN_POINTS,
    SEASONALITY_MIN_QUARTERS,
    SEASONALITY_VARIANCE_RATIO,
    TREND_CHANGE_PERCENT,
    TrendDirection,
)


def classify_trend(values: Sequence[float]) -> TrendDirection:
    """
    Compare the average of the second half of the series with the first.

    The first half holds ``n // 2`` values and the second half the rest, so
    the middle value of an odd-length series counts towards the second half.
    A change of more than 10% either way is a trend; a zero first-half
    average makes the change undefined and is reported as stable.
    """
    if len(values) < 2:
        return TrendDirection.STABLE

    split = len(values) // 2
    first_avg = stats.mean(values[:split])
    second_avg = stats.mean(values[split:])

    if first_avg == 0:
        return TrendDirection.STABLE

    change = (second_avg - first_avg) / first_avg * 100

    if change > TREND_CHANGE_PERCENT:
        return TrendDirection.INCREASING
    if change < -TREND_CHANGE_PERCENT:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def quarter_means(values: Sequence[float]) -> List[float]:
    """Means of consecutive non-overlapping 3-value windows; a partial tail is dropped."""
    complete = len(values) - len(values) % QUARTER_LENGTH
    return [
        stats.mean(values[start:start + QUARTER_LENGTH])
        for start in range(0, complete, QUARTER_LENGTH)
    ]


def detect_seasonality(values: Sequence[float]) -> bool:
    """
    Coarse quarterly seasonality check.

    Reports seasonality when the variance of the quarter means exceeds half
    the variance of the whole series. This is a heuristic, not a statistical
    test. Series shorter than 12 values, or with fewer than 4 complete
    quarters, are treated as insufficient data.
    """
    if len(values) < SEASONALITY_MIN_POINTS:
        return False

    quarters = quarter_means(values)
    if len(quarters) < SEASONALITY_MIN_QUARTERS:
        return False

    return stats.variance(quarters) > stats.variance(values) * SEASONALITY_VARIANCE_RATIO
