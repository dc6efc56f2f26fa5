"""
Budget forecasting service.
Extrapolates a linear trend over ordinal time and attaches a fixed-width
confidence band, trend and seasonality metadata.
"""

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from project_analytics.models.analytics import (
    FitMetrics,
    ForecastPoint,
    ForecastResult,
    HistoricalPoint,
)
from project_analytics.services import stats
from project_analytics.services.trend import classify_trend, detect_seasonality
from project_analytics.utils.constants import (
    ACCURACY_CAP,
    ACCURACY_FULL_DATA_POINTS,
    BASE_CONFIDENCE,
    CONFIDENCE_DECAY_PER_PERIOD,
    CONFIDENCE_PER_POINT,
    CONFIDENCE_Z,
    FORECAST_ALGORITHM,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    MIN_FORECAST_POINTS,
)
from project_analytics.utils.exceptions import DegenerateInputError, InsufficientDataError, ValidationError
from project_analytics.utils.validators import validate_periods


def calculate_confidence(data_points: int, period: int) -> float:
    """Confidence rises with history length and decays with forecast distance."""
    base = min(MAX_CONFIDENCE, BASE_CONFIDENCE + data_points * CONFIDENCE_PER_POINT)
    return float(max(MIN_CONFIDENCE, base - period * CONFIDENCE_DECAY_PER_PERIOD))


def estimate_accuracy(data_points: int) -> int:
    """Data-sufficiency proxy: scales with history up to 12 points, capped at 90."""
    # min(1, n / 12) * 90, kept exact so half-way values round up
    score = Decimal(min(data_points, ACCURACY_FULL_DATA_POINTS) * ACCURACY_CAP) / Decimal(ACCURACY_FULL_DATA_POINTS)
    return int(score.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _fit_metrics(fit: stats.LinearFit, amounts: List[float]) -> FitMetrics:
    fitted = [fit.predict(index) for index in range(len(amounts))]
    r2 = None
    if stats.variance(amounts) > 0:
        r2 = float(r2_score(amounts, fitted))

    return FitMetrics(
        mae=float(mean_absolute_error(amounts, fitted)),
        rmse=math.sqrt(mean_squared_error(amounts, fitted)),
        r2=r2
    )


class ForecastEngine:
    """Linear-trend budget forecaster."""

    def __init__(self, max_periods: Optional[int] = None):
        self.max_periods = max_periods

    def forecast(
        self,
        history: Sequence[HistoricalPoint],
        periods: int,
        now: Optional[datetime] = None
    ) -> ForecastResult:
        """
        Forecast ``periods`` future values from an ordered history.

        History entries are indexed ``0..n-1`` in the order given; calendar
        gaps and the points' own ``index`` values are ignored and nothing is
        re-sorted. Each period gets ``predicted = max(0, trend)`` and a band of
        ``1.96 * stddev(history)`` on either side, with the lower bound clamped
        at zero.

        Raises:
            InsufficientDataError: fewer than 3 history points.
            DegenerateInputError: amounts so large the band overflows.
            ValidationError: ``periods`` outside ``1..max_periods``.
        """
        if len(history) < MIN_FORECAST_POINTS:
            raise InsufficientDataError(
                required=MIN_FORECAST_POINTS,
                received=len(history)
            )

        try:
            validate_periods(periods, self.max_periods or periods)
        except ValueError as e:
            raise ValidationError("Invalid forecast horizon", details=[str(e)])

        amounts = [point.amount for point in history]
        data_points = len(amounts)
        fit = stats.fit_linear_regression(list(range(data_points)), amounts)

        interval = CONFIDENCE_Z * math.sqrt(stats.variance(amounts))
        last_index = data_points - 1

        forecasts = []
        for period in range(1, periods + 1):
            predicted = max(0.0, fit.predict(last_index + period))
            upper = predicted + interval
            if not math.isfinite(upper):
                raise DegenerateInputError(
                    "Forecast exceeds floating point range",
                    details=[f"Period: {period}"]
                )

            forecasts.append(ForecastPoint(
                period=period,
                predicted_value=predicted,
                lower_bound=max(0.0, predicted - interval),
                upper_bound=upper,
                confidence=calculate_confidence(data_points, period)
            ))

        return ForecastResult(
            forecasts=tuple(forecasts),
            trend=classify_trend(amounts),
            seasonality=detect_seasonality(amounts),
            accuracy=estimate_accuracy(data_points),
            data_points=data_points,
            generated_at=now or datetime.utcnow(),
            algorithm=FORECAST_ALGORITHM,
            slope=fit.slope,
            intercept=fit.intercept,
            fit_metrics=_fit_metrics(fit, amounts)
        )


def generate_forecast(
    history: Sequence[HistoricalPoint],
    periods: int,
    now: Optional[datetime] = None
) -> ForecastResult:
    """Forecast with an unbounded horizon."""
    return ForecastEngine().forecast(history, periods, now=now)
