"""
Project Analytics Service.
Entry point used by the API layer: applies configured limits and defaults,
and logs each computation. The underlying engines neither log nor hold state.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

import structlog

from project_analytics.config import Settings
from project_analytics.models.analytics import (
    Anomaly,
    ExpenseRecord,
    ForecastResult,
    HistoricalPoint,
    ProjectSnapshot,
    RiskAssessment,
)
from project_analytics.services.anomaly import AnomalyDetector
from project_analytics.services.forecasting import ForecastEngine
from project_analytics.services.preprocessing import aggregate_expenses, history_from_records
from project_analytics.services.risk import RiskScorer
from project_analytics.utils.constants import AnomalySeverity
from project_analytics.utils.exceptions import AnalyticsError, ValidationError

logger = structlog.get_logger()


class ProjectAnalyticsService:
    """Forecasting, anomaly detection and risk scoring for a project."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.forecast_engine = ForecastEngine(max_periods=settings.max_forecast_periods)
        self.risk_scorer = RiskScorer()

    def forecast_budget(
        self,
        records: Iterable[Any],
        periods: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> ForecastResult:
        """Forecast from raw history records carrying ``amount`` or ``value``."""
        history = history_from_records(records)
        self._check_size(len(history), "history")
        return self._run_forecast(history, periods, now)

    def forecast_from_expenses(
        self,
        expenses: Sequence[ExpenseRecord],
        periods: Optional[int] = None,
        frequency: str = "MS",
        now: Optional[datetime] = None
    ) -> ForecastResult:
        """Aggregate expenses per period, then forecast the period totals."""
        self._check_size(len(expenses), "expenses")
        history = aggregate_expenses(expenses, frequency)
        logger.debug(
            "Expenses aggregated for forecasting",
            expense_count=len(expenses),
            frequency=frequency,
            periods_built=len(history)
        )
        return self._run_forecast(history, periods, now)

    def detect_anomalies(
        self,
        expenses: Sequence[ExpenseRecord],
        threshold: Optional[float] = None
    ) -> List[Anomaly]:
        """Flag anomalous expenses. ``threshold`` defaults to the configured sensitivity."""
        self._check_size(len(expenses), "expenses")
        if threshold is None:
            threshold = self.settings.anomaly_detection_sensitivity

        anomalies = AnomalyDetector(threshold).detect(expenses)

        logger.info(
            "Spending anomalies detected",
            expense_count=len(expenses),
            threshold=threshold,
            anomaly_count=len(anomalies),
            high_severity=sum(1 for anomaly in anomalies if anomaly.severity == AnomalySeverity.HIGH)
        )
        return anomalies

    def assess_risk(self, project: ProjectSnapshot, now: Optional[datetime] = None) -> RiskAssessment:
        """Score the risk of a project snapshot."""
        assessment = self.risk_scorer.score(project, now=now)

        logger.info(
            "Project risk assessed",
            project_id=project.id,
            score=assessment.score,
            level=assessment.level.value,
            factors=list(assessment.factors)
        )
        return assessment

    def _run_forecast(
        self,
        history: List[HistoricalPoint],
        periods: Optional[int],
        now: Optional[datetime]
    ) -> ForecastResult:
        if periods is None:
            periods = self.settings.default_forecast_periods

        try:
            result = self.forecast_engine.forecast(history, periods, now=now)
        except AnalyticsError as e:
            logger.warning(
                "Budget forecast failed",
                error_code=e.code,
                error_message=e.message,
                data_points=len(history),
                periods=periods
            )
            raise

        logger.info(
            "Budget forecast generated",
            data_points=result.data_points,
            periods=periods,
            trend=result.trend.value,
            seasonality=result.seasonality,
            accuracy=result.accuracy
        )
        return result

    def _check_size(self, size: int, name: str) -> None:
        if size > self.settings.max_history_points:
            raise ValidationError(
                f"Too many {name} records",
                details=[f"Maximum allowed: {self.settings.max_history_points}", f"Received: {size}"]
            )


def get_analytics_service(settings: Settings) -> ProjectAnalyticsService:
    """Build a service for the given settings. Instances are cheap and hold no state."""
    return ProjectAnalyticsService(settings)
