"""
Analytics domain models: history points, forecasts, anomalies and risk.
"""
from datetime import datetime
from typing import Any, List, Optional, Tuple, Union

from pydantic import AliasChoices, Field, validator

from project_analytics.utils.constants import (
    AnomalyDirection,
    AnomalySeverity,
    ProjectPriority,
    RiskLevel,
    TrendDirection,
)
from project_analytics.utils.validators import to_naive_utc, validate_finite_amount

from .base import InputRecord, ValueObject


class HistoricalPoint(InputRecord):
    """One period of historical spend. ``index`` is an ordinal, not a date."""

    index: int = Field(..., ge=0)
    amount: float

    @validator("amount", pre=True)
    def validate_amount(cls, v):
        """Reject non-numeric and non-finite amounts."""
        return validate_finite_amount(v)


class ForecastPoint(ValueObject):
    """Estimate for a single future period."""

    period: int = Field(..., ge=1)
    predicted_value: float = Field(..., ge=0)
    lower_bound: float = Field(..., ge=0)
    upper_bound: float
    confidence: float = Field(..., ge=50, le=95)

    @validator("upper_bound")
    def validate_upper_bound(cls, v, values):
        """Upper bound may never sit below the point estimate."""
        predicted = values.get("predicted_value")
        if predicted is not None and v < predicted:
            raise ValueError("upper_bound must be >= predicted_value")
        return v


class FitMetrics(ValueObject):
    """In-sample goodness of fit for the trend line."""

    mae: float = Field(..., ge=0)
    rmse: float = Field(..., ge=0)
    r2: Optional[float] = Field(None, description="Undefined for a constant series")


class ForecastResult(ValueObject):
    """Forecast for consecutive future periods plus series metadata."""

    forecasts: Tuple[ForecastPoint, ...]
    trend: TrendDirection
    seasonality: bool
    accuracy: int = Field(..., ge=0, le=100)
    data_points: int = Field(..., ge=0)
    generated_at: datetime
    algorithm: str
    slope: float
    intercept: float
    fit_metrics: FitMetrics


class ExpenseRecord(InputRecord):
    """Expense line supplied by the budget ledger."""

    id: Optional[Union[str, int]] = Field(
        None, validation_alias=AliasChoices("id", "_id")
    )
    date: Optional[datetime] = None
    amount: float
    category: Optional[str] = None
    description: Optional[str] = None

    @validator("amount", pre=True)
    def validate_amount(cls, v):
        """Reject non-numeric and non-finite amounts."""
        return validate_finite_amount(v)


class Anomaly(ValueObject):
    """Expense whose z-score exceeded the detection threshold."""

    id: Optional[Union[str, int]] = None
    date: Optional[datetime] = None
    amount: float
    category: Optional[str] = None
    description: Optional[str] = None
    z_score: float = Field(..., ge=0)
    severity: AnomalySeverity
    direction: AnomalyDirection
    recommendation: str


class BudgetSnapshot(InputRecord):
    """Budget figures of a project."""

    allocated: float = Field(..., ge=0)
    spent: float = Field(default=0, ge=0)


class TimelineSnapshot(InputRecord):
    """Planned start and end of a project."""

    start_date: datetime = Field(..., validation_alias=AliasChoices("start_date", "startDate"))
    end_date: datetime = Field(..., validation_alias=AliasChoices("end_date", "endDate"))

    @validator("end_date")
    def validate_end_date(cls, v, values):
        """End date cannot precede start date."""
        start = values.get("start_date")
        if start is not None and to_naive_utc(v) < to_naive_utc(start):
            raise ValueError("end_date must not be before start_date")
        return v


class ProjectSnapshot(InputRecord):
    """Project fields consulted by the risk model."""

    id: Optional[Union[str, int]] = Field(
        None, validation_alias=AliasChoices("id", "_id")
    )
    budget: BudgetSnapshot
    timeline: TimelineSnapshot
    team: Optional[List[Any]] = Field(default_factory=list)
    priority: ProjectPriority = ProjectPriority.MEDIUM
    risks: Optional[List[Any]] = Field(default_factory=list)


class RiskAssessment(ValueObject):
    """Composite risk score of a project."""

    score: int = Field(..., ge=0, le=100)
    level: RiskLevel
    factors: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    calculated_at: datetime
    budget_utilization: float
    time_progress: float

