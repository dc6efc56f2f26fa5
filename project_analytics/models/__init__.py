"""
Pydantic models for the project analytics engine.
"""
from .analytics import (
    Anomaly,
    BudgetSnapshot,
    ExpenseRecord,
    FitMetrics,
    ForecastPoint,
    ForecastResult,
    HistoricalPoint,
    ProjectSnapshot,
    RiskAssessment,
    TimelineSnapshot,
)
from .base import InputRecord, ValueObject

__all__ = [
    # Base models
    "ValueObject",
    "InputRecord",
    # Forecasting
    "HistoricalPoint",
    "ForecastPoint",
    "ForecastResult",
    "FitMetrics",
    # Anomaly detection
    "ExpenseRecord",
    "Anomaly",
    # Risk scoring
    "BudgetSnapshot",
    "TimelineSnapshot",
    "ProjectSnapshot",
    "RiskAssessment",
]
