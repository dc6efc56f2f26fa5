"""
Pydantic models for API requests and responses.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .analytics import Anomaly, ExpenseRecord, ProjectSnapshot


class HealthCheckResponse(BaseModel):
    """Response model for basic health check."""
    status: str = Field(..., description="Service health status", examples=["healthy"])
    timestamp: str = Field(..., description="Current timestamp in ISO format", examples=["2024-01-15T10:30:00Z"])
    version: str = Field(..., description="Application version", examples=["1.0.0"])
    environment: str = Field(..., description="Current environment", examples=["production"])
    app_name: str = Field(..., description="Application name", examples=["project-analytics-api"])


class ForecastRequest(BaseModel):
    """Budget forecast request."""
    history: List[Dict[str, Any]] = Field(
        ...,
        description="Chronological history records, each with 'amount' (or 'value') and an optional 'date'"
    )
    periods: Optional[int] = Field(None, ge=1, description="Number of future periods to forecast")


class ExpenseForecastRequest(BaseModel):
    """Forecast built from dated expense records."""
    expenses: List[ExpenseRecord] = Field(..., description="Dated expense records")
    periods: Optional[int] = Field(None, ge=1, description="Number of future periods to forecast")
    frequency: str = Field(default="MS", description="Pandas offset alias used to bucket expenses")


class AnomalyRequest(BaseModel):
    """Anomaly detection request."""
    expenses: List[ExpenseRecord] = Field(..., description="Expense records to screen")
    threshold: Optional[float] = Field(None, gt=0, description="Z-score threshold override")


class AnomalyListResponse(BaseModel):
    """Anomaly detection response."""
    anomalies: List[Anomaly] = Field(..., description="Flagged expenses in input order")
    count: int = Field(..., description="Number of flagged expenses")
    threshold: float = Field(..., description="Z-score threshold applied")
    analyzed: int = Field(..., description="Number of expenses screened")


class RiskRequest(BaseModel):
    """Risk scoring request."""
    project: ProjectSnapshot = Field(..., description="Project snapshot")
    as_of: Optional[datetime] = Field(None, description="Evaluation instant; defaults to now")
