"""
Project analytics endpoints.
Budget forecasting, spending anomaly detection and project risk scoring.
"""

from fastapi import APIRouter, Depends, status

from project_analytics.models.analytics import ForecastResult, RiskAssessment
from project_analytics.models.api_responses import (
    AnomalyListResponse,
    AnomalyRequest,
    ExpenseForecastRequest,
    ForecastRequest,
    RiskRequest,
)
from project_analytics.services.analytics_service import ProjectAnalyticsService
from project_analytics.utils.dependencies import get_service

router = APIRouter()


@router.post(
    "/forecast",
    status_code=status.HTTP_200_OK,
    summary="Generate Budget Forecast",
    description="Extrapolates the linear trend of a project's spend history",
    response_model=ForecastResult,
    tags=["Analytics"]
)
async def generate_forecast(
    request: ForecastRequest,
    service: ProjectAnalyticsService = Depends(get_service)
) -> ForecastResult:
    """
    **Generate budget forecast**

    - Linear trend over the ordinal position of each history record
    - 95% normal-approximation band around every estimate
    - Trend direction and quarterly seasonality flags

    Requires at least 3 history records; fewer returns `INSUFFICIENT_DATA`.
    """
    return service.forecast_budget(request.history, request.periods)


@router.post(
    "/forecast/expenses",
    status_code=status.HTTP_200_OK,
    summary="Forecast From Expenses",
    description="Totals expenses per period and forecasts the period totals",
    response_model=ForecastResult,
    tags=["Analytics"]
)
async def forecast_from_expenses(
    request: ExpenseForecastRequest,
    service: ProjectAnalyticsService = Depends(get_service)
) -> ForecastResult:
    """Forecast per-period spend built from dated expense records."""
    return service.forecast_from_expenses(request.expenses, request.periods, request.frequency)


@router.post(
    "/anomalies",
    status_code=status.HTTP_200_OK,
    summary="Detect Spending Anomalies",
    description="Flags expenses whose z-score exceeds the threshold",
    response_model=AnomalyListResponse,
    tags=["Analytics"]
)
async def detect_spending_anomalies(
    request: AnomalyRequest,
    service: ProjectAnalyticsService = Depends(get_service)
) -> AnomalyListResponse:
    """
    **Detect spending anomalies**

    Detection needs at least 10 expenses; smaller batches return an empty list.
    """
    threshold = request.threshold
    if threshold is None:
        threshold = service.settings.anomaly_detection_sensitivity

    anomalies = service.detect_anomalies(request.expenses, threshold)

    return AnomalyListResponse(
        anomalies=anomalies,
        count=len(anomalies),
        threshold=threshold,
        analyzed=len(request.expenses)
    )


@router.post(
    "/risk",
    status_code=status.HTTP_200_OK,
    summary="Calculate Project Risk",
    description="Scores budget, schedule, team, priority and risk-registry factors",
    response_model=RiskAssessment,
    tags=["Analytics"]
)
async def calculate_project_risk(
    request: RiskRequest,
    service: ProjectAnalyticsService = Depends(get_service)
) -> RiskAssessment:
    """Composite 0-100 risk score with level, factors and recommendations."""
    return service.assess_risk(request.project, now=request.as_of)
