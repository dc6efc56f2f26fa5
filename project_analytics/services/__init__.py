"""
Analytics services.
"""
from .analytics_service import ProjectAnalyticsService, get_analytics_service
from .anomaly import AnomalyDetector, detect_anomalies
from .forecasting import ForecastEngine, generate_forecast
from .risk import RiskScorer, calculate_risk_score

__all__ = [
    "ProjectAnalyticsService",
    "get_analytics_service",
    "ForecastEngine",
    "generate_forecast",
    "AnomalyDetector",
    "detect_anomalies",
    "RiskScorer",
    "calculate_risk_score",
]
