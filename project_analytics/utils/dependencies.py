"""
FastAPI dependencies.
"""

from fastapi import Depends

from project_analytics.config import Settings, get_settings
from project_analytics.services.analytics_service import ProjectAnalyticsService, get_analytics_service


def get_service(settings: Settings = Depends(get_settings)) -> ProjectAnalyticsService:
    """Analytics service for the current request."""
    return get_analytics_service(settings)
