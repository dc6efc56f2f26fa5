"""
Health check endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from project_analytics.config import Settings, get_settings
from project_analytics.models.api_responses import HealthCheckResponse

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic Health Check",
    description="Returns the basic health status of the API service",
    response_model=HealthCheckResponse,
    tags=["Health Checks"]
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthCheckResponse:
    """
    **Basic health check endpoint**

    Used by load balancers and uptime monitors. The analytics engine has no
    external dependencies, so a response means the service is ready.
    """
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.utcnow().isoformat(),
        version=settings.version,
        environment=settings.environment,
        app_name=settings.app_name
    )
