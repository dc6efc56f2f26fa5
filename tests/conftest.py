"""
Global pytest configuration and fixtures.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from project_analytics.config import Settings
from project_analytics.models.analytics import ExpenseRecord, HistoricalPoint, ProjectSnapshot
from project_analytics.services.analytics_service import ProjectAnalyticsService
from tests.factories.analytics_factory import ExpenseFactory, ProjectFactory


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings configuration."""
    return Settings(
        app_name="project-analytics-api-test",
        version="1.0.0-test",
        debug=True,
        environment="testing",

        # API
        api_prefix="/api/v1",

        # Analytics
        anomaly_detection_sensitivity=2.0,
        default_forecast_periods=6,
        max_forecast_periods=24,
        max_history_points=500,

        # Monitoring
        log_level="DEBUG",

        # Server
        host="127.0.0.1",
        port=8081
    )


@pytest.fixture(scope="session")
def app_with_test_settings(test_settings):
    """FastAPI app with test settings."""
    from project_analytics.main import create_app
    return create_app(test_settings)


@pytest.fixture
def client(app_with_test_settings) -> TestClient:
    """Synchronous test client."""
    return TestClient(app_with_test_settings)


@pytest.fixture
def analytics_service(test_settings) -> ProjectAnalyticsService:
    """Analytics service bound to test settings."""
    return ProjectAnalyticsService(test_settings)


@pytest.fixture
def evaluation_time() -> datetime:
    """Fixed instant for schedule-dependent risk scoring."""
    return datetime(2024, 6, 1)


@pytest.fixture
def steady_history():
    """Monthly spend rising by 10 each period."""
    return [HistoricalPoint(index=i, amount=100.0 + 10 * i) for i in range(12)]


@pytest.fixture
def expenses_with_outlier():
    """Nineteen routine expenses and one large one at position 7."""
    records = ExpenseFactory.build_batch(20, amount=100.0)
    records[7]["amount"] = 10000.0
    return [ExpenseRecord.model_validate(record) for record in records]


@pytest.fixture
def on_track_project() -> ProjectSnapshot:
    """95% spent, five people, medium priority, no registered risks."""
    return ProjectSnapshot.model_validate(ProjectFactory())


# Pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
