"""
Integration tests for API endpoints.
"""

import pytest

from tests.factories.analytics_factory import ExpenseFactory, HistoryRecordFactory, ProjectFactory


@pytest.mark.integration
class TestHealthEndpoints:
    """Integration tests for health check endpoints."""

    def test_basic_health_check(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "version" in data
        assert "environment" in data
        assert "app_name" in data


@pytest.mark.integration
class TestForecastEndpoints:
    """Integration tests for forecasting endpoints."""

    def test_forecast(self, client):
        history = [{"date": f"2024-{m:02d}-01", "amount": 1000 + 50 * m} for m in range(1, 13)]

        response = client.post("/api/v1/analytics/forecast", json={"history": history, "periods": 3})

        assert response.status_code == 200
        data = response.json()
        assert [f["period"] for f in data["forecasts"]] == [1, 2, 3]
        assert data["forecasts"][0]["predicted_value"] == pytest.approx(1650)
        assert data["trend"] == "increasing"
        assert data["data_points"] == 12
        assert data["accuracy"] == 90
        assert data["algorithm"]

    def test_forecast_default_periods(self, client, test_settings):
        response = client.post(
            "/api/v1/analytics/forecast",
            json={"history": HistoryRecordFactory.build_batch(5)}
        )

        assert response.status_code == 200
        assert len(response.json()["forecasts"]) == test_settings.default_forecast_periods

    def test_forecast_with_two_records(self, client):
        response = client.post(
            "/api/v1/analytics/forecast",
            json={"history": [{"amount": 10}, {"amount": 20}], "periods": 2}
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INSUFFICIENT_DATA"
        assert "Required data points: 3" in error["details"]

    def test_forecast_too_many_periods(self, client):
        response = client.post(
            "/api/v1/analytics/forecast",
            json={"history": HistoryRecordFactory.build_batch(5), "periods": 1000}
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_forecast_overflowing_amounts(self, client):
        history = [{"amount": 1e200}, {"amount": 2e200}, {"amount": 3e200}]

        response = client.post("/api/v1/analytics/forecast", json={"history": history, "periods": 1})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "DEGENERATE_INPUT"

    def test_forecast_constant_fractional_history(self, client):
        history = [{"amount": 33.33}] * 7

        response = client.post("/api/v1/analytics/forecast", json={"history": history, "periods": 2})

        assert response.status_code == 200
        for point in response.json()["forecasts"]:
            assert point["lower_bound"] == point["upper_bound"] == point["predicted_value"] == 33.33

    def test_forecast_zero_periods_rejected_by_schema(self, client):
        response = client.post(
            "/api/v1/analytics/forecast",
            json={"history": HistoryRecordFactory.build_batch(5), "periods": 0}
        )

        assert response.status_code == 422

    def test_forecast_from_expenses(self, client):
        expenses = [
            {"_id": f"e{m}", "date": f"2024-{m:02d}-15", "amount": 100 * m}
            for m in range(1, 5)
        ]

        response = client.post(
            "/api/v1/analytics/forecast/expenses",
            json={"expenses": expenses, "periods": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["data_points"] == 4
        assert data["forecasts"][0]["predicted_value"] == pytest.approx(500)


@pytest.mark.integration
class TestAnomalyEndpoints:
    """Integration tests for anomaly detection."""

    def test_detects_outlier(self, client):
        expenses = ExpenseFactory.build_batch(20, amount=100.0)
        expenses[4]["amount"] = 10000.0

        response = client.post("/api/v1/analytics/anomalies", json={"expenses": expenses})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["analyzed"] == 20
        assert data["threshold"] == 2.0
        anomaly = data["anomalies"][0]
        assert anomaly["id"] == expenses[4]["id"]
        assert anomaly["severity"] == "high"
        assert anomaly["direction"] == "overspending"

    def test_small_batch_returns_empty(self, client):
        response = client.post(
            "/api/v1/analytics/anomalies",
            json={"expenses": ExpenseFactory.build_batch(5)}
        )

        assert response.status_code == 200
        assert response.json()["anomalies"] == []

    def test_threshold_override(self, client):
        expenses = ExpenseFactory.build_batch(20, amount=100.0)
        expenses[4]["amount"] = 10000.0

        response = client.post(
            "/api/v1/analytics/anomalies",
            json={"expenses": expenses, "threshold": 5.0}
        )

        assert response.json()["count"] == 0
        assert response.json()["threshold"] == 5.0


@pytest.mark.integration
class TestRiskEndpoints:
    """Integration tests for risk scoring."""

    def test_risk_with_as_of(self, client):
        response = client.post(
            "/api/v1/analytics/risk",
            json={"project": ProjectFactory(), "as_of": "2024-06-01T00:00:00"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 30
        assert data["level"] == "low"
        assert data["factors"] == ["High budget utilization (>90%)"]
        assert data["calculated_at"].startswith("2024-06-01")

    def test_invalid_timeline_rejected(self, client):
        project = ProjectFactory(timeline={"startDate": "2024-05-01", "endDate": "2024-01-01"})

        response = client.post("/api/v1/analytics/risk", json={"project": project})

        assert response.status_code == 422

    def test_request_id_echoed(self, client):
        response = client.post(
            "/api/v1/analytics/risk",
            json={"project": ProjectFactory(), "as_of": "2024-06-01T00:00:00"},
            headers={"x-request-id": "trace-42"}
        )

        assert response.headers["x-request-id"] == "trace-42"
