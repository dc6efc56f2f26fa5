"""
Tests for spending anomaly detection.
"""

import pytest

from project_analytics.models.analytics import ExpenseRecord
from project_analytics.services.anomaly import (
    AnomalyDetector,
    detect_anomalies,
    get_anomaly_recommendation,
)
from project_analytics.utils.constants import (
    ANOMALY_RECOMMENDATION_INVESTIGATE,
    ANOMALY_RECOMMENDATION_MONITOR,
    ANOMALY_RECOMMENDATION_REVIEW,
    AnomalyDirection,
    AnomalySeverity,
)
from project_analytics.utils.exceptions import DegenerateInputError, ValidationError
from tests.factories.analytics_factory import ExpenseFactory


def make_expenses(amounts):
    return [
        ExpenseRecord.model_validate(ExpenseFactory(amount=amount))
        for amount in amounts
    ]


@pytest.mark.unit
class TestAnomalyDetector:
    """Test z-score anomaly detection."""

    def test_fewer_than_ten_expenses_returns_empty(self):
        expenses = make_expenses([100] * 8 + [100000])

        assert detect_anomalies(expenses) == []

    def test_single_outlier_among_ten(self):
        """With n=10 the largest possible population z-score is exactly 3."""
        expenses = make_expenses([100] * 9 + [10000])

        anomalies = detect_anomalies(expenses)

        assert len(anomalies) == 1
        anomaly = anomalies[0]
        assert anomaly.id == expenses[9].id
        assert anomaly.amount == 10000
        assert anomaly.direction == AnomalyDirection.OVERSPENDING
        assert anomaly.z_score == pytest.approx(3.0)
        assert anomaly.severity == AnomalySeverity.MEDIUM
        assert anomaly.recommendation == ANOMALY_RECOMMENDATION_REVIEW

    def test_high_severity_outlier(self, expenses_with_outlier):
        anomalies = detect_anomalies(expenses_with_outlier)

        assert len(anomalies) == 1
        anomaly = anomalies[0]
        assert anomaly.id == expenses_with_outlier[7].id
        assert anomaly.z_score == pytest.approx(19 ** 0.5)
        assert anomaly.severity == AnomalySeverity.HIGH
        assert anomaly.recommendation == ANOMALY_RECOMMENDATION_INVESTIGATE

    def test_underspending_outlier(self):
        expenses = make_expenses([1000] * 19 + [0])

        anomalies = detect_anomalies(expenses)

        assert len(anomalies) == 1
        assert anomalies[0].direction == AnomalyDirection.UNDERSPENDING
        assert anomalies[0].severity == AnomalySeverity.HIGH

    def test_anomaly_copies_expense_fields(self, expenses_with_outlier):
        source = expenses_with_outlier[7]
        anomaly = detect_anomalies(expenses_with_outlier)[0]

        assert anomaly.date == source.date
        assert anomaly.category == source.category
        assert anomaly.description == source.description

    def test_output_preserves_input_order(self):
        amounts = [100] * 20
        amounts[15] = 10000
        amounts[3] = 10000
        expenses = make_expenses(amounts)

        anomalies = detect_anomalies(expenses)

        assert [a.id for a in anomalies] == [expenses[3].id, expenses[15].id]

    def test_constant_amounts_yield_no_anomalies(self):
        assert detect_anomalies(make_expenses([250] * 12)) == []

    @pytest.mark.parametrize("amount", [19.99, 33.33, 0.1, 0.7])
    @pytest.mark.parametrize("threshold", [0.1, 0.5, 2.0])
    def test_constant_fractional_amounts_yield_no_anomalies(self, amount, threshold):
        expenses = make_expenses([amount] * 10)

        assert AnomalyDetector(threshold=threshold).detect(expenses) == []

    def test_overflowing_amounts_raise(self):
        with pytest.raises(DegenerateInputError):
            detect_anomalies(make_expenses([1e200] * 5 + [3e200] * 5))

    def test_low_threshold_reaches_monitor_tier(self):
        """Every value sits exactly one deviation from the mean."""
        expenses = make_expenses([0, 10] * 5)

        anomalies = AnomalyDetector(threshold=0.5).detect(expenses)

        assert len(anomalies) == 10
        assert {a.recommendation for a in anomalies} == {ANOMALY_RECOMMENDATION_MONITOR}
        assert {a.severity for a in anomalies} == {AnomalySeverity.MEDIUM}
        assert anomalies[0].direction == AnomalyDirection.UNDERSPENDING
        assert anomalies[1].direction == AnomalyDirection.OVERSPENDING

    def test_threshold_is_strict(self):
        """A z-score equal to the threshold is not flagged."""
        expenses = make_expenses([0, 10] * 5)

        assert AnomalyDetector(threshold=1.0).detect(expenses) == []

    def test_higher_threshold_suppresses_medium_anomalies(self):
        expenses = make_expenses([100] * 9 + [10000])

        assert AnomalyDetector(threshold=3.5).detect(expenses) == []

    @pytest.mark.parametrize("threshold", [0, -1, float("nan")])
    def test_invalid_threshold_raises(self, threshold):
        with pytest.raises(ValidationError):
            AnomalyDetector(threshold=threshold)

    def test_repeat_calls_are_identical(self, expenses_with_outlier):
        detector = AnomalyDetector()

        first = detector.detect(expenses_with_outlier)
        second = detector.detect(expenses_with_outlier)

        assert [a.model_dump_json() for a in first] == [a.model_dump_json() for a in second]


@pytest.mark.unit
class TestExpenseRecord:
    """Test expense input parsing."""

    def test_accepts_underscore_id_alias(self):
        expense = ExpenseRecord.model_validate({"_id": "64f0c2", "amount": 12.5})

        assert expense.id == "64f0c2"

    def test_parses_iso_date(self):
        expense = ExpenseRecord.model_validate({"id": "e1", "amount": 1, "date": "2024-02-29"})

        assert expense.date.year == 2024
        assert expense.date.day == 29

    def test_rejects_non_numeric_amount(self):
        with pytest.raises(ValueError):
            ExpenseRecord.model_validate({"id": "e1", "amount": "lots"})


@pytest.mark.unit
class TestRecommendations:
    """Test recommendation tiers."""

    @pytest.mark.parametrize("z_score,expected", [
        (3.01, ANOMALY_RECOMMENDATION_INVESTIGATE),
        (3.0, ANOMALY_RECOMMENDATION_REVIEW),
        (2.5, ANOMALY_RECOMMENDATION_REVIEW),
        (2.0, ANOMALY_RECOMMENDATION_MONITOR),
        (1.2, ANOMALY_RECOMMENDATION_MONITOR),
    ])
    def test_tiers(self, z_score, expected):
        assert get_anomaly_recommendation(z_score) == expected
