"""
Spending anomaly detection using z-scores against the batch's own mean.
"""

from typing import List, Sequence

import numpy as np

from project_analytics.models.analytics import Anomaly, ExpenseRecord
from project_analytics.services import stats
from project_analytics.utils.constants import (
    ANOMALY_RECOMMENDATION_INVESTIGATE,
    ANOMALY_RECOMMENDATION_MONITOR,
    ANOMALY_RECOMMENDATION_REVIEW,
    DEFAULT_ANOMALY_THRESHOLD,
    HIGH_SEVERITY_Z,
    MIN_ANOMALY_POINTS,
    REVIEW_Z,
    AnomalyDirection,
    AnomalySeverity,
)
from project_analytics.utils.exceptions import ValidationError
from project_analytics.utils.validators import validate_threshold


def get_anomaly_recommendation(z_score: float) -> str:
    """Three-tier recommendation keyed on how far the expense deviates."""
    if z_score > HIGH_SEVERITY_Z:
        return ANOMALY_RECOMMENDATION_INVESTIGATE
    elif z_score > REVIEW_Z:
        return ANOMALY_RECOMMENDATION_REVIEW
    return ANOMALY_RECOMMENDATION_MONITOR


class AnomalyDetector:
    """Flags expenses whose z-score exceeds a threshold."""

    def __init__(self, threshold: float = DEFAULT_ANOMALY_THRESHOLD):
        try:
            self.threshold = validate_threshold(float(threshold))
        except (TypeError, ValueError) as e:
            raise ValidationError("Invalid anomaly threshold", details=[str(e)])

    def detect(self, expenses: Sequence[ExpenseRecord]) -> List[Anomaly]:
        """
        Return the anomalous expenses in input order.

        Fewer than 10 expenses, or a batch where every amount is equal,
        yields an empty list rather than an error. Amounts whose variance
        overflows raise DegenerateInputError.
        """
        if len(expenses) < MIN_ANOMALY_POINTS:
            return []

        amounts = np.array([expense.amount for expense in expenses], dtype=float)
        mean_amount = stats.mean(amounts)
        deviation = stats.stddev(amounts)
        if deviation == 0:
            return []

        z_scores = np.abs(amounts - mean_amount) / deviation

        anomalies = []
        for expense, z_score in zip(expenses, z_scores.tolist()):
            if z_score <= self.threshold:
                continue

            anomalies.append(Anomaly(
                id=expense.id,
                date=expense.date,
                amount=expense.amount,
                category=expense.category,
                description=expense.description,
                z_score=z_score,
                severity=AnomalySeverity.HIGH if z_score > HIGH_SEVERITY_Z else AnomalySeverity.MEDIUM,
                direction=(
                    AnomalyDirection.OVERSPENDING
                    if expense.amount > mean_amount
                    else AnomalyDirection.UNDERSPENDING
                ),
                recommendation=get_anomaly_recommendation(z_score)
            ))

        return anomalies


def detect_anomalies(
    expenses: Sequence[ExpenseRecord],
    threshold: float = DEFAULT_ANOMALY_THRESHOLD
) -> List[Anomaly]:
    """Detect anomalies with the given z-score threshold."""
    return AnomalyDetector(threshold).detect(expenses)
