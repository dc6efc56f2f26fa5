"""
Application constants.
"""

from enum import Enum


class TrendDirection(str, Enum):
    """Direction of a series over time."""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class AnomalySeverity(str, Enum):
    """Severity of a flagged expense."""
    MEDIUM = "medium"
    HIGH = "high"


class AnomalyDirection(str, Enum):
    """Which side of the mean a flagged expense falls on."""
    OVERSPENDING = "overspending"
    UNDERSPENDING = "underspending"


class RiskLevel(str, Enum):
    """Bucketed project risk."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProjectPriority(str, Enum):
    """Project priority as recorded by the project registry."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Forecasting constants
MIN_FORECAST_POINTS = 3
CONFIDENCE_Z = 1.96  # two-sided 95%, normal approximation
BASE_CONFIDENCE = 60
MAX_CONFIDENCE = 95
MIN_CONFIDENCE = 50
CONFIDENCE_PER_POINT = 2
CONFIDENCE_DECAY_PER_PERIOD = 2
ACCURACY_CAP = 90
ACCURACY_FULL_DATA_POINTS = 12
FORECAST_ALGORITHM = "Linear Regression with Time Series Analysis"

# Trend constants
TREND_CHANGE_PERCENT = 10
SEASONALITY_MIN_POINTS = 12
QUARTER_LENGTH = 3
SEASONALITY_MIN_QUARTERS = 4
SEASONALITY_VARIANCE_RATIO = 0.5

# Anomaly constants
MIN_ANOMALY_POINTS = 10
DEFAULT_ANOMALY_THRESHOLD = 2.0
HIGH_SEVERITY_Z = 3.0
REVIEW_Z = 2.0

ANOMALY_RECOMMENDATION_INVESTIGATE = (
    "Investigate immediately - significant deviation from normal spending pattern"
)
ANOMALY_RECOMMENDATION_REVIEW = "Review expense for accuracy and business justification"
ANOMALY_RECOMMENDATION_MONITOR = "Monitor for recurring patterns"

# Risk constants
HIGH_UTILIZATION_PERCENT = 90
MEDIUM_UTILIZATION_PERCENT = 75
SCHEDULE_SLACK_PERCENT = 10
SMALL_TEAM_SIZE = 3
MANY_RISKS_COUNT = 5
MAX_RISK_SCORE = 100
HIGH_RISK_SCORE = 70
MEDIUM_RISK_SCORE = 40

RISK_POINTS = {
    "high_utilization": 30,
    "medium_utilization": 15,
    "behind_schedule": 25,
    "small_team": 10,
    "critical_priority": 15,
    "many_risks": 20,
}

RISK_FACTOR_TEXT = {
    "high_utilization": "High budget utilization (>90%)",
    "medium_utilization": "Medium budget utilization (75-90%)",
    "behind_schedule": "Behind schedule",
    "small_team": "Small team size",
    "critical_priority": "Critical priority project",
    "many_risks": "High number of identified risks",
}

RISK_RECOMMENDATIONS = {
    RiskLevel.HIGH: [
        "Immediate attention required",
        "Consider risk mitigation strategies",
        "Increase monitoring frequency",
    ],
    RiskLevel.MEDIUM: [
        "Monitor closely",
        "Review project timeline and budget",
    ],
    RiskLevel.LOW: [
        "Continue normal monitoring",
    ],
}
