"""
Project risk scoring.
Additive point model over budget, schedule, team, priority and risk registry.
"""

from datetime import datetime
from typing import List, Optional

from project_analytics.models.analytics import (
    BudgetSnapshot,
    ProjectSnapshot,
    RiskAssessment,
    TimelineSnapshot,
)
from project_analytics.utils.constants import (
    HIGH_RISK_SCORE,
    HIGH_UTILIZATION_PERCENT,
    MANY_RISKS_COUNT,
    MAX_RISK_SCORE,
    MEDIUM_RISK_SCORE,
    MEDIUM_UTILIZATION_PERCENT,
    RISK_FACTOR_TEXT,
    RISK_POINTS,
    RISK_RECOMMENDATIONS,
    SCHEDULE_SLACK_PERCENT,
    SMALL_TEAM_SIZE,
    ProjectPriority,
    RiskLevel,
)
from project_analytics.utils.validators import to_naive_utc


def budget_utilization(budget: BudgetSnapshot) -> float:
    """Percentage of the allocation already spent; 0 when nothing is allocated."""
    if budget.allocated == 0:
        return 0.0
    return budget.spent / budget.allocated * 100


def time_progress(timeline: TimelineSnapshot, now: datetime) -> float:
    """Percentage of the planned timeline elapsed at ``now``; not clamped to 0..100."""
    start = to_naive_utc(timeline.start_date)
    end = to_naive_utc(timeline.end_date)
    current = to_naive_utc(now)

    total = (end - start).total_seconds()
    if total <= 0:
        return 100.0 if current >= end else 0.0

    return (current - start).total_seconds() / total * 100


def risk_level(score: int) -> RiskLevel:
    if score > HIGH_RISK_SCORE:
        return RiskLevel.HIGH
    elif score > MEDIUM_RISK_SCORE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class RiskScorer:
    """Scores a project snapshot against fixed risk rules."""

    def score(self, project: ProjectSnapshot, now: Optional[datetime] = None) -> RiskAssessment:
        """
        Evaluate each rule in order and sum the points, capped at 100.

        The schedule rule depends on the evaluation instant; pass ``now`` to
        make the result reproducible.
        """
        now = now or datetime.utcnow()
        utilization = budget_utilization(project.budget)
        progress = time_progress(project.timeline, now)

        fired = self._fired_rules(project, utilization, progress)
        score = min(MAX_RISK_SCORE, sum(RISK_POINTS[rule] for rule in fired))
        level = risk_level(score)

        return RiskAssessment(
            score=score,
            level=level,
            factors=tuple(RISK_FACTOR_TEXT[rule] for rule in fired),
            recommendations=tuple(RISK_RECOMMENDATIONS[level]),
            calculated_at=now,
            budget_utilization=utilization,
            time_progress=progress
        )

    def _fired_rules(self, project: ProjectSnapshot, utilization: float, progress: float) -> List[str]:
        rules = []

        if utilization > HIGH_UTILIZATION_PERCENT:
            rules.append("high_utilization")
        elif utilization > MEDIUM_UTILIZATION_PERCENT:
            rules.append("medium_utilization")

        if progress > utilization + SCHEDULE_SLACK_PERCENT:
            rules.append("behind_schedule")

        # A missing team list is unknown, not empty
        if project.team is not None and len(project.team) < SMALL_TEAM_SIZE:
            rules.append("small_team")

        if project.priority == ProjectPriority.CRITICAL:
            rules.append("critical_priority")

        if project.risks and len(project.risks) > MANY_RISKS_COUNT:
            rules.append("many_risks")

        return rules


def calculate_risk_score(project: ProjectSnapshot, now: Optional[datetime] = None) -> RiskAssessment:
    """Score a project snapshot."""
    return RiskScorer().score(project, now=now)
