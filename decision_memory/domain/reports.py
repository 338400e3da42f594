"""Monthly reports and workspace analytics.

Pure functions -- no side effects, recomputed on demand from the cached
decision slice.
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from decision_memory.schemas.decisions import Decision, DecisionStatus

REVIEWED_STATUSES = (DecisionStatus.SUCCEEDED, DecisionStatus.FAILED, DecisionStatus.REVERSED)


@dataclass
class MonthlyReport:
    month_name: str
    year: int
    total_decisions: int
    category_breakdown: dict[str, int] = field(default_factory=dict)
    status_distribution: dict[str, int] = field(default_factory=dict)
    average_risk_score: int = 0
    top_category: str = "None"


@dataclass
class CategoryStat:
    category: str
    total: int
    succeeded: int
    failed: int
    rate: int


@dataclass
class AnalyticsSummary:
    total_decisions: int
    success_rate: int
    velocity: int  # decisions in the last 30 days
    category_breakdown: list[CategoryStat] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_monthly_report(decisions: Iterable[Decision], month: int, year: int) -> MonthlyReport:
    """Summarise the decisions made in one calendar month.

    Args:
        decisions: Decisions to filter
        month: Calendar month, 1-12
        year: Four-digit year

    Returns:
        MonthlyReport. The average risk score only counts decisions that have
        a score; the top category is the first-seen category with the highest count.

    Raises:
        ValueError: If month is not in range 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}. Must be 1-12.")

    month_decisions = [
        d for d in decisions if d.made_on.month == month and d.made_on.year == year
    ]

    category_breakdown: dict[str, int] = {}
    status_distribution: dict[str, int] = {}
    risk_total = 0
    risk_count = 0

    for d in month_decisions:
        category_breakdown[d.category.value] = category_breakdown.get(d.category.value, 0) + 1
        status_distribution[d.status.value] = status_distribution.get(d.status.value, 0) + 1
        if d.ai_risk_score is not None:
            risk_total += d.ai_risk_score
            risk_count += 1

    top_category = "None"
    max_count = 0
    for category, count in category_breakdown.items():
        if count > max_count:
            max_count = count
            top_category = category

    return MonthlyReport(
        month_name=calendar.month_name[month],
        year=year,
        total_decisions=len(month_decisions),
        category_breakdown=category_breakdown,
        status_distribution=status_distribution,
        average_risk_score=_round_half_up(risk_total / risk_count) if risk_count else 0,
        top_category=top_category,
    )


def calculate_analytics(decisions: Iterable[Decision], now: datetime | None = None) -> AnalyticsSummary:
    """Overall success rate, 30-day velocity and per-category outcomes.

    Args:
        decisions: Decisions to analyse
        now: Current time (injectable for testing, defaults to datetime.now(timezone.utc))
    """
    if now is None:
        now = datetime.now(timezone.utc)
    decisions = list(decisions)

    reviewed = [d for d in decisions if d.status in REVIEWED_STATUSES]
    succeeded = sum(1 for d in decisions if d.status == DecisionStatus.SUCCEEDED)
    success_rate = _round_half_up(succeeded / len(reviewed) * 100) if reviewed else 0

    cutoff = _as_utc(now) - timedelta(days=30)
    velocity = sum(1 for d in decisions if _as_utc(d.made_on) > cutoff)

    categories: list[str] = []
    for d in decisions:
        if d.category.value not in categories:
            categories.append(d.category.value)

    breakdown = []
    for category in categories:
        in_category = [d for d in decisions if d.category.value == category]
        cat_succeeded = sum(1 for d in in_category if d.status == DecisionStatus.SUCCEEDED)
        cat_failed = sum(1 for d in in_category if d.status == DecisionStatus.FAILED)
        cat_reviewed = cat_succeeded + cat_failed
        breakdown.append(
            CategoryStat(
                category=category,
                total=len(in_category),
                succeeded=cat_succeeded,
                failed=cat_failed,
                rate=_round_half_up(cat_succeeded / cat_reviewed * 100) if cat_reviewed else 0,
            )
        )
    breakdown.sort(key=lambda stat: stat.total, reverse=True)

    return AnalyticsSummary(
        total_decisions=len(decisions),
        success_rate=success_rate,
        velocity=velocity,
        category_breakdown=breakdown,
    )
