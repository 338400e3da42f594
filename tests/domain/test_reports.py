"""Tests for monthly reports and the analytics summary."""
from datetime import datetime, timedelta, timezone

import pytest

from decision_memory.domain.reports import calculate_analytics, generate_monthly_report
from decision_memory.schemas.decisions import Category, DecisionStatus

pytestmark = pytest.mark.unit

MARCH = datetime(2026, 3, 5, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def march_decisions(make_decision):
    return [
        make_decision("d1", made_on=MARCH, category=Category.TECH, ai_risk_score=40),
        make_decision("d2", made_on=MARCH, category=Category.HIRING, ai_risk_score=55),
        make_decision("d3", made_on=MARCH, category=Category.TECH, status=DecisionStatus.SUCCEEDED),
        make_decision("d4", made_on=MARCH, category=Category.HIRING, status=DecisionStatus.FAILED),
        make_decision("d5", made_on=datetime(2026, 2, 27, tzinfo=timezone.utc), category=Category.SALES),
        make_decision("d6", made_on=datetime(2025, 3, 5, tzinfo=timezone.utc), category=Category.SALES),
    ]


def test_monthly_report_filters_to_month_and_year(march_decisions):
    report = generate_monthly_report(march_decisions, month=3, year=2026)
    assert report.total_decisions == 4
    assert report.month_name == "March"
    assert report.year == 2026


def test_category_histogram_sums_to_total(march_decisions):
    report = generate_monthly_report(march_decisions, month=3, year=2026)
    assert sum(report.category_breakdown.values()) == report.total_decisions
    assert sum(report.status_distribution.values()) == report.total_decisions
    assert report.category_breakdown == {"TECH": 2, "HIRING": 2}


def test_average_risk_counts_only_scored_decisions(march_decisions):
    # (40 + 55) / 2 = 47.5, rounded half up
    report = generate_monthly_report(march_decisions, month=3, year=2026)
    assert report.average_risk_score == 48


def test_top_category_tie_goes_to_first_seen(march_decisions):
    report = generate_monthly_report(march_decisions, month=3, year=2026)
    assert report.top_category == "TECH"


def test_empty_month_report():
    report = generate_monthly_report([], month=1, year=2026)
    assert report.total_decisions == 0
    assert report.average_risk_score == 0
    assert report.top_category == "None"
    assert report.month_name == "January"


@pytest.mark.parametrize("month", [0, 13, -1])
def test_invalid_month_raises(month):
    with pytest.raises(ValueError, match="Invalid month"):
        generate_monthly_report([], month=month, year=2026)


def test_analytics_success_rate_over_reviewed_decisions(make_decision):
    decisions = [
        make_decision("d1", status=DecisionStatus.SUCCEEDED),
        make_decision("d2", status=DecisionStatus.FAILED),
        make_decision("d3", status=DecisionStatus.REVERSED),
        make_decision("d4", status=DecisionStatus.ACTIVE),
    ]
    summary = calculate_analytics(decisions)
    assert summary.total_decisions == 4
    assert summary.success_rate == 33


def test_analytics_without_reviewed_decisions_has_zero_rate(make_decision):
    assert calculate_analytics([make_decision("d1")]).success_rate == 0


def test_analytics_velocity_counts_last_30_days(make_decision):
    now = datetime(2026, 3, 18, tzinfo=timezone.utc)
    decisions = [
        make_decision("d1", made_on=now - timedelta(days=1)),
        make_decision("d2", made_on=now - timedelta(days=29)),
        make_decision("d3", made_on=now - timedelta(days=31)),
    ]
    assert calculate_analytics(decisions, now=now).velocity == 2


def test_analytics_category_breakdown_sorted_by_total(make_decision):
    decisions = [
        make_decision("d1", category=Category.SALES, status=DecisionStatus.SUCCEEDED),
        make_decision("d2", category=Category.TECH, status=DecisionStatus.SUCCEEDED),
        make_decision("d3", category=Category.TECH, status=DecisionStatus.FAILED),
        make_decision("d4", category=Category.TECH),
    ]
    breakdown = calculate_analytics(decisions).category_breakdown

    assert [stat.category for stat in breakdown] == ["TECH", "SALES"]
    tech = breakdown[0]
    assert (tech.total, tech.succeeded, tech.failed, tech.rate) == (3, 1, 1, 50)
