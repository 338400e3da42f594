"""Tests for weekly streak calculation.

Tests enforce pure function behavior:
- Deterministic outputs given same inputs
- Injectable time for testability
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from decision_memory.domain.streaks import active_weeks, calculate_streak, current_streak, week_start

pytestmark = pytest.mark.unit

NOW = datetime(2026, 3, 18, 12, 0, 0, tzinfo=timezone.utc)  # Wednesday; week starts Mon 16th


def _on(make_decision, *days_ago: int):
    return [make_decision(f"dec-{i}", made_on=NOW - timedelta(days=d)) for i, d in enumerate(days_ago)]


def test_week_start_is_monday():
    assert week_start(date(2026, 3, 18)) == date(2026, 3, 16)
    assert week_start(date(2026, 3, 16)) == date(2026, 3, 16)
    assert week_start(date(2026, 3, 22)) == date(2026, 3, 16)


def test_no_decisions_gives_zero_everything():
    summary = calculate_streak([], now=NOW)
    assert summary.current_streak == 0
    assert summary.longest_streak == 0
    assert summary.active_weeks == 0
    assert summary.activity == [False] * 7


def test_two_decisions_in_same_week_count_as_one_week(make_decision):
    """Monday and Wednesday of the same ISO week are one active week."""
    decisions = _on(make_decision, 0, 2)

    summary = calculate_streak(decisions, now=NOW)
    assert summary.active_weeks == 1
    assert summary.current_streak == 1


def test_consecutive_weeks_are_counted(make_decision):
    decisions = _on(make_decision, 0, 7, 14)
    assert calculate_streak(decisions, now=NOW).current_streak == 3


def test_latest_week_one_behind_still_counts(make_decision):
    """Nothing yet this week, but last week was active: the streak is still alive."""
    decisions = _on(make_decision, 7, 14)
    assert calculate_streak(decisions, now=NOW).current_streak == 2


def test_latest_week_more_than_one_behind_resets_to_zero(make_decision):
    decisions = _on(make_decision, 14, 21, 28)

    summary = calculate_streak(decisions, now=NOW)
    assert summary.current_streak == 0
    assert summary.longest_streak == 3


def test_streak_stops_at_first_gap(make_decision):
    # Weeks of Mar 16, Mar 9, then a gap, then Feb 23 and Feb 16
    decisions = _on(make_decision, 0, 7, 21, 28)

    summary = calculate_streak(decisions, now=NOW)
    assert summary.current_streak == 2
    assert summary.longest_streak == 2
    assert summary.active_weeks == 4


def test_streak_never_exceeds_unique_active_weeks(make_decision):
    decisions = _on(make_decision, *range(0, 35))  # every day for five weeks

    summary = calculate_streak(decisions, now=NOW)
    assert summary.current_streak <= summary.active_weeks
    assert summary.active_weeks == len(active_weeks(decisions))


def test_current_streak_ignores_order_of_input_weeks():
    weeks = [date(2026, 3, 16), date(2026, 3, 9), date(2026, 3, 2)]
    assert current_streak(weeks, date(2026, 3, 18)) == 3


def test_activity_covers_last_seven_days_oldest_first(make_decision):
    decisions = _on(make_decision, 0, 2, 10)

    activity = calculate_streak(decisions, now=NOW).activity
    assert len(activity) == 7
    assert activity[-1] is True  # today
    assert activity[-3] is True  # two days ago
    assert activity.count(True) == 2
