"""Weekly decision streaks.

Pure functions over a decision collection. A week is an ISO week starting
Monday; a week is "active" when at least one decision was made in it.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

from decision_memory.schemas.decisions import Decision


@dataclass
class StreakSummary:
    """Result of a streak calculation."""

    current_streak: int
    longest_streak: int
    active_weeks: int
    activity: list[bool] = field(default_factory=list)  # last 7 days, oldest first


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def active_weeks(decisions: Iterable[Decision]) -> list[date]:
    """Unique week starts with at least one decision, most recent first."""
    return sorted({week_start(d.made_on.date()) for d in decisions}, reverse=True)


def current_streak(weeks: list[date], today: date) -> int:
    """Consecutive active weeks ending at the most recent active week.

    Args:
        weeks: Unique active week starts sorted descending
        today: Current date

    Returns:
        0 when the latest active week is more than one week behind the
        current week; otherwise the length of the unbroken run.
    """
    if not weeks:
        return 0

    gap_weeks = (week_start(today) - weeks[0]).days // 7
    if gap_weeks > 1:
        return 0

    streak = 1
    for newer, older in zip(weeks, weeks[1:]):
        if (newer - older).days != 7:
            break
        streak += 1
    return streak


def longest_streak(weeks: list[date]) -> int:
    """Longest unbroken run of active weeks anywhere in the history."""
    if not weeks:
        return 0

    ordered = sorted(weeks)
    best = run = 1
    for older, newer in zip(ordered, ordered[1:]):
        run = run + 1 if (newer - older).days == 7 else 1
        best = max(best, run)
    return best


def calculate_streak(decisions: Iterable[Decision], now: datetime | None = None) -> StreakSummary:
    """Compute current/longest weekly streak and last-7-days activity.

    Args:
        decisions: Decisions to bucket by ``made_on``
        now: Current time (injectable for testing, defaults to datetime.now(timezone.utc))
    """
    if now is None:
        now = datetime.now(timezone.utc)
    today = now.date()

    decisions = list(decisions)
    weeks = active_weeks(decisions)
    days = {d.made_on.date() for d in decisions}
    activity = [(today - timedelta(days=offset)) in days for offset in range(6, -1, -1)]

    return StreakSummary(
        current_streak=current_streak(weeks, today),
        longest_streak=longest_streak(weeks),
        active_weeks=len(weeks),
        activity=activity,
    )
