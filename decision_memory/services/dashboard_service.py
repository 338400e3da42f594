"""DashboardService: analytics views over the cached decisions of the active workspace.

Orchestrates domain functions with the cache and the feature flag resolver.
Flag-gated sections are None unless the flag is confirmed on.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from decision_memory.core.feature_flags import FeatureFlagResolver
from decision_memory.domain.patterns import PatternMatch, detect_failure_pattern
from decision_memory.domain.plans import decisions_remaining, is_feature_locked
from decision_memory.domain.quality import QualityReport, score_quality
from decision_memory.domain.reports import (
    AnalyticsSummary,
    MonthlyReport,
    calculate_analytics,
    generate_monthly_report,
)
from decision_memory.domain.risk import RiskAssessment, assess_decision_risk
from decision_memory.domain.streaks import StreakSummary, calculate_streak
from decision_memory.schemas.decisions import Decision, DecisionDraft
from decision_memory.schemas.workspaces import PlanTier

# Flag keys gating dashboard sections
STREAKS_FLAG = "decision_streaks"
SUCCESS_DASHBOARD_FLAG = "success_dashboard"
MONTHLY_REPORT_FLAG = "monthly_report"
FAILURE_DETECTION_FLAG = "failure_detection"
RISK_ANALYZER_FLAG = "risk_analyzer"
QUALITY_METER_FLAG = "quality_meter"


@dataclass
class DashboardSummary:
    workspace_id: str | None
    plan_tier: PlanTier
    total_decisions: int
    decisions_remaining: int | None
    ai_insights_locked: bool
    streak: StreakSummary | None = None
    analytics: AnalyticsSummary | None = None
    monthly_report: MonthlyReport | None = None


@dataclass
class DraftFeedback:
    """Live feedback shown while a decision is being written."""

    risk: RiskAssessment | None = None
    quality: QualityReport | None = None
    pattern_warning: PatternMatch | None = None


class DashboardService:
    """Service layer for dashboard aggregation.

    All methods are pure orchestration; the analytics live in the domain layer.
    """

    def __init__(self, cache, flags: FeatureFlagResolver | None = None, now: Callable[[], datetime] | None = None):
        """Initialize the service.

        Args:
            cache: DecisionCache holding the session's entities
            flags: Resolver used for gating (defaults to the cache's)
            now: Clock; injectable for tests
        """
        self.cache = cache
        self.flags = flags or cache.flags
        self._now = now or (lambda: datetime.now(UTC))

    def _decisions(self) -> list[Decision]:
        return self.cache.decisions

    def get_summary(self, month: int | None = None, year: int | None = None) -> DashboardSummary:
        """Build the dashboard for the active workspace.

        Args:
            month: Report month 1-12 (defaults to the current month)
            year: Report year (defaults to the current year)
        """
        now = self._now()
        decisions = self._decisions()
        workspace = self.cache.active_workspace
        plan_tier = workspace.plan_tier if workspace else PlanTier.FREE

        summary = DashboardSummary(
            workspace_id=self.cache.context.active_id,
            plan_tier=plan_tier,
            total_decisions=len(decisions),
            decisions_remaining=decisions_remaining(plan_tier, len(decisions)),
            ai_insights_locked=is_feature_locked(plan_tier, "ai_insights"),
        )

        if self.flags.is_enabled(STREAKS_FLAG):
            summary.streak = calculate_streak(decisions, now=now)
        if self.flags.is_enabled(SUCCESS_DASHBOARD_FLAG):
            summary.analytics = calculate_analytics(decisions, now=now)
        if self.flags.is_enabled(MONTHLY_REPORT_FLAG):
            summary.monthly_report = generate_monthly_report(decisions, month or now.month, year or now.year)

        return summary

    def monthly_report(self, month: int, year: int) -> MonthlyReport:
        """Monthly report for the active workspace.

        Raises:
            FeatureDisabledError: If monthly reports are not enabled
            ValueError: If month is outside 1-12
        """
        self.flags.require_feature(MONTHLY_REPORT_FLAG)
        return generate_monthly_report(self._decisions(), month, year)

    def draft_feedback(self, draft: DecisionDraft) -> DraftFeedback:
        feedback = DraftFeedback()
        if self.flags.is_enabled(RISK_ANALYZER_FLAG):
            feedback.risk = assess_decision_risk(draft)
        if self.flags.is_enabled(QUALITY_METER_FLAG):
            feedback.quality = score_quality(draft)
        if self.flags.is_enabled(FAILURE_DETECTION_FLAG):
            feedback.pattern_warning = detect_failure_pattern(draft.title, draft.context, self._decisions())
        return feedback
