"""Pure domain functions: analytics engine, transitions, plans, templates, export.

No I/O and no state; everything is recomputed from the decisions passed in.
"""

from decision_memory.domain.patterns import PatternMatch, detect_failure_pattern
from decision_memory.domain.quality import QualityReport, score_quality
from decision_memory.domain.reports import AnalyticsSummary, MonthlyReport, calculate_analytics, generate_monthly_report
from decision_memory.domain.risk import RiskAssessment, assess_decision_risk, assess_risk
from decision_memory.domain.streaks import StreakSummary, calculate_streak

__all__ = [
    "AnalyticsSummary",
    "MonthlyReport",
    "PatternMatch",
    "QualityReport",
    "RiskAssessment",
    "StreakSummary",
    "assess_decision_risk",
    "assess_risk",
    "calculate_analytics",
    "calculate_streak",
    "detect_failure_pattern",
    "generate_monthly_report",
    "score_quality",
]
