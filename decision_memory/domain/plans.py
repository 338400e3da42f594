"""Plan tier limits.

-1 means unlimited. Checked client-side only to decide what to show;
the API enforces the real limits.
"""

from decision_memory.schemas.workspaces import PlanTier

UNLIMITED = -1

PLAN_LIMITS: dict[PlanTier, dict] = {
    PlanTier.FREE: {"decisions": 50, "members": 1, "ai_insights": False, "export": "PDF"},
    PlanTier.PRO: {"decisions": UNLIMITED, "members": 5, "ai_insights": True, "export": "ALL"},
    PlanTier.TEAM: {"decisions": UNLIMITED, "members": UNLIMITED, "ai_insights": True, "export": "ALL"},
    PlanTier.ENTERPRISE: {"decisions": UNLIMITED, "members": UNLIMITED, "ai_insights": True, "export": "ALL"},
}


def is_feature_locked(plan_tier: PlanTier, feature: str) -> bool:
    """True when a boolean plan feature (e.g. ai_insights) is not part of the tier.

    Raises:
        KeyError: If the feature is not a known plan limit
    """
    return PLAN_LIMITS[plan_tier][feature] is False


def decisions_remaining(plan_tier: PlanTier, used: int) -> int | None:
    """Decisions left on the tier, or None when unlimited."""
    limit = PLAN_LIMITS[plan_tier]["decisions"]
    if limit == UNLIMITED:
        return None
    return max(0, limit - used)
