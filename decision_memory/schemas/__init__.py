"""Cache entity schemas."""

from decision_memory.schemas.decisions import (
    Alternative,
    Category,
    Comment,
    Decision,
    DecisionDraft,
    DecisionLink,
    DecisionStatus,
    DecisionUpdate,
    LinkType,
    Privacy,
)
from decision_memory.schemas.notifications import FeatureFlag, Insight, Notification, NotificationType
from decision_memory.schemas.workspaces import PlanTier, User, UserPreferences, UserRole, Workspace, WorkspaceMember

__all__ = [
    "Alternative",
    "Category",
    "Comment",
    "Decision",
    "DecisionDraft",
    "DecisionLink",
    "DecisionStatus",
    "DecisionUpdate",
    "FeatureFlag",
    "Insight",
    "LinkType",
    "Notification",
    "NotificationType",
    "PlanTier",
    "Privacy",
    "User",
    "UserPreferences",
    "UserRole",
    "Workspace",
    "WorkspaceMember",
]
