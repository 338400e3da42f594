"""Pydantic schemas for workspaces and the signed-in user."""

from enum import StrEnum

from pydantic import BaseModel, Field


class PlanTier(StrEnum):
    FREE = "FREE"
    PRO = "PRO"
    TEAM = "TEAM"
    ENTERPRISE = "ENTERPRISE"


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class WorkspaceMember(BaseModel):
    name: str = "Unknown"
    email: str = ""
    role: str = "Member"


class Workspace(BaseModel):
    """Tenant boundary; every decision belongs to exactly one."""

    id: str
    name: str
    plan_tier: PlanTier = PlanTier.FREE
    members: list[WorkspaceMember] = Field(default_factory=list)


class UserPreferences(BaseModel):
    email_digest: bool = False
    review_reminders: bool = False
    marketing_emails: bool = False


class User(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole = UserRole.MEMBER
    has_onboarded: bool = False
    workspace_id: str | None = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    @property
    def avatar(self) -> str:
        """Two-letter initials shown in place of a profile picture."""
        return (self.name or self.email)[:2].upper()
