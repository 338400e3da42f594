"""Pydantic schemas for decisions, their links and comments.

Field names are Python-side; the remote API's camelCase names are handled
by decision_memory.schemas.mappers.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DecisionStatus(StrEnum):
    """Decision lifecycle states."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    REVERSED = "REVERSED"


class Category(StrEnum):
    PRODUCT = "PRODUCT"
    MARKETING = "MARKETING"
    SALES = "SALES"
    HIRING = "HIRING"
    TECH = "TECH"
    OPERATIONS = "OPERATIONS"
    STRATEGIC = "STRATEGIC"
    OTHER = "OTHER"


class Privacy(StrEnum):
    """Visibility of a decision outside its workspace."""

    WORKSPACE = "WORKSPACE"
    PUBLIC = "PUBLIC"
    ANONYMOUS_PUBLIC = "ANONYMOUS_PUBLIC"


class LinkType(StrEnum):
    RELIES_ON = "RELIES_ON"
    SUPERSEDES = "SUPERSEDES"
    RELATES_TO = "RELATES_TO"
    BLOCKED_BY = "BLOCKED_BY"


class Alternative(BaseModel):
    """An option that was considered and rejected."""

    name: str
    why_rejected: str = ""


class DecisionLink(BaseModel):
    """Directed link from one decision to another."""

    id: str
    type: LinkType
    target_id: str
    target_title: str = ""


class Comment(BaseModel):
    id: str
    decision_id: str
    text: str
    author: str = "Unknown"
    is_anonymous: bool = False
    created_at: datetime


class Decision(BaseModel):
    """A recorded decision as held in the cache.

    Temporary (unconfirmed) decisions carry an id starting with ``tmp-``.
    """

    id: str
    workspace_id: str
    title: str
    category: Category = Category.OTHER
    decision: str = ""
    context: str = ""
    alternatives: list[Alternative] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    success_criteria: list[str] = Field(default_factory=list)
    status: DecisionStatus = DecisionStatus.ACTIVE
    made_by: str = "Unknown"
    made_on: datetime
    privacy: Privacy = Privacy.WORKSPACE
    ai_risk_score: int | None = Field(None, ge=0, le=100)
    links: list[DecisionLink] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    review_deadline: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_temporary(self) -> bool:
        return self.id.startswith("tmp-")


class DecisionDraft(BaseModel):
    """In-progress, uncommitted decision as typed into the authoring form.

    Every field is optional-by-default so half-filled drafts round-trip
    through durable storage; completeness is checked at submit time.
    """

    title: str = ""
    category: Category = Category.TECH
    decision: str = ""
    context: str = ""
    alternatives: list[Alternative] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    success_criteria: list[str] = Field(default_factory=list)
    privacy: Privacy = Privacy.WORKSPACE
    tags: list[str] = Field(default_factory=list)
    ai_risk_score: int | None = Field(None, ge=0, le=100)


class DecisionUpdate(BaseModel):
    """Partial edit of a decision's content. Only set fields are sent."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    category: Category | None = None
    decision: str | None = None
    context: str | None = None
    alternatives: list[Alternative] | None = None
    assumptions: list[str] | None = None
    success_criteria: list[str] | None = None
    privacy: Privacy | None = None
    tags: list[str] | None = None
    ai_risk_score: int | None = Field(None, ge=0, le=100)
    review_deadline: datetime | None = None
