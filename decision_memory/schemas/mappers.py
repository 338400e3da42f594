"""Conversion between remote API payloads and cache schemas.

The API speaks camelCase and a few structurally different shapes
(``theDecision``, ``alternativesConsidered``, assumptions as ``{id, text}``
objects, ``madeBy`` as a nested user). Everything crossing the wire goes
through these functions.
"""

from typing import Any

from decision_memory.schemas.decisions import (
    Alternative,
    Category,
    Comment,
    Decision,
    DecisionDraft,
    DecisionLink,
    DecisionStatus,
    DecisionUpdate,
    Privacy,
)
from decision_memory.schemas.notifications import FeatureFlag, Insight, Notification
from decision_memory.schemas.workspaces import PlanTier, User, UserPreferences, Workspace, WorkspaceMember


def _enum_or_default(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _author_name(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("name") or "Unknown"
    return value or "Unknown"


def decision_from_api(data: dict) -> Decision:
    """Map an API decision object onto the cache's Decision schema."""
    assumptions = []
    for a in data.get("assumptions") or []:
        assumptions.append(a.get("text", "") if isinstance(a, dict) else str(a))

    links = [
        DecisionLink(
            id=link["id"],
            type=link["type"],
            target_id=link.get("targetId", ""),
            target_title=link.get("targetTitle", ""),
        )
        for link in data.get("links") or []
    ]

    return Decision(
        id=data["id"],
        workspace_id=data["workspaceId"],
        title=data.get("title", ""),
        category=_enum_or_default(Category, data.get("category"), Category.OTHER),
        decision=data.get("theDecision") or "",
        context=data.get("context") or "",
        alternatives=[
            Alternative(name=a.get("name", ""), why_rejected=a.get("whyRejected", ""))
            for a in data.get("alternativesConsidered") or []
        ],
        assumptions=assumptions,
        success_criteria=list(data.get("successCriteria") or []),
        status=DecisionStatus(data.get("status", DecisionStatus.ACTIVE)),
        made_by=_author_name(data.get("madeBy")),
        made_on=data["madeOn"],
        privacy=_enum_or_default(Privacy, data.get("privacy"), Privacy.WORKSPACE),
        ai_risk_score=data.get("aiRiskScore"),
        links=links,
        comments=[comment_from_api(c, data["id"]) for c in data.get("comments") or []],
        tags=list(data.get("tags") or []),
        review_deadline=data.get("reviewDeadline"),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def draft_to_api(draft: DecisionDraft) -> dict:
    """Build the POST /decisions payload from a complete draft."""
    payload = {
        "title": draft.title,
        "category": draft.category.value,
        "theDecision": draft.decision,
        "context": draft.context,
        "alternativesConsidered": [
            {"name": a.name, "whyRejected": a.why_rejected} for a in draft.alternatives
        ],
        "successCriteria": list(draft.success_criteria),
        "tags": list(draft.tags),
        "privacy": draft.privacy.value,
        "assumptions": [{"text": a, "confidence": "CONFIDENT"} for a in draft.assumptions],
    }
    if draft.ai_risk_score is not None:
        payload["aiRiskScore"] = draft.ai_risk_score
    return payload


def update_to_api(update: DecisionUpdate) -> dict:
    """Build a PATCH /decisions/:id payload containing only the fields that were set."""
    fields = update.model_dump(exclude_unset=True)
    payload: dict[str, Any] = {}

    simple = {
        "title": "title",
        "context": "context",
        "tags": "tags",
        "ai_risk_score": "aiRiskScore",
        "decision": "theDecision",
    }
    for name, wire_name in simple.items():
        if name in fields:
            payload[wire_name] = fields[name]

    if "category" in fields:
        payload["category"] = update.category.value if update.category else None
    if "privacy" in fields:
        payload["privacy"] = update.privacy.value if update.privacy else None
    if "alternatives" in fields:
        payload["alternativesConsidered"] = [
            {"name": a.name, "whyRejected": a.why_rejected} for a in update.alternatives or []
        ]
    if "assumptions" in fields:
        payload["assumptions"] = [
            {"text": a, "confidence": "CONFIDENT"} for a in update.assumptions or []
        ]
    if "success_criteria" in fields:
        payload["successCriteria"] = list(update.success_criteria or [])
    if "review_deadline" in fields:
        deadline = update.review_deadline
        payload["reviewDeadline"] = deadline.isoformat() if deadline else None

    return payload


def comment_from_api(data: dict, decision_id: str | None = None) -> Comment:
    return Comment(
        id=data["id"],
        decision_id=data.get("decisionId") or decision_id or "",
        text=data.get("content") or data.get("text") or "",
        author=_author_name(data.get("author")),
        is_anonymous=bool(data.get("isAnonymous", False)),
        created_at=data["createdAt"],
    )


def link_from_api(data: dict) -> DecisionLink:
    return DecisionLink(
        id=data["id"],
        type=data["type"],
        target_id=data.get("targetId", ""),
        target_title=data.get("targetTitle", ""),
    )


def workspace_from_api(data: dict) -> Workspace:
    return Workspace(
        id=data["id"],
        name=data["name"],
        plan_tier=_enum_or_default(PlanTier, data.get("planTier") or "FREE", PlanTier.FREE),
        members=[
            WorkspaceMember(
                name=u.get("name") or "Unknown",
                email=u.get("email", ""),
                role=u.get("role") or "Member",
            )
            for u in data.get("users") or []
        ],
    )


def user_from_api(data: dict) -> User:
    prefs = data.get("preferences") or {}
    return User(
        id=data["id"],
        name=data.get("name") or "",
        email=data.get("email") or "",
        role=data.get("role") or "MEMBER",
        has_onboarded=bool(data.get("hasOnboarded", False)),
        workspace_id=data.get("workspaceId"),
        preferences=UserPreferences(
            email_digest=prefs.get("emailDigest", False),
            review_reminders=prefs.get("reviewReminders", False),
            marketing_emails=prefs.get("marketingEmails", False),
        ),
    )


def notification_from_api(data: dict) -> Notification:
    return Notification(
        id=data["id"],
        type=data.get("type") or "INFO",
        title=data.get("title", ""),
        message=data.get("message", ""),
        link=data.get("link"),
        is_read=bool(data.get("isRead", False)),
        created_at=data["createdAt"],
    )


def insight_from_api(data: dict) -> Insight:
    return Insight(
        id=data["id"],
        title=data.get("title", ""),
        description=data.get("description", ""),
        insight_type=data.get("insightType") or "GENERAL",
        impact=data.get("impact") or "MEDIUM",
        action=data.get("action") or "Review related decisions",
        confidence=data.get("confidence") or 85,
    )


def flag_from_api(key: str, data: dict | None) -> FeatureFlag:
    data = data or {}
    return FeatureFlag(
        key=data.get("key") or key,
        enabled=bool(data.get("enabled", data.get("isEnabled", False))),
        scope=data.get("scope") or "global",
    )
