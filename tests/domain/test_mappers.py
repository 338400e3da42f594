"""Tests for API payload mapping."""
import pytest

from decision_memory.schemas.decisions import Alternative, DecisionStatus, DecisionUpdate, LinkType
from decision_memory.schemas.mappers import (
    comment_from_api,
    decision_from_api,
    draft_to_api,
    flag_from_api,
    update_to_api,
    workspace_from_api,
)

pytestmark = pytest.mark.unit

API_DECISION = {
    "id": "dec-1",
    "workspaceId": "ws-a",
    "title": "Adopt Postgres",
    "category": "NOT_A_CATEGORY",
    "theDecision": "Move to Postgres",
    "alternativesConsidered": [{"name": "Stay", "whyRejected": "Slow"}],
    "assumptions": [{"id": "a1", "text": "Team knows SQL"}, "Plain string"],
    "successCriteria": ["Fast"],
    "status": "SUCCEEDED",
    "madeBy": {"name": "Ada"},
    "madeOn": "2026-03-10T09:00:00Z",
    "links": [{"id": "l1", "type": "RELIES_ON", "targetId": "dec-2", "targetTitle": "Hire DBA"}],
    "comments": [{"id": "c1", "content": "Nice", "createdAt": "2026-03-11T09:00:00Z"}],
}


def test_decision_from_api_maps_wire_shapes():
    decision = decision_from_api(API_DECISION)

    assert decision.decision == "Move to Postgres"
    assert decision.alternatives == [Alternative(name="Stay", why_rejected="Slow")]
    assert decision.assumptions == ["Team knows SQL", "Plain string"]
    assert decision.status == DecisionStatus.SUCCEEDED
    assert decision.made_by == "Ada"
    assert decision.category == "OTHER"
    assert decision.links[0].type == LinkType.RELIES_ON
    assert decision.comments[0].text == "Nice"
    assert decision.comments[0].decision_id == "dec-1"


def test_decision_from_api_requires_id():
    with pytest.raises(KeyError):
        decision_from_api({k: v for k, v in API_DECISION.items() if k != "id"})


def test_draft_to_api_uses_wire_names(complete_draft):
    payload = draft_to_api(complete_draft)
    assert payload["theDecision"] == complete_draft.decision
    assert payload["alternativesConsidered"][0] == {
        "name": "Stay on Mongo",
        "whyRejected": "No multi-document transactions",
    }
    assert payload["assumptions"] == [{"text": "The team can run Postgres", "confidence": "CONFIDENT"}]
    assert "aiRiskScore" not in payload


def test_update_to_api_sends_only_set_fields():
    assert update_to_api(DecisionUpdate(title="New title")) == {"title": "New title"}
    assert update_to_api(DecisionUpdate(decision="X", tags=[])) == {"theDecision": "X", "tags": []}


def test_comment_author_falls_back_to_unknown():
    comment = comment_from_api({"id": "c1", "content": "Hi", "createdAt": "2026-03-11T09:00:00Z"}, "dec-1")
    assert comment.author == "Unknown"


def test_workspace_members_come_from_users():
    workspace = workspace_from_api({"id": "ws", "name": "Acme", "users": [{"name": "Ada", "email": "a@x.io"}]})
    assert workspace.members[0].email == "a@x.io"
    assert workspace.plan_tier == "FREE"


@pytest.mark.parametrize("data,expected", [
    ({"enabled": True}, True),
    ({"isEnabled": True}, True),
    ({}, False),
    (None, False),
])
def test_flag_from_api(data, expected):
    assert flag_from_api("k", data).enabled is expected
