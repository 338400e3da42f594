"""Shared test fixtures for all test groups."""

from datetime import datetime, timezone

import pytest
from fakeredis import FakeAsyncRedis

from decision_memory.integrations.api_fake import ApiClientFake
from decision_memory.schemas.decisions import Alternative, Category, Decision, DecisionDraft, DecisionStatus
from decision_memory.services.decision_cache import DecisionCache

NOW = datetime(2026, 3, 18, 12, 0, 0, tzinfo=timezone.utc)  # a Wednesday


def _api_decision(decision_id: str, workspace_id: str, title: str, status: str = "ACTIVE", **extra) -> dict:
    return {
        "id": decision_id,
        "workspaceId": workspace_id,
        "title": title,
        "category": "TECH",
        "theDecision": f"We decided: {title}",
        "context": "Background for the decision",
        "alternativesConsidered": [{"name": "Do nothing", "whyRejected": "Too slow"}],
        "assumptions": [{"id": "a1", "text": "Traffic keeps growing"}],
        "successCriteria": ["p95 under 200ms"],
        "status": status,
        "madeBy": {"name": "Ada"},
        "madeOn": "2026-03-10T09:00:00+00:00",
        **extra,
    }


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_decision():
    """Factory for cache Decision objects with sensible defaults."""

    def _make(decision_id: str = "dec-1", **overrides) -> Decision:
        fields = {
            "id": decision_id,
            "workspace_id": "ws-a",
            "title": "Adopt Postgres",
            "category": Category.TECH,
            "decision": "Move the primary store to Postgres",
            "context": "Mongo struggles with our relational queries",
            "status": DecisionStatus.ACTIVE,
            "made_on": NOW,
        }
        fields.update(overrides)
        return Decision(**fields)

    return _make


@pytest.fixture
def complete_draft():
    """A draft that passes local validation."""
    return DecisionDraft(
        title="Adopt Postgres for billing",
        category=Category.TECH,
        decision="Move billing tables from Mongo to Postgres",
        context="Billing needs transactions and joins across accounts",
        alternatives=[Alternative(name="Stay on Mongo", why_rejected="No multi-document transactions")],
        assumptions=["The team can run Postgres"],
        success_criteria=["Zero billing data loss"],
    )


@pytest.fixture
def fake_api():
    """In-memory API with two workspaces and a few decisions."""
    return ApiClientFake(
        workspaces=[
            {"id": "ws-a", "name": "Acme", "planTier": "FREE", "users": [{"name": "Ada", "email": "ada@acme.io"}]},
            {"id": "ws-b", "name": "Beta", "planTier": "PRO", "users": []},
        ],
        decisions=[
            _api_decision("dec-1", "ws-a", "Adopt Postgres"),
            _api_decision("dec-2", "ws-a", "Hire a designer", category="HIRING"),
            _api_decision("dec-3", "ws-a", "Raise prices", status="SUCCEEDED"),
            _api_decision("dec-9", "ws-b", "Open Berlin office"),
        ],
        notifications=[
            {"id": "n-1", "title": "Review due", "isRead": False, "createdAt": "2026-03-17T08:00:00+00:00"},
            {"id": "n-2", "title": "Welcome", "isRead": True, "createdAt": "2026-03-01T08:00:00+00:00"},
        ],
        flags={"decision_streaks": True, "monthly_report": False},
        user={"id": "user-1", "name": "Ada Lovelace", "email": "ada@acme.io", "hasOnboarded": True},
    )


@pytest.fixture
async def cache(fake_api):
    """Cache with user, workspaces and ws-a decisions loaded."""
    cache = DecisionCache(fake_api, now=lambda: NOW)
    await cache.fetch_me()
    await cache.fetch_workspaces()
    await cache.fetch_decisions("ws-a")
    fake_api.calls.clear()
    return cache


@pytest.fixture
async def redis_client():
    """Fake Redis, flushed after each test."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()
