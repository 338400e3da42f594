"""Tests for workspace switching and response ordering.

Responses apply in arrival order and nothing is cancelled; these tests pin
that behavior down with held responses from ApiClientFake.
"""
import asyncio

from decision_memory.services.workspace_context import WorkspaceContext


async def _settle():
    for _ in range(5):
        await asyncio.sleep(0)


async def test_switch_workspace_sets_header_and_fetches(cache, fake_api):
    decisions = await cache.switch_workspace("ws-b")

    assert [d.id for d in decisions] == ["dec-9"]
    assert fake_api.workspace_id == "ws-b"
    assert [d.id for d in cache.decisions] == ["dec-9"]
    assert cache.active_workspace.name == "Beta"


async def test_inactive_workspace_stays_resident(cache):
    await cache.switch_workspace("ws-b")

    assert {d.workspace_id for d in cache.all_decisions} == {"ws-a", "ws-b"}

    cache.context.activate("ws-a")
    assert [d.id for d in cache.decisions] == ["dec-1", "dec-2", "dec-3"]


async def test_stale_fetch_applies_to_its_own_workspace(cache, fake_api):
    gate = fake_api.hold("GET", "/decisions")
    stale = asyncio.create_task(cache.fetch_decisions("ws-a"))
    await _settle()

    await cache.switch_workspace("ws-b")
    fake_api.decisions = [d for d in fake_api.decisions if d["id"] != "dec-2"]

    gate.set()
    await stale

    # The stale response was computed before dec-2 was removed server-side
    assert [d.id for d in cache.decisions] == ["dec-9"]
    assert sorted(d.id for d in cache.all_decisions if d.workspace_id == "ws-a") == ["dec-1", "dec-2", "dec-3"]


async def test_older_response_arriving_last_wins(cache, fake_api):
    gate = fake_api.hold("GET", "/decisions")
    older = asyncio.create_task(cache.fetch_decisions("ws-a"))
    await _settle()

    fake_api.decisions.append({
        "id": "dec-new",
        "workspaceId": "ws-a",
        "title": "Open a support desk",
        "madeOn": "2026-03-17T09:00:00+00:00",
    })
    await cache.fetch_decisions("ws-a")
    assert "dec-new" in [d.id for d in cache.decisions]

    gate.set()
    await older

    assert "dec-new" not in [d.id for d in cache.decisions]


async def test_workspace_context_scope(fake_api, make_decision):
    context = WorkspaceContext(fake_api)
    items = [make_decision("a", workspace_id="ws-a"), make_decision("b", workspace_id="ws-b")]

    assert context.scope(items) == []

    context.activate("ws-b")
    assert [d.id for d in context.scope(items)] == ["b"]
    assert [d.id for d in context.scope(items, "ws-a")] == ["a"]

    context.clear()
    assert context.active_id is None
    assert fake_api.workspace_id is None
