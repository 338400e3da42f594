"""Tests for session wiring in decision_memory.main."""
from unittest.mock import AsyncMock, patch

import pytest

from decision_memory.core.config import Settings
from decision_memory.core.exceptions import NetworkError
from decision_memory.db.draft_store import RedisDraftStore
from decision_memory.main import open_session
from decision_memory.schemas.decisions import DecisionDraft


@pytest.fixture
def settings():
    return Settings(draft_debounce_seconds=0.01, draft_key_prefix="test:draft:")


async def test_start_loads_session_state(settings, fake_api, redis_client):
    async with open_session(settings, api=fake_api, redis_client=redis_client) as session:
        await session.start()

        assert session.cache.current_user.id == "user-1"
        assert session.cache.context.active_id == "ws-a"
        assert len(session.cache.decisions) == 3
        assert session.cache.unread_notification_count == 1
        assert session.flags.enabled_flags() == {"decision_streaks": True}
        assert session.dashboard.get_summary().streak is not None


async def test_start_tolerates_notification_failure(settings, fake_api, redis_client):
    fake_api.fail("GET", "/notifications")

    async with open_session(settings, api=fake_api, redis_client=redis_client) as session:
        await session.start()
        assert session.cache.notifications == []
        assert len(session.cache.decisions) == 3


async def test_start_raises_when_decisions_fail(settings, fake_api, redis_client):
    fake_api.fail("GET", "/decisions", message="Backend down", status_code=503)

    async with open_session(settings, api=fake_api, redis_client=redis_client) as session:
        with pytest.raises(NetworkError, match="Backend down"):
            await session.start()


async def test_autosave_is_bound_to_user_and_workspace(settings, fake_api, redis_client):
    async with open_session(settings, api=fake_api, redis_client=redis_client) as session:
        await session.start()
        autosave = session.autosave()

        autosave.on_change(DecisionDraft(title="Hire a data engineer"))
        await autosave.flush()

        assert await redis_client.exists("test:draft:user-1:ws-a") == 1


async def test_session_exit_clears_cache(settings, fake_api, redis_client):
    async with open_session(settings, api=fake_api, redis_client=redis_client) as session:
        await session.start()

    assert session.cache.all_decisions == []
    assert fake_api.workspace_id is None


async def test_owned_redis_is_opened_and_closed(settings, fake_api):
    store = AsyncMock()
    with patch.object(RedisDraftStore, "connect", new_callable=AsyncMock, return_value=store) as connect:
        async with open_session(settings, api=fake_api) as session:
            connect.assert_awaited_once_with(settings.redis_url, "test:draft:", settings.draft_ttl_seconds)
            assert session.drafts is store
            store.aclose.assert_not_awaited()

    store.aclose.assert_awaited_once()
