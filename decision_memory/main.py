"""Decision Memory client session: entry point wiring cache, flags, drafts and storage."""

from contextlib import asynccontextmanager
from dataclasses import dataclass

# configure_structlog must run before the other package imports
# (structlog caches the processor chain on first use).
from decision_memory.core.config import get_settings as _get_settings_early
from decision_memory.core.logging import configure_structlog

_early_settings = _get_settings_early()
configure_structlog(
    log_level="DEBUG" if _early_settings.debug else _early_settings.log_level,
    json_logs=_early_settings.json_logs and not _early_settings.debug,
)

import asyncio

import redis.asyncio as redis
import structlog

from decision_memory.core.config import Settings, get_settings
from decision_memory.core.feature_flags import FeatureFlagResolver
from decision_memory.db.draft_store import RedisDraftStore
from decision_memory.integrations.api_client import ApiClient, HttpApiClient
from decision_memory.services.dashboard_service import DashboardService
from decision_memory.services.decision_cache import DecisionCache
from decision_memory.services.draft_autosave import DraftAutosave

logger = structlog.get_logger(__name__)


@dataclass
class Session:
    """Everything one signed-in user needs, built once per sign-in."""

    settings: Settings
    api: ApiClient
    cache: DecisionCache
    flags: FeatureFlagResolver
    dashboard: DashboardService
    drafts: RedisDraftStore

    def autosave(self) -> DraftAutosave:
        """Autosave bound to the current user and active workspace."""
        user = self.cache.current_user
        return DraftAutosave(
            self.drafts,
            user_id=user.id if user else None,
            workspace_id=self.cache.context.active_id,
            delay_seconds=self.settings.draft_debounce_seconds,
        )

    async def start(self) -> None:
        """Load the signed-in user, workspaces, flags, notifications and the active workspace's decisions.

        Raises:
            NetworkError: If the user, workspace or decision fetch fails
        """
        await self.cache.fetch_me()
        await self.cache.fetch_workspaces()

        results = await asyncio.gather(
            self.flags.fetch_feature_flags(self.settings.known_feature_flags),
            self.cache.fetch_notifications(),
            self.cache.fetch_decisions(self.cache.context.active_id),
            return_exceptions=True,
        )
        flag_states, notifications, decisions = results

        if isinstance(notifications, Exception):
            logger.warning("notifications_fetch_failed", error=str(notifications))
        for result in (flag_states, decisions):
            if isinstance(result, BaseException):
                raise result

        logger.info(
            "session_started",
            workspace_id=self.cache.context.active_id,
            decisions=len(decisions),
            enabled_flags=sorted(self.flags.enabled_flags()),
        )


@asynccontextmanager
async def open_session(
    settings: Settings | None = None,
    api: ApiClient | None = None,
    redis_client: redis.Redis | None = None,
):
    """Build a Session and tear down what it opened on exit.

    Args:
        settings: Defaults to get_settings()
        api: Defaults to an HttpApiClient from settings
        redis_client: Defaults to a pool opened from settings.redis_url and closed on exit
    """
    settings = settings or get_settings()
    logger.info("session_open_begin", app_name=settings.app_name, debug=settings.debug)

    owns_redis = redis_client is None
    if owns_redis:
        drafts = await RedisDraftStore.connect(
            settings.redis_url, settings.draft_key_prefix, settings.draft_ttl_seconds
        )
        logger.info("redis_initialized")
    else:
        drafts = RedisDraftStore(redis_client, settings.draft_key_prefix, settings.draft_ttl_seconds)

    api = api or HttpApiClient(
        base_url=settings.api_base_url,
        token=settings.api_token,
        timeout=settings.request_timeout_seconds,
    )
    flags = FeatureFlagResolver(api)
    cache = DecisionCache(api, flags=flags)
    session = Session(
        settings=settings,
        api=api,
        cache=cache,
        flags=flags,
        dashboard=DashboardService(cache, flags),
        drafts=drafts,
    )

    try:
        yield session
    finally:
        cache.logout()
        if owns_redis:
            await drafts.aclose()
            logger.info("redis_closed")
