"""Durable per-user, per-workspace draft storage in Redis.

Key format: ``{prefix}{user_id}:{workspace_id}`` holding the draft as JSON.
"""

import pydantic
import redis.asyncio as redis
import structlog

from decision_memory.core.config import get_settings
from decision_memory.schemas.decisions import DecisionDraft

logger = structlog.get_logger(__name__)

ANONYMOUS = "anonymous"
NO_WORKSPACE = "none"


class RedisDraftStore:
    """Reads and writes the single saved draft for a user in a workspace."""

    def __init__(self, redis_client: redis.Redis, prefix: str | None = None, ttl_seconds: int | None = None):
        settings = get_settings()
        self.redis = redis_client
        self.prefix = prefix if prefix is not None else settings.draft_key_prefix
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.draft_ttl_seconds

    @classmethod
    async def connect(
        cls, url: str | None = None, prefix: str | None = None, ttl_seconds: int | None = None
    ) -> "RedisDraftStore":
        """Open a dedicated connection pool and verify it answers.

        Args:
            url: Redis URL, defaults to settings.redis_url
            prefix: Key prefix, defaults to settings.draft_key_prefix
            ttl_seconds: Draft expiry, defaults to settings.draft_ttl_seconds

        Raises:
            redis.exceptions.ConnectionError: If Redis is unreachable
        """
        client = redis.from_url(url or get_settings().redis_url, encoding="utf-8", decode_responses=True)
        await client.ping()
        return cls(client, prefix, ttl_seconds)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self.redis.aclose()

    def key(self, user_id: str | None, workspace_id: str | None) -> str:
        return f"{self.prefix}{user_id or ANONYMOUS}:{workspace_id or NO_WORKSPACE}"

    async def load(self, user_id: str | None, workspace_id: str | None) -> DecisionDraft | None:
        """Return the saved draft, or None when absent or unreadable.

        An unreadable entry is deleted so the form starts clean next time.
        """
        key = self.key(user_id, workspace_id)
        raw = await self.redis.get(key)
        if raw is None:
            return None

        try:
            return DecisionDraft.model_validate_json(raw)
        except pydantic.ValidationError as e:
            logger.warning("draft_unreadable", key=key, error=str(e))
            await self.redis.delete(key)
            return None

    async def save(self, user_id: str | None, workspace_id: str | None, draft: DecisionDraft) -> None:
        key = self.key(user_id, workspace_id)
        if self.ttl_seconds:
            await self.redis.set(key, draft.model_dump_json(), ex=self.ttl_seconds)
        else:
            await self.redis.set(key, draft.model_dump_json())

    async def delete(self, user_id: str | None, workspace_id: str | None) -> None:
        await self.redis.delete(self.key(user_id, workspace_id))
