"""Feature flag resolution and gating.

Resolution logic:
1. Each flag starts UNKNOWN; unknown flags read as disabled (fail closed)
2. fetch_feature_flag() asks the server and records the answer
3. toggle_feature_flag() posts the new value, then re-fetches; the cached
   value only ever changes from a server read
4. Fetch errors leave the cached state untouched
"""

import asyncio
from collections.abc import Iterable
from enum import StrEnum
from urllib.parse import quote

import structlog

from decision_memory.core.exceptions import FeatureDisabledError, NetworkError
from decision_memory.integrations.api_client import ApiClient, unwrap
from decision_memory.schemas.mappers import flag_from_api
from decision_memory.schemas.notifications import FeatureFlag

logger = structlog.get_logger(__name__)


class FlagState(StrEnum):
    UNKNOWN = "unknown"
    ENABLED = "enabled"
    DISABLED = "disabled"


class FeatureFlagResolver:
    """Client-side cache of server-resolved feature flags."""

    def __init__(self, api: ApiClient):
        self.api = api
        self._flags: dict[str, FeatureFlag] = {}

    def state(self, key: str) -> FlagState:
        flag = self._flags.get(key)
        if flag is None:
            return FlagState.UNKNOWN
        return FlagState.ENABLED if flag.enabled else FlagState.DISABLED

    def is_enabled(self, key: str) -> bool:
        """True only when the server has confirmed the flag is on."""
        return self.state(key) is FlagState.ENABLED

    def enabled_flags(self) -> dict[str, bool]:
        """Return only the enabled flags, keyed by name."""
        return {key: True for key, flag in self._flags.items() if flag.enabled}

    def require_feature(self, key: str) -> None:
        """Raise FeatureDisabledError unless the flag is confirmed on.

        Usage:
            flags.require_feature("monthly_report")
            report = generate_monthly_report(...)
        """
        if not self.is_enabled(key):
            raise FeatureDisabledError(key)

    async def fetch_feature_flag(self, key: str) -> bool:
        """Fetch one flag from the server and cache it.

        Returns:
            The flag's enabled value

        Raises:
            NetworkError: If the fetch fails (cached state is left as it was)
        """
        body = await self.api.request("GET", f"/feature-flags/{quote(key, safe='')}")
        flag = flag_from_api(key, unwrap(body))
        self._flags[key] = flag
        logger.debug("feature_flag_fetched", key=key, enabled=flag.enabled)
        return flag.enabled

    async def toggle_feature_flag(self, key: str, enabled: bool) -> bool:
        """Set a flag on the server, then re-fetch it.

        Returns:
            The server's value after the toggle

        Raises:
            NetworkError: If the toggle or the follow-up fetch fails
        """
        await self.api.request("POST", f"/feature-flags/{quote(key, safe='')}", json={"enabled": enabled})
        logger.info("feature_flag_toggled", key=key, enabled=enabled)
        return await self.fetch_feature_flag(key)

    async def fetch_feature_flags(self, keys: Iterable[str]) -> dict[str, FlagState]:
        """Fetch several flags concurrently.

        A flag whose fetch fails keeps its previous state; failures are logged,
        not raised.
        """
        keys = list(dict.fromkeys(keys))
        results = await asyncio.gather(
            *(self.fetch_feature_flag(key) for key in keys),
            return_exceptions=True,
        )

        for key, result in zip(keys, results):
            if isinstance(result, NetworkError):
                logger.warning("feature_flag_fetch_failed", key=key, error=str(result))
            elif isinstance(result, BaseException):
                raise result

        return {key: self.state(key) for key in keys}

    def reset(self) -> None:
        """Forget every cached flag (all return to UNKNOWN)."""
        self._flags.clear()
