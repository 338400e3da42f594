"""Active workspace tracking.

The active workspace id is pushed into the API client (sent as the
workspace header on every request) and into the log context.
"""

from collections.abc import Iterable
from typing import TypeVar

import structlog

from decision_memory.core.logging import bind_session_context
from decision_memory.integrations.api_client import ApiClient

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class WorkspaceContext:
    def __init__(self, api: ApiClient, workspace_id: str | None = None):
        self.api = api
        self._active_id: str | None = None
        if workspace_id:
            self.activate(workspace_id)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    def activate(self, workspace_id: str) -> None:
        """Make workspace_id the active workspace for requests and logs."""
        previous = self._active_id
        self._active_id = workspace_id
        self.api.set_workspace_id(workspace_id)
        bind_session_context(workspace_id=workspace_id)
        if previous != workspace_id:
            logger.info("workspace_activated", workspace_id=workspace_id, previous_workspace_id=previous)

    def clear(self) -> None:
        self._active_id = None
        self.api.set_workspace_id(None)

    def scope(self, items: Iterable[T], workspace_id: str | None = None) -> list[T]:
        """Filter items carrying a workspace_id down to one workspace (default: the active one)."""
        workspace_id = workspace_id or self._active_id
        if workspace_id is None:
            return []
        return [item for item in items if getattr(item, "workspace_id", None) == workspace_id]
