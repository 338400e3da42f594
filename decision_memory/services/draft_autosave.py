"""Debounced autosave of the decision authoring form.

Every change restarts a single timer; when it fires the latest draft is
written to durable storage for the (user, workspace) pair. Submitting the
draft successfully clears the stored copy.
"""

import asyncio
import contextlib

import structlog
from redis.exceptions import RedisError

from decision_memory.core.config import get_settings
from decision_memory.db.draft_store import RedisDraftStore
from decision_memory.domain.templates import get_template
from decision_memory.schemas.decisions import Decision, DecisionDraft
from decision_memory.services.results import MutationResult

logger = structlog.get_logger(__name__)


class DraftAutosave:
    """Autosave for one user's draft in one workspace.

    At most one save is pending at a time; a new change cancels it.
    """

    def __init__(
        self,
        store: RedisDraftStore,
        user_id: str | None,
        workspace_id: str | None,
        delay_seconds: float | None = None,
    ):
        self.store = store
        self.user_id = user_id
        self.workspace_id = workspace_id
        self.delay_seconds = delay_seconds if delay_seconds is not None else get_settings().draft_debounce_seconds
        self.latest: DecisionDraft | None = None
        self._pending: asyncio.Task | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def on_change(self, draft: DecisionDraft) -> None:
        """Record a form change and restart the save timer.

        Must be called from within a running event loop.
        """
        self.latest = draft.model_copy(deep=True)
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.create_task(self._save_after_delay(self.latest))

    async def _save_after_delay(self, draft: DecisionDraft) -> None:
        await asyncio.sleep(self.delay_seconds)
        await self._save(draft)

    async def _save(self, draft: DecisionDraft) -> None:
        # Autosave is best effort; a failed write never interrupts editing
        try:
            await self.store.save(self.user_id, self.workspace_id, draft)
        except RedisError as e:
            logger.warning("draft_save_failed", user_id=self.user_id, workspace_id=self.workspace_id,
                           error=str(e), error_type=type(e).__name__)
            return
        logger.debug("draft_saved", user_id=self.user_id, workspace_id=self.workspace_id)

    async def cancel(self) -> None:
        """Cancel the pending save, if any, without writing."""
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def flush(self) -> None:
        """Write the latest draft now instead of waiting for the timer."""
        await self.cancel()
        if self.latest is not None:
            await self._save(self.latest)

    async def clear(self) -> None:
        """Cancel the pending save and delete the stored draft."""
        await self.cancel()
        self.latest = None
        try:
            await self.store.delete(self.user_id, self.workspace_id)
        except RedisError as e:
            logger.warning("draft_clear_failed", user_id=self.user_id, workspace_id=self.workspace_id,
                           error=str(e), error_type=type(e).__name__)
            return
        logger.debug("draft_cleared", user_id=self.user_id, workspace_id=self.workspace_id)

    async def load_initial(self, template_id: str | None = None) -> DecisionDraft | None:
        """Return the form's starting content.

        Args:
            template_id: When given, the template's prefill wins over any saved draft

        Returns:
            Template prefill, the saved draft, or None

        Raises:
            ValueError: If template_id is unknown
        """
        if template_id:
            return get_template(template_id)

        try:
            draft = await self.store.load(self.user_id, self.workspace_id)
        except RedisError as e:
            logger.warning("draft_load_failed", user_id=self.user_id, workspace_id=self.workspace_id, error=str(e))
            return None

        self.latest = draft
        return draft


async def submit_draft(cache, autosave: DraftAutosave, draft: DecisionDraft) -> MutationResult[Decision]:
    """Commit a draft through the cache; the saved draft is cleared only on success.

    Args:
        cache: DecisionCache to create the decision in
        autosave: Autosave instance holding the draft
        draft: Complete draft to submit

    Returns:
        The cache's MutationResult for the create
    """
    result = await cache.add_decision(draft)
    if result.ok:
        await autosave.clear()
    else:
        logger.info("draft_submit_failed", error=str(result.error))
    return result
