"""DecisionCache: canonical in-memory entity cache and sync engine.

Holds everything fetched so far (decisions of every workspace visited,
workspaces, notifications, insights, the signed-in user) and mirrors local
mutations to the remote API.

Mutations are optimistic: the change is applied to the cache first, the
request is issued, and the change is then confirmed with server data or
rolled back. They return a MutationResult instead of raising. Fetches
replace their slice of the cache and raise NetworkError on failure, leaving
prior state intact.

Responses apply in arrival order. A slow response for an earlier request
overwrites a faster one for a later request; nothing is cancelled.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar
from uuid import uuid4

import pydantic
import structlog

from decision_memory.core.exceptions import (
    NetworkError,
    NotFoundError,
    TransitionError,
    ValidationError,
)
from decision_memory.core.feature_flags import FeatureFlagResolver
from decision_memory.core.logging import bind_session_context
from decision_memory.domain.transitions import check_transition
from decision_memory.domain.validation import validate_draft
from decision_memory.integrations.api_client import ApiClient, unwrap
from decision_memory.schemas.decisions import (
    Category,
    Comment,
    Decision,
    DecisionDraft,
    DecisionLink,
    DecisionStatus,
    DecisionUpdate,
    LinkType,
)
from decision_memory.schemas.mappers import (
    comment_from_api,
    decision_from_api,
    draft_to_api,
    insight_from_api,
    link_from_api,
    notification_from_api,
    update_to_api,
    user_from_api,
    workspace_from_api,
)
from decision_memory.schemas.notifications import Insight, Notification
from decision_memory.schemas.workspaces import PlanTier, User, UserPreferences, Workspace
from decision_memory.services.results import MutationFailed, MutationOk, MutationResult
from decision_memory.services.workspace_context import WorkspaceContext

logger = structlog.get_logger(__name__)

T = TypeVar("T")

TEMP_PREFIX = "tmp-"
CHECKOUT_PLANS = (PlanTier.PRO, PlanTier.TEAM)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _temp_id() -> str:
    return f"{TEMP_PREFIX}{uuid4().hex}"


def _parse(mapper: Callable[[Any], T], data: Any, endpoint: str) -> T:
    """Map a response payload, turning malformed data into NetworkError."""
    try:
        return mapper(data)
    except (KeyError, TypeError, ValueError, AttributeError, pydantic.ValidationError) as e:
        raise NetworkError(f"Malformed response from {endpoint}: {e}", endpoint=endpoint) from e


def _parse_list(mapper: Callable[[Any], T], data: Any, endpoint: str) -> list[T]:
    if not isinstance(data, list):
        raise NetworkError(f"Malformed response from {endpoint}: expected a list", endpoint=endpoint)
    return [_parse(mapper, item, endpoint) for item in data]


class DecisionCache:
    """Shared entity cache for one signed-in session.

    Usage:
        cache = DecisionCache(HttpApiClient(token=token))
        await cache.fetch_workspaces()
        await cache.fetch_decisions(cache.context.active_id)
        result = await cache.add_decision(draft)
    """

    def __init__(
        self,
        api: ApiClient,
        flags: FeatureFlagResolver | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        """Initialize an empty cache.

        Args:
            api: Transport for the remote API
            flags: Feature flag resolver (one is created on the same api when omitted)
            now: Clock for optimistic timestamps; injectable for tests
        """
        self.api = api
        self.context = WorkspaceContext(api)
        self.flags = flags or FeatureFlagResolver(api)
        self._now = now or _utcnow

        self._decisions: list[Decision] = []
        self.workspaces: list[Workspace] = []
        self.notifications: list[Notification] = []
        self.insights: list[Insight] = []
        self.current_user: User | None = None

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    @property
    def decisions(self) -> list[Decision]:
        """Decisions of the active workspace, in cache order."""
        return self.context.scope(self._decisions)

    @property
    def all_decisions(self) -> list[Decision]:
        return list(self._decisions)

    @property
    def active_workspace(self) -> Workspace | None:
        return next((w for w in self.workspaces if w.id == self.context.active_id), None)

    @property
    def unread_notification_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    def get_decision(self, decision_id: str) -> Decision | None:
        return next((d for d in self._decisions if d.id == decision_id), None)

    def _index_of(self, decision_id: str) -> int | None:
        for i, d in enumerate(self._decisions):
            if d.id == decision_id:
                return i
        return None

    def _replace(self, decision_id: str, decision: Decision) -> bool:
        """Replace a cached decision in its slot. False if it is no longer cached."""
        idx = self._index_of(decision_id)
        if idx is None:
            return False
        self._decisions[idx] = decision
        return True

    def _require(self, decision_id: str) -> Decision:
        decision = self.get_decision(decision_id)
        if decision is None:
            raise NotFoundError("Decision", decision_id)
        return decision

    def _require_confirmed(self, decision_id: str) -> Decision:
        decision = self._require(decision_id)
        if decision.is_temporary:
            raise ValidationError(f"Decision '{decision_id}' has not been confirmed by the server yet")
        return decision

    def _confirmed(self, data: dict, cached: Decision, endpoint: str) -> Decision:
        """Parse a server decision, keeping cached comments and links the response omits."""
        confirmed = _parse(decision_from_api, data, endpoint)
        keep = {}
        if "comments" not in data:
            keep["comments"] = cached.comments
        if "links" not in data:
            keep["links"] = cached.links
        return confirmed.model_copy(update=keep) if keep else confirmed

    # ------------------------------------------------------------------
    # Fetches
    # ------------------------------------------------------------------

    async def fetch_workspaces(self) -> list[Workspace]:
        """Replace cached workspaces; activate the first one when none is active."""
        endpoint = "/workspaces"
        body = await self.api.request("GET", endpoint)
        workspaces = _parse_list(workspace_from_api, unwrap(body), endpoint)

        self.workspaces = workspaces
        if self.context.active_id is None and workspaces:
            self.context.activate(workspaces[0].id)

        logger.debug("workspaces_fetched", count=len(workspaces))
        return workspaces

    async def fetch_decisions(self, workspace_id: str | None) -> list[Decision]:
        """Replace the cached decisions of one workspace with server data.

        Other workspaces' decisions stay resident.
        """
        if not workspace_id:
            return []

        endpoint = "/decisions"
        body = await self.api.request("GET", endpoint, params={"workspaceId": workspace_id})
        fetched = _parse_list(decision_from_api, unwrap(body), endpoint)

        self._decisions = [d for d in self._decisions if d.workspace_id != workspace_id] + fetched
        logger.debug("decisions_fetched", workspace_id=workspace_id, count=len(fetched))
        return fetched

    async def fetch_notifications(self) -> list[Notification]:
        endpoint = "/notifications"
        body = await self.api.request("GET", endpoint)
        self.notifications = _parse_list(notification_from_api, unwrap(body), endpoint)
        return self.notifications

    async def fetch_comments(self, decision_id: str) -> list[Comment]:
        """Replace a cached decision's comments with server data."""
        endpoint = "/comments"
        body = await self.api.request("GET", endpoint, params={"decisionId": decision_id})
        comments = _parse_list(lambda c: comment_from_api(c, decision_id), unwrap(body), endpoint)

        decision = self.get_decision(decision_id)
        if decision is not None:
            self._replace(decision_id, decision.model_copy(update={"comments": comments}))
        return comments

    async def fetch_insights(self) -> list[Insight]:
        endpoint = "/insights"
        body = await self.api.request("GET", endpoint)
        self.insights = _parse_list(insight_from_api, unwrap(body), endpoint)
        return self.insights

    async def fetch_me(self) -> User:
        endpoint = "/users/me"
        body = await self.api.request("GET", endpoint)
        self.current_user = _parse(user_from_api, unwrap(body), endpoint)
        bind_session_context(user_id=self.current_user.id)
        return self.current_user

    async def switch_workspace(self, workspace_id: str) -> list[Decision]:
        """Activate a workspace and fetch its decisions.

        An in-flight fetch for the previous workspace is not cancelled; if it
        resolves later it still replaces that workspace's slice.
        """
        self.context.activate(workspace_id)
        return await self.fetch_decisions(workspace_id)

    # ------------------------------------------------------------------
    # Decision mutations
    # ------------------------------------------------------------------

    async def add_decision(self, draft: DecisionDraft) -> MutationResult[Decision]:
        """Create a decision optimistically.

        A temporary record (id prefixed ``tmp-``) is shown immediately and
        swapped in place for the confirmed one, or removed on failure.
        """
        snapshot = self.all_decisions
        try:
            validate_draft(draft)
        except ValidationError as e:
            logger.info("decision_create_rejected", errors=e.errors)
            return MutationFailed(e, snapshot)

        workspace_id = self.context.active_id
        if workspace_id is None:
            return MutationFailed(ValidationError("No active workspace"), snapshot)

        now = self._now()
        temp = Decision(
            id=_temp_id(),
            workspace_id=workspace_id,
            title=draft.title,
            category=draft.category,
            decision=draft.decision,
            context=draft.context,
            alternatives=draft.alternatives,
            assumptions=draft.assumptions,
            success_criteria=draft.success_criteria,
            status=DecisionStatus.ACTIVE,
            made_by=self.current_user.name if self.current_user and self.current_user.name else "You",
            made_on=now,
            privacy=draft.privacy,
            ai_risk_score=draft.ai_risk_score,
            tags=draft.tags,
            created_at=now,
            updated_at=now,
        )
        self._decisions.append(temp)

        endpoint = "/decisions"
        try:
            body = await self.api.request("POST", endpoint, json=draft_to_api(draft))
            confirmed = _parse(decision_from_api, unwrap(body), endpoint)
        except NetworkError as e:
            self._decisions = [d for d in self._decisions if d.id != temp.id]
            logger.warning("decision_create_failed", temp_id=temp.id, error=str(e), status_code=e.status_code)
            return MutationFailed(e, snapshot)

        if not self._replace(temp.id, confirmed) and self._index_of(confirmed.id) is None:
            # A refetch dropped the temporary record; keep the confirmed one
            self._decisions.append(confirmed)

        logger.info("decision_created", decision_id=confirmed.id, workspace_id=confirmed.workspace_id)
        return MutationOk(confirmed)

    async def update_decision_status(
        self, decision_id: str, new_status: DecisionStatus | str
    ) -> MutationResult[Decision]:
        """Move a decision to a new status if the transition is allowed."""
        try:
            current = self._require_confirmed(decision_id)
            new_status = DecisionStatus(new_status)
            check_transition(current.status, new_status)
        except ValueError:
            return MutationFailed(ValidationError(f"Unknown status: {new_status}"), self.get_decision(decision_id))
        except (NotFoundError, ValidationError, TransitionError) as e:
            logger.info("decision_status_rejected", decision_id=decision_id, error=str(e))
            return MutationFailed(e, self.get_decision(decision_id))

        self._replace(decision_id, current.model_copy(update={"status": new_status, "updated_at": self._now()}))

        endpoint = f"/decisions/{decision_id}"
        try:
            body = await self.api.request("PATCH", endpoint, json={"status": new_status.value})
            data = unwrap(body)
            confirmed = None
            if isinstance(data, dict) and data.get("id"):
                confirmed = self._confirmed(data, self.get_decision(decision_id) or current, endpoint)
        except NetworkError as e:
            self._replace(decision_id, current)
            logger.warning("decision_status_rolled_back", decision_id=decision_id,
                           status=new_status.value, error=str(e))
            return MutationFailed(e, current)

        if confirmed is not None:
            self._replace(decision_id, confirmed)
        result = self.get_decision(decision_id) or confirmed or current
        logger.info("decision_status_updated", decision_id=decision_id, status=new_status.value)
        return MutationOk(result)

    async def update_decision(
        self, decision_id: str, patch: DecisionUpdate | dict
    ) -> MutationResult[Decision]:
        """Edit a decision's content. Status changes go through update_decision_status()."""
        try:
            current = self._require_confirmed(decision_id)
            if isinstance(patch, dict):
                if "status" in patch:
                    raise ValidationError("Use update_decision_status() to change status")
                patch = DecisionUpdate.model_validate(patch)
        except pydantic.ValidationError as e:
            error = ValidationError("Invalid decision update", errors=[err["msg"] for err in e.errors()])
            return MutationFailed(error, self.get_decision(decision_id))
        except (NotFoundError, ValidationError) as e:
            return MutationFailed(e, self.get_decision(decision_id))

        fields = {name: getattr(patch, name) for name in patch.model_fields_set}
        if not fields:
            return MutationOk(current)

        self._replace(decision_id, current.model_copy(update={**fields, "updated_at": self._now()}))

        endpoint = f"/decisions/{decision_id}"
        try:
            body = await self.api.request("PATCH", endpoint, json=update_to_api(patch))
            data = unwrap(body)
            confirmed = None
            if isinstance(data, dict) and data.get("id"):
                confirmed = self._confirmed(data, self.get_decision(decision_id) or current, endpoint)
        except NetworkError as e:
            self._replace(decision_id, current)
            logger.warning("decision_update_rolled_back", decision_id=decision_id,
                           fields=sorted(fields), error=str(e))
            return MutationFailed(e, current)

        if confirmed is not None:
            self._replace(decision_id, confirmed)
        logger.info("decision_updated", decision_id=decision_id, fields=sorted(fields))
        return MutationOk(self.get_decision(decision_id) or confirmed or current)

    async def link_decision(
        self, source_id: str, target_id: str, link_type: LinkType | str
    ) -> MutationResult[Decision]:
        """Link source to target. Returns the source decision with its new link."""
        try:
            try:
                link_type = LinkType(link_type)
            except ValueError:
                raise ValidationError(f"Unknown link type: {link_type}") from None
            if source_id == target_id:
                raise ValidationError("A decision cannot link to itself")
            source = self._require_confirmed(source_id)
            target = self._require_confirmed(target_id)
            if any(link.type == link_type and link.target_id == target_id for link in source.links):
                raise ValidationError(f"Link {link_type.value} to '{target_id}' already exists")
        except (NotFoundError, ValidationError) as e:
            logger.info("decision_link_rejected", source_id=source_id, target_id=target_id, error=str(e))
            return MutationFailed(e, self.get_decision(source_id))

        temp = DecisionLink(id=_temp_id(), type=link_type, target_id=target_id, target_title=target.title)
        self._replace(source_id, source.model_copy(update={"links": [*source.links, temp]}))

        endpoint = f"/decisions/{source_id}/link"
        try:
            body = await self.api.request("POST", endpoint, json={"targetId": target_id, "type": link_type.value})
            data = unwrap(body)
            confirmed = _parse(link_from_api, data, endpoint) if isinstance(data, dict) and data.get("id") else None
        except NetworkError as e:
            cached = self.get_decision(source_id)
            if cached is not None:
                self._replace(source_id, cached.model_copy(
                    update={"links": [link for link in cached.links if link.id != temp.id]}
                ))
            logger.warning("decision_link_rolled_back", source_id=source_id, target_id=target_id, error=str(e))
            return MutationFailed(e, source)

        cached = self.get_decision(source_id)
        if cached is None:
            return MutationOk(source)
        if confirmed is not None:
            if not confirmed.target_title:
                confirmed = confirmed.model_copy(update={"target_title": target.title})
            links = [confirmed if link.id == temp.id else link for link in cached.links]
            cached = cached.model_copy(update={"links": links})
            self._replace(source_id, cached)

        logger.info("decision_linked", source_id=source_id, target_id=target_id, link_type=link_type.value)
        return MutationOk(cached)

    async def add_comment(
        self, decision_id: str, text: str, is_anonymous: bool = False
    ) -> MutationResult[Comment]:
        try:
            if not text or not text.strip():
                raise ValidationError("Comment text is required")
            decision = self._require_confirmed(decision_id)
        except (NotFoundError, ValidationError) as e:
            return MutationFailed(e, self.get_decision(decision_id))

        if is_anonymous:
            author = "Anonymous"
        else:
            author = self.current_user.name if self.current_user and self.current_user.name else "You"
        temp = Comment(
            id=_temp_id(),
            decision_id=decision_id,
            text=text,
            author=author,
            is_anonymous=is_anonymous,
            created_at=self._now(),
        )
        self._replace(decision_id, decision.model_copy(update={"comments": [*decision.comments, temp]}))

        endpoint = "/comments"
        payload = {"decisionId": decision_id, "content": text, "isAnonymous": is_anonymous}
        try:
            body = await self.api.request("POST", endpoint, json=payload)
            confirmed = _parse(lambda c: comment_from_api(c, decision_id), unwrap(body), endpoint)
        except NetworkError as e:
            cached = self.get_decision(decision_id)
            if cached is not None:
                self._replace(decision_id, cached.model_copy(
                    update={"comments": [c for c in cached.comments if c.id != temp.id]}
                ))
            logger.warning("comment_create_failed", decision_id=decision_id, error=str(e))
            return MutationFailed(e, decision)

        cached = self.get_decision(decision_id)
        if cached is not None:
            comments = [confirmed if c.id == temp.id else c for c in cached.comments]
            self._replace(decision_id, cached.model_copy(update={"comments": comments}))
        return MutationOk(confirmed)

    # ------------------------------------------------------------------
    # Workspaces, user, notifications
    # ------------------------------------------------------------------

    async def create_workspace(self, name: str) -> MutationResult[Workspace]:
        """Create a workspace and make it active. Applied once the server confirms."""
        if not name or not name.strip():
            return MutationFailed(ValidationError("Workspace name is required"), list(self.workspaces))

        endpoint = "/workspaces"
        try:
            body = await self.api.request("POST", endpoint, json={"name": name.strip()})
            workspace = _parse(workspace_from_api, unwrap(body), endpoint)
        except NetworkError as e:
            logger.warning("workspace_create_failed", error=str(e))
            return MutationFailed(e, list(self.workspaces))

        self.workspaces = [*self.workspaces, workspace]
        self.context.activate(workspace.id)
        logger.info("workspace_created", workspace_id=workspace.id)
        return MutationOk(workspace)

    async def update_workspace(self, workspace_id: str, name: str) -> MutationResult[Workspace]:
        current = next((w for w in self.workspaces if w.id == workspace_id), None)
        if current is None:
            return MutationFailed(NotFoundError("Workspace", workspace_id))
        if not name or not name.strip():
            return MutationFailed(ValidationError("Workspace name is required"), current)

        def put(workspace: Workspace) -> None:
            self.workspaces = [workspace if w.id == workspace_id else w for w in self.workspaces]

        put(current.model_copy(update={"name": name.strip()}))

        endpoint = f"/workspaces/{workspace_id}"
        try:
            body = await self.api.request("PATCH", endpoint, json={"name": name.strip()})
            data = unwrap(body)
            confirmed = _parse(workspace_from_api, data, endpoint) if isinstance(data, dict) and data.get("id") else None
        except NetworkError as e:
            put(current)
            logger.warning("workspace_update_rolled_back", workspace_id=workspace_id, error=str(e))
            return MutationFailed(e, current)

        if confirmed is not None:
            put(confirmed)
        return MutationOk(next(w for w in self.workspaces if w.id == workspace_id))

    async def update_user(
        self,
        name: str | None = None,
        timezone: str | None = None,
        has_onboarded: bool | None = None,
    ) -> MutationResult[User]:
        """Update the signed-in user's profile (PATCH /users/me)."""
        current = self.current_user
        if current is None:
            return MutationFailed(ValidationError("No signed-in user"))

        payload = {}
        if name is not None:
            payload["name"] = name
        if timezone is not None:
            payload["timezone"] = timezone
        if has_onboarded is not None:
            payload["hasOnboarded"] = has_onboarded
        if not payload:
            return MutationOk(current)

        local = {}
        if name is not None:
            local["name"] = name
        if has_onboarded is not None:
            local["has_onboarded"] = has_onboarded
        self.current_user = current.model_copy(update=local)

        endpoint = "/users/me"
        try:
            body = await self.api.request("PATCH", endpoint, json=payload)
            data = unwrap(body)
            confirmed = _parse(user_from_api, data, endpoint) if isinstance(data, dict) and data.get("id") else None
        except NetworkError as e:
            self.current_user = current
            logger.warning("user_update_rolled_back", error=str(e))
            return MutationFailed(e, current)

        if confirmed is not None:
            # Preferences are local-only
            self.current_user = confirmed.model_copy(update={"preferences": current.preferences})
        return MutationOk(self.current_user)

    def update_preferences(self, **preferences: bool) -> UserPreferences:
        """Update notification preferences locally. Nothing is sent to the server.

        Raises:
            ValidationError: If no user is signed in or a preference is unknown
        """
        if self.current_user is None:
            raise ValidationError("No signed-in user")
        unknown = set(preferences) - set(UserPreferences.model_fields)
        if unknown:
            raise ValidationError(f"Unknown preferences: {sorted(unknown)}")

        updated = self.current_user.preferences.model_copy(update=preferences)
        self.current_user = self.current_user.model_copy(update={"preferences": updated})
        return updated

    async def mark_notification_read(self, notification_id: str) -> MutationResult[Notification]:
        current = next((n for n in self.notifications if n.id == notification_id), None)
        if current is None:
            return MutationFailed(NotFoundError("Notification", notification_id))
        if current.is_read:
            return MutationOk(current)

        def put(notification: Notification) -> None:
            self.notifications = [notification if n.id == notification_id else n for n in self.notifications]

        read = current.model_copy(update={"is_read": True})
        put(read)

        try:
            await self.api.request("PATCH", f"/notifications/{notification_id}/read")
        except NetworkError as e:
            put(current)
            logger.warning("notification_read_rolled_back", notification_id=notification_id, error=str(e))
            return MutationFailed(e, current)
        return MutationOk(read)

    async def mark_all_notifications_read(self) -> MutationResult[int]:
        """Mark every notification read. The value is how many were unread."""
        snapshot = list(self.notifications)
        unread = sum(1 for n in snapshot if not n.is_read)
        self.notifications = [n.model_copy(update={"is_read": True}) for n in snapshot]

        try:
            await self.api.request("POST", "/notifications/mark-all-read")
        except NetworkError as e:
            read_ids = {n.id for n in snapshot if n.is_read}
            self.notifications = [
                n.model_copy(update={"is_read": n.id in read_ids}) for n in self.notifications
            ]
            logger.warning("notifications_read_rolled_back", count=unread, error=str(e))
            return MutationFailed(e, snapshot)
        return MutationOk(unread)

    # ------------------------------------------------------------------
    # Feature flags, AI helpers, billing
    # ------------------------------------------------------------------

    async def fetch_feature_flag(self, key: str) -> bool:
        return await self.flags.fetch_feature_flag(key)

    async def toggle_feature_flag(self, key: str, enabled: bool) -> bool:
        return await self.flags.toggle_feature_flag(key, enabled)

    async def analyze_blindspots(self, decision: Decision | DecisionDraft) -> list[str]:
        """Ask the server for blind spots in a decision. Empty on any failure."""
        payload = {
            "title": decision.title,
            "context": decision.context,
            "theDecision": decision.decision,
            "alternatives": [a.name for a in decision.alternatives],
        }
        try:
            body = await self.api.request("POST", "/ai/blindspot", json=payload)
        except NetworkError as e:
            logger.warning("blindspot_analysis_failed", error=str(e))
            return []

        data = unwrap(body)
        blindspots = data.get("blindspots") if isinstance(data, dict) else None
        return [str(b) for b in blindspots] if isinstance(blindspots, list) else []

    async def suggest_tags(self, title: str, category: Category | str) -> list[str]:
        """Ask the server for tag suggestions. Empty on any failure."""
        try:
            body = await self.api.request("POST", "/ai/tag", json={"title": title, "category": str(category)})
        except NetworkError as e:
            logger.warning("tag_suggestion_failed", error=str(e))
            return []

        data = unwrap(body)
        tags = data.get("tags") if isinstance(data, dict) else None
        return [str(t) for t in tags] if isinstance(tags, list) else []

    async def create_checkout_session(self, plan: PlanTier | str) -> str:
        """Start a billing checkout for an upgrade and return its URL.

        Raises:
            ValidationError: If the plan cannot be bought through checkout
            NetworkError: If the billing call fails or returns no URL
        """
        try:
            plan = PlanTier(plan)
        except ValueError:
            raise ValidationError(f"Unknown plan: {plan}") from None
        if plan not in CHECKOUT_PLANS:
            raise ValidationError(f"Plan {plan.value} is not available through checkout")

        endpoint = "/billing/checkout"
        body = await self.api.request("POST", endpoint, json={"plan": plan.value})
        data = unwrap(body)
        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            raise NetworkError("Checkout session returned no URL", endpoint=endpoint)

        logger.info("checkout_session_created", plan=plan.value)
        return url

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def logout(self) -> None:
        """Drop all session state, including the active workspace and flags."""
        self._decisions = []
        self.workspaces = []
        self.notifications = []
        self.insights = []
        self.current_user = None
        self.context.clear()
        self.flags.reset()
        logger.info("session_cleared")


