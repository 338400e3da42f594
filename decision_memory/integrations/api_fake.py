"""ApiClientFake: in-memory test double for the ApiClient protocol.

Holds server-side state as wire-format dicts and answers the same endpoints
as the real API, so the cache's mapping code is exercised end to end.

Two hooks make failure and ordering scenarios deterministic:
- fail(method, endpoint): the next matching request raises NetworkError
- hold(method, endpoint): the next matching request computes its response
  immediately but does not return until the returned event is set, which
  lets tests control the order in which concurrent responses arrive
"""

import asyncio
import itertools
from datetime import UTC, datetime
from typing import Any

from decision_memory.core.exceptions import NetworkError


def _now() -> str:
    return datetime.now(UTC).isoformat()


class ApiClientFake:
    """In-memory API server for tests and local runs."""

    def __init__(
        self,
        workspaces: list[dict] | None = None,
        decisions: list[dict] | None = None,
        notifications: list[dict] | None = None,
        insights: list[dict] | None = None,
        flags: dict[str, bool] | None = None,
        user: dict | None = None,
    ):
        """Initialize the fake with seed data in API wire format.

        Args:
            workspaces: Workspace objects ({id, name, planTier, users})
            decisions: Decision objects ({id, workspaceId, title, theDecision, ...})
            notifications: Notification objects ({id, title, isRead, createdAt, ...})
            insights: Insight objects returned by GET /insights
            flags: Feature flag key -> enabled
            user: Signed-in user ({id, name, email, ...})
        """
        self.workspaces = [dict(w) for w in workspaces or []]
        self.decisions = [dict(d) for d in decisions or []]
        self.comments: list[dict] = []
        self.notifications = [dict(n) for n in notifications or []]
        self.insights = [dict(i) for i in insights or []]
        self.flags = dict(flags or {})
        self.user = dict(user or {"id": "user-1", "name": "Test User", "email": "test@example.com"})

        self.workspace_id: str | None = None
        self.calls: list[tuple[str, str, dict | None, dict | None]] = []
        self._ids = itertools.count(101)
        self._failures: list[tuple[str, str, NetworkError]] = []
        self._gates: dict[tuple[str, str], asyncio.Event] = {}

    # Scenario hooks

    def fail(self, method: str, endpoint: str, message: str = "Internal Server Error", status_code: int = 500) -> None:
        """Make the next request to method + endpoint fail with NetworkError."""
        error = NetworkError(message, status_code=status_code, endpoint=endpoint)
        self._failures.append((method.upper(), endpoint, error))

    def hold(self, method: str, endpoint: str) -> asyncio.Event:
        """Delay the next response to method + endpoint until the returned event is set."""
        gate = asyncio.Event()
        self._gates[(method.upper(), endpoint)] = gate
        return gate

    def calls_to(self, method: str, endpoint: str) -> list[tuple[str, str, dict | None, dict | None]]:
        return [c for c in self.calls if c[0] == method.upper() and c[1] == endpoint]

    # ApiClient protocol

    def set_workspace_id(self, workspace_id: str | None) -> None:
        self.workspace_id = workspace_id

    async def request(
        self,
        method: str,
        endpoint: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        method = method.upper()
        self.calls.append((method, endpoint, json, params))

        # Yield like real I/O would
        await asyncio.sleep(0)

        error = self._take_failure(method, endpoint)
        body = None
        if error is None:
            try:
                body = self._handle(method, endpoint, json or {}, params or {})
            except NetworkError as exc:
                error = exc

        gate = self._gates.pop((method, endpoint), None)
        if gate is not None:
            await gate.wait()

        if error is not None:
            raise error
        return body

    def _take_failure(self, method: str, endpoint: str) -> NetworkError | None:
        for i, (m, e, error) in enumerate(self._failures):
            if m == method and e == endpoint:
                del self._failures[i]
                return error
        return None

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    # Routing

    def _handle(self, method: str, endpoint: str, body: dict, params: dict) -> dict:
        parts = [p for p in endpoint.split("/") if p]
        if not parts:
            raise NetworkError("Not found", status_code=404, endpoint=endpoint)

        resource = parts[0]
        handler = getattr(self, f"_handle_{resource.replace('-', '_')}", None)
        if handler is None:
            raise NetworkError("Not found", status_code=404, endpoint=endpoint)
        return handler(method, parts[1:], body, params, endpoint)

    def _not_found(self, endpoint: str, what: str = "Resource") -> NetworkError:
        return NetworkError(f"{what} not found", status_code=404, endpoint=endpoint)

    def _find(self, items: list[dict], item_id: str, endpoint: str, what: str) -> dict:
        for item in items:
            if item["id"] == item_id:
                return item
        raise self._not_found(endpoint, what)

    def _handle_workspaces(self, method, rest, body, params, endpoint):
        if method == "GET" and not rest:
            return {"data": [dict(w) for w in self.workspaces]}
        if method == "POST" and not rest:
            workspace = {"id": self._next_id("ws"), "name": body.get("name", ""), "planTier": "FREE", "users": []}
            self.workspaces.append(workspace)
            return {"data": dict(workspace)}
        if method == "PATCH" and len(rest) == 1:
            workspace = self._find(self.workspaces, rest[0], endpoint, "Workspace")
            workspace.update({k: v for k, v in body.items() if k in ("name",)})
            return {"data": dict(workspace)}
        raise self._not_found(endpoint)

    def _handle_decisions(self, method, rest, body, params, endpoint):
        if method == "GET" and not rest:
            workspace_id = params.get("workspaceId")
            return {"data": [dict(d) for d in self.decisions if d["workspaceId"] == workspace_id]}

        if method == "POST" and not rest:
            if not self.workspace_id:
                raise NetworkError("Workspace header missing", status_code=400, endpoint=endpoint)
            now = _now()
            decision = {
                **body,
                "id": self._next_id("dec"),
                "workspaceId": self.workspace_id,
                "status": "ACTIVE",
                "madeBy": {"name": self.user.get("name")},
                "madeOn": now,
                "links": [],
                "createdAt": now,
                "updatedAt": now,
            }
            self.decisions.append(decision)
            return {"data": dict(decision)}

        if method == "PATCH" and len(rest) == 1:
            decision = self._find(self.decisions, rest[0], endpoint, "Decision")
            decision.update(body)
            decision["updatedAt"] = _now()
            return {"data": dict(decision)}

        if method == "POST" and len(rest) == 2 and rest[1] == "link":
            decision = self._find(self.decisions, rest[0], endpoint, "Decision")
            target = self._find(self.decisions, body.get("targetId", ""), endpoint, "Target decision")
            link = {
                "id": self._next_id("link"),
                "type": body.get("type"),
                "targetId": target["id"],
                "targetTitle": target.get("title", ""),
            }
            decision.setdefault("links", []).append(link)
            return {"data": dict(link)}

        raise self._not_found(endpoint)

    def _handle_comments(self, method, rest, body, params, endpoint):
        if method == "GET" and not rest:
            decision_id = params.get("decisionId")
            return {"data": [dict(c) for c in self.comments if c["decisionId"] == decision_id]}
        if method == "POST" and not rest:
            self._find(self.decisions, body.get("decisionId", ""), endpoint, "Decision")
            anonymous = bool(body.get("isAnonymous"))
            comment = {
                "id": self._next_id("cmt"),
                "decisionId": body["decisionId"],
                "content": body.get("content", ""),
                "isAnonymous": anonymous,
                "author": {"name": "Anonymous" if anonymous else self.user.get("name")},
                "createdAt": _now(),
            }
            self.comments.append(comment)
            return {"data": dict(comment)}
        raise self._not_found(endpoint)

    def _handle_feature_flags(self, method, rest, body, params, endpoint):
        if len(rest) != 1:
            raise self._not_found(endpoint)
        key = rest[0]
        if method == "POST":
            self.flags[key] = bool(body.get("enabled"))
            return {"data": {"key": key, "enabled": self.flags[key]}}
        if method == "GET":
            return {"data": {"key": key, "enabled": self.flags.get(key, False)}}
        raise self._not_found(endpoint)

    def _handle_notifications(self, method, rest, body, params, endpoint):
        if method == "GET" and not rest:
            return {"data": [dict(n) for n in self.notifications]}
        if method == "PATCH" and len(rest) == 2 and rest[1] == "read":
            notification = self._find(self.notifications, rest[0], endpoint, "Notification")
            notification["isRead"] = True
            return {"data": dict(notification)}
        if method == "POST" and rest == ["mark-all-read"]:
            for notification in self.notifications:
                notification["isRead"] = True
            return {"data": {"updated": len(self.notifications)}}
        raise self._not_found(endpoint)

    def _handle_users(self, method, rest, body, params, endpoint):
        if rest != ["me"]:
            raise self._not_found(endpoint)
        if method == "PATCH":
            self.user.update(body)
        return {"data": dict(self.user)}

    def _handle_insights(self, method, rest, body, params, endpoint):
        return {"data": [dict(i) for i in self.insights]}

    def _handle_ai(self, method, rest, body, params, endpoint):
        if rest == ["blindspot"]:
            blindspots = []
            if len(body.get("alternatives") or []) < 2:
                blindspots.append("Few alternatives were considered.")
            if len(body.get("context") or "") < 50:
                blindspots.append("The context is thin; key constraints may be missing.")
            return {"data": {"blindspots": blindspots}}
        if rest == ["tag"]:
            title = (body.get("title") or "").lower()
            tags = [w for w in ("pricing", "hiring", "database", "launch") if w in title]
            return {"data": {"tags": tags or [str(body.get("category", "other")).lower()]}}
        raise self._not_found(endpoint)

    def _handle_billing(self, method, rest, body, params, endpoint):
        if method == "POST" and rest == ["checkout"]:
            return {"data": {"url": f"https://billing.example.com/checkout/{body.get('plan', '').lower()}"}}
        raise self._not_found(endpoint)
