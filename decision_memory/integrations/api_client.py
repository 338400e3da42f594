"""Remote API client: JSON over HTTP with the ``{"data": ...}`` envelope.

Every call carries the bearer token and the active workspace id header.
Non-2xx responses become NetworkError with the server's message verbatim.
"""

from typing import Any, Protocol, runtime_checkable

import httpx
import structlog

from decision_memory.core.config import get_settings
from decision_memory.core.exceptions import NetworkError

logger = structlog.get_logger(__name__)

WORKSPACE_HEADER = "x-workspace-id"


@runtime_checkable
class ApiClient(Protocol):
    """What the cache needs from a transport.

    Implementations: HttpApiClient (httpx) and ApiClientFake (in-memory).
    """

    def set_workspace_id(self, workspace_id: str | None) -> None:
        """Set the workspace id sent with every subsequent request."""
        ...

    async def request(
        self,
        method: str,
        endpoint: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            NetworkError: On transport failure or non-2xx status
        """
        ...


def unwrap(body: Any) -> Any:
    """Return the payload inside a ``{"data": ...}`` envelope."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def error_message(response: httpx.Response) -> str:
    """Extract the server's error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return f"System Error: {response.reason_phrase or response.status_code}"

    if isinstance(body, dict):
        error = body.get("error")
        if body.get("message"):
            return str(body["message"])
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return f"Request failed with status {response.status_code}"


class HttpApiClient:
    """httpx-backed ApiClient."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, e.g. "https://api.example.com/api" (defaults to settings)
            token: Bearer token handed over by the identity provider (defaults to settings)
            timeout: Per-request timeout in seconds (defaults to settings)
            transport: Optional httpx transport, used by tests to stub the server
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token if token is not None else settings.api_token
        self.timeout = timeout or settings.request_timeout_seconds
        self.workspace_id: str | None = None
        self._transport = transport

    def set_token(self, token: str | None) -> None:
        self.token = token

    def set_workspace_id(self, workspace_id: str | None) -> None:
        self.workspace_id = workspace_id

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if self.workspace_id:
            headers[WORKSPACE_HEADER] = self.workspace_id
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = self._headers()

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.request(method, url, headers=headers, json=json, params=params)
        except httpx.HTTPError as exc:
            logger.warning("api_request_failed", method=method, endpoint=endpoint, error=str(exc),
                           error_type=type(exc).__name__)
            raise NetworkError(f"Network request failed: {exc}", endpoint=endpoint) from exc

        if response.status_code >= 400:
            message = error_message(response)
            logger.warning("api_error_response", method=method, endpoint=endpoint,
                           status_code=response.status_code, message=message)
            raise NetworkError(message, status_code=response.status_code, endpoint=endpoint)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(
                "Malformed JSON in API response", status_code=response.status_code, endpoint=endpoint
            ) from exc
