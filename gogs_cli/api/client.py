"""
Authenticated HTTP client for the Gogs REST API.

One ``APIClient`` is bound to one identity for the life of the process. It
exposes four verbs against paths relative to ``/api/v1`` and converts every
transport or HTTP-status failure into a member of the ``gogs_cli.exceptions``
taxonomy. Each logical operation issues exactly one request: nothing is
retried.
"""

from typing import Any

import httpx
import structlog

from gogs_cli.exceptions import (
    ApiError,
    AuthError,
    NetworkError,
    NotFoundError,
    ResponseDecodeError,
    ValidationError,
)

log = structlog.get_logger(__name__)

API_ROOT = "/api/v1"
DEFAULT_TIMEOUT = 30.0
MAX_MESSAGE_LENGTH = 300


class APIClient:
    """Single-identity REST client.

    The underlying ``httpx.AsyncClient`` holds no per-call state, so one
    instance may be shared by concurrent aggregation workers.

    Example:
        >>> async with APIClient("https://gogs.example.com", token) as client:
        ...     repos = await client.fetch("/user/repos")
    """

    def __init__(
        self,
        server_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            server_url: Gogs base URL (e.g., https://gogs.example.com)
            token: API token; sent as ``Authorization: token <token>``
            timeout: Per-request timeout in seconds
            transport: Optional transport override, used by tests
        """
        self.server_url = server_url.rstrip("/")
        self.api_base = f"{self.server_url}{API_ROOT}"
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.api_base,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"token {token.strip()}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def __repr__(self) -> str:
        return f"APIClient(api_base={self.api_base!r})"

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def fetch(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        response = await self._request("GET", path, params=params)
        return self._decode(response, path)

    async def create(self, path: str, payload: dict[str, Any]) -> Any:
        """POST ``payload`` to ``path`` and return the decoded JSON body."""
        response = await self._request("POST", path, json=payload)
        return self._decode(response, path)

    async def update(self, path: str, payload: dict[str, Any]) -> Any:
        """PATCH ``path`` with ``payload`` and return the decoded JSON body."""
        response = await self._request("PATCH", path, json=payload)
        return self._decode(response, path)

    async def delete(self, path: str) -> None:
        """DELETE ``path``. The response body, if any, is ignored."""
        await self._request("DELETE", path)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request and map failures to the error taxonomy.

        Raises:
            NetworkError: On timeout or any transport failure
            AuthError: On HTTP 401/403
            NotFoundError: On HTTP 404
            ValidationError: On HTTP 400/422
            ApiError: On any other non-success status
        """
        log.debug("api_request", method=method, path=path)

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out after {self.timeout:g}s: {method} {path}"
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Failed to send request to {self.server_url}: {e}") from e

        if response.is_success:
            return response

        status = response.status_code
        message = self._error_message(response)
        log.debug("api_error", method=method, path=path, status=status)

        if status == 401:
            raise AuthError(
                f"Authentication failed for {method} {path}. Check your API token. ({message})"
            )
        if status == 403:
            raise AuthError(f"Access denied for {method} {path}. Check permissions. ({message})")
        if status == 404:
            raise NotFoundError(f"Resource not found: {path} ({message})")
        if status in (400, 422):
            raise ValidationError(f"Request rejected by server: {method} {path}: {message}")
        raise ApiError(f"{method} {path}: {message}", status_code=status)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract a message from an error response.

        Gogs answers errors with ``{"message": "..."}``; anything else falls
        back to the (truncated) body text, then to the status reason.
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])

        text = response.text.strip()
        if text:
            return text[:MAX_MESSAGE_LENGTH]
        return response.reason_phrase or "no message"

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(f"Invalid JSON in response from {path}: {e}") from e
