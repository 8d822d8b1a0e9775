"""HTTP client helper."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ...config import DEFAULT_TIMEOUT_SECONDS
from ...core.exceptions import (
    AlreadyExistsError,
    FailedPreconditionError,
    FetchError,
    NotFoundError,
    RateLimitError,
    TransportError,
)
from .auth import TokenSource

logger = logging.getLogger(__name__)


def error_for_status(
    status_code: int,
    message: str,
    status: str | None = None,
    retry_after: int = 60,
) -> FetchError:
    """Map an HTTP status and Firestore status string to a FetchError.

    The canonical status string wins over the HTTP code when both are present
    (409 is used for both ALREADY_EXISTS and ABORTED).
    """
    if status == "ALREADY_EXISTS" or (status is None and status_code == 409):
        return AlreadyExistsError(message)
    if status == "NOT_FOUND" or (status is None and status_code == 404):
        return NotFoundError(message)
    if status == "FAILED_PRECONDITION" or (status is None and status_code == 412):
        return FailedPreconditionError(message, status_code=status_code, status=status)
    if status_code == 429:
        return RateLimitError(message, retry_after=retry_after)
    return FetchError(message, status_code=status_code, status=status)


async def _error_from_response(response: aiohttp.ClientResponse) -> FetchError:
    message = response.reason or f"HTTP {response.status}"
    status: str | None = None
    try:
        body = await response.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        body = None

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message") or message
        status = body["error"].get("status")

    try:
        retry_after = int(response.headers.get("Retry-After", "60"))
    except ValueError:
        retry_after = 60

    return error_for_status(response.status, message, status=status, retry_after=retry_after)


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_source: TokenSource | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._token_source = token_source
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def build_url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}/{url.lstrip('/')}"
        return url

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Raises:
            FetchError: Error status from the server (mapped to a subclass)
            TransportError: Connection failure or timeout
        """
        url = self.build_url(url)
        headers: dict[str, str] = {}
        if self._token_source is not None:
            headers["Authorization"] = f"Bearer {await self._token_source.token()}"

        try:
            async with self.session.request(
                method, url, params=params, json=json, headers=headers
            ) as response:
                if response.status >= 400:
                    raise await _error_from_response(response)
                if response.status == 204:
                    return {}
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.debug(
                "http_request_failed",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise TransportError(f"{method} {url} failed: {e}") from e

        return data if isinstance(data, dict) else {}

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
