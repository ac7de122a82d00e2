"""HTTP client helper."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from yarl import URL

from ..core.exceptions import TransportError

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper.

    Relative paths are joined to ``base_url``. Query strings built by the
    query builder are already percent-encoded, so URLs are passed to aiohttp
    as encoded and never re-quoted.
    """

    def __init__(
        self,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.headers = dict(headers or {})
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def build_url(self, url: str) -> URL:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"
        return URL(url, encoded=True)

    async def request(
        self,
        method: str,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue a request and return the decoded JSON body.

        Returns None for empty bodies (e.g. 204 responses).

        Raises:
            TransportError: On non-2xx responses or connection failures
        """
        target = self.build_url(url)
        try:
            async with self.session.request(
                method, target, json=json, headers=headers
            ) as response:
                if response.status >= 400:
                    upstream = await _read_message(response)
                    message = f"{method} {target.path} failed: {response.status} {response.reason}"
                    if upstream:
                        message = f"{message} - {upstream}"
                    raise TransportError(
                        message, status_code=response.status, upstream_message=upstream
                    )
                if response.status == 204 or response.content_length == 0:
                    return None
                return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(
                "http_request_failed",
                extra={"method": method, "path": target.path, "error_message": str(e)},
            )
            raise TransportError(f"{method} {target.path} failed: {e}") from e

    async def get(self, url: str, headers: dict[str, str] | None = None) -> Any:
        """GET request."""
        return await self.request("GET", url, headers=headers)

    async def post(self, url: str, json: Any = None, headers: dict[str, str] | None = None) -> Any:
        """POST request."""
        return await self.request("POST", url, json=json, headers=headers)

    async def put(self, url: str, json: Any = None, headers: dict[str, str] | None = None) -> Any:
        """PUT request."""
        return await self.request("PUT", url, json=json, headers=headers)

    async def delete(self, url: str, headers: dict[str, str] | None = None) -> Any:
        """DELETE request."""
        return await self.request("DELETE", url, headers=headers)

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


async def _read_message(response: aiohttp.ClientResponse) -> str | None:
    """Extract the backend's ``Message`` field from an error body."""
    try:
        body = await response.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        return None
    if isinstance(body, dict):
        message = body.get("Message")
        return str(message) if message else None
    return None
