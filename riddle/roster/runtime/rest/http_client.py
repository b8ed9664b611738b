"""HTTP client helper."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp

from ...core.exceptions import RateLimitError, TransportError


class HTTPClient:
    """Async HTTP client wrapper.

    Returns raw response bodies and maps non-2xx statuses to TransportError.
    Never retries; callers own the retry policy.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._default_headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        """GET request returning the raw body.

        Raises:
            RateLimitError: On HTTP 429
            TransportError: On any other non-2xx status or a network failure
        """
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"
        merged = {**self._default_headers, **(headers or {})}

        try:
            async with self.session.get(url, params=params, headers=merged) as response:
                body = await response.read()
                status = response.status
                if status == 429:
                    raise RateLimitError(
                        f"Rate limited: GET {url}",
                        retry_after=_parse_retry_after(response.headers),
                        body=body,
                    )
                if not 200 <= status < 300:
                    raise TransportError(
                        f"GET {url} failed with status {status}",
                        status_code=status,
                        body=body,
                    )
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"GET {url} failed: {e}") from e

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


def _parse_retry_after(headers: Mapping[str, str]) -> float | None:
    value = headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date form is not interpreted
        return None
