"""REST transport for the paginated collection endpoint."""

from __future__ import annotations

from urllib.parse import quote

from ...config import MAX_PAGE_LIMIT, MIN_PAGE_LIMIT, REQUEST_TIMEOUT, USERS_PATH
from ...core.exceptions import PreconditionError
from .http_client import HTTPClient


class RESTTransport:
    """Issues one GET per page or entity request.

    The Authorization value is passed through untouched. Preconditions are
    checked before any network call; status mapping is done by HTTPClient.
    """

    def __init__(
        self,
        base_url: str,
        *,
        authorization: str | None = None,
        path: str = USERS_PATH,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        headers = {"Accept": "application/json"}
        if authorization is not None:
            headers["Authorization"] = authorization
        self._http = HTTPClient(base_url=base_url, timeout=timeout, headers=headers)
        self._path = path

    async def fetch_page(self, offset: int, limit: int) -> bytes:
        """Fetch one collection window.

        Args:
            offset: Zero-based start index
            limit: Window size, 1..100

        Returns:
            Raw response body

        Raises:
            PreconditionError: If limit or offset is out of range
            TransportError: On non-2xx status or network failure
        """
        validate_limit(limit)
        if offset < 0:
            raise PreconditionError(f"Offset cannot be negative, got {offset}")
        return await self._http.get(self._path, params={"offset": offset, "limit": limit})

    async def fetch_one(self, record_id: str) -> bytes:
        """Fetch one entity by id.

        Raises:
            PreconditionError: If the id is blank
            TransportError: On non-2xx status or network failure
        """
        if not record_id or not record_id.strip():
            raise PreconditionError("Record id cannot be blank")
        return await self._http.get(f"{self._path}/{quote(record_id, safe='')}")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def validate_limit(limit: int) -> None:
    """Reject page limits outside the remote's accepted range."""
    if not MIN_PAGE_LIMIT <= limit <= MAX_PAGE_LIMIT:
        raise PreconditionError(
            f"Limit must be between {MIN_PAGE_LIMIT} and {MAX_PAGE_LIMIT}, got {limit}"
        )
