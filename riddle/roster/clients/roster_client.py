"""High-level client for the roster collection.

Wraps the REST transport and response adapters and exposes the read-only
surface used by sessions and scripts:

- ``fetch_page(offset, limit)`` for one decoded page
- ``fetch_one(record_id)`` for one decoded record
- ``traverse(start_offset, page_size)`` for a lazy walk over all pages
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from time import perf_counter

from ..config import DEFAULT_PAGE_SIZE, RosterSettings
from ..core.exceptions import RosterError, TransportError
from ..models import Page, Record
from ..runtime.pagination import OffsetPaginator
from ..runtime.rest import EntityAdapter, PageAdapter, RESTTransport
from ..runtime.telemetry import log_fetch_error, log_page_fetched


class RosterClient:
    """Read-only client: page fetch, single-entity fetch and traversal."""

    def __init__(
        self,
        transport: RESTTransport,
        *,
        page_adapter: PageAdapter | None = None,
        entity_adapter: EntityAdapter | None = None,
    ) -> None:
        self._transport = transport
        self._page_adapter = page_adapter or PageAdapter()
        self._entity_adapter = entity_adapter or EntityAdapter()

    @classmethod
    def from_settings(cls, settings: RosterSettings) -> RosterClient:
        """Create a client wired from runtime settings."""
        transport = RESTTransport(
            settings.base_url,
            authorization=settings.authorization,
            timeout=settings.timeout,
        )
        return cls(transport)

    async def fetch_page(self, offset: int, limit: int) -> Page:
        """Fetch and decode one page.

        Raises:
            PreconditionError: If limit/offset is out of range
            TransportError: On non-2xx status or network failure
            ValidationError: If the document cannot be decoded
        """
        start = perf_counter()
        try:
            body = await self._transport.fetch_page(offset, limit)
            page = self._page_adapter.parse(body)
        except RosterError as e:
            _log_error("page", e)
            raise
        log_page_fetched(
            offset=page.offset,
            limit=page.limit,
            item_count=page.item_count,
            has_more=page.has_more,
            total=page.total,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return page

    async def fetch_one(self, record_id: str) -> Record:
        """Fetch and decode one record by id."""
        try:
            body = await self._transport.fetch_one(record_id)
            return self._entity_adapter.parse(body)
        except RosterError as e:
            _log_error("entity", e)
            raise

    def traverse(
        self,
        start_offset: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        pacing: float = 0.0,
    ) -> AsyncIterator[Page]:
        """Walk the collection from ``start_offset`` until exhaustion."""
        return OffsetPaginator(self, pacing=pacing).traverse(start_offset, page_size)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> RosterClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _log_error(operation: str, error: RosterError) -> None:
    log_fetch_error(
        operation=operation,
        error_type=type(error).__name__,
        error_message=str(error),
        status_code=error.status_code if isinstance(error, TransportError) else None,
    )
