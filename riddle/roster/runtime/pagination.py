"""Offset/limit pagination traversal.

This module provides the OffsetPaginator, which walks a remote collection
page by page. Termination is driven only by the server-reported ``more``
flag; ``total`` is never consulted because it is routinely stale.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Protocol

from ..config import DEFAULT_PAGE_SIZE
from ..core.exceptions import PaginationError, PreconditionError
from ..models import Page
from .rest.transport import validate_limit
from .telemetry import log_traversal_complete

Sleep = Callable[[float], Awaitable[None]]


class PageSource(Protocol):
    """Anything that can fetch one decoded page."""

    async def fetch_page(self, offset: int, limit: int) -> Page: ...


class OffsetPaginator:
    """Lazily fetches successive pages of a collection.

    Each ``traverse`` call returns a fresh, finite async iterator. Pages are
    fetched strictly in increasing offset order, one at a time; the next page
    is only requested when the consumer asks for it.
    """

    def __init__(
        self,
        source: PageSource,
        *,
        pacing: float = 0.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize paginator.

        Args:
            source: Page source (client or test double)
            pacing: Minimum delay between successive fetches, in seconds
            sleep: Awaitable sleep used for pacing
        """
        if pacing < 0:
            raise PreconditionError("Pacing delay cannot be negative")
        self._source = source
        self._pacing = pacing
        self._sleep = sleep

    async def traverse(
        self,
        start_offset: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        *,
        should_stop: Callable[[], bool] | None = None,
    ) -> AsyncIterator[Page]:
        """Yield pages from ``start_offset`` until the server reports no more.

        Args:
            start_offset: Offset of the first page
            page_size: Limit requested for every page (1..100)
            should_stop: Polled before every fetch after the first (before and
                after the pacing delay); a true result ends the traversal early

        Yields:
            Decoded pages in increasing offset order

        Raises:
            PreconditionError: If start_offset or page_size is out of range
            PaginationError: If a page claims more data but cannot advance
        """
        validate_limit(page_size)
        if start_offset < 0:
            raise PreconditionError(f"Start offset cannot be negative, got {start_offset}")

        offset = start_offset
        pages = 0
        records = 0

        while True:
            if pages:
                if should_stop is not None and should_stop():
                    break
                if self._pacing:
                    await self._sleep(self._pacing)
                if should_stop is not None and should_stop():
                    break

            page = await self._source.fetch_page(offset, page_size)
            pages += 1
            records += page.item_count
            yield page

            if not page.has_more:
                break

            next_offset = page.next_offset
            if next_offset <= offset:
                raise PaginationError(
                    f"Page at offset {page.offset} reports more data but next offset "
                    f"{next_offset} does not advance past {offset}"
                )
            offset = next_offset

        log_traversal_complete(start_offset=start_offset, pages=pages, records=records)
