"""Unit tests for OffsetPaginator traversal."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from riddle.roster.core import PaginationError, PreconditionError, TransportError
from riddle.roster.models import Page
from riddle.roster.runtime import OffsetPaginator


async def _collect(iterator) -> list[Page]:
    return [page async for page in iterator]


class TestTraverse:
    """Test traversal termination and ordering."""

    @pytest.mark.asyncio
    async def test_walks_until_no_more(self, source):
        """Test every record is yielded once, then traversal stops."""
        pages = await _collect(OffsetPaginator(source).traverse(0, 10))

        assert [p.offset for p in pages] == [0, 10, 20]
        assert [p.item_count for p in pages] == [10, 10, 5]
        assert not pages[-1].has_more
        assert sum(p.item_count for p in pages) == 25

    @pytest.mark.asyncio
    async def test_offsets_increase_by_limit(self, source):
        """Test successive offsets advance by exactly the previous limit."""
        pages = await _collect(OffsetPaginator(source).traverse(5, 7))

        for previous, current in zip(pages, pages[1:]):
            assert current.offset == previous.offset + previous.limit

    @pytest.mark.asyncio
    async def test_does_not_stop_early_on_empty_page_with_more(self, source_factory):
        """Test an empty page that reports more keeps the traversal going."""
        src = source_factory([])
        pages = [
            Page(limit=10, offset=0, more=True, total=0),
            Page(limit=10, offset=10, more=False, total=0),
        ]
        src.fetch_page = AsyncMock(side_effect=pages)

        result = await _collect(OffsetPaginator(src).traverse(0, 10))

        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_total_is_ignored(self, source_factory, records):
        """Test a stale total does not end the traversal."""
        src = source_factory(records, total=3)
        pages = await _collect(OffsetPaginator(src).traverse(0, 10))
        assert sum(p.item_count for p in pages) == 25

    @pytest.mark.asyncio
    async def test_lazy_fetching(self, source):
        """Test pages are fetched only as they are consumed."""
        walk = OffsetPaginator(source).traverse(0, 10)
        first = await walk.__anext__()
        assert first.offset == 0
        assert source.calls == [(0, 10)]
        await walk.aclose()
        assert source.calls == [(0, 10)]

    @pytest.mark.asyncio
    async def test_each_traverse_is_fresh(self, source):
        """Test two traversals are independent."""
        paginator = OffsetPaginator(source)
        first = await _collect(paginator.traverse(0, 10))
        second = await _collect(paginator.traverse(0, 10))
        assert len(first) == len(second) == 3

    @pytest.mark.asyncio
    async def test_non_advancing_page_raises(self, source_factory):
        """Test a page claiming more data with limit 0 cannot loop forever."""
        src = source_factory([])
        src.fetch_page = AsyncMock(return_value=Page(limit=0, offset=0, more=True))

        with pytest.raises(PaginationError):
            await _collect(OffsetPaginator(src).traverse(0, 10))
        assert src.fetch_page.await_count == 1

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, source_factory, records):
        """Test a transport failure ends the traversal with the error."""
        src = source_factory(records, errors={1: TransportError("boom", status_code=500)})
        walk = OffsetPaginator(src).traverse(0, 10)

        first = await walk.__anext__()
        assert first.offset == 0
        with pytest.raises(TransportError):
            await walk.__anext__()


class TestTraversePreconditions:
    """Test argument validation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [0, 101])
    async def test_invalid_page_size(self, source, page_size):
        """Test out-of-range page size raises before any fetch."""
        with pytest.raises(PreconditionError):
            await _collect(OffsetPaginator(source).traverse(0, page_size))
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_negative_start_offset(self, source):
        """Test negative start offset raises before any fetch."""
        with pytest.raises(PreconditionError):
            await _collect(OffsetPaginator(source).traverse(-1, 10))
        assert source.calls == []

    def test_negative_pacing(self, source):
        """Test negative pacing is rejected."""
        with pytest.raises(PreconditionError):
            OffsetPaginator(source, pacing=-0.1)


class TestPacing:
    """Test delay between page fetches."""

    @pytest.mark.asyncio
    async def test_sleeps_between_pages_only(self, source):
        """Test pacing is applied before every fetch but the first."""
        sleep = AsyncMock()
        await _collect(OffsetPaginator(source, pacing=0.1, sleep=sleep).traverse(0, 10))

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.1)

    @pytest.mark.asyncio
    async def test_no_sleep_without_pacing(self, source):
        """Test zero pacing never sleeps."""
        sleep = AsyncMock()
        await _collect(OffsetPaginator(source, sleep=sleep).traverse(0, 10))
        sleep.assert_not_awaited()


class TestShouldStop:
    """Test cooperative stopping between pages."""

    @pytest.mark.asyncio
    async def test_not_polled_before_first_fetch(self, source):
        """Test the first page is always fetched."""
        pages = await _collect(OffsetPaginator(source).traverse(0, 10, should_stop=lambda: True))

        assert [p.offset for p in pages] == [0]
        assert source.calls == [(0, 10)]

    @pytest.mark.asyncio
    async def test_stop_requested_during_pacing(self, source):
        """Test a stop set while waiting prevents the next fetch."""
        stopped = False

        async def _sleep(_delay):
            nonlocal stopped
            stopped = True

        paginator = OffsetPaginator(source, pacing=0.5, sleep=_sleep)
        pages = await _collect(paginator.traverse(0, 10, should_stop=lambda: stopped))

        assert len(pages) == 1
        assert source.calls == [(0, 10)]

    @pytest.mark.asyncio
    async def test_stop_before_pacing_skips_sleep(self, source):
        """Test an early stop neither sleeps nor fetches again."""
        sleep = AsyncMock()
        paginator = OffsetPaginator(source, pacing=0.5, sleep=sleep)
        walk = paginator.traverse(0, 10, should_stop=lambda: len(source.calls) >= 2)

        pages = await _collect(walk)

        assert [p.offset for p in pages] == [0, 10]
        assert sleep.await_count == 1
        assert len(source.calls) == 2
