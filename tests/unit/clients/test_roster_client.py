"""Unit tests for RosterClient."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from riddle.roster.clients import RosterClient
from riddle.roster.config import RosterSettings
from riddle.roster.core import DecodeError, TransportError


def _page_body(offset: int, limit: int, total: int) -> bytes:
    users = [
        {"id": f"P{i}", "type": "user", "name": f"User {i}"}
        for i in range(offset, min(offset + limit, total))
    ]
    return json.dumps(
        {
            "users": users,
            "limit": limit,
            "offset": offset,
            "more": offset + limit < total,
            "total": total,
        }
    ).encode()


@pytest.fixture
def transport():
    t = MagicMock()
    t.fetch_page = AsyncMock(side_effect=lambda offset, limit: _page_body(offset, limit, 12))
    t.fetch_one = AsyncMock(return_value=b'{"user": {"id": "P1", "type": "user"}}')
    t.close = AsyncMock()
    return t


class TestRosterClient:
    """Test page and entity fetching."""

    def test_from_settings(self):
        """Test transport is wired from settings."""
        settings = RosterSettings(api_token="abc", base_url="http://localhost:9000", timeout=5.0)
        client = RosterClient.from_settings(settings)
        http = client._transport._http
        assert http.base_url == "http://localhost:9000"
        assert http.timeout.total == 5.0
        assert http._default_headers["Authorization"] == "Token token=abc"

    @pytest.mark.asyncio
    async def test_fetch_page(self, transport):
        """Test fetch_page decodes the transport body."""
        client = RosterClient(transport)
        page = await client.fetch_page(10, 5)

        transport.fetch_page.assert_awaited_once_with(10, 5)
        assert page.offset == 10
        assert [r.id for r in page.items] == ["P10", "P11"]
        assert not page.has_more

    @pytest.mark.asyncio
    async def test_fetch_page_logs_error(self, transport, caplog):
        """Test failures are logged and re-raised."""
        transport.fetch_page = AsyncMock(side_effect=TransportError("down", status_code=503))
        client = RosterClient(transport)

        with caplog.at_level(logging.ERROR), pytest.raises(TransportError):
            await client.fetch_page(0, 10)

        record = next(r for r in caplog.records if r.getMessage() == "fetch_error")
        assert record.status_code == 503
        assert record.operation == "page"

    @pytest.mark.asyncio
    async def test_fetch_page_decode_error(self, transport):
        """Test malformed bodies surface as DecodeError."""
        transport.fetch_page = AsyncMock(return_value=b"not json")
        with pytest.raises(DecodeError):
            await RosterClient(transport).fetch_page(0, 10)

    @pytest.mark.asyncio
    async def test_fetch_one(self, transport):
        """Test fetch_one decodes the entity document."""
        record = await RosterClient(transport).fetch_one("P1")
        transport.fetch_one.assert_awaited_once_with("P1")
        assert record.id == "P1"

    @pytest.mark.asyncio
    async def test_traverse(self, transport):
        """Test traverse walks the whole collection."""
        client = RosterClient(transport)
        ids = [r.id async for page in client.traverse(0, 5) for r in page.items]

        assert ids == [f"P{i}" for i in range(12)]
        assert transport.fetch_page.await_count == 3

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, transport):
        """Test async context manager closes the transport."""
        async with RosterClient(transport):
            pass
        transport.close.assert_awaited_once()
