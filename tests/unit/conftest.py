"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from riddle.roster.models import Page, Record


def make_record(i: int, **fields) -> Record:
    return Record(id=f"P{i}", kind="user", name=f"User {i}", email=f"user{i}@example.com", **fields)


class FakeSource:
    """In-memory page source over a fixed list of records.

    ``errors`` maps a call index (0-based) to an exception raised instead
    of returning a page.
    """

    def __init__(self, records: list[Record], *, total: int | None = None, errors=None):
        self.records = records
        self.total = len(records) if total is None else total
        self.errors = dict(errors or {})
        self.calls: list[tuple[int, int]] = []

    async def fetch_page(self, offset: int, limit: int) -> Page:
        index = len(self.calls)
        self.calls.append((offset, limit))
        if index in self.errors:
            raise self.errors[index]
        items = self.records[offset : offset + limit]
        return Page(
            limit=limit,
            offset=offset,
            more=offset + limit < len(self.records),
            total=self.total,
            items=items,
        )


@pytest.fixture
def records() -> list[Record]:
    return [make_record(i) for i in range(25)]


@pytest.fixture
def source(records) -> FakeSource:
    return FakeSource(records)


@pytest.fixture
def source_factory():
    """Build FakeSource instances with custom records or errors."""
    return FakeSource
