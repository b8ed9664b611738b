"""Record store capability and its in-memory implementation."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")


class RecordStore(Protocol[T]):
    """Ordered store of items queried by key.

    Sessions and services depend only on this protocol, so a persistent
    implementation can replace the in-memory one.
    """

    def append(self, item: T) -> T: ...

    def query_by_key(self, key: Hashable) -> list[T]: ...

    def clear(self) -> None: ...

    def __iter__(self) -> Iterator[T]: ...

    def __len__(self) -> int: ...


class InMemoryRecordStore(Generic[T]):
    """Ordered in-memory store.

    Items are kept in insertion order; ``query_by_key`` returns matches in
    that order.
    """

    def __init__(self, key: Callable[[T], Hashable]) -> None:
        self._key = key
        self._items: list[T] = []

    def append(self, item: T) -> T:
        self._items.append(item)
        return item

    def query_by_key(self, key: Hashable) -> list[T]:
        return [item for item in self._items if self._key(item) == key]

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
