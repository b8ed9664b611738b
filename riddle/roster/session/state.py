"""Mutable exploration state owned by one session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..config import DEFAULT_PAGE_SIZE
from ..models import Page, Record
from ..storage import InMemoryRecordStore, RecordStore


class SessionPhase(Enum):
    """Session lifecycle phases."""

    IDLE = "idle"
    PAGE_LOADED = "page_loaded"
    SEARCHING = "searching"
    BULK_LOADING = "bulk_loading"
    EXPORTING = "exporting"
    TERMINATED = "terminated"


def _record_store() -> InMemoryRecordStore[Record]:
    return InMemoryRecordStore(key=lambda record: record.id)


@dataclass
class SessionState:
    """Navigation position plus the records accumulated by bulk loads."""

    page_size: int = DEFAULT_PAGE_SIZE
    current_offset: int = 0
    current_page: Page | None = None
    phase: SessionPhase = SessionPhase.IDLE
    corpus_complete: bool = False
    records: RecordStore[Record] = field(default_factory=_record_store)

    @property
    def current_page_number(self) -> int:
        """1-based page number derived from offset and page size."""
        return self.current_offset // self.page_size + 1
