"""Record storage."""

from .in_memory import InMemoryRecordStore, RecordStore

__all__ = ["RecordStore", "InMemoryRecordStore"]
