"""Data models for the roster collection.

Architecture:
    Pydantic v2 models for the remote collection. Both are immutable
    (frozen=True) so pages can be handed to the session, the statistics
    aggregator and exporters without defensive copying.

Model Categories:
    - Entities: Record (known fields + preserved unknown fields)
    - Windows: Page (offset/limit metadata + records)
"""

from .page import Page
from .record import WIRE_NAMES, Record

__all__ = ["Page", "Record", "WIRE_NAMES"]
