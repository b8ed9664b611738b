"""Page of records with offset/limit pagination metadata."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import DecodeError, ValidationError
from .record import Record


class Page(BaseModel):
    """One fetched window of a remote collection.

    ``total`` is a server-reported hint and is deliberately not checked
    against ``len(items)``.
    """

    limit: int = Field(..., strict=True)
    offset: int = Field(..., strict=True)
    has_more: bool = Field(..., alias="more", strict=True)
    total: int | None = Field(default=None, strict=True)
    items: tuple[Record, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 0:
            raise ValidationError("Limit cannot be negative")
        return v

    @field_validator("offset")
    @classmethod
    def validate_offset(cls, v: int) -> int:
        if v < 0:
            raise ValidationError("Offset cannot be negative")
        return v

    @field_validator("total")
    @classmethod
    def validate_total(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValidationError("Total cannot be negative")
        return v

    @classmethod
    def decode(cls, document: Any, items_key: str = "users") -> Page:
        """Decode a collection document.

        Args:
            document: Parsed wire document
            items_key: Key of the record array (e.g. ``"users"``)

        Returns:
            Page with decoded records

        Raises:
            DecodeError: If the document or its metadata is malformed
            ValidationError: If a record lacks identity or limit/offset is negative
        """
        if not isinstance(document, Mapping):
            raise DecodeError(f"Page document must be a mapping, got {type(document).__name__}")

        if "more" not in document:
            raise DecodeError("Page document has no 'more' flag")

        raw_items = document.get(items_key)
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise DecodeError(f"{items_key!r} must be an array, got {type(raw_items).__name__}")

        items = [Record.decode(raw) for raw in raw_items]
        try:
            return cls(
                limit=document.get("limit"),
                offset=document.get("offset"),
                has_more=document["more"],
                total=document.get("total"),
                items=items,
            )
        except PydanticValidationError as e:
            raise DecodeError(f"Malformed pagination metadata: {e}") from e

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def is_first_page(self) -> bool:
        return self.offset == 0

    @property
    def next_offset(self) -> int:
        """Offset of the following window."""
        return self.offset + self.limit

    @property
    def previous_offset(self) -> int:
        """Offset of the preceding window, floored at zero."""
        return max(0, self.offset - self.limit)

    @property
    def current_page_number(self) -> int:
        """1-based page number.

        Raises:
            ZeroDivisionError: If ``limit`` is zero
        """
        if self.limit == 0:
            raise ZeroDivisionError("Cannot compute page number with limit=0")
        return self.offset // self.limit + 1

    @property
    def estimated_total_pages(self) -> int | None:
        """``ceil(total / limit)``, or None when total or limit is unusable."""
        if self.total is None or self.limit == 0:
            return None
        return math.ceil(self.total / self.limit)

    def pagination_info(self) -> str:
        """Pagination metadata as a single line for logging."""
        return (
            f"offset={self.offset}, limit={self.limit}, count={self.item_count}, "
            f"more={self.has_more}, total={self.total}"
        )
