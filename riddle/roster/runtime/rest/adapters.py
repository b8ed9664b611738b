"""Response adapters turning raw bodies into models."""

from __future__ import annotations

import json
from typing import Any

from ...config import ENTITY_KEY, ITEMS_KEY
from ...core.exceptions import DecodeError
from ...models import Page, Record


class ResponseAdapter:
    def parse(self, body: bytes) -> Any:
        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Response is not valid JSON: {e}") from e


class PageAdapter(ResponseAdapter):
    """Decode a collection document (``{"users": [...], "limit": ...}``)."""

    def __init__(self, items_key: str = ITEMS_KEY) -> None:
        self.items_key = items_key

    def parse(self, body: bytes) -> Page:
        return Page.decode(super().parse(body), items_key=self.items_key)


class EntityAdapter(ResponseAdapter):
    """Decode a single-entity document (``{"user": {...}}``)."""

    def __init__(self, key: str = ENTITY_KEY) -> None:
        self.key = key

    def parse(self, body: bytes) -> Record:
        document = super().parse(body)
        if not isinstance(document, dict) or self.key not in document:
            raise DecodeError(f"Entity document has no {self.key!r} key")
        return Record.decode(document[self.key])
