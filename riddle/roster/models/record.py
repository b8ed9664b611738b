"""Remote user record with forward-compatible decoding.

Architecture:
    A Record separates the fields this client knows about from everything
    else the server sent. Decoding works on the generic key/value tree of the
    wire document: keys found in the translation table populate typed
    attributes, every other key lands in ``unknown_fields`` with its original
    name and untouched value. Encoding merges both halves back into one flat
    mapping, so ``Record.decode(raw).encode() == raw``.

Design Decisions:
    - Frozen pydantic model with a read-only ``unknown_fields`` view: records
      are never mutated after decoding
    - Wire names are pydantic aliases; attributes use Python names
    - A known key with an unexpected value shape is kept as unknown instead
      of failing the record
    - Only identity (``id`` and ``type``) is mandatory
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from ..core.exceptions import DecodeError, ValidationError

# Attribute name -> wire name
WIRE_NAMES: dict[str, str] = {
    "id": "id",
    "kind": "type",
    "name": "name",
    "email": "email",
    "summary": "summary",
    "self_url": "self",
    "html_url": "html_url",
    "avatar_url": "avatar_url",
    "color": "color",
    "role": "role",
    "description": "description",
    "invitation_sent": "invitation_sent",
    "job_title": "job_title",
    "timezone": "time_zone",
}

_BOOL_FIELDS = frozenset({"invitation_sent"})
_WIRE_TO_ATTR = {wire: attr for attr, wire in WIRE_NAMES.items()}


class Record(BaseModel):
    """One remote user entity."""

    id: str
    kind: str = Field(..., alias="type")
    name: str | None = None
    email: str | None = None
    summary: str | None = None
    self_url: str | None = Field(default=None, alias="self")
    html_url: str | None = None
    avatar_url: str | None = None
    color: str | None = None
    role: str | None = None
    description: str | None = None
    invitation_sent: bool | None = Field(default=None, strict=True)
    job_title: str | None = None
    timezone: str | None = Field(default=None, alias="time_zone")
    unknown_fields: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _require_identity(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        for attr in ("id", "kind"):
            value = data.get(attr, data.get(WIRE_NAMES[attr]))
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    f"Record {WIRE_NAMES[attr]!r} must be a non-empty string, got {value!r}"
                )
        return data

    @field_validator("unknown_fields")
    @classmethod
    def _freeze_unknown_fields(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @field_serializer("unknown_fields")
    def _dump_unknown_fields(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)

    @model_validator(mode="after")
    def _reject_shadowed_keys(self) -> Record:
        # A known key may sit in unknown_fields only when its attribute was not set
        clash = sorted(
            key
            for key in self.unknown_fields
            if key in _WIRE_TO_ATTR and _WIRE_TO_ATTR[key] in self.model_fields_set
        )
        if clash:
            raise ValidationError(f"Unknown fields cannot shadow known fields: {clash}")
        return self

    @classmethod
    def decode(cls, raw: Any) -> Record:
        """Decode one wire mapping into a Record.

        Args:
            raw: Wire mapping (as parsed from JSON)

        Returns:
            Record with every unrecognized key kept in ``unknown_fields``

        Raises:
            DecodeError: If ``raw`` is not a mapping
            ValidationError: If ``id`` or ``type`` is missing or empty
        """
        if not isinstance(raw, Mapping):
            raise DecodeError(f"Record must be a mapping, got {type(raw).__name__}")

        known: dict[str, Any] = {}
        unknown: dict[str, Any] = {}
        for key, value in raw.items():
            attr = _WIRE_TO_ATTR.get(key)
            if attr is not None and _fits(attr, value):
                known[key] = value
            else:
                unknown[key] = value

        # Identity keys are never demoted to unknown
        for attr in ("id", "kind"):
            wire = WIRE_NAMES[attr]
            if wire in unknown:
                known[wire] = unknown.pop(wire)

        return cls.model_validate({**known, "unknown_fields": unknown})

    def encode(self) -> dict[str, Any]:
        """Encode back to a flat wire mapping.

        Known fields are emitted under their wire names when they were present
        on input (explicit nulls included), followed by all unknown fields.
        """
        wire = self.model_dump(by_alias=True, exclude_unset=True, exclude={"unknown_fields"})
        wire.update(self.unknown_fields)
        return wire

    def with_unknown_field(self, name: str, value: Any) -> Record:
        """Return a copy with one more (or replaced) unknown field."""
        if name in _WIRE_TO_ATTR:
            raise ValidationError(f"{name!r} is a known field")
        fields = MappingProxyType({**self.unknown_fields, name: value})
        return self.model_copy(update={"unknown_fields": fields})

    @property
    def has_unknown_fields(self) -> bool:
        """Whether the server sent fields this client does not know."""
        return bool(self.unknown_fields)

    def get_unknown_field(self, name: str, default: Any = None) -> Any:
        """Get an unknown field by its wire name."""
        return self.unknown_fields.get(name, default)

    @property
    def status(self) -> str | None:
        """Human-readable activation status."""
        if self.invitation_sent is None:
            return None
        return "Active" if self.invitation_sent else "Invitation Pending"


def _fits(attr: str, value: Any) -> bool:
    if value is None:
        return True
    if attr in _BOOL_FIELDS:
        return isinstance(value, bool)
    return isinstance(value, str)
