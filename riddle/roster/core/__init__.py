"""Core components."""

from .exceptions import (
    ConfigError,
    DecodeError,
    ExportError,
    LedgerError,
    PaginationError,
    PreconditionError,
    RateLimitError,
    RosterError,
    SessionClosedError,
    TransportError,
    ValidationError,
)

__all__ = [
    "RosterError",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "PreconditionError",
    "SessionClosedError",
    "TransportError",
    "RateLimitError",
    "PaginationError",
    "ExportError",
    "LedgerError",
]
