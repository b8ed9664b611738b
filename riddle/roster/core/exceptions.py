"""Custom exception hierarchy."""

from __future__ import annotations


class RosterError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigError(RosterError):
    """Missing or malformed configuration."""

    pass


class ValidationError(RosterError):
    """Malformed construction arguments.

    Raised for negative page limits/offsets and records without identity
    fields. Never retried.
    """

    pass


class DecodeError(ValidationError):
    """Wire document could not be decoded into a model."""

    pass


class PreconditionError(RosterError):
    """Request rejected before any network call.

    Raised for out-of-range page sizes, non-positive page numbers and
    empty search terms. No state is mutated when this is raised.
    """

    pass


class SessionClosedError(PreconditionError):
    """Command issued after the session was terminated."""

    pass


class TransportError(RosterError):
    """Non-2xx HTTP outcome or network failure.

    ``status_code`` is ``None`` when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimitError(TransportError):
    """Remote rate limit exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        body: bytes = b"",
    ) -> None:
        super().__init__(message, status_code=429, body=body)
        self.retry_after = retry_after


class PaginationError(RosterError):
    """Traversal cannot make progress."""

    pass


class ExportError(RosterError):
    """Export file could not be written."""

    pass


class LedgerError(ValidationError):
    """Transaction rejected by a ledger business rule."""

    pass
