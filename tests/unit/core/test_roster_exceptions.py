"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from riddle.roster.core import (
    DecodeError,
    LedgerError,
    PreconditionError,
    RateLimitError,
    RosterError,
    SessionClosedError,
    TransportError,
    ValidationError,
)


def test_rate_limit_error_with_retry_after():
    """Test RateLimitError carries status 429 and the retry hint."""
    error = RateLimitError("rate limit", retry_after=30.0)
    assert error.status_code == 429
    assert error.retry_after == 30.0
    assert isinstance(error, TransportError)
    assert isinstance(error, RosterError)


def test_transport_error_without_response():
    """Test TransportError for network failures has no status code."""
    error = TransportError("connection reset")
    assert str(error) == "connection reset"
    assert error.status_code is None
    assert error.body == b""


def test_transport_error_keeps_body():
    """Test TransportError keeps the response body for diagnostics."""
    error = TransportError("not found", status_code=404, body=b'{"error": "x"}')
    assert error.status_code == 404
    assert error.body == b'{"error": "x"}'


def test_validation_errors_are_not_value_errors():
    """Test ValidationError stays out of pydantic's ValueError wrapping."""
    assert not issubclass(ValidationError, ValueError)
    assert issubclass(DecodeError, ValidationError)
    assert issubclass(LedgerError, ValidationError)


def test_session_closed_is_precondition():
    """Test SessionClosedError is a PreconditionError."""
    assert issubclass(SessionClosedError, PreconditionError)
    assert issubclass(PreconditionError, RosterError)
