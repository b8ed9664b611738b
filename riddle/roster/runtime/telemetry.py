"""Structured logging for fetch, traversal and bulk-load operations.

This module provides telemetry hooks emitting structured logs (event name as
the message, details in ``extra``) so handlers can ship them as JSON.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    offset: int,
    limit: int,
    item_count: int,
    has_more: bool,
    total: int | None,
    latency_ms: float | None = None,
) -> None:
    """Log a successfully decoded page.

    Args:
        offset: Offset reported by the page
        limit: Limit reported by the page
        item_count: Number of records on the page
        has_more: Server-reported more flag
        total: Server-reported total (may be None)
        latency_ms: Fetch latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "offset": offset,
            "limit": limit,
            "item_count": item_count,
            "has_more": has_more,
            "total": total,
            "latency_ms": latency_ms,
        },
    )


def log_traversal_complete(*, start_offset: int, pages: int, records: int) -> None:
    """Log the end of a traversal.

    Args:
        start_offset: Offset the traversal started from
        pages: Number of pages yielded
        records: Number of records yielded
    """
    logger.info(
        "traversal_complete",
        extra={"start_offset": start_offset, "pages": pages, "records": records},
    )


def log_fetch_error(
    *,
    operation: str,
    error_type: str,
    error_message: str,
    status_code: int | None = None,
) -> None:
    """Log a failed fetch.

    Args:
        operation: What was being fetched (e.g. "page", "entity")
        error_type: Exception class name
        error_message: Exception message
        status_code: HTTP status, if a response was received
    """
    logger.error(
        "fetch_error",
        extra={
            "operation": operation,
            "error_type": error_type,
            "error_message": error_message,
            "status_code": status_code,
        },
    )


def log_rate_limited(*, backoff_seconds: float, retry_after: float | None) -> None:
    """Log a 429 and the fixed backoff about to be applied.

    Args:
        backoff_seconds: Backoff the session will wait
        retry_after: Server Retry-After hint (informational only)
    """
    logger.warning(
        "rate_limited",
        extra={"backoff_seconds": backoff_seconds, "retry_after": retry_after},
    )


def log_bulk_load_cancelled(*, pages: int, records: int) -> None:
    """Log a bulk load stopped by cooperative cancellation."""
    logger.warning("bulk_load_cancelled", extra={"pages": pages, "records": records})
