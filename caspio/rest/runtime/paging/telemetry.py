"""Structured logging for paging operations.

This module provides telemetry hooks for the pagination driver, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_plan(
    *,
    resource_id: str,
    page_index: int,
    page_number: int | None,
    query: str,
) -> None:
    """Log the query planned for a page request.

    Args:
        resource_id: Table or view identifier
        page_index: Zero-based index of the request
        page_number: Backend page number (None for the first request)
        query: Encoded query string
    """
    logger.debug(
        "page_plan_created",
        extra={
            "resource_id": resource_id,
            "page_index": page_index,
            "page_number": page_number,
            "query": query,
        },
    )


def log_page_completed(
    *,
    resource_id: str,
    page_index: int,
    rows: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page request.

    Args:
        resource_id: Table or view identifier
        page_index: Zero-based index of the request
        rows: Number of records returned by the page
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "page_completed",
        extra={
            "resource_id": resource_id,
            "page_index": page_index,
            "rows": rows,
            "latency_ms": latency_ms,
        },
    )


def log_pagination_complete(
    *,
    resource_id: str,
    pages_used: int,
    total_records: int,
    mode: str,
) -> None:
    """Log completion of a full pagination run.

    Args:
        resource_id: Table or view identifier
        pages_used: Number of page requests issued
        total_records: Number of records accumulated or streamed
        mode: "accumulate" or "stream"
    """
    logger.info(
        "pagination_complete",
        extra={
            "resource_id": resource_id,
            "pages_used": pages_used,
            "total_records": total_records,
            "mode": mode,
        },
    )


def log_page_error(
    *,
    resource_id: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page request error.

    Args:
        resource_id: Table or view identifier
        page_index: Zero-based index of the request that failed
        error_type: Type of error (e.g., "TransportError")
        error_message: Error message
    """
    logger.error(
        "page_error",
        extra={
            "resource_id": resource_id,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
