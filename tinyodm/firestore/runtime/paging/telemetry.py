"""Structured logging for paging operations.

This module provides telemetry hooks for list streams, emitting structured
logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    parent: str,
    collection_id: str,
    page_index: int,
    documents: int,
    has_more: bool,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single page fetch.

    Args:
        parent: Parent resource name of the listed collection
        collection_id: Leaf id of the listed collection
        page_index: Zero-based index of the page within its stream
        documents: Number of documents returned
        has_more: Whether the server returned a continuation token
        latency_ms: Round-trip latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "parent": parent,
            "collection_id": collection_id,
            "page_index": page_index,
            "documents": documents,
            "has_more": has_more,
            "latency_ms": latency_ms,
        },
    )


def log_page_fetch_error(
    *,
    parent: str,
    collection_id: str,
    page_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed page fetch.

    Args:
        parent: Parent resource name of the listed collection
        collection_id: Leaf id of the listed collection
        page_index: Zero-based index of the page that failed
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "page_fetch_error",
        extra={
            "parent": parent,
            "collection_id": collection_id,
            "page_index": page_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_stream_exhausted(*, collection: str, pages: int, documents: int) -> None:
    """Log the end of a list stream.

    Args:
        collection: Resource name of the listed collection
        pages: Number of pages fetched
        documents: Number of documents yielded
    """
    logger.info(
        "stream_exhausted",
        extra={
            "collection": collection,
            "pages": pages,
            "documents": documents,
        },
    )


def log_document_decode_error(*, name: str, error_message: str) -> None:
    logger.warning(
        "document_decode_error",
        extra={"document": name, "error_message": error_message},
    )
