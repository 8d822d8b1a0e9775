"""Single-page list fetch."""

from __future__ import annotations

from time import perf_counter

from ...core.base import FirestoreTransport
from .definitions import ListDocumentsRequest, Page
from .telemetry import log_page_fetch_error, log_page_fetched


async def fetch_page(
    transport: FirestoreTransport,
    request: ListDocumentsRequest,
    *,
    page_index: int = 0,
) -> Page:
    """Fetch one page of a collection listing.

    Issues exactly one request through the transport's shared handle. Errors
    from the transport propagate unchanged; nothing is retried.

    Args:
        transport: Shared transport; its handle is held only for this request
        request: List parameters, including the continuation token
        page_index: Position of this page in its stream (for telemetry)

    Returns:
        Page with documents in server order and the next token ("" when done)
    """
    start = perf_counter()
    try:
        async with transport.acquire() as handle:
            page = await handle.list_documents(request)
    except Exception as e:
        log_page_fetch_error(
            parent=request.parent,
            collection_id=request.collection_id,
            page_index=page_index,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise

    log_page_fetched(
        parent=request.parent,
        collection_id=request.collection_id,
        page_index=page_index,
        documents=len(page.documents),
        has_more=not page.is_last,
        latency_ms=(perf_counter() - start) * 1000.0,
    )
    return page
