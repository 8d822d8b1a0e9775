"""Lazy, paginated async stream over a collection listing.

Architecture:
    ListResponse is an async iterator driven by an explicit state machine:

        DRAINING ──buffer empty──▶ AWAITING_FETCH ──page──▶ DRAINING
            │                            │
            └─ buffer empty, last page ─▶ EXHAUSTED        └─ error ─▶ FAILED

    - One page of raw documents is buffered; documents are decoded one at a
      time as they are pulled.
    - A fetch is only started when the buffer is empty, and the next fetch
      needs the previous page's token, so pages arrive strictly in order and
      at most one fetch per stream is ever in flight.
    - The in-flight fetch runs as a task and is awaited through
      asyncio.shield(): cancelling a pull (e.g. a timeout) leaves the fetch
      running, and the next pull picks up the same result exactly once.
      Overlapping pulls share the one fetch; only the first to resume applies
      its page.

Design Decisions:
    - Lazy: nothing is requested until the first item is awaited.
    - Builder-style configuration (with_page_size / with_order_by) fixed
      before iteration starts and applied to every page.
    - Fetch failures are terminal: the error is raised on the pull that hit
      it, and the stream then reports no more items.
    - Decode failures are per item: the bad document is consumed, the error
      is raised for that pull, and the next pull continues with the buffer.
    - Abandoning a stream is always safe; aclose() drops the buffer and token
      and lets an already-dispatched fetch finish unobserved.

Example:
    >>> async for doc in users.list().with_page_size(50).with_order_by("name"):
    ...     print(doc.name.document_id, doc.value)
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Generic, TypeVar

from ...codec import from_document
from ...core.base import FirestoreTransport
from ...core.exceptions import DeserializationError, NameParseError
from ...core.names import CollectionName, DocumentName
from ...models import NamedDocument, RawDocument
from .definitions import ListDocumentsRequest, Page, StreamState
from .fetcher import fetch_page
from .telemetry import log_document_decode_error, log_stream_exhausted

T = TypeVar("T")


def _retrieve_exception(task: asyncio.Task[Any]) -> None:
    # Marks the exception as retrieved so an abandoned fetch does not warn
    if not task.cancelled():
        task.exception()


class ListResponse(Generic[T]):
    """Stream of the documents in one collection, as NamedDocument[T]."""

    def __init__(
        self,
        collection: CollectionName,
        transport: FirestoreTransport,
        model: type[T],
        *,
        page_size: int = 0,
        order_by: str = "",
    ) -> None:
        """Create a stream; no request is made until the first pull.

        Args:
            collection: Collection to list (must not be the database root)
            transport: Shared transport used for every page
            model: Type each document is decoded into
            page_size: Documents per page (0 lets the server choose)
            order_by: Ordering expression ("" for unspecified order)
        """
        if collection.is_root:
            raise ValueError("Cannot list the database root; choose a collection")
        if page_size < 0:
            raise ValueError("page_size must be >= 0")

        self._collection = collection
        self._transport = transport
        self._model = model
        self._page_size = page_size
        self._order_by = order_by

        self._page_token: str | None = None
        self._buffer: deque[RawDocument] = deque()
        self._depleted = False
        self._pending: asyncio.Task[Page] | None = None
        self._state = StreamState.DRAINING
        self._started = False

        self._pages_fetched = 0
        self._documents_yielded = 0

    # ----------------------
    # Configuration
    # ----------------------
    @property
    def collection(self) -> CollectionName:
        return self._collection

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def order_by(self) -> str:
        return self._order_by

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    def with_page_size(self, page_size: int) -> ListResponse[T]:
        """Return a copy of this stream that requests ``page_size`` documents per page."""
        self._ensure_not_started("with_page_size")
        return ListResponse(
            self._collection,
            self._transport,
            self._model,
            page_size=page_size,
            order_by=self._order_by,
        )

    def with_order_by(self, order_by: str) -> ListResponse[T]:
        """Return a copy of this stream ordered by ``order_by`` (e.g. ``"age desc"``)."""
        self._ensure_not_started("with_order_by")
        return ListResponse(
            self._collection,
            self._transport,
            self._model,
            page_size=self._page_size,
            order_by=order_by,
        )

    def _ensure_not_started(self, method: str) -> None:
        if self._started:
            raise RuntimeError(f"{method}() must be called before iteration starts")

    # ----------------------
    # Iteration
    # ----------------------
    def __aiter__(self) -> ListResponse[T]:
        return self

    async def __anext__(self) -> NamedDocument[T]:
        self._started = True
        while True:
            if self._state in (StreamState.EXHAUSTED, StreamState.FAILED):
                raise StopAsyncIteration

            if self._buffer:
                self._state = StreamState.DRAINING
                return self._decode(self._buffer.popleft())

            if self._depleted:
                self._state = StreamState.EXHAUSTED
                log_stream_exhausted(
                    collection=self._collection.name,
                    pages=self._pages_fetched,
                    documents=self._documents_yielded,
                )
                raise StopAsyncIteration

            await self._await_page()

    async def _await_page(self) -> None:
        if self._pending is None:
            self._pending = asyncio.create_task(
                fetch_page(
                    self._transport,
                    self._next_request(),
                    page_index=self._pages_fetched,
                )
            )
            self._pending.add_done_callback(_retrieve_exception)
            self._state = StreamState.AWAITING_FETCH

        pending = self._pending
        try:
            page = await asyncio.shield(pending)
        except asyncio.CancelledError:
            if pending.cancelled() and self._pending is pending:
                # The fetch itself was cancelled, not just this pull
                self._pending = None
                self._state = StreamState.DRAINING
            raise
        except Exception:
            if self._pending is not pending:
                # Another pull already applied this failure, or the stream was closed
                return
            self._pending = None
            self._buffer.clear()
            self._page_token = None
            self._state = StreamState.FAILED
            raise

        if self._pending is not pending:
            # Result already applied by another pull, or the stream was closed
            return

        self._pending = None
        self._pages_fetched += 1
        self._buffer.extend(page.documents)
        if page.is_last:
            self._depleted = True
            self._page_token = None
        else:
            self._page_token = page.next_page_token
        self._state = StreamState.DRAINING

    def _next_request(self) -> ListDocumentsRequest:
        return ListDocumentsRequest(
            parent=self._collection.parent().name,
            collection_id=self._collection.leaf_name,
            page_size=self._page_size,
            order_by=self._order_by,
            page_token=self._page_token,
        )

    def _decode(self, raw: RawDocument) -> NamedDocument[T]:
        try:
            name = DocumentName.parse(raw.name)
            value = from_document(raw, self._model)
        except (NameParseError, DeserializationError) as e:
            log_document_decode_error(name=raw.name, error_message=str(e))
            if isinstance(e, DeserializationError):
                raise
            raise DeserializationError(
                f"Invalid document name in list response: {raw.name!r}", name=raw.name
            ) from e

        self._documents_yielded += 1
        return NamedDocument(name=name, value=value)

    # ----------------------
    # Convenience
    # ----------------------
    async def get_page(self) -> list[NamedDocument[T]]:
        """Fetch and decode a single page without starting the stream."""
        self._ensure_not_started("get_page")
        page = await fetch_page(self._transport, self._next_request())
        return [self._decode(raw) for raw in page.documents]

    async def collect(self) -> list[NamedDocument[T]]:
        """Drain the stream into a list."""
        return [doc async for doc in self]

    async def aclose(self) -> None:
        """Stop the stream, dropping buffered documents and the page token.

        A fetch that is already in flight is not cancelled; its result is
        discarded. Safe to call more than once.
        """
        self._pending = None
        self._buffer.clear()
        self._page_token = None
        self._depleted = True
        if self._state != StreamState.FAILED:
            self._state = StreamState.EXHAUSTED

    async def __aenter__(self) -> ListResponse[T]:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
