"""REST transport: one shared HTTP session guarded by an exclusive handle."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ...config import DEFAULT_TIMEOUT_SECONDS, get_base_url, get_emulator_host
from ...models import RawDocument
from ..paging.definitions import ListDocumentsRequest, Page
from .auth import TokenSource
from .endpoints import (
    CREATE_DOCUMENT,
    DELETE_DOCUMENT,
    GET_DOCUMENT,
    LIST_DOCUMENTS,
    UPDATE_DOCUMENT,
    DocumentAdapter,
    EmptyAdapter,
    ListDocumentsAdapter,
)
from .http_client import HTTPClient
from .runner import RestRunner


class FirestoreRESTHandle:
    """Issues Firestore REST calls; only valid while acquired from the transport."""

    def __init__(self, runner: RestRunner) -> None:
        self._runner = runner

    async def list_documents(self, request: ListDocumentsRequest) -> Page:
        return await self._runner.run(
            spec=LIST_DOCUMENTS, adapter=ListDocumentsAdapter(), params={"request": request}
        )

    async def get_document(self, name: str) -> RawDocument:
        return await self._runner.run(
            spec=GET_DOCUMENT, adapter=DocumentAdapter(), params={"name": name}
        )

    async def create_document(
        self,
        parent: str,
        collection_id: str,
        document: RawDocument,
        document_id: str | None = None,
    ) -> RawDocument:
        params = {
            "parent": parent,
            "collection_id": collection_id,
            "document": document,
            "document_id": document_id,
        }
        return await self._runner.run(
            spec=CREATE_DOCUMENT, adapter=DocumentAdapter(), params=params
        )

    async def update_document(
        self,
        document: RawDocument,
        exists: bool | None = None,
    ) -> RawDocument:
        if not document.name:
            raise ValueError("update_document requires a named document")
        return await self._runner.run(
            spec=UPDATE_DOCUMENT,
            adapter=DocumentAdapter(),
            params={"document": document, "exists": exists},
        )

    async def delete_document(self, name: str, exists: bool | None = None) -> None:
        await self._runner.run(
            spec=DELETE_DOCUMENT, adapter=EmptyAdapter(), params={"name": name, "exists": exists}
        )


class FirestoreRESTTransport:
    """Firestore transport over the v1 REST API.

    At most one request is in flight at a time: ``acquire()`` holds an
    asyncio.Lock for the duration of the ``async with`` block, so concurrent
    callers queue up in arrival order.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        token_source: TokenSource | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Versioned API root; defaults to the emulator when
                FIRESTORE_EMULATOR_HOST is set, else the public endpoint
            token_source: Bearer token provider (None sends no Authorization header)
            timeout: Total per-request timeout in seconds
        """
        if base_url is None:
            base_url = get_base_url(get_emulator_host())
        self._http = HTTPClient(base_url=base_url, timeout=timeout, token_source=token_source)
        self._handle = FirestoreRESTHandle(RestRunner(self._http))
        self._lock = asyncio.Lock()

    @property
    def base_url(self) -> str | None:
        return self._http.base_url

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[FirestoreRESTHandle]:
        """Acquire the exclusive request handle."""
        async with self._lock:
            yield self._handle

    async def close(self) -> None:
        """Close underlying HTTP resources."""
        await self._http.close()

    async def __aenter__(self) -> FirestoreRESTTransport:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
