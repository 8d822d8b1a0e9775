"""Transport interfaces the document layer depends on.

Architecture:
    The collection and stream code never talks to HTTP directly. They depend on
    two structural protocols:
    - FirestoreTransport: owns the connection, hands out a handle via acquire()
    - FirestoreHandle: issues exactly one request per call

Design Decisions:
    - Protocol over inheritance: any object with the right methods is a transport
      (the REST transport, an in-memory fake in tests, a gRPC adapter, ...)
    - acquire() is an async context manager: the handle is exclusive and is
      released on every exit path, including errors and cancellation
    - No retries here: retry policy belongs to a transport that wants one

See Also:
    - FirestoreRESTTransport: aiohttp implementation
    - fetch_page: the single-page list operation built on these protocols
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import RawDocument
    from ..runtime.paging.definitions import ListDocumentsRequest, Page


@runtime_checkable
class FirestoreHandle(Protocol):
    """Exclusive handle on a connection, valid inside ``acquire()``."""

    async def list_documents(self, request: ListDocumentsRequest) -> Page:
        """Fetch one page of a collection listing."""
        ...

    async def get_document(self, name: str) -> RawDocument:
        """Fetch one document by resource name.

        Raises:
            NotFoundError: Document does not exist
        """
        ...

    async def create_document(
        self,
        parent: str,
        collection_id: str,
        document: RawDocument,
        document_id: str | None = None,
    ) -> RawDocument:
        """Create a document, letting the server assign an id when none is given.

        Returns:
            The stored document, including its assigned name
        """
        ...

    async def update_document(
        self,
        document: RawDocument,
        exists: bool | None = None,
    ) -> RawDocument:
        """Write ``document`` at ``document.name``.

        Args:
            document: Document to write; its name selects the target
            exists: Precondition (True: must exist, False: must not, None: no check)

        Raises:
            AlreadyExistsError: exists=False and the document exists
            NotFoundError: exists=True and the document does not exist
        """
        ...

    async def delete_document(self, name: str, exists: bool | None = None) -> None:
        """Delete a document, optionally requiring it to exist."""
        ...


@runtime_checkable
class FirestoreTransport(Protocol):
    """Shared connection to a Firestore database."""

    def acquire(self) -> AbstractAsyncContextManager[FirestoreHandle]:
        """Acquire the exclusive request handle."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
