"""Typed collection facade.

Documents in Firestore have no schema, but each Collection is bound to a
Python type: values are encoded from it on write and validated into it on
read. Every key is qualified against the collection before any request is
made, so a DocumentName from another collection fails locally.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from ..codec import from_document, to_document
from ..core.base import FirestoreTransport
from ..core.exceptions import AlreadyExistsError, NotFoundError
from ..core.names import CollectionName, DocumentKey, DocumentName, qualify
from ..runtime.paging import ListResponse

T = TypeVar("T")
S = TypeVar("S")


class Collection(Generic[T]):
    """A collection of documents of type ``T``."""

    def __init__(self, transport: FirestoreTransport, name: CollectionName, model: type[T]) -> None:
        if name.is_root:
            raise ValueError("Collection requires a collection id; the database root is not one")
        self._transport = transport
        self._name = name
        self._model = model

    @property
    def name(self) -> CollectionName:
        return self._name

    @property
    def model(self) -> type[T]:
        return self._model

    def document_name(self, key: DocumentKey) -> DocumentName:
        """Qualify ``key`` against this collection."""
        return qualify(key, self._name)

    def list(self) -> ListResponse[T]:
        """Stream of all documents in this collection, fetched lazily page by page."""
        return ListResponse(self._name, self._transport, self._model)

    def subcollection(self, document_id: str, collection_id: str, model: type[S]) -> Collection[S]:
        """Collection nested under one of this collection's documents."""
        return Collection(
            self._transport, self._name.subcollection(document_id, collection_id), model
        )

    async def create(self, value: T) -> DocumentName:
        """Add ``value`` under a new server-assigned key.

        Returns:
            Name of the created document
        """
        document = to_document(value)
        async with self._transport.acquire() as handle:
            stored = await handle.create_document(
                self._name.parent().name, self._name.leaf_name, document
            )
        return DocumentName.parse(stored.name)

    async def create_with_key(self, value: T, key: DocumentKey) -> None:
        """Create ``value`` under ``key``.

        Raises:
            AlreadyExistsError: The key is already in use (use upsert() to replace)
        """
        await self._write(value, key, exists=False)

    async def try_create(self, value: T, key: DocumentKey) -> bool:
        """Create ``value`` under ``key``.

        Returns:
            True if the document was created, False if it already existed
        """
        try:
            await self._write(value, key, exists=False)
        except AlreadyExistsError:
            return False
        return True

    async def upsert(self, value: T, key: DocumentKey) -> None:
        """Write ``value`` under ``key``, replacing any existing document."""
        await self._write(value, key, exists=None)

    async def update(self, value: T, key: DocumentKey) -> None:
        """Replace the document at ``key``.

        Raises:
            NotFoundError: No document exists at ``key``
        """
        await self._write(value, key, exists=True)

    async def get(self, key: DocumentKey) -> T:
        """Fetch and decode the document at ``key``.

        Raises:
            NotFoundError: No document exists at ``key``
            DeserializationError: Stored fields do not validate as ``T``
        """
        name = qualify(key, self._name)
        async with self._transport.acquire() as handle:
            document = await handle.get_document(name.name)
        return from_document(document, self._model)

    async def try_get(self, key: DocumentKey) -> T | None:
        """Like get(), but returns None when the document does not exist."""
        try:
            return await self.get(key)
        except NotFoundError:
            return None

    async def delete(self, key: DocumentKey) -> None:
        """Delete the document at ``key``.

        Raises:
            NotFoundError: No document exists at ``key``
        """
        name = qualify(key, self._name)
        async with self._transport.acquire() as handle:
            await handle.delete_document(name.name, exists=True)

    async def _write(self, value: T, key: DocumentKey, *, exists: bool | None) -> None:
        name = qualify(key, self._name)
        document = to_document(value).with_name(name.name)
        async with self._transport.acquire() as handle:
            await handle.update_document(document, exists=exists)

    def __repr__(self) -> str:
        model = getattr(self._model, "__name__", self._model)
        return f"Collection({self._name.name!r}, model={model})"
