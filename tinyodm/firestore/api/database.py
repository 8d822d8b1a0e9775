"""Database facade: the entry point for collections.

Example:
    >>> async with Database.connect("my-project", token_source=StaticTokenSource(token)) as db:
    ...     users = db.collection("users", User)
    ...     key = await users.create(User(name="Bob"))
    ...     async for doc in users.list():
    ...         print(doc.name.document_id, doc.value)
"""

from __future__ import annotations

from typing import Any, TypeVar, overload

from ..config import DEFAULT_TIMEOUT_SECONDS, get_base_url, get_emulator_host
from ..core.base import FirestoreTransport
from ..core.exceptions import ProjectMismatchError
from ..core.names import CollectionName, DatabaseRoot
from ..runtime.rest import FirestoreRESTTransport, TokenSource
from .collection import Collection

T = TypeVar("T")


class Database:
    """A project's default Firestore database."""

    def __init__(self, transport: FirestoreTransport, project_id: str) -> None:
        self._transport = transport
        self._root = DatabaseRoot(project_id=project_id)

    @classmethod
    def connect(
        cls,
        project_id: str,
        *,
        token_source: TokenSource | None = None,
        emulator_host: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> Database:
        """Create a database backed by the REST transport.

        No request is made here; the HTTP session opens on first use.

        Args:
            project_id: Google Cloud project id
            token_source: Bearer token provider (omit for the emulator)
            emulator_host: ``host:port`` of an emulator; defaults to FIRESTORE_EMULATOR_HOST
            timeout: Per-request timeout in seconds
        """
        base_url = get_base_url(emulator_host or get_emulator_host())
        transport = FirestoreRESTTransport(
            base_url=base_url, token_source=token_source, timeout=timeout
        )
        return cls(transport, project_id)

    @property
    def project_id(self) -> str:
        return self._root.project_id

    @property
    def root(self) -> DatabaseRoot:
        return self._root

    @property
    def transport(self) -> FirestoreTransport:
        return self._transport

    @overload
    def collection(self, collection_id: str) -> Collection[dict[str, Any]]: ...

    @overload
    def collection(self, collection_id: str, model: type[T]) -> Collection[T]: ...

    def collection(self, collection_id: str, model: type[Any] = dict) -> Collection[Any]:
        """Top-level collection bound to ``model`` (plain dicts by default)."""
        return Collection(self._transport, self._root.collection(collection_id), model)

    def collection_at(self, name: CollectionName, model: type[T]) -> Collection[T]:
        """Collection at an arbitrary (possibly nested) name in this database.

        Raises:
            ProjectMismatchError: ``name`` belongs to another project
        """
        if name.project_id != self.project_id:
            raise ProjectMismatchError(
                f"Collection {name.name} is not in project {self.project_id!r}",
                collection=name,
            )
        return Collection(self._transport, name, model)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> Database:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
