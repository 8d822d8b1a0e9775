"""Resource names for collections and documents.

Every Firestore resource is addressed by a slash-delimited name rooted at a
project's default database:

    projects/{project}/databases/(default)/documents[/{collection}/{document}]*[/{collection}]

Architecture:
    - CollectionName: project + chain of (collection, document) ancestor pairs
      + leaf collection id. A leaf of None is the database root itself.
    - DocumentName: a CollectionName held by value + leaf document id.
    - DatabaseRoot: the marker returned by CollectionName.parent() when there
      is no enclosing document.

Design Decisions:
    - Frozen pydantic models: equality and hashing compare every segment in
      order, never the serialized string.
    - parent() returns a tagged union (DocumentName | DatabaseRoot) rather
      than Optional, so callers can tell "top of the tree" from "no parent".
    - Parsing and serialization are exact inverses for well-formed names.

Examples:
    >>> users = CollectionName.new("my-project", "users")
    >>> users.document("alice").name
    'projects/my-project/databases/(default)/documents/users/alice'
    >>> users.subcollection("alice", "devices").parent().name
    'projects/my-project/databases/(default)/documents/users/alice'
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..config import DATABASES_MARKER, DEFAULT_DATABASE, DOCUMENTS_MARKER, PROJECTS_MARKER
from .exceptions import (
    CollectionMismatchError,
    InvalidKeyError,
    InvalidPartError,
    ProjectMismatchError,
    TooFewPartsError,
    WrongNumberOfPartsError,
)

# (index, literal) of the fixed segments, checked in this order
_FIXED_PARTS = (
    (0, PROJECTS_MARKER),
    (2, DATABASES_MARKER),
    (3, DEFAULT_DATABASE),
    (4, DOCUMENTS_MARKER),
)
_PREFIX_LEN = 5
_MIN_DOCUMENT_PARTS = 7


def _check_segment(value: str) -> str:
    if not value:
        raise ValueError("name segment must be non-empty")
    if "/" in value:
        raise ValueError(f"name segment must not contain '/': {value!r}")
    return value


def _database_prefix(project_id: str) -> str:
    return "/".join(
        (PROJECTS_MARKER, project_id, DATABASES_MARKER, DEFAULT_DATABASE, DOCUMENTS_MARKER)
    )


def _split_name(value: str) -> list[str]:
    """Split a resource name and validate its fixed prefix."""
    parts = value.split("/")
    if len(parts) < _PREFIX_LEN:
        raise TooFewPartsError(len(parts), value=value)

    for index, marker in _FIXED_PARTS:
        if parts[index] != marker:
            raise InvalidPartError(index, value=value)

    if not parts[1]:
        raise InvalidPartError(1, value=value)
    for index in range(_PREFIX_LEN, len(parts)):
        if not parts[index]:
            raise InvalidPartError(index, value=value)

    return parts


def _collection_from_parts(parts: list[str]) -> CollectionName:
    project_id = parts[1]
    if len(parts) == _PREFIX_LEN:
        return CollectionName.root(project_id)

    path = parts[_PREFIX_LEN:-1]
    parent_path = tuple((path[i], path[i + 1]) for i in range(0, len(path), 2))
    return CollectionName(project_id=project_id, parent_path=parent_path, collection_id=parts[-1])


class DatabaseRoot(BaseModel):
    """Root of a project's document tree (``.../databases/(default)/documents``)."""

    project_id: str

    model_config = ConfigDict(frozen=True)

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: str) -> str:
        return _check_segment(v)

    @property
    def name(self) -> str:
        return _database_prefix(self.project_id)

    def collection(self, collection_id: str) -> CollectionName:
        """Top-level collection under this root."""
        return CollectionName.new(self.project_id, collection_id)

    def __str__(self) -> str:
        return self.name


class CollectionName(BaseModel):
    """Fully-qualified name of a collection.

    Attributes:
        project_id: Project the database belongs to
        parent_path: Ancestor (collection_id, document_id) pairs, outermost first
        collection_id: Leaf collection id, or None for the database root
    """

    project_id: str
    parent_path: tuple[tuple[str, str], ...] = ()
    collection_id: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: str) -> str:
        return _check_segment(v)

    @field_validator("parent_path")
    @classmethod
    def validate_parent_path(cls, v: tuple[tuple[str, str], ...]) -> tuple[tuple[str, str], ...]:
        for collection_id, document_id in v:
            _check_segment(collection_id)
            _check_segment(document_id)
        return v

    @field_validator("collection_id")
    @classmethod
    def validate_collection_id(cls, v: str | None) -> str | None:
        if v is not None:
            _check_segment(v)
        return v

    @model_validator(mode="after")
    def validate_root(self) -> CollectionName:
        if self.collection_id is None and self.parent_path:
            raise ValueError("database root cannot have a parent path")
        return self

    @classmethod
    def new(cls, project_id: str, collection_id: str) -> CollectionName:
        """Top-level collection (empty parent chain)."""
        return cls(project_id=project_id, parent_path=(), collection_id=collection_id)

    @classmethod
    def new_with_path(
        cls,
        project_id: str,
        path: Iterable[tuple[str, str]],
        collection_id: str,
    ) -> CollectionName:
        """Collection nested under an explicit (collection, document) chain."""
        return cls(
            project_id=project_id,
            parent_path=tuple((c, d) for c, d in path),
            collection_id=collection_id,
        )

    @classmethod
    def root(cls, project_id: str) -> CollectionName:
        """The database root, which has no leaf collection id."""
        return cls(project_id=project_id, parent_path=(), collection_id=None)

    @classmethod
    def parse(cls, name: str) -> CollectionName:
        """Parse a collection resource name.

        Args:
            name: Resource name, e.g. ``projects/p/databases/(default)/documents/users``

        Returns:
            Parsed CollectionName (the database root for a bare ``.../documents``)

        Raises:
            TooFewPartsError: Fewer than five segments
            InvalidPartError: Fixed marker mismatch or empty segment
            WrongNumberOfPartsError: Segment count is a document's, not a collection's
        """
        parts = _split_name(name)
        if len(parts) > _PREFIX_LEN and len(parts) % 2 != 0:
            raise WrongNumberOfPartsError(len(parts), value=name)
        return _collection_from_parts(parts)

    @property
    def is_root(self) -> bool:
        return self.collection_id is None

    @property
    def leaf_name(self) -> str:
        """Leaf collection id, as sent in list and create requests."""
        if self.collection_id is None:
            raise ValueError("database root has no collection id")
        return self.collection_id

    @property
    def name(self) -> str:
        segments = [_database_prefix(self.project_id)]
        for collection_id, document_id in self.parent_path:
            segments.append(collection_id)
            segments.append(document_id)
        if self.collection_id is not None:
            segments.append(self.collection_id)
        return "/".join(segments)

    def parent(self) -> DocumentName | DatabaseRoot:
        """Enclosing document, or the database root for a top-level collection."""
        if not self.parent_path:
            return DatabaseRoot(project_id=self.project_id)

        *ancestors, (collection_id, document_id) = self.parent_path
        collection = CollectionName(
            project_id=self.project_id,
            parent_path=tuple(ancestors),
            collection_id=collection_id,
        )
        return DocumentName(collection=collection, document_id=document_id)

    def parent_collection(self) -> CollectionName | None:
        """Collection holding the enclosing document.

        A top-level collection yields the database root; the root yields None.
        """
        if self.is_root:
            return None
        if not self.parent_path:
            return CollectionName.root(self.project_id)

        *ancestors, (collection_id, _) = self.parent_path
        return CollectionName(
            project_id=self.project_id,
            parent_path=tuple(ancestors),
            collection_id=collection_id,
        )

    def subcollection(self, document_id: str, collection_id: str) -> CollectionName:
        """Collection nested under ``document_id`` of this collection."""
        return CollectionName(
            project_id=self.project_id,
            parent_path=(*self.parent_path, (self.leaf_name, document_id)),
            collection_id=collection_id,
        )

    def document(self, document_id: str) -> DocumentName:
        if self.is_root:
            raise ValueError("database root cannot hold documents")
        return DocumentName(collection=self, document_id=document_id)

    def __str__(self) -> str:
        return self.name


class DocumentName(BaseModel):
    """Fully-qualified name of a document."""

    collection: CollectionName
    document_id: str

    model_config = ConfigDict(frozen=True)

    @field_validator("document_id")
    @classmethod
    def validate_document_id(cls, v: str) -> str:
        return _check_segment(v)

    @model_validator(mode="after")
    def validate_collection(self) -> DocumentName:
        if self.collection.is_root:
            raise ValueError("document must belong to a collection, not the database root")
        return self

    @classmethod
    def parse(cls, name: str) -> DocumentName:
        """Parse a document resource name.

        Raises:
            TooFewPartsError: Fewer than seven segments
            InvalidPartError: Fixed marker mismatch or empty segment
            WrongNumberOfPartsError: Segment count is a collection's, not a document's
        """
        parts = _split_name(name)
        if len(parts) < _MIN_DOCUMENT_PARTS:
            raise TooFewPartsError(len(parts), value=name)
        if len(parts) % 2 == 0:
            raise WrongNumberOfPartsError(len(parts), value=name)
        return cls(collection=_collection_from_parts(parts[:-1]), document_id=parts[-1])

    @property
    def project_id(self) -> str:
        return self.collection.project_id

    @property
    def leaf_name(self) -> str:
        return self.document_id

    @property
    def name(self) -> str:
        return f"{self.collection.name}/{self.document_id}"

    def parent(self) -> CollectionName:
        """Collection containing this document."""
        return self.collection

    def subcollection(self, collection_id: str) -> CollectionName:
        return self.collection.subcollection(self.document_id, collection_id)

    def __str__(self) -> str:
        return self.name


DocumentKey = str | DocumentName


def parse_name(name: str) -> CollectionName | DocumentName:
    """Parse a resource name, choosing the shape from its segment count."""
    parts = _split_name(name)
    if len(parts) == _PREFIX_LEN or len(parts) % 2 == 0:
        return _collection_from_parts(parts)
    return DocumentName(collection=_collection_from_parts(parts[:-1]), document_id=parts[-1])


def qualify(key: DocumentKey, collection: CollectionName) -> DocumentName:
    """Resolve a key into a document name scoped to ``collection``.

    A bare id is attached to the collection. An existing DocumentName is
    returned unchanged, but only if it lives in exactly that collection.

    Raises:
        ProjectMismatchError: DocumentName belongs to another project
        CollectionMismatchError: DocumentName belongs to another collection chain
        InvalidKeyError: Bare id is empty or contains "/"
    """
    if isinstance(key, DocumentName):
        if key.project_id != collection.project_id:
            raise ProjectMismatchError(
                f"Document {key.name} is not in project {collection.project_id!r}",
                document=key,
                collection=collection,
            )
        if key.collection != collection:
            raise CollectionMismatchError(
                f"Document {key.name} is not in collection {collection.name}",
                document=key,
                collection=collection,
            )
        return key

    if isinstance(key, str):
        if not key or "/" in key:
            raise InvalidKeyError(f"Invalid document id: {key!r}", key=key)
        return collection.document(key)

    raise TypeError(f"Document key must be str or DocumentName, got {type(key).__name__}")
