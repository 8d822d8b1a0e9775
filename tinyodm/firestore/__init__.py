"""Tiny Firestore ODM - typed, async access to Firestore collections."""

from .api import Collection, Database
from .codec import from_document, to_document
from .core import (
    AlreadyExistsError,
    CollectionMismatchError,
    CollectionName,
    DatabaseRoot,
    DeserializationError,
    DocumentKey,
    DocumentName,
    FailedPreconditionError,
    FetchError,
    FirestoreError,
    FirestoreHandle,
    FirestoreTransport,
    InvalidKeyError,
    InvalidPartError,
    NameParseError,
    NotFoundError,
    ProjectMismatchError,
    QualifyError,
    RateLimitError,
    SerializationError,
    TooFewPartsError,
    TransportError,
    WrongNumberOfPartsError,
    parse_name,
    qualify,
)
from .models import NamedDocument, RawDocument
from .runtime import (
    CallableTokenSource,
    FirestoreRESTTransport,
    ListDocumentsRequest,
    ListResponse,
    Page,
    StaticTokenSource,
    StreamState,
    TokenSource,
    fetch_page,
)

__version__ = "0.1.0"

__all__ = [
    # API
    "Database",
    "Collection",
    # Names
    "CollectionName",
    "DatabaseRoot",
    "DocumentKey",
    "DocumentName",
    "parse_name",
    "qualify",
    # Models
    "NamedDocument",
    "RawDocument",
    # Codec
    "from_document",
    "to_document",
    # Paging
    "ListDocumentsRequest",
    "ListResponse",
    "Page",
    "StreamState",
    "fetch_page",
    # Transport
    "FirestoreHandle",
    "FirestoreTransport",
    "FirestoreRESTTransport",
    "TokenSource",
    "StaticTokenSource",
    "CallableTokenSource",
    # Exceptions
    "FirestoreError",
    "NameParseError",
    "TooFewPartsError",
    "WrongNumberOfPartsError",
    "InvalidPartError",
    "QualifyError",
    "ProjectMismatchError",
    "CollectionMismatchError",
    "InvalidKeyError",
    "FetchError",
    "AlreadyExistsError",
    "NotFoundError",
    "FailedPreconditionError",
    "RateLimitError",
    "TransportError",
    "SerializationError",
    "DeserializationError",
]
