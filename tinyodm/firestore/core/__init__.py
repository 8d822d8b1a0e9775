"""Core components."""

from .base import FirestoreHandle, FirestoreTransport
from .exceptions import (
    AlreadyExistsError,
    CollectionMismatchError,
    DeserializationError,
    FailedPreconditionError,
    FetchError,
    FirestoreError,
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
)
from .names import (
    CollectionName,
    DatabaseRoot,
    DocumentKey,
    DocumentName,
    parse_name,
    qualify,
)

__all__ = [
    "FirestoreHandle",
    "FirestoreTransport",
    # Names
    "CollectionName",
    "DatabaseRoot",
    "DocumentKey",
    "DocumentName",
    "parse_name",
    "qualify",
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
