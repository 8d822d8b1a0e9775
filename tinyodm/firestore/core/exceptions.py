"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .names import CollectionName, DocumentName


class FirestoreError(Exception):
    """Base exception for all library errors."""

    pass


class NameParseError(FirestoreError, ValueError):
    """Malformed resource name string."""

    def __init__(self, message: str, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value


class TooFewPartsError(NameParseError):
    """Resource name has fewer segments than the shape requires."""

    def __init__(self, count: int, value: str | None = None) -> None:
        super().__init__(f"Too few parts in resource name: {count}", value=value)
        self.count = count


class WrongNumberOfPartsError(NameParseError):
    """Segment count has the wrong parity for a collection or document name."""

    def __init__(self, count: int, value: str | None = None) -> None:
        super().__init__(f"Wrong number of parts in resource name: {count}", value=value)
        self.count = count


class InvalidPartError(NameParseError):
    """A fixed marker segment is wrong, or a path segment is empty."""

    def __init__(self, index: int, value: str | None = None) -> None:
        super().__init__(f"Invalid part at index {index} of resource name", value=value)
        self.index = index


class QualifyError(FirestoreError):
    """Document key does not belong to the target collection.

    Raised before any request is issued, so nothing has been written or read.
    """

    def __init__(
        self,
        message: str,
        document: DocumentName | None = None,
        collection: CollectionName | None = None,
    ) -> None:
        super().__init__(message)
        self.document = document
        self.collection = collection


class ProjectMismatchError(QualifyError):
    """Document belongs to a different project."""

    pass


class CollectionMismatchError(QualifyError):
    """Document belongs to a different collection chain in the same project."""

    pass


class InvalidKeyError(FirestoreError, ValueError):
    """Bare document id is empty or contains a slash."""

    def __init__(self, message: str, key: str) -> None:
        super().__init__(message)
        self.key = key


class FetchError(FirestoreError):
    """Error reported by the store or the transport."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status = status


class AlreadyExistsError(FetchError):
    """Write precondition failed: the document already exists."""

    def __init__(self, message: str, status: str | None = "ALREADY_EXISTS") -> None:
        super().__init__(message, status_code=409, status=status)


class NotFoundError(FetchError):
    """Document (or its precondition target) does not exist."""

    def __init__(self, message: str, status: str | None = "NOT_FOUND") -> None:
        super().__init__(message, status_code=404, status=status)


class FailedPreconditionError(FetchError):
    """Server rejected the request because a precondition did not hold."""

    pass


class RateLimitError(FetchError):
    """Store quota or rate limit exceeded."""

    def __init__(self, message: str, retry_after: int = 60) -> None:
        super().__init__(message, status_code=429, status="RESOURCE_EXHAUSTED")
        self.retry_after = retry_after


class TransportError(FetchError):
    """Connection-level failure; the request may not have reached the store."""

    pass


class SerializationError(FirestoreError):
    """Value could not be converted into a document."""

    pass


class DeserializationError(FirestoreError):
    """Document could not be converted into the requested type."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name
