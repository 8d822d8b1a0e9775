"""Paging request and result structures.

This module defines the data structures passed between the stream engine,
the page fetcher and the transport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ...models import RawDocument


@dataclass(frozen=True)
class ListDocumentsRequest:
    """A single list call.

    Attributes:
        parent: Resource name of the parent document or database root
        collection_id: Leaf id of the collection being listed
        page_size: Maximum documents per page (0 lets the server choose)
        order_by: Ordering expression, e.g. ``"age desc"`` ("" for unspecified)
        page_token: Continuation token from the previous page (None on the first call)
    """

    parent: str
    collection_id: str
    page_size: int = 0
    order_by: str = ""
    page_token: str | None = None

    def __post_init__(self) -> None:
        """Validate request configuration."""
        if self.page_size < 0:
            raise ValueError("page_size must be >= 0")
        if not self.collection_id:
            raise ValueError("collection_id must be non-empty")


@dataclass(frozen=True)
class Page:
    """One page of list results.

    Attributes:
        documents: Raw documents in server order
        next_page_token: Token for the next page; "" means there are no more pages
    """

    documents: tuple[RawDocument, ...] = field(default_factory=tuple)
    next_page_token: str = ""

    @property
    def is_last(self) -> bool:
        return not self.next_page_token


class StreamState(Enum):
    """States of a ListResponse."""

    DRAINING = "draining"
    AWAITING_FETCH = "awaiting_fetch"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
