"""Paginated listing: page requests, single-page fetch and the lazy stream."""

from .definitions import ListDocumentsRequest, Page, StreamState
from .fetcher import fetch_page
from .stream import ListResponse

__all__ = [
    "ListDocumentsRequest",
    "ListResponse",
    "Page",
    "StreamState",
    "fetch_page",
]
