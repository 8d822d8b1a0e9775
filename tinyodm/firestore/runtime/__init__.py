"""Runtime components: paginated listing and the REST transport."""

from .paging import ListDocumentsRequest, ListResponse, Page, StreamState, fetch_page
from .rest import (
    CallableTokenSource,
    FirestoreRESTTransport,
    StaticTokenSource,
    TokenSource,
)

__all__ = [
    "CallableTokenSource",
    "FirestoreRESTTransport",
    "ListDocumentsRequest",
    "ListResponse",
    "Page",
    "StaticTokenSource",
    "StreamState",
    "TokenSource",
    "fetch_page",
]
