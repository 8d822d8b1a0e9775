"""REST runtime abstractions."""

from .auth import CallableTokenSource, StaticTokenSource, TokenSource
from .http_client import HTTPClient, error_for_status
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import FirestoreRESTHandle, FirestoreRESTTransport

__all__ = [
    "CallableTokenSource",
    "FirestoreRESTHandle",
    "FirestoreRESTTransport",
    "HTTPClient",
    "ResponseAdapter",
    "RestEndpointSpec",
    "RestRunner",
    "StaticTokenSource",
    "TokenSource",
    "error_for_status",
]
