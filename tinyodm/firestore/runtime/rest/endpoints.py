"""Firestore v1 REST endpoint definitions and adapters.

Each endpoint is a RestEndpointSpec (how to build the request) plus a
ResponseAdapter (how to turn the JSON body into library types). Resource
names are used directly as URL paths below the versioned base URL:

    GET    {parent}/{collectionId}?pageSize=&pageToken=&orderBy=    list
    GET    {name}                                                   get
    POST   {parent}/{collectionId}?documentId=                      create
    PATCH  {name}?currentDocument.exists=                           update / upsert
    DELETE {name}?currentDocument.exists=                           delete
"""

from __future__ import annotations

from typing import Any

from ...core.exceptions import FetchError
from ...models import RawDocument
from ..paging.definitions import ListDocumentsRequest, Page
from .runner import ResponseAdapter, RestEndpointSpec


def _precondition_query(params: dict[str, Any]) -> dict[str, Any]:
    exists: bool | None = params.get("exists")
    if exists is None:
        return {}
    return {"currentDocument.exists": "true" if exists else "false"}


def _document_body(params: dict[str, Any]) -> dict[str, Any]:
    document: RawDocument = params["document"]
    return {"fields": document.fields}


def _parse_document(response: Any) -> RawDocument:
    if not isinstance(response, dict):
        raise FetchError(f"Invalid response format: expected dict, got {type(response)}")
    return RawDocument.model_validate(response)


# ----------------------
# List
# ----------------------
def build_list_path(params: dict[str, Any]) -> str:
    request: ListDocumentsRequest = params["request"]
    return f"{request.parent}/{request.collection_id}"


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    request: ListDocumentsRequest = params["request"]
    q: dict[str, Any] = {}
    if request.page_size:
        q["pageSize"] = request.page_size
    if request.page_token:
        q["pageToken"] = request.page_token
    if request.order_by:
        q["orderBy"] = request.order_by
    return q


LIST_DOCUMENTS = RestEndpointSpec(
    id="list_documents",
    method="GET",
    build_path=build_list_path,
    build_query=build_list_query,
)


class ListDocumentsAdapter(ResponseAdapter):
    """Parses ``{"documents": [...], "nextPageToken": "..."}`` into a Page."""

    def parse(self, response: Any, params: dict[str, Any]) -> Page:
        if not isinstance(response, dict):
            raise FetchError(f"Invalid response format: expected dict, got {type(response)}")

        # Both keys are omitted from the body when empty
        documents = tuple(_parse_document(raw) for raw in response.get("documents", []))
        return Page(documents=documents, next_page_token=response.get("nextPageToken", ""))


# ----------------------
# Get
# ----------------------
GET_DOCUMENT = RestEndpointSpec(
    id="get_document",
    method="GET",
    build_path=lambda p: p["name"],
)


class DocumentAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> RawDocument:
        return _parse_document(response)


# ----------------------
# Create
# ----------------------
def build_create_query(params: dict[str, Any]) -> dict[str, Any]:
    document_id = params.get("document_id")
    return {"documentId": document_id} if document_id else {}


CREATE_DOCUMENT = RestEndpointSpec(
    id="create_document",
    method="POST",
    build_path=lambda p: f"{p['parent']}/{p['collection_id']}",
    build_query=build_create_query,
    build_body=_document_body,
)


# ----------------------
# Update
# ----------------------
UPDATE_DOCUMENT = RestEndpointSpec(
    id="update_document",
    method="PATCH",
    build_path=lambda p: p["document"].name,
    build_query=_precondition_query,
    build_body=_document_body,
)


# ----------------------
# Delete
# ----------------------
DELETE_DOCUMENT = RestEndpointSpec(
    id="delete_document",
    method="DELETE",
    build_path=lambda p: p["name"],
    build_query=_precondition_query,
)


class EmptyAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> None:
        return None
