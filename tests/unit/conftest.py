"""Shared fixtures for unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest

from tinyodm.firestore.codec import encode_fields
from tinyodm.firestore.core import AlreadyExistsError, NotFoundError
from tinyodm.firestore.models import RawDocument
from tinyodm.firestore.runtime.paging import ListDocumentsRequest, Page

PROJECT = "my-project"
PREFIX = f"projects/{PROJECT}/databases/(default)/documents"


class FakeHandle:
    """Handle on FakeTransport; records every call."""

    def __init__(self, transport: FakeTransport) -> None:
        self._t = transport

    async def list_documents(self, request: ListDocumentsRequest) -> Page:
        self._t.list_requests.append(request)
        if self._t.gate is not None:
            await self._t.gate.wait()
        if not self._t.pages:
            return Page()
        page = self._t.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page

    async def get_document(self, name: str) -> RawDocument:
        self._t.calls.append(("get", name))
        if name not in self._t.documents:
            raise NotFoundError(f"Document not found: {name}")
        return self._t.documents[name]

    async def create_document(
        self,
        parent: str,
        collection_id: str,
        document: RawDocument,
        document_id: str | None = None,
    ) -> RawDocument:
        self._t.calls.append(("create", parent, collection_id, document_id))
        if document_id is None:
            self._t.next_id += 1
            document_id = f"auto{self._t.next_id}"
        name = f"{parent}/{collection_id}/{document_id}"
        if name in self._t.documents:
            raise AlreadyExistsError(f"Document already exists: {name}")
        stored = document.with_name(name)
        self._t.documents[name] = stored
        return stored

    async def update_document(
        self, document: RawDocument, exists: bool | None = None
    ) -> RawDocument:
        self._t.calls.append(("update", document.name, exists))
        present = document.name in self._t.documents
        if exists is False and present:
            raise AlreadyExistsError(f"Document already exists: {document.name}")
        if exists is True and not present:
            raise NotFoundError(f"Document not found: {document.name}")
        self._t.documents[document.name] = document
        return document

    async def delete_document(self, name: str, exists: bool | None = None) -> None:
        self._t.calls.append(("delete", name, exists))
        if exists and name not in self._t.documents:
            raise NotFoundError(f"Document not found: {name}")
        self._t.documents.pop(name, None)


class FakeTransport:
    """In-memory transport serving scripted list pages and a document dict."""

    def __init__(self, pages: list[Page | Exception] | None = None) -> None:
        self.pages: list[Page | Exception] = list(pages or [])
        self.list_requests: list[ListDocumentsRequest] = []
        self.documents: dict[str, RawDocument] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.gate: asyncio.Event | None = None
        self.next_id = 0
        self.active = 0
        self.max_active = 0
        self.closed = False
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def acquire(self):
        async with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            try:
                yield FakeHandle(self)
            finally:
                self.active -= 1

    async def close(self) -> None:
        self.closed = True


def _make_document(name: str, values: dict[str, Any]) -> RawDocument:
    return RawDocument(name=name, fields=encode_fields(values))


@pytest.fixture
def make_document() -> Callable[..., RawDocument]:
    """Factory for RawDocuments: make_document("people/jack", age=3)."""

    def factory(path: str = "", **values: Any) -> RawDocument:
        name = f"{PREFIX}/{path}" if path else ""
        return _make_document(name, values)

    return factory


@pytest.fixture
def make_page(make_document) -> Callable[..., Page]:
    """Factory for Pages: make_page(["people/a", "people/b"], "t1")."""

    def factory(paths: list[str], token: str = "") -> Page:
        docs = tuple(make_document(path, id=path.rsplit("/", 1)[-1]) for path in paths)
        return Page(documents=docs, next_page_token=token)

    return factory


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def transport_factory() -> Callable[..., FakeTransport]:
    return FakeTransport
