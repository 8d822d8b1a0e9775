"""Data models for documents and their wire representation."""

from .document import NamedDocument, RawDocument

__all__ = [
    "NamedDocument",
    "RawDocument",
]
