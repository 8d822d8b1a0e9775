"""High-level API: Database and typed Collection facades."""

from .collection import Collection
from .database import Database

__all__ = ["Collection", "Database"]
