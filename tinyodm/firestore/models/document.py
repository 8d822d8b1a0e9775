"""Document data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..core.names import DocumentName

T = TypeVar("T")


class RawDocument(BaseModel):
    """Document as it travels over the wire.

    ``fields`` holds Firestore ``Value`` JSON (``{"stringValue": ...}`` etc.),
    see ``tinyodm.firestore.codec`` for the conversion to Python values.
    """

    name: str = ""
    fields: dict[str, Any] = Field(default_factory=dict)
    create_time: datetime | None = Field(default=None, alias="createTime")
    update_time: datetime | None = Field(default=None, alias="updateTime")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def with_name(self, name: str) -> RawDocument:
        return self.model_copy(update={"name": name})


@dataclass(frozen=True)
class NamedDocument(Generic[T]):
    """A decoded document value together with its fully-qualified name."""

    name: DocumentName
    value: T
