"""Conversion between Python values and Firestore documents.

Firestore's REST surface encodes every field as a typed ``Value`` object
(``{"stringValue": "x"}``, ``{"integerValue": "3"}``, ...). This module maps
those to plain Python values and back, and validates decoded documents into
application types with pydantic.

Supported types:
    None, bool, int (64-bit), float, str, bytes, datetime, Enum (by value),
    DocumentName (as a reference), mappings with str keys, lists/tuples
    (not directly nested, which Firestore rejects), pydantic models.
"""

from __future__ import annotations

import base64
import math
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import DeserializationError, NameParseError, SerializationError
from .core.names import DocumentName
from .models import RawDocument

T = TypeVar("T")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_SPECIAL_DOUBLES = {"NaN": math.nan, "Infinity": math.inf, "-Infinity": -math.inf}


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _model_items(value: BaseModel) -> dict[str, Any]:
    # Shallow, so DocumentName fields stay references instead of becoming maps
    return {
        field.alias or name: getattr(value, name)
        for name, field in type(value).model_fields.items()
    }


def encode_value(value: Any) -> dict[str, Any]:
    """Encode a Python value as a Firestore ``Value``.

    Raises:
        SerializationError: Unsupported type, out-of-range int, nested array
    """
    if value is None:
        return {"nullValue": "NULL_VALUE"}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, Enum):
        return encode_value(value.value)
    if isinstance(value, int):
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise SerializationError(f"Integer out of 64-bit range: {value}")
        return {"integerValue": str(value)}
    if isinstance(value, float):
        if math.isnan(value):
            return {"doubleValue": "NaN"}
        if math.isinf(value):
            return {"doubleValue": "Infinity" if value > 0 else "-Infinity"}
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, bytes | bytearray):
        return {"bytesValue": base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, datetime):
        return {"timestampValue": _format_timestamp(value)}
    if isinstance(value, DocumentName):
        return {"referenceValue": value.name}
    if isinstance(value, BaseModel):
        return {"mapValue": {"fields": encode_fields(_model_items(value))}}
    if isinstance(value, Mapping):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, list | tuple):
        values = []
        for item in value:
            if isinstance(item, list | tuple):
                raise SerializationError("Arrays cannot directly contain arrays")
            values.append(encode_value(item))
        return {"arrayValue": {"values": values}}
    raise SerializationError(f"Unsupported value type: {type(value).__name__}")


def encode_fields(values: Mapping[Any, Any]) -> dict[str, dict[str, Any]]:
    fields: dict[str, dict[str, Any]] = {}
    for key, item in values.items():
        if not isinstance(key, str):
            raise SerializationError(f"Field names must be strings, got {type(key).__name__}")
        fields[key] = encode_value(item)
    return fields


def decode_value(value: Mapping[str, Any]) -> Any:
    """Decode a Firestore ``Value`` into a Python value.

    Raises:
        DeserializationError: Unknown or malformed value
    """
    if len(value) != 1:
        raise DeserializationError(f"Value must have exactly one type key, got {sorted(value)}")

    (kind, raw), = value.items()
    try:
        if kind == "nullValue":
            return None
        if kind == "booleanValue":
            return bool(raw)
        if kind == "integerValue":
            return int(raw)
        if kind == "doubleValue":
            if isinstance(raw, str):
                return _SPECIAL_DOUBLES[raw]
            return float(raw)
        if kind == "timestampValue":
            return datetime.fromisoformat(raw)
        if kind == "stringValue":
            return raw
        if kind == "bytesValue":
            return base64.b64decode(raw)
        if kind == "referenceValue":
            return DocumentName.parse(raw)
        if kind == "geoPointValue":
            return {"latitude": raw.get("latitude", 0.0), "longitude": raw.get("longitude", 0.0)}
        if kind == "arrayValue":
            return [decode_value(item) for item in raw.get("values", [])]
        if kind == "mapValue":
            return decode_fields(raw.get("fields", {}))
    except (AttributeError, KeyError, TypeError, ValueError, NameParseError) as e:
        raise DeserializationError(f"Malformed {kind}: {raw!r}") from e

    raise DeserializationError(f"Unknown value type: {kind}")


def decode_fields(fields: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
    return {key: decode_value(item) for key, item in fields.items()}


def to_document(value: Any) -> RawDocument:
    """Convert a pydantic model or mapping into an unnamed RawDocument.

    Raises:
        SerializationError: Value is not a model or mapping, or holds an unsupported type
    """
    if isinstance(value, BaseModel):
        data = _model_items(value)
    elif isinstance(value, Mapping):
        data = value
    else:
        raise SerializationError(
            f"Documents must be pydantic models or mappings, got {type(value).__name__}"
        )
    return RawDocument(fields=encode_fields(data))


def from_document(document: RawDocument, model: type[T]) -> T:
    """Decode a RawDocument and validate it as ``model``.

    ``model`` may be a pydantic model, a dataclass, a TypedDict or ``dict``.

    Raises:
        DeserializationError: Malformed fields or validation failure
    """
    try:
        data = decode_fields(document.fields)
    except DeserializationError as e:
        raise DeserializationError(str(e), name=document.name) from e

    if model is dict:
        return data  # type: ignore[return-value]

    try:
        return TypeAdapter(model).validate_python(data)
    except PydanticValidationError as e:
        type_name = getattr(model, "__name__", repr(model))
        raise DeserializationError(
            f"Could not convert document {document.name or '<unnamed>'} to {type_name}: {e}",
            name=document.name,
        ) from e
