"""Storage document <-> BSON document round-trip (identifier, datetime, Decimal)."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from bson import Decimal128, ObjectId

from .exceptions import MongoPersistenceError


def to_object_id(value: Any) -> Any:
    """Convert a 24-hex identifier string to ``ObjectId``; pass others through."""
    if isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def serialize_value(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, datetime) and value.tzinfo is not None:
        # BSON dates carry no zone; naive values are read as UTC.
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [serialize_value(v) for v in value]
    return value


def _deserialize_value(value: Any) -> Any:
    """Convert BSON types back to Python types."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, datetime):
        # BSON dates are UTC; drivers hand them back naive by default.
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, dict):
        return {k: _deserialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(v) for v in value]
    return value


def to_bson(document: dict[str, Any]) -> dict[str, Any]:
    """Convert a storage document to a BSON-ready one (``id`` -> ``_id``)."""
    if not isinstance(document, dict):
        raise MongoPersistenceError("Document must be a dict")
    data = {k: serialize_value(v) for k, v in document.items() if k != "id"}
    if document.get("id"):
        data["_id"] = to_object_id(document["id"])
    return data


def from_bson(document: dict[str, Any]) -> dict[str, Any]:
    """Convert a BSON document to a storage document (``_id`` -> ``id``)."""
    if not isinstance(document, dict):
        raise MongoPersistenceError("Document must be a dict")
    data = {k: _deserialize_value(v) for k, v in document.items() if k != "_id"}
    if "_id" in document:
        data["id"] = str(document["_id"])
    return data
