"""Common utility functions and helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    """Current UTC time truncated to the millisecond precision BSON stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def resolve_path(obj: Any, path: str) -> Any:
    """
    Resolve a dot-separated field path on a document or object.

    Supports nested mappings (``ratings.average``) and implicit list
    traversal (``items.name`` where ``items`` is a list returns
    ``[item.name for item in items]``). Missing parts resolve to ``None``.
    """
    parts = path.split(".")
    for i, part in enumerate(parts):
        if obj is None:
            return None
        if isinstance(obj, list | tuple):
            rest = ".".join(parts[i:])
            return [resolve_path(item, rest) for item in obj]
        obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
    return obj
