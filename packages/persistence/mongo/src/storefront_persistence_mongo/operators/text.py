"""Full-text search node -> $text (answered by the collection's text index)."""

from __future__ import annotations

from typing import Any

from ..exceptions import MongoQueryError


def compile_text(data: dict[str, Any]) -> dict[str, Any]:
    """Compile an ``fts`` node; the declared fields live in the text index."""
    query = data.get("val")
    if not isinstance(query, str) or not query.strip():
        raise MongoQueryError("Text search requires a non-empty string")
    return {"$text": {"$search": query}}
