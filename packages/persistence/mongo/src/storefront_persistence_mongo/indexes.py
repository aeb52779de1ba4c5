"""Index definition helpers — compound and text indexes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .connection import MongoConnectionManager


async def create_compound_index(
    connection: MongoConnectionManager,
    collection: str,
    keys: Sequence[tuple[str, int]],
    *,
    name: str | None = None,
    unique: bool = False,
) -> str:
    """Create a compound index. keys: [(field, 1|(-1)), ...]. Returns index name."""
    coll = connection.database().get_collection(collection)
    return await coll.create_index(list(keys), name=name, unique=unique)


async def create_text_index(
    connection: MongoConnectionManager,
    collection: str,
    fields: Sequence[str],
    *,
    name: str | None = None,
) -> str:
    """Create the collection's text index over *fields* (one per collection)."""
    coll = connection.database().get_collection(collection)
    return await coll.create_index(
        [(f, "text") for f in fields], name=name or f"{collection}_text"
    )
