"""storefront-persistence-mongo — MongoDB adapter for the storefront query engine."""

from __future__ import annotations

from .collection import MongoRecordCollection
from .connection import MongoConnectionManager
from .exceptions import MongoConnectionError, MongoPersistenceError, MongoQueryError
from .indexes import create_compound_index, create_text_index
from .query_builder import MongoQueryBuilder
from .serialization import from_bson, to_bson, to_object_id

__all__ = [
    "MongoConnectionError",
    "MongoConnectionManager",
    "MongoPersistenceError",
    "MongoQueryBuilder",
    "MongoQueryError",
    "MongoRecordCollection",
    "create_compound_index",
    "create_text_index",
    "from_bson",
    "to_bson",
    "to_object_id",
]
