"""MongoDB persistence exceptions."""

from __future__ import annotations

from storefront_core.primitives.exceptions import (
    PersistenceError,
    StorageUnavailableError,
)


class MongoPersistenceError(PersistenceError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError, StorageUnavailableError):
    """Raised when connection to MongoDB fails or the server is unreachable."""


class MongoQueryError(MongoPersistenceError):
    """Raised when a query or compilation fails."""
