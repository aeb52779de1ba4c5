"""MongoConnectionManager — one Motor client per process, opened lazily."""

from __future__ import annotations

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from .exceptions import MongoConnectionError

logger = logging.getLogger("storefront.mongo")

APP_NAME = "storefront-admin"


class MongoConnectionManager:
    """Own the Motor client for one database.

    Motor connects in the background, so ``connect()`` only validates the
    URL and builds the pool; an unreachable server surfaces on the first
    query (bounded by *server_selection_timeout_ms*) or through
    :meth:`health_check`.
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        database: str = "storefront",
        *,
        server_selection_timeout_ms: int = 5000,
        max_pool_size: int = 50,
        **client_options: Any,
    ) -> None:
        self._url = url
        self._database = database
        self._options: dict[str, Any] = {
            "appname": APP_NAME,
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
            "maxPoolSize": max_pool_size,
            **client_options,
        }
        self._client: AsyncIOMotorClient[Any] | None = None

    async def connect(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            try:
                self._client = AsyncIOMotorClient(self._url, **self._options)
            except (ConfigurationError, ValueError) as e:
                raise MongoConnectionError(f"Invalid MongoDB settings: {e}") from e
            logger.info("MongoDB client opened for database %r", self._database)
        return self._client

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            raise MongoConnectionError("MongoDB client is not open; call connect()")
        return self._client

    @property
    def database_name(self) -> str:
        return self._database

    def database(self) -> AsyncIOMotorDatabase[Any]:
        return self.client.get_database(self._database)

    def close(self) -> None:
        """Release the pool. Safe to call when never connected."""
        client, self._client = self._client, None
        if client is not None:
            client.close()

    async def health_check(self) -> bool:
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            logger.warning("MongoDB ping failed for %r", self._database, exc_info=True)
            return False
        return True
