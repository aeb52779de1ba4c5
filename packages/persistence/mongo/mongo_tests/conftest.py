"""Test configuration for MongoDB persistence package."""

from __future__ import annotations

import pytest
from mongomock_motor import AsyncMongoMockClient

from storefront_persistence_mongo import MongoConnectionManager


@pytest.fixture
async def mongo_connection():
    """A connection manager backed by an in-process mongomock-motor client."""
    connection = MongoConnectionManager("mongodb://mock:27017", "test_db")
    connection._client = AsyncMongoMockClient(default_database_name="test_db")

    async def _mock_connect():
        return connection._client

    connection.connect = _mock_connect

    yield connection
