"""Tests for settings and catalog wiring."""

from __future__ import annotations

import pytest

from storefront_catalog import Settings, build_catalog, ensure_indexes, in_memory_catalog
from storefront_core import InMemoryCollection, TimeoutCollection


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("STOREFRONT_MONGO_DATABASE", "shop_admin")
    monkeypatch.setenv("STOREFRONT_MAX_PAGE_SIZE", "50")

    settings = Settings()

    assert settings.mongo_database == "shop_admin"
    assert settings.max_page_size == 50
    assert settings.default_page_size == 10


def test_settings_reject_inconsistent_page_sizes() -> None:
    with pytest.raises(ValueError):
        Settings(default_page_size=20, max_page_size=10)


def test_build_catalog_applies_settings() -> None:
    products, enquiries = InMemoryCollection(), InMemoryCollection()

    catalog = build_catalog(
        products,
        enquiries,
        Settings(storage_timeout=2.5, default_page_size=5, max_page_size=20),
    )

    assert isinstance(catalog.products.collection, TimeoutCollection)
    assert catalog.products.collection.inner is products
    assert catalog.enquiries.collection.inner is enquiries
    assert catalog.enquiries.parser.pagination.default_limit == 5
    assert catalog.enquiries.parser.pagination.max_limit == 20


@pytest.mark.asyncio
async def test_in_memory_catalog_round_trip(new_product) -> None:
    catalog = in_memory_catalog()

    created = await catalog.products.create(new_product())
    page = await catalog.products.list({"search": "lamp"})

    assert [item["id"] for item in page.items] == [created.id]


class _RecordingCollection:
    def __init__(self, log: list) -> None:
        self._log = log

    async def create_index(self, keys, **kwargs):
        self._log.append((keys, kwargs))
        return kwargs.get("name") or "idx"


class _RecordingDatabase:
    def __init__(self) -> None:
        self.calls: dict[str, list] = {}

    def get_collection(self, name: str) -> _RecordingCollection:
        return _RecordingCollection(self.calls.setdefault(name, []))


class _RecordingConnection:
    database_name = "storefront"

    def __init__(self) -> None:
        self.db = _RecordingDatabase()

    def database(self) -> _RecordingDatabase:
        return self.db


@pytest.mark.asyncio
async def test_ensure_indexes() -> None:
    connection = _RecordingConnection()

    await ensure_indexes(connection, Settings())

    enquiry_indexes = [keys for keys, _ in connection.db.calls["enquiries"]]
    assert [("name", "text"), ("email", "text"), ("subject", "text")] in enquiry_indexes
    assert [("status", 1), ("priority", 1), ("createdAt", -1)] in enquiry_indexes
    product_indexes = [keys for keys, _ in connection.db.calls["products"]]
    assert product_indexes == [
        [("name", "text"), ("category", "text"), ("description", "text")]
    ]
