"""Wiring helpers that assemble catalog services over a storage backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from storefront_core.adapters.decorators import TimeoutCollection
from storefront_core.adapters.memory import InMemoryCollection
from storefront_persistence_mongo import (
    MongoConnectionManager,
    MongoRecordCollection,
    create_compound_index,
    create_text_index,
)
from storefront_specifications.operators_memory import build_default_registry

from .resources import ENQUIRIES, PRODUCTS
from .services import EnquiryService, ProductService
from .settings import Settings

if TYPE_CHECKING:
    from storefront_core.ports.collection import IRecordCollection
    from storefront_specifications.evaluator import MemoryOperatorRegistry

logger = logging.getLogger("storefront.catalog")


@dataclass
class Catalog:
    products: ProductService
    enquiries: EnquiryService


def build_catalog(
    products: IRecordCollection,
    enquiries: IRecordCollection,
    settings: Settings,
    *,
    registry: MemoryOperatorRegistry | None = None,
) -> Catalog:
    """Services over the given collections, each call bounded by the timeout."""
    registry = registry or build_default_registry()
    limits = {
        "default_limit": settings.default_page_size,
        "max_limit": settings.max_page_size,
    }
    return Catalog(
        products=ProductService(
            TimeoutCollection(products, settings.storage_timeout), registry, **limits
        ),
        enquiries=EnquiryService(
            TimeoutCollection(enquiries, settings.storage_timeout), registry, **limits
        ),
    )


def in_memory_catalog(settings: Settings | None = None) -> Catalog:
    return build_catalog(InMemoryCollection(), InMemoryCollection(), settings or Settings())


async def ensure_indexes(connection: MongoConnectionManager, settings: Settings) -> None:
    """Create the text and compound indexes the list queries rely on."""
    await create_text_index(
        connection, settings.enquiries_collection, ENQUIRIES.text_fields
    )
    await create_compound_index(
        connection,
        settings.enquiries_collection,
        [("status", 1), ("priority", 1), ("createdAt", -1)],
    )
    await create_text_index(
        connection, settings.products_collection, PRODUCTS.text_fields
    )
    logger.info("Indexes ensured on %r", connection.database_name)


async def mongo_catalog(settings: Settings) -> tuple[Catalog, MongoConnectionManager]:
    """Connect to MongoDB and build services over its collections.

    The caller owns the returned connection and must close it.
    """
    connection = MongoConnectionManager(settings.mongo_url, settings.mongo_database)
    await connection.connect()
    await ensure_indexes(connection, settings)
    catalog = build_catalog(
        MongoRecordCollection(connection, settings.products_collection),
        MongoRecordCollection(connection, settings.enquiries_collection),
        settings,
    )
    return catalog, connection
