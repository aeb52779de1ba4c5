"""Application factory for the storefront admin API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from ...bootstrap import build_catalog, mongo_catalog
from ...settings import Settings, get_settings
from .errors import install_error_handlers
from .routers import build_enquiries_router, build_products_router

if TYPE_CHECKING:
    from storefront_core.ports.collection import IRecordCollection

logger = logging.getLogger("storefront.catalog")


def create_app(
    settings: Settings | None = None,
    *,
    products: IRecordCollection | None = None,
    enquiries: IRecordCollection | None = None,
) -> FastAPI:
    """
    Build the API application.

    With both collections given the catalog is wired immediately over them
    (tests, embedded use); otherwise the lifespan connects to MongoDB using
    *settings* and closes the connection on shutdown.
    """
    settings = settings or get_settings()
    logging.getLogger("storefront").setLevel(settings.log_level.upper())

    if (products is None) != (enquiries is None):
        raise ValueError("Pass both products and enquiries collections, or neither")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if products is not None:
            yield
            return
        catalog, connection = await mongo_catalog(settings)
        app.state.catalog = catalog
        logger.info("Storefront API started on database %r", settings.mongo_database)
        try:
            yield
        finally:
            connection.close()
            logger.info("MongoDB connection closed")

    app = FastAPI(title="Storefront Admin API", lifespan=lifespan)
    if products is not None and enquiries is not None:
        app.state.catalog = build_catalog(products, enquiries, settings)
    install_error_handlers(app)
    app.include_router(build_products_router())
    app.include_router(build_enquiries_router())
    return app
