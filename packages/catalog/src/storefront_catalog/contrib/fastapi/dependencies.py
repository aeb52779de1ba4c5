"""FastAPI dependencies resolving catalog services from application state."""

from __future__ import annotations

from fastapi import Request

from ...bootstrap import Catalog
from ...services import EnquiryService, ProductService


def get_catalog(request: Request) -> Catalog:
    catalog: Catalog | None = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise RuntimeError("Catalog is not initialised; run the app lifespan first")
    return catalog


def get_products(request: Request) -> ProductService:
    return get_catalog(request).products


def get_enquiries(request: Request) -> EnquiryService:
    return get_catalog(request).enquiries
