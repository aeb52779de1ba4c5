"""Shared fixtures for catalog tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from storefront_catalog import Enquiry, EnquiryService, Product, ProductService
from storefront_core import InMemoryCollection, to_document
from storefront_specifications.operators_memory import build_default_registry

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def enquiry_body(**overrides: Any) -> dict[str, Any]:
    body = {
        "name": "Asha Rao",
        "email": "Asha.Rao@Example.com",
        "phone": "9876543210",
        "address": "12 MG Road",
        "city": "Pune",
        "state": "Maharashtra",
        "pincode": "411001",
        "subject": "Bulk order",
        "message": "Need 40 units of the desk lamp",
    }
    body.update(overrides)
    return body


def product_body(**overrides: Any) -> dict[str, Any]:
    body = {
        "name": "Desk Lamp",
        "description": "Adjustable LED desk lamp",
        "price": 1499.0,
        "category": "Lighting",
        "image": "https://cdn.example.com/lamp.png",
        "stock": 25,
    }
    body.update(overrides)
    return body


def enquiry_document(minutes: int = 0, **overrides: Any) -> dict[str, Any]:
    """Stored enquiry created *minutes* after BASE_TIME."""
    created = overrides.pop("createdAt", BASE_TIME + timedelta(minutes=minutes))
    record = Enquiry.model_validate(enquiry_body(**overrides))
    return to_document(
        record.model_copy(update={"created_at": created, "updated_at": created}),
        include_id=False,
    )


def product_document(minutes: int = 0, **overrides: Any) -> dict[str, Any]:
    created = overrides.pop("createdAt", BASE_TIME + timedelta(minutes=minutes))
    record = Product.model_validate(product_body(**overrides))
    return to_document(
        record.model_copy(update={"created_at": created, "updated_at": created}),
        include_id=False,
    )


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def enquiries() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture
def products() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture
def enquiry_service(enquiries: InMemoryCollection, registry) -> EnquiryService:
    return EnquiryService(enquiries, registry)


@pytest.fixture
def product_service(products: InMemoryCollection, registry) -> ProductService:
    return ProductService(products, registry)


@pytest.fixture
def new_enquiry():
    return enquiry_body


@pytest.fixture
def new_product():
    return product_body


@pytest.fixture
def stored_enquiry():
    return enquiry_document


@pytest.fixture
def stored_product():
    return product_document
