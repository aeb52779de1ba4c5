"""Shared fixtures for filtering tests."""

from __future__ import annotations

import pytest

from storefront_filtering import (
    BooleanField,
    DerivedRangeField,
    EqualityField,
    FilterSchema,
    Range,
    RangeField,
    RangeKind,
    SubstringField,
    TextSearchField,
)
from storefront_specifications.operators_memory import build_default_registry


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def enquiry_schema() -> FilterSchema:
    return FilterSchema(
        "enquiries",
        [
            TextSearchField("search", ["name", "email", "subject", "message"]),
            EqualityField("status", choices=["pending", "completed"]),
            EqualityField("priority", choices=["low", "medium", "high", "urgent"]),
            SubstringField("city"),
            SubstringField("state"),
            RangeField(
                "createdAt",
                min_param="dateFrom",
                max_param="dateTo",
                kind=RangeKind.DATE,
            ),
        ],
    )


@pytest.fixture
def product_schema() -> FilterSchema:
    return FilterSchema(
        "products",
        [
            SubstringField("category"),
            BooleanField("featured"),
            RangeField("price", min_param="minPrice", max_param="maxPrice"),
            DerivedRangeField(
                "stockStatus",
                "stock",
                {
                    "out-of-stock": Range(gte=0, lte=0),
                    "low-stock": Range(gte=1, lte=10),
                    "in-stock": Range(gte=11),
                },
            ),
        ],
    )
