"""Tests for AggregationReporter and the dashboard report sets."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from storefront_catalog import (
    PRODUCTS,
    AggregationReporter,
    EnquiryReports,
    Priority,
    ProductReports,
    values_of,
)
from storefront_core import Bucket
from storefront_filtering import ConstraintInjector


@pytest.fixture
def reporter(enquiries, registry) -> AggregationReporter:
    return AggregationReporter(enquiries, registry)


@pytest.mark.asyncio
class TestAggregationReporter:
    async def test_monthly_keeps_most_recent_twelve(
        self, reporter, enquiries, stored_enquiry
    ) -> None:
        months = [(2023, m) for m in range(1, 13)] + [(2024, 1), (2024, 2)]
        for year, month in months:
            created = datetime(year, month, 15, tzinfo=timezone.utc)
            await enquiries.insert(stored_enquiry(createdAt=created))
        await enquiries.insert(
            stored_enquiry(createdAt=datetime(2024, 2, 20, tzinfo=timezone.utc))
        )

        buckets = await reporter.monthly("createdAt")

        assert len(buckets) == 12
        assert buckets[0] == Bucket(key=(2024, 2), count=2)
        assert buckets[1].key == (2024, 1)
        assert buckets[-1].key == (2023, 3)
        assert [b.key for b in buckets] == sorted((b.key for b in buckets), reverse=True)

    async def test_breakdown_follows_declared_order(
        self, reporter, enquiries, stored_enquiry
    ) -> None:
        for priority in ["urgent", "low", "urgent", "high"]:
            await enquiries.insert(stored_enquiry(priority=priority))

        buckets = await reporter.breakdown("priority", values_of(Priority))

        assert buckets == [
            Bucket("low", 1),
            Bucket("high", 1),
            Bucket("urgent", 2),
        ]

    async def test_top_n_is_count_descending(
        self, reporter, enquiries, stored_enquiry
    ) -> None:
        cities = ["Pune"] * 3 + ["Delhi"] * 5 + ["Agra"] + ["Chennai"] * 2
        for i, city in enumerate(cities):
            await enquiries.insert(stored_enquiry(i, city=city))

        buckets = await reporter.top_n("city", 3)

        assert buckets == [Bucket("Delhi", 5), Bucket("Pune", 3), Bucket("Chennai", 2)]

    async def test_reports_do_not_mutate(
        self, reporter, enquiries, stored_enquiry
    ) -> None:
        await enquiries.insert(stored_enquiry())
        before = await enquiries.find()

        await reporter.rollup("source")
        await reporter.monthly()

        assert await enquiries.find() == before


@pytest.mark.asyncio
async def test_enquiry_overview_shape(enquiries, registry, stored_enquiry) -> None:
    docs = [
        stored_enquiry(0, status="pending", priority="high", source="phone"),
        stored_enquiry(1, status="pending", priority="urgent", city="Delhi"),
        stored_enquiry(2, status="completed", priority="high", source="phone"),
        stored_enquiry(3, status="in-progress"),
    ]
    for doc in docs:
        await enquiries.insert(doc)

    stats = await EnquiryReports(AggregationReporter(enquiries, registry)).overview()
    body = stats.to_dict()

    assert body["overview"] == {
        "totalEnquiries": 4,
        "pendingCount": 2,
        "inProgressCount": 1,
        "completedCount": 1,
        "cancelledCount": 0,
    }
    assert body["priorityStats"] == [
        {"_id": "medium", "count": 1},
        {"_id": "high", "count": 2},
        {"_id": "urgent", "count": 1},
    ]
    assert body["cityStats"] == [
        {"_id": "Pune", "count": 3},
        {"_id": "Delhi", "count": 1},
    ]
    assert body["monthlyStats"] == [{"_id": {"year": 2024, "month": 3}, "count": 4}]
    assert body["sourceStats"] == [
        {"_id": "phone", "count": 2},
        {"_id": "website", "count": 2},
    ]


@pytest.mark.asyncio
async def test_product_overview_ignores_soft_deleted(
    products, registry, stored_product
) -> None:
    for i, (stock, category, featured) in enumerate(
        [(0, "Toys", False), (5, "Toys", True), (10, "Books", False), (11, "Toys", False)]
    ):
        await products.insert(
            stored_product(i, stock=stock, category=category, featured=featured)
        )
    await products.insert(
        stored_product(9, stock=0, category="Books", featured=True) | {"isActive": False}
    )
    reporter = AggregationReporter(
        products, registry, ConstraintInjector(registry, PRODUCTS.scope)
    )

    stats = await ProductReports(reporter).overview()

    assert stats.to_dict() == {
        "totalProducts": 4,
        "outOfStock": 1,
        "lowStock": 2,
        "featuredProducts": 1,
        "categories": [{"_id": "Toys", "count": 3}, {"_id": "Books", "count": 1}],
    }
