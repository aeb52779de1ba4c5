"""AggregationReporter — grouped counts for dashboard statistics.

Every report is a read-only query. Reports in one report set are issued as
independent sequential calls and are not mutually consistent under
concurrent writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from storefront_core.ports.collection import Bucket, GroupKey, GroupOrder, GroupQuery
from storefront_specifications.ast import AttributeSpecification
from storefront_specifications.base import AndSpecification
from storefront_specifications.operators import SpecificationOperator

from .enums import EnquiryStatus, Priority, StockStatus, values_of
from .records import STOCK_STATUS_RANGES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from storefront_core.domain.specification import ISpecification
    from storefront_core.ports.collection import IRecordCollection
    from storefront_filtering.injector import ConstraintInjector
    from storefront_specifications.evaluator import MemoryOperatorRegistry

logger = logging.getLogger("storefront.reporting")


def _bucket_dicts(buckets: Sequence[Bucket]) -> list[dict[str, Any]]:
    return [{"_id": b.key, "count": b.count} for b in buckets]


class AggregationReporter:
    """Generic grouped-count reports over one collection."""

    def __init__(
        self,
        collection: IRecordCollection,
        registry: MemoryOperatorRegistry,
        injector: ConstraintInjector | None = None,
    ) -> None:
        if registry is None:
            raise ValueError("registry parameter is required.")
        self.collection = collection
        self.registry = registry
        self.injector = injector

    def where(self, **equals: Any) -> ISpecification | None:
        """Equality criteria with the mandatory scope applied."""
        conditions = [
            AttributeSpecification(f, SpecificationOperator.EQ, v, registry=self.registry)
            for f, v in equals.items()
        ]
        spec: ISpecification | None = None
        if len(conditions) == 1:
            spec = conditions[0]
        elif conditions:
            spec = AndSpecification(*conditions)
        return self.scoped(spec)

    def scoped(self, spec: ISpecification | None) -> ISpecification | None:
        return self.injector.inject(spec) if self.injector is not None else spec

    async def count(self, criteria: ISpecification | None = None) -> int:
        return await self.collection.count(criteria)

    async def breakdown(
        self,
        field: str,
        declared: Sequence[str],
        criteria: ISpecification | None = None,
    ) -> list[Bucket]:
        """Count per value of an enumerated field, in declared value order.

        Only values that occur are returned.
        """
        buckets = await self.collection.group_count(
            GroupQuery(keys=(GroupKey.of(field),), criteria=criteria)
        )
        rank = {value: i for i, value in enumerate(declared)}
        return sorted(buckets, key=lambda b: rank.get(b.key, len(rank)))

    async def top_n(
        self, field: str, n: int = 10, criteria: ISpecification | None = None
    ) -> list[Bucket]:
        return await self.collection.group_count(
            GroupQuery(
                keys=(GroupKey.of(field),),
                criteria=criteria,
                order=GroupOrder.COUNT_DESC,
                limit=n,
            )
        )

    async def monthly(
        self,
        field: str = "createdAt",
        months: int = 12,
        criteria: ISpecification | None = None,
    ) -> list[Bucket]:
        """(year, month) buckets, most recent first."""
        return await self.collection.group_count(
            GroupQuery(
                keys=(GroupKey.year_of(field), GroupKey.month_of(field)),
                criteria=criteria,
                order=GroupOrder.KEY_DESC,
                limit=months,
            )
        )

    async def rollup(
        self, field: str, criteria: ISpecification | None = None
    ) -> list[Bucket]:
        """Count per value, largest group first."""
        return await self.collection.group_count(
            GroupQuery(
                keys=(GroupKey.of(field),),
                criteria=criteria,
                order=GroupOrder.COUNT_DESC,
            )
        )


@dataclass(frozen=True)
class EnquiryStats:
    total: int
    by_status: dict[str, int]
    priority: list[Bucket]
    cities: list[Bucket]
    monthly: list[Bucket]
    sources: list[Bucket]

    def to_dict(self) -> dict[str, Any]:
        return {
            "overview": {
                "totalEnquiries": self.total,
                "pendingCount": self.by_status[EnquiryStatus.PENDING.value],
                "inProgressCount": self.by_status[EnquiryStatus.IN_PROGRESS.value],
                "completedCount": self.by_status[EnquiryStatus.COMPLETED.value],
                "cancelledCount": self.by_status[EnquiryStatus.CANCELLED.value],
            },
            "priorityStats": _bucket_dicts(self.priority),
            "cityStats": _bucket_dicts(self.cities),
            "monthlyStats": [
                {"_id": {"year": b.key[0], "month": b.key[1]}, "count": b.count}
                for b in self.monthly
            ],
            "sourceStats": _bucket_dicts(self.sources),
        }


class EnquiryReports:
    """Dashboard report set for enquiries."""

    TOP_CITIES = 10
    MONTHS = 12

    def __init__(self, reporter: AggregationReporter) -> None:
        self.reporter = reporter

    async def overview(self) -> EnquiryStats:
        r = self.reporter
        total = await r.count(r.where())
        by_status = {
            status.value: await r.count(r.where(status=status.value))
            for status in EnquiryStatus
        }
        stats = EnquiryStats(
            total=total,
            by_status=by_status,
            priority=await r.breakdown("priority", values_of(Priority), r.where()),
            cities=await r.top_n("city", self.TOP_CITIES, r.where()),
            monthly=await r.monthly("createdAt", self.MONTHS, r.where()),
            sources=await r.rollup("source", r.where()),
        )
        logger.debug("Enquiry overview computed: total=%d", total)
        return stats


@dataclass(frozen=True)
class ProductStats:
    total: int
    out_of_stock: int
    low_stock: int
    featured: int
    categories: list[Bucket]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalProducts": self.total,
            "outOfStock": self.out_of_stock,
            "lowStock": self.low_stock,
            "featuredProducts": self.featured,
            "categories": _bucket_dicts(self.categories),
        }


class ProductReports:
    """Dashboard report set for products; counts only active products."""

    def __init__(self, reporter: AggregationReporter) -> None:
        self.reporter = reporter

    def _stock_in(self, status: StockStatus) -> ISpecification | None:
        r = self.reporter
        return r.scoped(STOCK_STATUS_RANGES[status].to_specification("stock", r.registry))

    async def overview(self) -> ProductStats:
        r = self.reporter
        stats = ProductStats(
            total=await r.count(r.where()),
            out_of_stock=await r.count(self._stock_in(StockStatus.OUT_OF_STOCK)),
            low_stock=await r.count(self._stock_in(StockStatus.LOW_STOCK)),
            featured=await r.count(r.where(featured=True)),
            categories=await r.rollup("category", r.where()),
        )
        logger.debug("Product overview computed: total=%d", stats.total)
        return stats
