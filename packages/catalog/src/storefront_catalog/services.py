"""Resource services — list/get/create/update/delete/stats per record kind.

Services own no state beyond their collaborators; every call is an
independent sequence of storage operations.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from storefront_core.domain.record import Record, to_document
from storefront_core.primitives.exceptions import (
    InvalidIdentifierError,
    RecordNotFoundError,
)
from storefront_core.primitives.id_generator import is_valid_id
from storefront_core.ports.collection import UpdateResult
from storefront_core.utils import utc_now
from storefront_core.validation.pydantic import validate_model
from storefront_filtering import (
    ConstraintInjector,
    EqualityField,
    FilterBuilder,
    FilterSchema,
    RangeField,
    RangeKind,
)
from storefront_specifications.ast import AttributeSpecification
from storefront_specifications.base import AndSpecification, OrSpecification
from storefront_specifications.operators import SpecificationOperator

from . import records
from .enums import EnquiryStatus, Priority, StockStatus
from .exceptions import InvalidRequestError
from .executor import PageResult, QueryExecutor
from .export import enquiries_to_csv
from .models import Enquiry, Product
from .reporting import (
    AggregationReporter,
    EnquiryReports,
    EnquiryStats,
    ProductReports,
    ProductStats,
)
from .resources import ENQUIRIES, PRODUCTS, Resource, pick

if TYPE_CHECKING:
    from storefront_core.domain.specification import ISpecification
    from storefront_core.ports.collection import IRecordCollection
    from storefront_specifications.evaluator import MemoryOperatorRegistry

logger = logging.getLogger("storefront.catalog")

TRecord = TypeVar("TRecord", bound=Record)

_STATUS_REQUIRED = "Valid status is required (pending, in-progress, completed, cancelled)"
_PRIORITY_REQUIRED = "Valid priority is required (low, medium, high, urgent)"


def _is_member(value: Any, enum_cls: type[Enum]) -> bool:
    return isinstance(value, str) and value in {m.value for m in enum_cls}


class RecordService(Generic[TRecord]):
    """Shared read/write operations over one resource's collection."""

    resource: Resource
    model: type[TRecord]

    def __init__(
        self,
        collection: IRecordCollection,
        registry: MemoryOperatorRegistry,
        *,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> None:
        self.collection = collection
        self.registry = registry
        self.injector = (
            ConstraintInjector(registry, self.resource.scope)
            if self.resource.scope
            else None
        )
        self.parser = self.resource.parser(
            default_limit=default_limit, max_limit=max_limit
        )
        self.executor = QueryExecutor(collection, registry, self.injector)
        self.reporter = AggregationReporter(collection, registry, self.injector)

    # ── Helpers ──────────────────────────────────────────────────

    def _in_scope(self, document: Mapping[str, Any]) -> bool:
        return all(document.get(k) == v for k, v in self.resource.scope.items())

    def _check_id(self, record_id: str) -> None:
        if not is_valid_id(record_id):
            raise InvalidIdentifierError(self.resource.entity, record_id)

    async def _load(self, record_id: str) -> TRecord:
        self._check_id(record_id)
        document = await self.collection.get(record_id)
        if document is None or not self._in_scope(document):
            raise RecordNotFoundError(self.resource.entity, record_id)
        return self.model.model_validate(document)

    async def _save(self, before: TRecord, after: TRecord) -> TRecord:
        """Write the fields that changed between *before* and *after*."""
        old = to_document(before, include_id=False)
        new = to_document(after, include_id=False)
        changes = {k: v for k, v in new.items() if old.get(k) != v}
        changes["updatedAt"] = new["updatedAt"]
        stored = await self.collection.update(before.id, changes)
        if stored is None:
            raise RecordNotFoundError(self.resource.entity, before.id)
        return self.model.model_validate(stored)

    def _eq(self, field: str, value: Any) -> AttributeSpecification:
        return AttributeSpecification(
            field, SpecificationOperator.EQ, value, registry=self.registry
        )

    # ── Operations ───────────────────────────────────────────────

    async def list(self, params: Mapping[str, Any]) -> PageResult:
        """Filtered, sorted page of documents plus pagination metadata."""
        return await self.executor.execute(self.parser.parse(params))

    async def get(self, record_id: str) -> TRecord:
        return await self._load(record_id)

    async def create(self, body: Mapping[str, Any]) -> TRecord:
        record = validate_model(
            self.model, pick(dict(body), self.resource.create_fields)
        )
        stored = await self.collection.insert(to_document(record, include_id=False))
        logger.info("Created %s %s", self.resource.entity, stored["id"])
        return self.model.model_validate(stored)

    async def update(self, record_id: str, body: Mapping[str, Any]) -> TRecord:
        """Partial update; only allowed fields with a value are merged."""
        current = await self._load(record_id)
        updated = records.apply_changes(
            current, pick(dict(body), self.resource.update_fields)
        )
        return await self._save(current, updated)


class EnquiryService(RecordService[Enquiry]):
    resource = ENQUIRIES
    model = Enquiry

    EXPORT_SCHEMA = FilterSchema(
        "enquiries-export",
        [
            EqualityField("status", choices=EnquiryStatus),
            EqualityField("priority", choices=Priority),
            RangeField(
                "createdAt",
                min_param="dateFrom",
                max_param="dateTo",
                kind=RangeKind.DATE,
            ),
        ],
    )
    SEARCH_FIELDS = ("name", "email", "phone", "subject", "city")

    @staticmethod
    def _status(status: Any) -> str:
        if not _is_member(status, EnquiryStatus):
            raise InvalidRequestError("status", _STATUS_REQUIRED)
        return status

    async def delete(self, record_id: str) -> Enquiry:
        self._check_id(record_id)
        removed = await self.collection.delete(record_id)
        if removed is None:
            raise RecordNotFoundError(self.resource.entity, record_id)
        logger.info("Deleted enquiry %s", record_id)
        return Enquiry.model_validate(removed)

    async def stats(self) -> EnquiryStats:
        return await EnquiryReports(self.reporter).overview()

    async def update_status(
        self, record_id: str, status: Any, notes: str | None = None
    ) -> Enquiry:
        changes = {"status": self._status(status)}
        if notes:
            changes["notes"] = notes
        current = await self._load(record_id)
        return await self._save(current, records.apply_changes(current, changes))

    async def update_priority(self, record_id: str, priority: Any) -> Enquiry:
        if not _is_member(priority, Priority):
            raise InvalidRequestError("priority", _PRIORITY_REQUIRED)
        current = await self._load(record_id)
        return await self._save(
            current, records.apply_changes(current, {"priority": priority})
        )

    async def complete(self, record_id: str, notes: str | None = None) -> Enquiry:
        current = await self._load(record_id)
        return await self._save(current, records.mark_completed(current, notes))

    async def pending(self) -> list[dict[str, Any]]:
        """Pending enquiries, most urgent first, then newest first."""
        documents = await self.collection.find(
            self._eq("status", EnquiryStatus.PENDING.value),
            sort=[("createdAt", -1), ("id", 1)],
        )
        rank = {p.value: p.rank for p in Priority}
        # Stable sort keeps the creation-time order within one priority.
        documents.sort(key=lambda d: rank.get(d.get("priority"), -1), reverse=True)
        return documents

    async def by_priority(self, priority: str) -> list[dict[str, Any]]:
        """Open enquiries with *priority*, newest first."""
        if not _is_member(priority, Priority):
            raise InvalidRequestError("priority", "Invalid priority level")
        criteria = AndSpecification(
            self._eq("priority", priority),
            AttributeSpecification(
                "status",
                SpecificationOperator.NE,
                EnquiryStatus.COMPLETED.value,
                registry=self.registry,
            ),
        )
        return await self.collection.find(
            criteria, sort=[("createdAt", -1), ("id", 1)]
        )

    def _search_criteria(self, term: str) -> ISpecification:
        return OrSpecification(
            *(
                AttributeSpecification(
                    field, SpecificationOperator.ICONTAINS, term, registry=self.registry
                )
                for field in self.SEARCH_FIELDS
            )
        )

    async def search_term(self, term: str, limit: Any = 10) -> list[dict[str, Any]]:
        """Substring search across contact fields, newest first."""
        term = (term or "").strip()
        if not term:
            raise InvalidRequestError("term", "Search term is required")
        window = self.parser.pagination.window(1, limit)
        return await self.collection.find(
            self._search_criteria(term),
            sort=[("createdAt", -1), ("id", 1)],
            limit=window.limit,
        )

    async def bulk_update_status(
        self,
        record_ids: Sequence[str],
        status: Any,
        notes: str | None = None,
    ) -> UpdateResult:
        """Set the status of many enquiries in one storage operation."""
        if not record_ids or isinstance(record_ids, str):
            raise InvalidRequestError("enquiryIds", "Valid enquiry IDs array is required")
        changes: dict[str, Any] = {"status": self._status(status)}
        if notes is not None and not isinstance(notes, str):
            raise InvalidRequestError("notes", "Notes must be text")
        if notes:
            notes = notes.strip()
            if len(notes) > 500:
                raise InvalidRequestError("notes", "Notes cannot exceed 500 characters")
            changes["notes"] = notes
        for record_id in record_ids:
            self._check_id(record_id)
        changes["updatedAt"] = utc_now()
        result = await self.collection.update_many(list(record_ids), changes)
        logger.info(
            "Bulk status update to %s: matched=%d modified=%d",
            changes["status"],
            result.matched,
            result.modified,
        )
        return result

    async def export_csv(self, params: Mapping[str, Any]) -> str:
        """CSV of all enquiries matching status/priority/date filters."""
        predicate = FilterBuilder(self.EXPORT_SCHEMA).build(params)
        documents = await self.collection.find(
            predicate.to_specification(self.registry),
            sort=[("createdAt", -1), ("id", 1)],
        )
        return enquiries_to_csv(documents)


class ProductService(RecordService[Product]):
    resource = PRODUCTS
    model = Product

    async def delete(self, record_id: str) -> Product:
        """Soft delete: the product stays stored but leaves every read."""
        current = await self._load(record_id)
        deleted = current.model_copy(update={"is_active": False, "updated_at": utc_now()})
        saved = await self._save(current, deleted)
        logger.info("Soft-deleted product %s", record_id)
        return saved

    async def stats(self) -> ProductStats:
        return await ProductReports(self.reporter).overview()

    async def update_stock(
        self, record_id: str, stock: Any
    ) -> tuple[Product, StockStatus]:
        if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
            raise InvalidRequestError("stock", "Valid stock quantity is required")
        current = await self._load(record_id)
        product = await self._save(
            current, records.apply_changes(current, {"stock": stock})
        )
        return product, records.stock_status(product)

    async def add_rating(self, record_id: str, rating: Any) -> Product:
        if isinstance(rating, bool) or not isinstance(rating, int | float):
            raise InvalidRequestError("rating", "Rating must be between 1 and 5")
        current = await self._load(record_id)
        return await self._save(current, records.add_rating(current, rating))
