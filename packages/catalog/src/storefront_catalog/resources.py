"""Per-resource query declarations: filter schema, sortable fields, body fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront_filtering import (
    BooleanField,
    DerivedRangeField,
    EqualityField,
    FilterBuilder,
    FilterSchema,
    PaginationEngine,
    QueryParser,
    RangeField,
    RangeKind,
    SortResolver,
    SubstringField,
    TextSearchField,
)

from .enums import EnquirySource, EnquiryStatus, Priority
from .records import STOCK_STATUS_RANGES


@dataclass(frozen=True)
class Resource:
    """
    Everything the engine needs to know about one record kind.

    Attributes:
        name: Collection-level name (``products``).
        entity: Singular display name used in error messages.
        schema: Filterable query parameters.
        sortable: Stored fields accepted by ``sortBy``.
        text_fields: Fields covered by the collection's text index.
        create_fields: Body fields accepted on create.
        update_fields: Body fields accepted on update.
        scope: Mandatory equality constraints on every read.
    """

    name: str
    entity: str
    schema: FilterSchema
    sortable: frozenset[str]
    text_fields: tuple[str, ...]
    create_fields: frozenset[str]
    update_fields: frozenset[str]
    scope: dict[str, Any] = field(default_factory=dict)

    def parser(
        self,
        *,
        default_limit: int = 10,
        max_limit: int = 100,
        strict: bool = False,
    ) -> QueryParser:
        return QueryParser(
            FilterBuilder(self.schema, strict=strict),
            SortResolver(self.sortable),
            PaginationEngine(default_limit=default_limit, max_limit=max_limit),
        )


ENQUIRY_TEXT_FIELDS = ("name", "email", "subject")
PRODUCT_TEXT_FIELDS = ("name", "category", "description")

ENQUIRIES = Resource(
    name="enquiries",
    entity="Enquiry",
    schema=FilterSchema(
        "enquiries",
        [
            TextSearchField("search", ENQUIRY_TEXT_FIELDS),
            EqualityField("status", choices=EnquiryStatus),
            EqualityField("priority", choices=Priority),
            EqualityField("source", choices=EnquirySource),
            SubstringField("city"),
            SubstringField("state"),
            RangeField(
                "createdAt",
                min_param="dateFrom",
                max_param="dateTo",
                kind=RangeKind.DATE,
            ),
        ],
    ),
    sortable=frozenset(
        {
            "createdAt",
            "updatedAt",
            "name",
            "email",
            "city",
            "state",
            "status",
            "priority",
            "source",
            "subject",
            "followUpDate",
        }
    ),
    text_fields=ENQUIRY_TEXT_FIELDS,
    create_fields=frozenset(
        {
            "name",
            "email",
            "phone",
            "address",
            "city",
            "state",
            "pincode",
            "subject",
            "message",
            "productUrls",
            "attachedImages",
            "source",
            "priority",
        }
    ),
    update_fields=frozenset(
        {"status", "priority", "notes", "assignedTo", "followUpDate"}
    ),
)

PRODUCTS = Resource(
    name="products",
    entity="Product",
    schema=FilterSchema(
        "products",
        [
            TextSearchField("search", PRODUCT_TEXT_FIELDS),
            SubstringField("category"),
            BooleanField("featured"),
            RangeField("price", min_param="minPrice", max_param="maxPrice"),
            DerivedRangeField(
                "stockStatus",
                "stock",
                {status.value: rng for status, rng in STOCK_STATUS_RANGES.items()},
            ),
        ],
    ),
    sortable=frozenset(
        {
            "createdAt",
            "updatedAt",
            "name",
            "price",
            "category",
            "stock",
            "featured",
            "ratings.average",
        }
    ),
    text_fields=PRODUCT_TEXT_FIELDS,
    create_fields=frozenset(
        {"name", "description", "price", "category", "image", "stock", "featured"}
    ),
    update_fields=frozenset(
        {"name", "description", "price", "category", "image", "stock", "featured"}
    ),
    scope={"isActive": True},
)


def pick(body: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    """Allowed body fields that carry a value; the rest are dropped."""
    return {k: v for k, v in body.items() if k in allowed and v is not None}
