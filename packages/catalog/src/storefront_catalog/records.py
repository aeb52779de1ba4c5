"""Free functions over Product and Enquiry records.

Each function takes a record and returns a new one (records are frozen) or
a derived value.
"""

from __future__ import annotations

from typing import Any, TypeVar

from storefront_core.domain.record import Record, to_document
from storefront_core.utils import utc_now
from storefront_core.validation.pydantic import validate_model
from storefront_filtering.predicate import Range

from .enums import EnquiryStatus, StockStatus
from .exceptions import InvalidRequestError
from .models import Enquiry, Product, Ratings

TRecord = TypeVar("TRecord", bound=Record)

#: Stock quantity range behind each derived stock status.
STOCK_STATUS_RANGES: dict[StockStatus, Range] = {
    StockStatus.OUT_OF_STOCK: Range(gte=0, lte=0),
    StockStatus.LOW_STOCK: Range(gte=1, lte=10),
    StockStatus.IN_STOCK: Range(gte=11),
}


def stock_status(product: Product) -> StockStatus:
    for status, stock_range in STOCK_STATUS_RANGES.items():
        if stock_range.contains(product.stock):
            return status
    raise ValueError(f"Stock {product.stock!r} has no stock status")


def full_address(enquiry: Enquiry) -> str:
    return f"{enquiry.address}, {enquiry.city}, {enquiry.state} - {enquiry.pincode}"


def apply_changes(record: TRecord, changes: dict[str, Any]) -> TRecord:
    """
    Merge stored-field *changes* into *record* and re-validate the result.

    Raises:
        ValidationError: if the merged record breaks any field rule.
    """
    data = to_document(record)
    data.update(changes)
    data["updatedAt"] = utc_now()
    return validate_model(type(record), data)


def mark_completed(enquiry: Enquiry, notes: str | None = None) -> Enquiry:
    """Complete the enquiry; existing notes are kept unless new ones are given."""
    changes: dict[str, Any] = {"status": EnquiryStatus.COMPLETED.value}
    if notes:
        changes["notes"] = notes
    return apply_changes(enquiry, changes)


def add_rating(product: Product, rating: float) -> Product:
    """Fold one 1..5 rating into the running average."""
    if not 1 <= rating <= 5:
        raise InvalidRequestError("rating", "Rating must be between 1 and 5")
    current = product.ratings
    count = current.count + 1
    average = (current.average * current.count + rating) / count
    return product.model_copy(
        update={
            "ratings": Ratings(average=average, count=count),
            "updated_at": utc_now(),
        }
    )
