"""Tests for exceptions, identifiers and the record base model."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import Field

from storefront_core import (
    InvalidIdentifierError,
    NotFoundError,
    ObjectIdGenerator,
    Record,
    RecordNotFoundError,
    StorefrontError,
    ValidationError,
    is_valid_id,
    resolve_path,
    to_document,
    touch,
    utc_now,
    validate_model,
)


class Widget(Record):
    display_name: str = Field(..., max_length=10)
    stock_level: int = Field(0, ge=0)


def test_hierarchy() -> None:
    assert issubclass(RecordNotFoundError, NotFoundError)
    assert issubclass(ValidationError, StorefrontError)
    assert issubclass(InvalidIdentifierError, StorefrontError)


def test_record_not_found_message() -> None:
    err = RecordNotFoundError("Product", "abc")
    assert err.entity_type == "Product"
    assert "abc" in str(err)


def test_validation_error_messages() -> None:
    err = ValidationError({"name": ["too long"], "__root__": ["bad input"]})
    assert err.messages == ["name: too long", "bad input"]
    assert ValidationError("oops").errors == {"__root__": ["oops"]}
    assert ValidationError().errors == {}


def test_object_ids() -> None:
    new_id = ObjectIdGenerator().next_id()
    assert is_valid_id(new_id)
    assert not is_valid_id("not-an-id")
    assert not is_valid_id("")


def test_utc_now_is_millisecond_precision() -> None:
    now = utc_now()
    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0


def test_resolve_path() -> None:
    doc = {"ratings": {"average": 4.5}, "items": [{"n": 1}, {"n": 2}]}
    assert resolve_path(doc, "ratings.average") == 4.5
    assert resolve_path(doc, "items.n") == [1, 2]
    assert resolve_path(doc, "missing.deep") is None


def test_resolve_path_applies_remaining_segments_to_list_items() -> None:
    doc = {
        "orders": [{"item": {"sku": "a1"}}, {"item": {"sku": "b2"}}, {"item": None}]
    }
    assert resolve_path(doc, "orders.item.sku") == ["a1", "b2", None]
    assert resolve_path(doc, "orders.item.missing") == [None, None, None]


def test_record_document_uses_camel_case() -> None:
    widget = Widget(display_name="  gear ", stock_level=3)

    doc = to_document(widget)

    assert doc["displayName"] == "gear"
    assert doc["stockLevel"] == 3
    assert "createdAt" in doc and "updatedAt" in doc
    assert "id" not in to_document(widget, include_id=False)


def test_record_accepts_either_spelling() -> None:
    assert Widget.model_validate({"displayName": "a"}).display_name == "a"
    assert Widget(display_name="b").display_name == "b"


def test_touch_refreshes_updated_at() -> None:
    old = datetime(2020, 1, 1, tzinfo=timezone.utc)
    widget = Widget(display_name="a", updated_at=old)

    touched = touch(widget)

    assert touched.updated_at > old
    assert widget.updated_at == old


def test_validate_model_collects_all_errors() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_model(Widget, {"displayName": "x" * 11, "stockLevel": -1})

    assert set(exc_info.value.errors) == {"displayName", "stockLevel"}
