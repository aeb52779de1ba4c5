"""Product and Enquiry records with their write-time validation rules.

Validation messages are field-level and collected; a failed
``validate_model`` call reports every broken field at once.
"""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from storefront_core.domain.record import Record

from .enums import EnquirySource, EnquiryStatus, Priority

_EMAIL = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$", re.ASCII)
_PHONE = re.compile(r"^[6-9]\d{9}$", re.ASCII)
_PINCODE = re.compile(r"^[1-9][0-9]{5}$")
_HTTP_URL = re.compile(r"^https?://")


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("storefront_invalid", message)


def _required(value: str | None, message: str) -> str:
    if not value:
        raise _fail(message)
    return value


def _max_length(value: str | None, limit: int, message: str) -> str | None:
    if value is not None and len(value) > limit:
        raise _fail(message)
    return value


class Enquiry(Record):
    """Customer enquiry submitted from the storefront."""

    name: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    phone: str | None = Field(default=None, validate_default=True)
    address: str | None = None
    city: str | None = Field(default=None, validate_default=True)
    state: str | None = Field(default=None, validate_default=True)
    pincode: str | None = Field(default=None, validate_default=True)
    subject: str | None = None
    message: str | None = None
    status: EnquiryStatus = EnquiryStatus.PENDING
    priority: Priority = Priority.MEDIUM
    product_urls: list[str] = Field(default_factory=list)
    attached_images: list[str] = Field(default_factory=list)
    notes: str | None = None
    assigned_to: str | None = None
    follow_up_date: datetime | None = None
    source: EnquirySource = EnquirySource.WEBSITE

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str | None) -> str:
        v = _required(v, "Customer name is required")
        return _max_length(v, 50, "Name cannot exceed 50 characters")

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str | None) -> str:
        v = _required(v, "Email is required").lower()
        if not _EMAIL.match(v):
            raise _fail("Please provide a valid email address")
        return v

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, v: str | None) -> str:
        v = _required(v, "Phone number is required")
        if not _PHONE.match(v):
            raise _fail("Please provide a valid 10-digit phone number")
        return v

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str | None) -> str | None:
        return _max_length(v, 200, "Address cannot exceed 200 characters")

    @field_validator("city")
    @classmethod
    def _check_city(cls, v: str | None) -> str:
        return _required(v, "City is required")

    @field_validator("state")
    @classmethod
    def _check_state(cls, v: str | None) -> str:
        return _required(v, "State is required")

    @field_validator("pincode")
    @classmethod
    def _check_pincode(cls, v: str | None) -> str:
        v = _required(v, "Pincode is required")
        if not _PINCODE.match(v):
            raise _fail("Please provide a valid 6-digit pincode")
        return v

    @field_validator("subject")
    @classmethod
    def _check_subject(cls, v: str | None) -> str | None:
        return _max_length(v, 100, "Subject cannot exceed 100 characters")

    @field_validator("message")
    @classmethod
    def _check_message(cls, v: str | None) -> str | None:
        return _max_length(v, 1000, "Message cannot exceed 1000 characters")

    @field_validator("notes")
    @classmethod
    def _check_notes(cls, v: str | None) -> str | None:
        return _max_length(v, 500, "Notes cannot exceed 500 characters")

    @field_validator("product_urls")
    @classmethod
    def _check_product_urls(cls, v: list[str]) -> list[str]:
        if any(not _HTTP_URL.match(url) for url in v):
            raise _fail("Please provide valid URLs")
        return v

    @field_validator("attached_images")
    @classmethod
    def _check_attached_images(cls, v: list[str]) -> list[str]:
        if any(not _HTTP_URL.match(url) for url in v):
            raise _fail("Please provide valid image URLs")
        return v


class Ratings(BaseModel):
    model_config = ConfigDict(frozen=True)

    average: float = Field(default=0, ge=0, le=5)
    count: int = Field(default=0, ge=0)


class Product(Record):
    """Catalogue product. ``is_active=False`` marks a soft-deleted product."""

    name: str | None = Field(default=None, validate_default=True)
    description: str | None = Field(default=None, validate_default=True)
    price: float | None = Field(default=None, validate_default=True)
    category: str | None = Field(default=None, validate_default=True)
    image: str | None = Field(default=None, validate_default=True)
    stock: int | None = Field(default=0, validate_default=True)
    featured: bool = False
    ratings: Ratings = Field(default_factory=Ratings)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str | None) -> str:
        v = _required(v, "Product name is required")
        return _max_length(v, 100, "Product name cannot exceed 100 characters")

    @field_validator("description")
    @classmethod
    def _check_description(cls, v: str | None) -> str:
        v = _required(v, "Product description is required")
        return _max_length(v, 1000, "Description cannot exceed 1000 characters")

    @field_validator("price")
    @classmethod
    def _check_price(cls, v: float | None) -> float:
        if v is None:
            raise _fail("Product price is required")
        if v < 0:
            raise _fail("Price cannot be negative")
        return v

    @field_validator("category")
    @classmethod
    def _check_category(cls, v: str | None) -> str:
        return _required(v, "Product category is required")

    @field_validator("image")
    @classmethod
    def _check_image(cls, v: str | None) -> str:
        v = _required(v, "Product image URL is required")
        if not _HTTP_URL.match(v):
            raise _fail("Please provide a valid image URL")
        return v

    @field_validator("stock")
    @classmethod
    def _check_stock(cls, v: int | None) -> int:
        if v is None:
            raise _fail("Stock quantity is required")
        if v < 0:
            raise _fail("Stock cannot be negative")
        return v
