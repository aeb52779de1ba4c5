"""Shared enumerations for products and enquiries.

Every allowed-value list (filters, validation, routes, reports) is read from
these definitions.
"""

from __future__ import annotations

from enum import Enum


class EnquiryStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Position in declared order; higher is more urgent."""
        return list(Priority).index(self)


class EnquirySource(str, Enum):
    WEBSITE = "website"
    PHONE = "phone"
    EMAIL = "email"
    SOCIAL_MEDIA = "social-media"
    REFERRAL = "referral"
    OTHER = "other"


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out-of-stock"
    LOW_STOCK = "low-stock"
    IN_STOCK = "in-stock"


def values_of(enum_cls: type[Enum]) -> list[str]:
    """Enum values in declared order."""
    return [str(member.value) for member in enum_cls]
