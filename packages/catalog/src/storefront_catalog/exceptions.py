"""Catalog-specific exceptions."""

from __future__ import annotations

from storefront_core.primitives.exceptions import ValidationError


class InvalidRequestError(ValidationError):
    """An operation argument was rejected before any storage call.

    Reported as a single message rather than a field-error list.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__({field: [message]})
