"""Filtering package exceptions."""

from __future__ import annotations

from storefront_core.primitives.exceptions import ValidationError


class InvalidFilterError(ValidationError):
    """Raised when a filter parameter carries a value outside its allowed form."""

    def __init__(self, param: str, message: str) -> None:
        self.param = param
        super().__init__({param: [message]})


class InvalidSortFieldError(ValidationError):
    """Raised when the requested sort field is not sortable for the resource."""

    def __init__(self, field: str, allowed: list[str]) -> None:
        self.field = field
        self.allowed = allowed
        super().__init__(
            {"sortBy": [f"Field {field!r} is not sortable; use one of {allowed}"]}
        )


class InvalidPaginationError(ValidationError):
    """Raised when page or limit is not a usable positive integer."""

    def __init__(
        self, param: str, value: object, reason: str = "must be a positive integer"
    ) -> None:
        self.param = param
        self.value = value
        super().__init__({param: [f"{reason}, got {value!r}"]})
