"""SortResolver — sortBy/sortOrder parameters → SortSpec."""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from typing import NamedTuple

from .exceptions import InvalidSortFieldError

#: Deterministic secondary key appended to every ordering.
TIE_BREAK_FIELD = "id"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1


class SortSpec(NamedTuple):
    field: str
    direction: SortDirection

    def to_storage(self) -> list[tuple[str, int]]:
        """Ordering as ``(field, ±1)`` pairs with the identifier tie-break."""
        keys = [(self.field, self.direction.sign)]
        if self.field != TIE_BREAK_FIELD:
            keys.append((TIE_BREAK_FIELD, 1))
        return keys


class SortResolver:
    """
    Validate a requested sort against the resource's sortable fields.

    An absent or empty field falls back to ``default_field``; a field outside
    ``sortable`` is rejected. Direction defaults to descending when absent or
    not exactly ``asc`` or ``desc``.
    """

    def __init__(
        self,
        sortable: Collection[str],
        *,
        default_field: str = "createdAt",
        default_direction: SortDirection = SortDirection.DESC,
    ) -> None:
        if default_field not in sortable:
            raise ValueError(f"Default sort field {default_field!r} is not sortable")
        self.sortable = frozenset(sortable)
        self.default_field = default_field
        self.default_direction = default_direction

    def resolve(
        self, sort_by: str | None = None, sort_order: str | None = None
    ) -> SortSpec:
        field = (sort_by or "").strip() or self.default_field
        if field not in self.sortable:
            raise InvalidSortFieldError(field, sorted(self.sortable))
        try:
            direction = SortDirection((sort_order or "").strip())
        except ValueError:
            direction = self.default_direction
        return SortSpec(field, direction)
