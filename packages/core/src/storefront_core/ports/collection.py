"""IRecordCollection — storage port consumed by the query engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.specification import ISpecification


class GroupOrder(str, Enum):
    """Ordering applied to grouped buckets."""

    KEY_ASC = "key_asc"
    KEY_DESC = "key_desc"
    COUNT_DESC = "count_desc"


@dataclass(frozen=True)
class GroupKey:
    """One grouping dimension: a field value or a date part of a field."""

    field: str
    part: str = "value"

    @classmethod
    def of(cls, field: str) -> GroupKey:
        return cls(field)

    @classmethod
    def year_of(cls, field: str) -> GroupKey:
        return cls(field, "year")

    @classmethod
    def month_of(cls, field: str) -> GroupKey:
        return cls(field, "month")

    @property
    def name(self) -> str:
        return self.field if self.part == "value" else self.part


@dataclass(frozen=True)
class GroupQuery:
    """
    Grouped count request.

    Attributes:
        keys: Grouping dimensions; a single key yields scalar bucket keys,
            several keys yield tuple bucket keys in the same order.
        criteria: Optional specification restricting the grouped documents.
        order: Bucket ordering.
        limit: Maximum number of buckets returned (``None`` = all).
    """

    keys: tuple[GroupKey, ...]
    criteria: ISpecification | None = None
    order: GroupOrder = GroupOrder.KEY_ASC
    limit: int | None = None


class Bucket(NamedTuple):
    key: Any
    count: int


class UpdateResult(NamedTuple):
    matched: int
    modified: int


@runtime_checkable
class IRecordCollection(Protocol):
    """
    Async document collection.

    Documents are plain dicts keyed by stored field name; the identifier is
    exposed as ``"id"`` (24-hex string) regardless of backend. ``criteria``
    is any :class:`ISpecification` or ``None`` for "everything". ``sort`` is
    a list of ``(field, 1 | -1)`` pairs applied in order.
    """

    async def find(
        self,
        criteria: ISpecification | None = None,
        *,
        sort: Sequence[tuple[str, int]] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]: ...

    async def count(self, criteria: ISpecification | None = None) -> int: ...

    async def get(self, record_id: str) -> dict[str, Any] | None: ...

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]: ...

    async def update(
        self, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def update_many(
        self, record_ids: Sequence[str], changes: dict[str, Any]
    ) -> UpdateResult: ...

    async def delete(self, record_id: str) -> dict[str, Any] | None: ...

    async def group_count(self, query: GroupQuery) -> list[Bucket]: ...
