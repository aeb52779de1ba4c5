"""TimeoutCollection - Decorator bounding every storage call with a timeout."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from ...primitives.exceptions import StorageTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from ...domain.specification import ISpecification
    from ...ports.collection import (
        Bucket,
        GroupQuery,
        IRecordCollection,
        UpdateResult,
    )

R = TypeVar("R")

logger = logging.getLogger("storefront.storage")


class TimeoutCollection:
    """
    Decorator that adds a per-call timeout to any IRecordCollection.

    Each call is awaited through ``asyncio.wait_for``; a call that exceeds
    ``timeout`` seconds is cancelled and surfaces as
    :class:`StorageTimeoutError` (retryable by the client). No retry is
    attempted here.
    """

    def __init__(self, inner: IRecordCollection, timeout: float) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._inner = inner
        self._timeout = timeout

    @property
    def inner(self) -> IRecordCollection:
        return self._inner

    async def _guard(self, operation: str, call: Awaitable[R]) -> R:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.warning(
                "Storage %s exceeded %.3fs timeout", operation, self._timeout
            )
            raise StorageTimeoutError(operation, self._timeout) from e

    async def find(
        self,
        criteria: ISpecification | None = None,
        *,
        sort: Sequence[tuple[str, int]] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        return await self._guard(
            "find",
            self._inner.find(criteria, sort=sort, offset=offset, limit=limit),
        )

    async def count(self, criteria: ISpecification | None = None) -> int:
        return await self._guard("count", self._inner.count(criteria))

    async def get(self, record_id: str) -> dict[str, Any] | None:
        return await self._guard("get", self._inner.get(record_id))

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        return await self._guard("insert", self._inner.insert(document))

    async def update(
        self, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        return await self._guard("update", self._inner.update(record_id, changes))

    async def update_many(
        self, record_ids: Sequence[str], changes: dict[str, Any]
    ) -> UpdateResult:
        return await self._guard(
            "update_many", self._inner.update_many(record_ids, changes)
        )

    async def delete(self, record_id: str) -> dict[str, Any] | None:
        return await self._guard("delete", self._inner.delete(record_id))

    async def group_count(self, query: GroupQuery) -> list[Bucket]:
        return await self._guard("group_count", self._inner.group_count(query))
