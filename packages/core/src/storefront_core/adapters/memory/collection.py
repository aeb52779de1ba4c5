"""InMemoryCollection — dict-backed document collection for tests and demos."""

from __future__ import annotations

import copy
from collections import Counter
from typing import TYPE_CHECKING, Any

from ...ports.collection import Bucket, GroupOrder, UpdateResult
from ...primitives.id_generator import IIDGenerator, ObjectIdGenerator
from ...utils import resolve_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ...domain.specification import ISpecification
    from ...ports.collection import GroupKey, GroupQuery


def _null_first(value: Any) -> tuple[int, Any]:
    # Missing and null values sort before everything else, as in MongoDB.
    return (0, 0) if value is None else (1, value)


def _bucket_key(doc: dict[str, Any], key: GroupKey) -> Any:
    value = resolve_path(doc, key.field)
    if key.part == "year":
        return value.year if value is not None else None
    if key.part == "month":
        return value.month if value is not None else None
    return value


class InMemoryCollection:
    """In-memory implementation of ``IRecordCollection``.

    Documents are kept in insertion order, keyed by ``id``. Reads and writes
    hand out deep copies so callers never share state with the store.
    """

    def __init__(
        self,
        documents: Iterable[dict[str, Any]] | None = None,
        *,
        id_generator: IIDGenerator | None = None,
    ) -> None:
        self._docs: dict[str, dict[str, Any]] = {}
        self._id_generator = id_generator or ObjectIdGenerator()
        for doc in documents or ():
            self._store(doc)

    def _store(self, document: dict[str, Any]) -> dict[str, Any]:
        doc = copy.deepcopy(document)
        if not doc.get("id"):
            doc["id"] = self._id_generator.next_id()
        self._docs[doc["id"]] = doc
        return doc

    def _matching(self, criteria: ISpecification | None) -> list[dict[str, Any]]:
        if criteria is None:
            return list(self._docs.values())
        return [doc for doc in self._docs.values() if criteria.is_satisfied_by(doc)]

    async def find(
        self,
        criteria: ISpecification | None = None,
        *,
        sort: Sequence[tuple[str, int]] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        docs = self._matching(criteria)
        # Stable sorts applied last key first give a lexicographic ordering.
        for field, direction in reversed(list(sort or [])):
            docs.sort(
                key=lambda d, f=field: _null_first(resolve_path(d, f)),
                reverse=direction < 0,
            )
        end = None if limit is None else offset + limit
        return [copy.deepcopy(d) for d in docs[offset:end]]

    async def count(self, criteria: ISpecification | None = None) -> int:
        return len(self._matching(criteria))

    async def get(self, record_id: str) -> dict[str, Any] | None:
        doc = self._docs.get(record_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        return copy.deepcopy(self._store(document))

    async def update(
        self, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        doc = self._docs.get(record_id)
        if doc is None:
            return None
        doc.update(copy.deepcopy(changes))
        return copy.deepcopy(doc)

    async def update_many(
        self, record_ids: Sequence[str], changes: dict[str, Any]
    ) -> UpdateResult:
        matched = modified = 0
        for record_id in dict.fromkeys(record_ids):
            doc = self._docs.get(record_id)
            if doc is None:
                continue
            matched += 1
            if any(doc.get(k) != v for k, v in changes.items()):
                doc.update(copy.deepcopy(changes))
                modified += 1
        return UpdateResult(matched=matched, modified=modified)

    async def delete(self, record_id: str) -> dict[str, Any] | None:
        return self._docs.pop(record_id, None)

    async def group_count(self, query: GroupQuery) -> list[Bucket]:
        counts: Counter[Any] = Counter()
        for doc in self._matching(query.criteria):
            parts = tuple(_bucket_key(doc, k) for k in query.keys)
            counts[parts if len(parts) > 1 else parts[0]] += 1

        def key_order(key: Any) -> tuple[Any, ...]:
            parts = key if isinstance(key, tuple) else (key,)
            return tuple(_null_first(p) for p in parts)

        if query.order == GroupOrder.COUNT_DESC:
            ordered = sorted(counts.items(), key=lambda kv: key_order(kv[0]))
            ordered.sort(key=lambda kv: kv[1], reverse=True)
        else:
            ordered = sorted(
                counts.items(),
                key=lambda kv: key_order(kv[0]),
                reverse=query.order == GroupOrder.KEY_DESC,
            )
        if query.limit is not None:
            ordered = ordered[: query.limit]
        return [Bucket(key=k, count=c) for k, c in ordered]

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._docs.clear()

    def __len__(self) -> int:
        return len(self._docs)
