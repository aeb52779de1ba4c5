"""MongoRecordCollection — IRecordCollection over a Motor collection."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, PyMongoError

from storefront_core.ports.collection import Bucket, UpdateResult
from storefront_core.primitives.id_generator import is_valid_id

from .exceptions import MongoConnectionError, MongoQueryError
from .query_builder import MongoQueryBuilder
from .serialization import from_bson, serialize_value, to_bson

if TYPE_CHECKING:
    from storefront_core.domain.specification import ISpecification
    from storefront_core.ports.collection import GroupQuery

    from .connection import MongoConnectionManager

logger = logging.getLogger("storefront.mongo")


class MongoRecordCollection:
    """
    Document collection backed by MongoDB.

    Identifiers are stored as ``ObjectId`` in ``_id`` and exposed as 24-hex
    strings under ``id``. Driver errors are translated: an unreachable
    server becomes :class:`MongoConnectionError` (storage unavailable),
    anything else :class:`MongoQueryError`.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        collection: str,
        *,
        query_builder: MongoQueryBuilder | None = None,
    ) -> None:
        self._connection = connection
        self._collection_name = collection
        self._query_builder = query_builder or MongoQueryBuilder()

    @property
    def name(self) -> str:
        return self._collection_name

    def _collection(self) -> Any:
        return self._connection.database().get_collection(self._collection_name)

    @contextmanager
    def _errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except ConnectionFailure as e:
            logger.error(
                "MongoDB unreachable during %s on %s: %s",
                operation,
                self._collection_name,
                e,
            )
            raise MongoConnectionError(str(e)) from e
        except PyMongoError as e:
            logger.exception("MongoDB %s failed on %s", operation, self._collection_name)
            raise MongoQueryError(str(e)) from e

    async def find(
        self,
        criteria: ISpecification | None = None,
        *,
        sort: Sequence[tuple[str, int]] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        match = self._query_builder.build_match(criteria)
        sort_list = self._query_builder.build_sort(sort)
        logger.debug(
            "find on %s: match=%s sort=%s skip=%d limit=%s",
            self._collection_name,
            match,
            sort_list,
            offset,
            limit,
        )
        with self._errors("find"):
            cursor = self._collection().find(match)
            if sort_list:
                cursor = cursor.sort(sort_list)
            if offset:
                cursor = cursor.skip(offset)
            if limit is not None:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=None)
        return [from_bson(d) for d in docs]

    async def count(self, criteria: ISpecification | None = None) -> int:
        match = self._query_builder.build_match(criteria)
        with self._errors("count"):
            return int(await self._collection().count_documents(match))

    async def get(self, record_id: str) -> dict[str, Any] | None:
        if not is_valid_id(record_id):
            return None
        with self._errors("get"):
            doc = await self._collection().find_one({"_id": ObjectId(record_id)})
        return from_bson(doc) if doc is not None else None

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        doc = to_bson(document)
        doc.setdefault("_id", ObjectId())
        with self._errors("insert"):
            await self._collection().insert_one(doc)
        return from_bson(doc)

    async def update(
        self, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        if not is_valid_id(record_id):
            return None
        update = {k: serialize_value(v) for k, v in changes.items() if k != "id"}
        with self._errors("update"):
            doc = await self._collection().find_one_and_update(
                {"_id": ObjectId(record_id)},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        return from_bson(doc) if doc is not None else None

    async def update_many(
        self, record_ids: Sequence[str], changes: dict[str, Any]
    ) -> UpdateResult:
        ids = [ObjectId(r) for r in dict.fromkeys(record_ids) if is_valid_id(r)]
        if not ids:
            return UpdateResult(matched=0, modified=0)
        update = {k: serialize_value(v) for k, v in changes.items() if k != "id"}
        with self._errors("update_many"):
            result = await self._collection().update_many(
                {"_id": {"$in": ids}}, {"$set": update}
            )
        return UpdateResult(matched=result.matched_count, modified=result.modified_count)

    async def delete(self, record_id: str) -> dict[str, Any] | None:
        if not is_valid_id(record_id):
            return None
        with self._errors("delete"):
            doc = await self._collection().find_one_and_delete(
                {"_id": ObjectId(record_id)}
            )
        return from_bson(doc) if doc is not None else None

    async def group_count(self, query: GroupQuery) -> list[Bucket]:
        pipeline = self._query_builder.build_group_pipeline(query)
        logger.debug("aggregate on %s: %s", self._collection_name, pipeline)
        with self._errors("group_count"):
            rows = await self._collection().aggregate(pipeline).to_list(length=None)
        return [
            Bucket(key=self._query_builder.bucket_key(query, row["_id"]), count=row["count"])
            for row in rows
        ]
