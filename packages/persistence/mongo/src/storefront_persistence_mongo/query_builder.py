"""Mongo query builder from specification AST."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from storefront_core.ports.collection import GroupKey, GroupOrder, GroupQuery
from storefront_specifications.operators import SpecificationOperator as Op

from .exceptions import MongoQueryError
from .operators import LEAF_COMPILERS, compile_text
from .serialization import serialize_value, to_object_id

_ID_FIELD = "id"

_JUNCTIONS = {Op.AND: "$and", Op.OR: "$or"}


def _storage_field(attr: str) -> str:
    return "_id" if attr == _ID_FIELD else attr


def _operator(data: dict[str, Any]) -> Op:
    try:
        return Op(str(data.get("op", "")).lower())
    except ValueError:
        raise MongoQueryError(
            f"Unsupported operator for MongoDB: {data.get('op')!r}"
        ) from None


def _compile_leaf(op: Op, data: dict[str, Any]) -> dict[str, Any]:
    attr = data.get("attr")
    if not attr:
        raise MongoQueryError(f"Specification missing 'attr': {data}")
    compiler = LEAF_COMPILERS.get(op)
    if compiler is None:
        raise MongoQueryError(f"Unsupported operator for MongoDB: {op.value!r}")
    val = serialize_value(data.get("val"))
    if attr == _ID_FIELD:
        val = [to_object_id(v) for v in val] if isinstance(val, list) else to_object_id(val)
    return compiler(_storage_field(attr), op, val)


def _compile_node(data: dict[str, Any]) -> dict[str, Any]:
    """Compile one node of a ``to_dict()`` tree; empty junctions match all."""
    if not isinstance(data, dict):
        raise MongoQueryError("Specification node must be a dict")
    op = _operator(data)
    if op in _JUNCTIONS:
        children = [c for c in map(_compile_node, data.get("conditions", [])) if c]
        if not children:
            return {}
        return children[0] if len(children) == 1 else {_JUNCTIONS[op]: children}
    if op is Op.NOT:
        conditions = data.get("conditions", [])
        inner = _compile_node(conditions[0]) if conditions else {}
        return {"$nor": [inner]} if inner else {}
    if op is Op.FTS:
        return compile_text(data)
    return _compile_leaf(op, data)


def _group_expression(key: GroupKey) -> Any:
    path = f"${key.field}"
    if key.part == "year":
        return {"$year": path}
    if key.part == "month":
        return {"$month": path}
    return path


class MongoQueryBuilder:
    """Compiles specifications (via to_dict()) to MongoDB query documents."""

    def build_match(self, spec: Any) -> dict[str, Any]:
        """Build a filter document from a specification (``None`` → everything)."""
        if spec is None:
            return {}
        if hasattr(spec, "to_dict"):
            data = spec.to_dict()
        elif isinstance(spec, dict):
            data = spec
        else:
            raise MongoQueryError("spec must be a specification or dict")
        if not data:
            return {}
        return _compile_node(data)

    def build_sort(
        self, order_by: Sequence[tuple[str, int]] | None
    ) -> list[tuple[str, int]]:
        """Build MongoDB sort tuples from ``[(field, 1 | -1)]``."""
        if not order_by:
            return []
        return [(_storage_field(field), 1 if direction > 0 else -1) for field, direction in order_by]

    def build_group_pipeline(self, query: GroupQuery) -> list[dict[str, Any]]:
        """Build a ``$match/$group/$sort/$limit`` pipeline for a grouped count."""
        if not query.keys:
            raise MongoQueryError("Group query needs at least one key")
        pipeline: list[dict[str, Any]] = []
        match = self.build_match(query.criteria)
        if match:
            pipeline.append({"$match": match})

        composite = len(query.keys) > 1
        if composite:
            group_id: Any = {k.name: _group_expression(k) for k in query.keys}
            key_paths = [f"_id.{k.name}" for k in query.keys]
        else:
            group_id = _group_expression(query.keys[0])
            key_paths = ["_id"]
        pipeline.append({"$group": {"_id": group_id, "count": {"$sum": 1}}})

        if query.order == GroupOrder.COUNT_DESC:
            sort = {"count": -1, **dict.fromkeys(key_paths, 1)}
        else:
            direction = -1 if query.order == GroupOrder.KEY_DESC else 1
            sort = dict.fromkeys(key_paths, direction)
        pipeline.append({"$sort": sort})

        if query.limit is not None:
            pipeline.append({"$limit": query.limit})
        return pipeline

    @staticmethod
    def bucket_key(query: GroupQuery, group_id: Any) -> Any:
        """Decode a ``$group`` ``_id`` into the bucket key shape of the port."""
        if len(query.keys) > 1:
            return tuple(group_id.get(k.name) for k in query.keys)
        return group_id
