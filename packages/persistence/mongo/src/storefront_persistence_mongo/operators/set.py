"""Membership and range operators -> ``$in``, ``$nin``, ``$gte``/``$lte``."""

from __future__ import annotations

from typing import Any

from storefront_specifications.operators import SpecificationOperator as Op

from ..exceptions import MongoQueryError


def _as_list(val: Any) -> list[Any]:
    return list(val) if isinstance(val, list | tuple) else [val]


def compile_membership(field: str, op: Op, val: Any) -> dict[str, Any]:
    return {field: {"$in" if op is Op.IN else "$nin": _as_list(val)}}


def compile_range(field: str, op: Op, val: Any) -> dict[str, Any]:
    """Inclusive bounds; a ``None`` bound is omitted."""
    if not isinstance(val, list | tuple) or len(val) != 2:
        raise MongoQueryError("between requires a (low, high) pair")
    bounds = {
        key: bound for key, bound in zip(("$gte", "$lte"), val) if bound is not None
    }
    if not bounds:
        raise MongoQueryError("between requires at least one bound")
    return {field: bounds}
