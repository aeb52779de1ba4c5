"""Comparison operators -> ``$eq``, ``$ne``, ``$gt``, ``$gte``, ``$lt``, ``$lte``."""

from __future__ import annotations

from typing import Any

from storefront_specifications.operators import SpecificationOperator as Op

COMPARISONS: dict[Op, str] = {
    Op.EQ: "$eq",
    Op.NE: "$ne",
    Op.GT: "$gt",
    Op.GE: "$gte",
    Op.LT: "$lt",
    Op.LE: "$lte",
}


def compile_comparison(field: str, op: Op, val: Any) -> dict[str, Any]:
    return {field: {COMPARISONS[op]: val}}
