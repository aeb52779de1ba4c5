"""Comparison operators: =, !=, >, <, >=, <=.

Values follow document-store semantics: an array field equals a scalar
when it holds it, a missing field never satisfies an ordering, and
values of unrelated types never compare. Naive datetimes are read as
UTC so stored timestamps order against aware filter bounds.
"""

from __future__ import annotations

import operator
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Callable


def comparable(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def ordered(compare: Callable[[Any, Any], bool], left: Any, right: Any) -> bool:
    """Apply *compare*; ``None`` and mismatched types are no match."""
    if left is None or right is None:
        return False
    try:
        return bool(compare(comparable(left), comparable(right)))
    except TypeError:
        return False


def equals(field_value: Any, condition_value: Any) -> bool:
    if isinstance(field_value, list) and not isinstance(condition_value, list):
        return any(comparable(v) == comparable(condition_value) for v in field_value)
    return bool(comparable(field_value) == comparable(condition_value))


class EqualOperator(MemoryOperator):
    name = SpecificationOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return equals(field_value, condition_value)


class NotEqualOperator(MemoryOperator):
    name = SpecificationOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return not equals(field_value, condition_value)


class OrderingOperator(MemoryOperator):
    """One of ``>``, ``<``, ``>=``, ``<=``, chosen at construction."""

    _COMPARATORS: dict[SpecificationOperator, Callable[[Any, Any], bool]] = {
        SpecificationOperator.GT: operator.gt,
        SpecificationOperator.LT: operator.lt,
        SpecificationOperator.GE: operator.ge,
        SpecificationOperator.LE: operator.le,
    }

    def __init__(self, name: SpecificationOperator) -> None:
        if name not in self._COMPARATORS:
            raise ValueError(f"{name.value!r} is not an ordering operator")
        self.name = name
        self._compare = self._COMPARATORS[name]

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return ordered(self._compare, field_value, condition_value)

    @classmethod
    def all(cls) -> list[OrderingOperator]:
        return [cls(name) for name in cls._COMPARATORS]
