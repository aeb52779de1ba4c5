"""Membership and range operators: in, not_in, between."""

from __future__ import annotations

import operator
from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator
from .standard import equals, ordered


def _member(field_value: Any, options: Any) -> bool:
    return any(equals(field_value, option) for option in options)


class InOperator(MemoryOperator):
    """An array field is a member when any of its elements is."""

    name = SpecificationOperator.IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _member(field_value, condition_value)


class NotInOperator(MemoryOperator):
    name = SpecificationOperator.NOT_IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return not _member(field_value, condition_value)


class BetweenOperator(MemoryOperator):
    """Inclusive ``(low, high)`` range; a ``None`` bound leaves that side open."""

    name = SpecificationOperator.BETWEEN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        low, high = condition_value
        if low is not None and not ordered(operator.ge, field_value, low):
            return False
        return high is None or ordered(operator.le, field_value, high)
