"""
In-memory operator implementations.

Usage::

    from storefront_specifications.operators_memory import build_default_registry

    registry = build_default_registry()
    registry.evaluate(SpecificationOperator.IN, "urgent", ["high", "urgent"])
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .fts import FtsOperator
from .set import BetweenOperator, InOperator, NotInOperator
from .standard import EqualOperator, NotEqualOperator, OrderingOperator
from .string import SubstringOperator, substring_operators


def build_default_registry() -> MemoryOperatorRegistry:
    """A registry with a strategy for every non-logical operator."""
    return MemoryOperatorRegistry(
        EqualOperator(),
        NotEqualOperator(),
        *OrderingOperator.all(),
        InOperator(),
        NotInOperator(),
        BetweenOperator(),
        *substring_operators(),
        FtsOperator(),
    )


__all__ = [
    "build_default_registry",
    "MemoryOperatorRegistry",
    "OrderingOperator",
    "SubstringOperator",
]
