"""FilterPredicate — conjunctive set of per-field constraints.

Each constraint kind is a small frozen dataclass; the predicate maps a
target field to at most one of them and compiles the whole set to a
specification tree.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from storefront_specifications.ast import (
    AttributeSpecification,
    TextSearchSpecification,
)
from storefront_specifications.base import AndSpecification
from storefront_specifications.operators import SpecificationOperator

if TYPE_CHECKING:
    from storefront_core.domain.specification import ISpecification
    from storefront_specifications.evaluator import MemoryOperatorRegistry

#: Predicate key under which the text-search constraint is stored.
TEXT_SEARCH_KEY = "$text"


@dataclass(frozen=True)
class Equals:
    value: Any

    def to_specification(
        self, field: str, registry: MemoryOperatorRegistry
    ) -> ISpecification:
        return AttributeSpecification(
            field, SpecificationOperator.EQ, self.value, registry=registry
        )


@dataclass(frozen=True)
class Contains:
    """Case-insensitive literal substring match."""

    value: str

    def to_specification(
        self, field: str, registry: MemoryOperatorRegistry
    ) -> ISpecification:
        return AttributeSpecification(
            field, SpecificationOperator.ICONTAINS, self.value, registry=registry
        )


@dataclass(frozen=True)
class Range:
    """Inclusive range; ``None`` leaves that side open."""

    gte: Any = None
    lte: Any = None

    def __post_init__(self) -> None:
        if self.gte is None and self.lte is None:
            raise ValueError("Range needs at least one bound")

    def contains(self, value: Any) -> bool:
        if value is None:
            return False
        if self.gte is not None and value < self.gte:
            return False
        return not (self.lte is not None and value > self.lte)

    def to_specification(
        self, field: str, registry: MemoryOperatorRegistry
    ) -> ISpecification:
        return AttributeSpecification(
            field,
            SpecificationOperator.BETWEEN,
            (self.gte, self.lte),
            registry=registry,
        )


@dataclass(frozen=True)
class OneOf:
    values: tuple[Any, ...]

    def to_specification(
        self, field: str, registry: MemoryOperatorRegistry
    ) -> ISpecification:
        return AttributeSpecification(
            field, SpecificationOperator.IN, list(self.values), registry=registry
        )


@dataclass(frozen=True)
class TextSearch:
    query: str
    fields: tuple[str, ...]

    def to_specification(
        self, field: str, registry: MemoryOperatorRegistry
    ) -> ISpecification:
        return TextSearchSpecification(self.fields, self.query, registry=registry)


Constraint = Union[Equals, Contains, Range, OneOf, TextSearch]


class FilterPredicate:
    """
    Ordered mapping of target field → constraint, combined with AND.

    A field holds at most one constraint: setting it again replaces the
    previous one and moves it to the end.
    """

    def __init__(self, constraints: dict[str, Constraint] | None = None) -> None:
        self._constraints: dict[str, Constraint] = {}
        for field, constraint in (constraints or {}).items():
            self.set(field, constraint)

    def set(self, field: str, constraint: Constraint) -> None:
        self._constraints.pop(field, None)
        self._constraints[field] = constraint

    def discard(self, field: str) -> None:
        self._constraints.pop(field, None)

    def get(self, field: str) -> Constraint | None:
        return self._constraints.get(field)

    def items(self) -> list[tuple[str, Constraint]]:
        return list(self._constraints.items())

    @property
    def is_empty(self) -> bool:
        return not self._constraints

    def __contains__(self, field: object) -> bool:
        return field in self._constraints

    def __iter__(self) -> Iterator[str]:
        return iter(self._constraints)

    def __len__(self) -> int:
        return len(self._constraints)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterPredicate):
            return NotImplemented
        return self._constraints == other._constraints

    def __repr__(self) -> str:
        return f"FilterPredicate({self._constraints!r})"

    def to_specification(
        self, registry: MemoryOperatorRegistry
    ) -> ISpecification | None:
        """Compile to a specification tree; ``None`` when unconstrained."""
        specs = [c.to_specification(f, registry) for f, c in self._constraints.items()]
        if not specs:
            return None
        if len(specs) == 1:
            return specs[0]
        return AndSpecification(*specs)
