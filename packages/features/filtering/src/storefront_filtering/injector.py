"""ConstraintInjector — append mandatory constraints (e.g. soft-delete scope)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from storefront_specifications.ast import AttributeSpecification
from storefront_specifications.base import AndSpecification
from storefront_specifications.operators import SpecificationOperator

if TYPE_CHECKING:
    from storefront_core.domain.specification import ISpecification
    from storefront_specifications.evaluator import MemoryOperatorRegistry


class ConstraintInjector:
    """Appends mandatory equality constraints before query execution."""

    def __init__(
        self,
        registry: MemoryOperatorRegistry,
        constraints: Mapping[str, Any],
    ) -> None:
        """
        Initialize ConstraintInjector.

        Args:
            registry: MemoryOperatorRegistry for creating specifications.
            constraints: Stored field → required value, ANDed onto every query.
        """
        if registry is None:
            raise ValueError(
                "registry parameter is required. "
                "Use build_default_registry() from "
                "storefront_specifications.operators_memory to create one."
            )
        self._registry = registry
        self._constraints = dict(constraints)

    def inject(self, spec: ISpecification | None) -> ISpecification | None:
        """Return spec AND every mandatory constraint."""
        result = spec
        for field, value in self._constraints.items():
            c = AttributeSpecification(
                field, SpecificationOperator.EQ, value, registry=self._registry
            )
            result = AndSpecification(result, c) if result is not None else c
        return result
