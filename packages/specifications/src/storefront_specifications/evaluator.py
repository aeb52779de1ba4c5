"""
In-memory operator evaluation.

Each leaf operator is a small :class:`MemoryOperator` strategy; the
:class:`MemoryOperatorRegistry` maps :class:`SpecificationOperator` values
to them so attribute specifications can test records without a database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import OperatorNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .operators import SpecificationOperator


class MemoryOperator(ABC):
    """Strategy for one operator; subclasses set :attr:`name`."""

    name: SpecificationOperator

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Test a value resolved from a record against the condition operand.

        Args:
            field_value: Value at the specification's attribute path, or
                ``None`` when the path is absent.
            condition_value: Operand carried by the specification.
        """


class MemoryOperatorRegistry:
    """
    Operator strategies keyed by :class:`SpecificationOperator`.

    Registering a second strategy for the same operator replaces the first,
    which is how callers override a built-in.
    """

    def __init__(self, *operators: MemoryOperator) -> None:
        self._operators: dict[SpecificationOperator, MemoryOperator] = {}
        self.register_all(*operators)

    def register(self, operator: MemoryOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, name: SpecificationOperator) -> MemoryOperator | None:
        return self._operators.get(name)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._operators

    def __iter__(self) -> Iterator[MemoryOperator]:
        return iter(self._operators.values())

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def evaluate(
        self, name: SpecificationOperator, field_value: Any, condition_value: Any
    ) -> bool:
        """
        Evaluate *name* against concrete values.

        Raises:
            OperatorNotFoundError: No strategy is registered for *name*.
        """
        op = self._operators.get(name)
        if op is None:
            raise OperatorNotFoundError(
                str(getattr(name, "value", name)),
                sorted(o.value for o in self._operators),
            )
        return op.evaluate(field_value, condition_value)
