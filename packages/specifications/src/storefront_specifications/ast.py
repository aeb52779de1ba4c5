from __future__ import annotations

from typing import TYPE_CHECKING, Any

from storefront_core.utils import resolve_path

from .base import BaseSpecification
from .exceptions import OperatorNotFoundError
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .evaluator import MemoryOperatorRegistry

_ATTRIBUTE_OPERATORS: dict[str, SpecificationOperator] = {
    m.value: m
    for m in SpecificationOperator
    if not m.is_logical and m is not SpecificationOperator.FTS
}


def _coerce_operator(op: SpecificationOperator | str) -> SpecificationOperator:
    """Operators that test a single attribute; combinators and fts are not."""
    name = op.value if isinstance(op, SpecificationOperator) else op
    if name not in _ATTRIBUTE_OPERATORS:
        raise OperatorNotFoundError(str(name), list(_ATTRIBUTE_OPERATORS))
    return _ATTRIBUTE_OPERATORS[name]


class AttributeSpecification(BaseSpecification):
    """
    Specification that checks a single attribute value.

    Delegates in-memory evaluation to a :class:`MemoryOperatorRegistry`
    (strategy pattern). A registry MUST be explicitly provided via
    dependency injection.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any,
        *,
        registry: MemoryOperatorRegistry,
    ) -> None:
        if registry is None:
            raise ValueError(
                "registry parameter is required. "
                "Use build_default_registry() from operators_memory to create one."
            )
        self.attr = attr
        self.op = _coerce_operator(op)
        self.val = val
        self._registry = registry

    def is_satisfied_by(self, candidate: Any) -> bool:
        actual_val = resolve_path(candidate, self.attr)
        return self._registry.evaluate(self.op, actual_val, self.val)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r}, {self.op.value!r}, {self.val!r})"


class TextSearchSpecification(BaseSpecification):
    """
    Full-text search across a declared set of text fields.

    Serialises as ``{"op": "fts", "fields": [...], "val": query}``; a backend
    with a text index answers it from the index, the in-memory evaluator
    checks each field with the ``fts`` operator and accepts any hit.
    """

    def __init__(
        self,
        fields: Sequence[str],
        query: str,
        *,
        registry: MemoryOperatorRegistry,
    ) -> None:
        if not fields:
            raise ValueError("text search needs at least one field")
        self.fields = tuple(fields)
        self.query = query
        self._registry = registry

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(
            self._registry.evaluate(
                SpecificationOperator.FTS, resolve_path(candidate, f), self.query
            )
            for f in self.fields
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.FTS.value,
            "fields": list(self.fields),
            "val": self.query,
        }
