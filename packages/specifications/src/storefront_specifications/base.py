"""Composable specifications: ``&``, ``|`` and ``~`` build AND/OR/NOT trees."""

from __future__ import annotations

from typing import Any, ClassVar

from storefront_core.domain.specification import ISpecification

from .operators import SpecificationOperator


class BaseSpecification(ISpecification):
    def __and__(self, other: ISpecification) -> AndSpecification:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification) -> OrSpecification:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification:
        return NotSpecification(self)

    def merge(self, other: ISpecification) -> AndSpecification:
        """Narrow this specification by *other*."""
        return AndSpecification(self, other)


class _Junction(BaseSpecification):
    """N-ary AND/OR. Children of the same junction are absorbed, so
    ``a & b & c`` serialises as one node with three conditions."""

    op: ClassVar[SpecificationOperator]

    def __init__(self, *specifications: ISpecification) -> None:
        flat: list[ISpecification] = []
        for spec in specifications:
            if type(spec) is type(self):
                flat.extend(spec.specifications)  # type: ignore[attr-defined]
            else:
                flat.append(spec)
        self.specifications = tuple(flat)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "conditions": [spec.to_dict() for spec in self.specifications],
        }

    def __repr__(self) -> str:
        inner = ", ".join(repr(s) for s in self.specifications)
        return f"{type(self).__name__}({inner})"


class AndSpecification(_Junction):
    op = SpecificationOperator.AND

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)


class OrSpecification(_Junction):
    op = SpecificationOperator.OR

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(spec.is_satisfied_by(candidate) for spec in self.specifications)


class NotSpecification(BaseSpecification):
    def __init__(self, specification: ISpecification) -> None:
        self.specification = specification

    def is_satisfied_by(self, candidate: Any) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def __invert__(self) -> ISpecification:  # type: ignore[override]
        return self.specification

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.NOT.value,
            "conditions": [self.specification.to_dict()],
        }
