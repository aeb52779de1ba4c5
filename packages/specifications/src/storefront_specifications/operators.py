"""Operator vocabulary shared by specifications, evaluators and compilers."""

from enum import Enum


class SpecificationOperator(str, Enum):
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"

    CONTAINS = "contains"
    ICONTAINS = "icontains"

    FTS = "fts"

    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def is_logical(self) -> bool:
        """Combinators take child conditions instead of an attribute."""
        return self in _LOGICAL


_LOGICAL = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
