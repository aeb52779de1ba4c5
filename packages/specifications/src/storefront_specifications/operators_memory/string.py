"""Substring operators: contains, icontains.

The operand is a literal, never a pattern.
"""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class SubstringOperator(MemoryOperator):
    def __init__(self, name: SpecificationOperator, *, ignore_case: bool) -> None:
        self.name = name
        self.ignore_case = ignore_case

    def _fold(self, value: Any) -> str:
        text = str(value)
        return text.casefold() if self.ignore_case else text

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or isinstance(field_value, list | dict):
            return False
        return self._fold(condition_value) in self._fold(field_value)


def substring_operators() -> list[SubstringOperator]:
    return [
        SubstringOperator(SpecificationOperator.CONTAINS, ignore_case=False),
        SubstringOperator(SpecificationOperator.ICONTAINS, ignore_case=True),
    ]
