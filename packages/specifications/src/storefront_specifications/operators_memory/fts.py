"""Full-text search operator for in-memory evaluation.

Approximates a MongoDB text index query: the query is split on
whitespace and a field matches when any term occurs in it, ignoring
case. There is no stemming, stop-word handling or relevance score.
"""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class FtsOperator(MemoryOperator):
    name = SpecificationOperator.FTS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        if isinstance(field_value, list | tuple):
            field_value = " ".join(map(str, field_value))
        text = str(field_value).casefold()
        return any(term in text for term in str(condition_value).casefold().split())
