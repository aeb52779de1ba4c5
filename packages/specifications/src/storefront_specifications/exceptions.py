"""Specification errors."""

from __future__ import annotations

from difflib import get_close_matches

from storefront_core.primitives.exceptions import StorefrontError


class SpecificationError(StorefrontError):
    """A specification tree cannot be built or evaluated."""


class OperatorNotFoundError(SpecificationError):
    """An operator name is unknown, or has no strategy registered.

    ``suggestions`` holds up to three close spellings from
    ``valid_operators``.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = sorted(valid_operators)
        self.suggestions = get_close_matches(operator, self.valid_operators, n=3)
        hint = f" Did you mean: {', '.join(self.suggestions)}?" if self.suggestions else ""
        super().__init__(f"Unknown operator: {operator!r}.{hint}")
