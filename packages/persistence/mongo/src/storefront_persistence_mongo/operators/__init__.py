"""Leaf operator compilers, keyed by the operator they translate."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from storefront_specifications.operators import SpecificationOperator as Op

from .set import compile_membership, compile_range
from .standard import COMPARISONS, compile_comparison
from .string import compile_substring
from .text import compile_text

LeafCompiler = Callable[[str, Op, Any], dict[str, Any]]

LEAF_COMPILERS: dict[Op, LeafCompiler] = {
    **dict.fromkeys(COMPARISONS, compile_comparison),
    Op.IN: compile_membership,
    Op.NOT_IN: compile_membership,
    Op.BETWEEN: compile_range,
    Op.CONTAINS: compile_substring,
    Op.ICONTAINS: compile_substring,
}

__all__ = ["LEAF_COMPILERS", "LeafCompiler", "compile_text"]
