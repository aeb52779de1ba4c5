"""Substring operators -> escaped ``$regex`` (``$options: "i"`` for icontains)."""

from __future__ import annotations

import re
from typing import Any

from storefront_specifications.operators import SpecificationOperator as Op

from ..exceptions import MongoQueryError


def compile_substring(field: str, op: Op, val: Any) -> dict[str, Any]:
    if not isinstance(val, str):
        raise MongoQueryError(f"{op.value} needs a string operand, got {val!r}")
    options = "i" if op is Op.ICONTAINS else ""
    return {field: {"$regex": re.escape(val), "$options": options}}
