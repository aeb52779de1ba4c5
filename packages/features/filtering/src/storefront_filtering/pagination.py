"""PaginationEngine — page/limit parameters → PageWindow and PageMeta."""

from __future__ import annotations

import math
from typing import Any, NamedTuple

from .exceptions import InvalidPaginationError

# Storage skip values are signed 64-bit.
MAX_OFFSET = 2**63 - 1


class PageWindow(NamedTuple):
    page: int
    limit: int
    offset: int


class PageMeta(NamedTuple):
    current: int
    pages: int
    total: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "pages": self.pages,
            "total": self.total,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


class PaginationEngine:
    """
    Parse page and limit strictly and derive page metadata.

    ``limit`` above ``max_limit`` is clamped; non-numeric, zero or negative
    values raise :class:`InvalidPaginationError`, as does a page whose
    offset would exceed :data:`MAX_OFFSET`.
    """

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100) -> None:
        if not 1 <= default_limit <= max_limit:
            raise ValueError("default_limit must be between 1 and max_limit")
        self.default_limit = default_limit
        self.max_limit = max_limit

    @staticmethod
    def _positive_int(param: str, raw: Any, default: int) -> int:
        if raw is None:
            return default
        if isinstance(raw, int) and not isinstance(raw, bool):
            value = raw
        else:
            text = str(raw).strip()
            if not (text.isascii() and text.isdigit()):
                raise InvalidPaginationError(param, raw)
            value = int(text)
        if value < 1:
            raise InvalidPaginationError(param, raw)
        return value

    def window(self, page: Any = None, limit: Any = None) -> PageWindow:
        page_no = self._positive_int("page", page, 1)
        size = min(self._positive_int("limit", limit, self.default_limit), self.max_limit)
        if (page_no - 1) * size > MAX_OFFSET:
            raise InvalidPaginationError("page", page, "is too large")
        return PageWindow(page=page_no, limit=size, offset=(page_no - 1) * size)

    @staticmethod
    def meta(window: PageWindow, total: int) -> PageMeta:
        pages = math.ceil(total / window.limit)
        return PageMeta(
            current=window.page,
            pages=pages,
            total=total,
            has_next=window.page < pages,
            has_prev=window.page > 1,
        )
