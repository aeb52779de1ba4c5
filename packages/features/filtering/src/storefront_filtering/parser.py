"""QueryParser — raw query parameters → QueryDescriptor."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from .builder import FilterBuilder
from .pagination import PageWindow, PaginationEngine
from .predicate import FilterPredicate
from .sort import SortResolver, SortSpec


class QueryDescriptor(NamedTuple):
    """Validated filter, ordering and page window for one list request."""

    predicate: FilterPredicate
    sort: SortSpec
    window: PageWindow


def collect_params(items: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Fold ``(name, value)`` pairs into a mapping; repeated names become lists."""
    params: dict[str, Any] = {}
    for key, value in items:
        if key in params:
            current = params[key]
            params[key] = [*current, value] if isinstance(current, list) else [current, value]
        else:
            params[key] = value
    return params


def _scalar(raw: Any) -> Any:
    # Repeated page/limit/sort parameters: the last one wins.
    if isinstance(raw, list | tuple):
        return raw[-1] if raw else None
    return raw


class QueryParser:
    """Parse API params into a filter predicate, sort spec and page window."""

    def __init__(
        self,
        builder: FilterBuilder,
        sort_resolver: SortResolver,
        pagination: PaginationEngine,
        *,
        page_key: str = "page",
        limit_key: str = "limit",
        sort_key: str = "sortBy",
        order_key: str = "sortOrder",
    ) -> None:
        self.builder = builder
        self.sort_resolver = sort_resolver
        self.pagination = pagination
        self._page_key = page_key
        self._limit_key = limit_key
        self._sort_key = sort_key
        self._order_key = order_key

    def parse(self, raw: Mapping[str, Any]) -> QueryDescriptor:
        window = self.pagination.window(
            _scalar(raw.get(self._page_key)), _scalar(raw.get(self._limit_key))
        )
        sort = self.sort_resolver.resolve(
            _scalar(raw.get(self._sort_key)), _scalar(raw.get(self._order_key))
        )
        predicate = self.builder.build(raw)
        return QueryDescriptor(predicate=predicate, sort=sort, window=window)
