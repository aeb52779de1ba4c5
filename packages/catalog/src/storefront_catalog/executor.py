"""QueryExecutor — run a query descriptor against a collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple

from storefront_filtering.pagination import PageMeta, PaginationEngine

if TYPE_CHECKING:
    from storefront_core.domain.specification import ISpecification
    from storefront_core.ports.collection import IRecordCollection
    from storefront_filtering.injector import ConstraintInjector
    from storefront_filtering.parser import QueryDescriptor
    from storefront_specifications.evaluator import MemoryOperatorRegistry

logger = logging.getLogger("storefront.catalog")


class PageResult(NamedTuple):
    items: list[dict[str, Any]]
    meta: PageMeta

    @property
    def total(self) -> int:
        return self.meta.total


class QueryExecutor:
    """
    Apply filter, sort and page window and return one page plus the total.

    The page query and the count query are two independent storage calls;
    a concurrent write between them may leave ``total`` and ``items``
    mutually inconsistent.
    """

    def __init__(
        self,
        collection: IRecordCollection,
        registry: MemoryOperatorRegistry,
        injector: ConstraintInjector | None = None,
    ) -> None:
        if registry is None:
            raise ValueError("registry parameter is required.")
        self.collection = collection
        self.registry = registry
        self.injector = injector

    def criteria(self, descriptor: QueryDescriptor) -> ISpecification | None:
        """Compiled filter with the mandatory constraints applied."""
        spec = descriptor.predicate.to_specification(self.registry)
        if self.injector is not None:
            spec = self.injector.inject(spec)
        return spec

    async def execute(self, descriptor: QueryDescriptor) -> PageResult:
        criteria = self.criteria(descriptor)
        window = descriptor.window
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Executing query filter=%s sort=%s offset=%d limit=%d",
                criteria.to_dict() if criteria is not None else None,
                descriptor.sort.to_storage(),
                window.offset,
                window.limit,
            )
        items = await self.collection.find(
            criteria,
            sort=descriptor.sort.to_storage(),
            offset=window.offset,
            limit=window.limit,
        )
        total = await self.collection.count(criteria)
        return PageResult(items=items, meta=PaginationEngine.meta(window, total))
