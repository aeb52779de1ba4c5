"""FilterBuilder — untrusted query parameters → FilterPredicate."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from typing import Any

from .exceptions import InvalidFilterError
from .predicate import FilterPredicate
from .schema import FilterSchema

logger = logging.getLogger("storefront.filtering")

#: Parameters consumed by sorting and pagination rather than filtering.
RESERVED_PARAMS: frozenset[str] = frozenset({"page", "limit", "sortBy", "sortOrder"})


class FilterBuilder:
    """
    Build a :class:`FilterPredicate` from raw parameters using a schema.

    Only parameters declared by the schema can produce constraints. With
    ``strict=True`` any other, non-reserved parameter is rejected with
    :class:`InvalidFilterError`; otherwise it is ignored.
    """

    def __init__(
        self,
        schema: FilterSchema,
        *,
        strict: bool = False,
        reserved: Collection[str] = RESERVED_PARAMS,
    ) -> None:
        self.schema = schema
        self.strict = strict
        self.reserved = frozenset(reserved)

    def build(self, raw: Mapping[str, Any]) -> FilterPredicate:
        unknown = [
            p for p in raw if p not in self.schema.params and p not in self.reserved
        ]
        if unknown:
            if self.strict:
                raise InvalidFilterError(
                    unknown[0],
                    f"Unknown filter parameter for {self.schema.resource}",
                )
            logger.debug(
                "Ignoring unknown %s filter parameters: %s",
                self.schema.resource,
                unknown,
            )

        predicate = FilterPredicate()
        for field in self.schema.fields:
            field.apply(raw, predicate)
        logger.debug("Built %s filter: %r", self.schema.resource, predicate)
        return predicate
