"""API query parsing — filter, sort, pagination; mandatory constraint injection."""

from __future__ import annotations

from .builder import RESERVED_PARAMS, FilterBuilder
from .exceptions import (
    InvalidFilterError,
    InvalidPaginationError,
    InvalidSortFieldError,
)
from .injector import ConstraintInjector
from .pagination import PageMeta, PageWindow, PaginationEngine
from .parser import QueryDescriptor, QueryParser, collect_params
from .predicate import (
    TEXT_SEARCH_KEY,
    Constraint,
    Contains,
    Equals,
    FilterPredicate,
    OneOf,
    Range,
    TextSearch,
)
from .schema import (
    ALL,
    BooleanField,
    DerivedRangeField,
    EqualityField,
    FilterField,
    FilterSchema,
    RangeField,
    RangeKind,
    SubstringField,
    TextSearchField,
)
from .sort import TIE_BREAK_FIELD, SortDirection, SortResolver, SortSpec

__all__ = [
    "ALL",
    "BooleanField",
    "Constraint",
    "ConstraintInjector",
    "Contains",
    "DerivedRangeField",
    "EqualityField",
    "Equals",
    "FilterBuilder",
    "FilterField",
    "FilterPredicate",
    "FilterSchema",
    "InvalidFilterError",
    "InvalidPaginationError",
    "InvalidSortFieldError",
    "OneOf",
    "PageMeta",
    "PageWindow",
    "PaginationEngine",
    "QueryDescriptor",
    "QueryParser",
    "RESERVED_PARAMS",
    "Range",
    "RangeField",
    "RangeKind",
    "SortDirection",
    "SortResolver",
    "SortSpec",
    "SubstringField",
    "TEXT_SEARCH_KEY",
    "TIE_BREAK_FIELD",
    "TextSearch",
    "TextSearchField",
    "collect_params",
]
