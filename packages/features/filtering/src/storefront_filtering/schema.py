"""FilterSchema — per-resource declaration of filterable query parameters.

Each declared field reads one or two raw parameters and contributes at most
one constraint to a :class:`FilterPredicate`. Raw values are strings, lists
of strings (repeated parameters) or ``None``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidFilterError
from .predicate import (
    TEXT_SEARCH_KEY,
    Contains,
    Equals,
    FilterPredicate,
    OneOf,
    Range,
    TextSearch,
)

#: Placeholder value meaning "no constraint" for enumerated fields.
ALL = "all"

_DATETIME = TypeAdapter(datetime)


def _present(raw: Any) -> list[str]:
    """Non-empty, stripped string values of a raw parameter."""
    if raw is None:
        return []
    values = raw if isinstance(raw, list | tuple) else [raw]
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


def _last(raw: Any) -> str | None:
    values = _present(raw)
    return values[-1] if values else None


def _choices_of(choices: type[Enum] | Sequence[str] | None) -> tuple[str, ...] | None:
    if choices is None:
        return None
    if isinstance(choices, type) and issubclass(choices, Enum):
        return tuple(str(m.value) for m in choices)
    return tuple(choices)


class FilterField(ABC):
    """A declared filterable parameter group."""

    @property
    @abstractmethod
    def params(self) -> tuple[str, ...]:
        """Raw parameter names consumed by this field."""
        ...

    @property
    @abstractmethod
    def target(self) -> str:
        """Stored field (predicate key) constrained by this field."""
        ...

    @abstractmethod
    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        """Read raw parameters and add this field's constraint, if any."""
        ...


class EqualityField(FilterField):
    """
    Exact match, optionally restricted to an enumerated value set.

    The sentinel ``"all"`` (or an empty value) means no constraint. A
    repeated parameter becomes a set-membership constraint.
    """

    def __init__(
        self,
        param: str,
        target: str | None = None,
        *,
        choices: type[Enum] | Sequence[str] | None = None,
    ) -> None:
        self.param = param
        self._target = target or param
        self.choices = _choices_of(choices)

    @property
    def params(self) -> tuple[str, ...]:
        return (self.param,)

    @property
    def target(self) -> str:
        return self._target

    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        values = list(dict.fromkeys(_present(raw.get(self.param))))
        if not values or ALL in values:
            return
        if self.choices is not None:
            for value in values:
                if value not in self.choices:
                    raise InvalidFilterError(
                        self.param,
                        f"{value!r} is not one of {list(self.choices)}",
                    )
        if len(values) == 1:
            predicate.set(self.target, Equals(values[0]))
        else:
            predicate.set(self.target, OneOf(tuple(values)))


class SubstringField(FilterField):
    """Case-insensitive partial match on free text (e.g. city, state)."""

    def __init__(self, param: str, target: str | None = None) -> None:
        self.param = param
        self._target = target or param

    @property
    def params(self) -> tuple[str, ...]:
        return (self.param,)

    @property
    def target(self) -> str:
        return self._target

    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        value = _last(raw.get(self.param))
        if value is None or value == ALL:
            return
        predicate.set(self.target, Contains(value))


class BooleanField(FilterField):
    """Accepts only the literals ``true``/``false``; anything else is absent."""

    def __init__(self, param: str, target: str | None = None) -> None:
        self.param = param
        self._target = target or param

    @property
    def params(self) -> tuple[str, ...]:
        return (self.param,)

    @property
    def target(self) -> str:
        return self._target

    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        value = _last(raw.get(self.param))
        if value == "true":
            predicate.set(self.target, Equals(True))
        elif value == "false":
            predicate.set(self.target, Equals(False))


class RangeKind(str, Enum):
    NUMBER = "number"
    DATE = "date"


class RangeField(FilterField):
    """Independent lower/upper bounds read from two parameters."""

    def __init__(
        self,
        target: str,
        *,
        min_param: str,
        max_param: str,
        kind: RangeKind = RangeKind.NUMBER,
    ) -> None:
        self._target = target
        self.min_param = min_param
        self.max_param = max_param
        self.kind = kind

    @property
    def params(self) -> tuple[str, ...]:
        return (self.min_param, self.max_param)

    @property
    def target(self) -> str:
        return self._target

    def _parse(self, param: str, value: str) -> Any:
        if self.kind == RangeKind.DATE:
            try:
                parsed = _DATETIME.validate_python(value)
            except PydanticValidationError as exc:
                raise InvalidFilterError(param, f"{value!r} is not a date") from exc
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        try:
            number = float(value)
        except ValueError as exc:
            raise InvalidFilterError(param, f"{value!r} is not a number") from exc
        if not math.isfinite(number):
            raise InvalidFilterError(param, f"{value!r} is not a finite number")
        return number

    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        low = _last(raw.get(self.min_param))
        high = _last(raw.get(self.max_param))
        if low is None and high is None:
            return
        predicate.set(
            self.target,
            Range(
                gte=self._parse(self.min_param, low) if low is not None else None,
                lte=self._parse(self.max_param, high) if high is not None else None,
            ),
        )


class DerivedRangeField(FilterField):
    """
    Enumerated parameter that is not stored but maps onto a range of a
    stored field (e.g. stock status → stock quantity).
    """

    def __init__(self, param: str, target: str, ranges: Mapping[str, Range]) -> None:
        self.param = param
        self._target = target
        self.ranges = dict(ranges)

    @property
    def params(self) -> tuple[str, ...]:
        return (self.param,)

    @property
    def target(self) -> str:
        return self._target

    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        value = _last(raw.get(self.param))
        if value is None or value == ALL:
            return
        if value not in self.ranges:
            raise InvalidFilterError(
                self.param, f"{value!r} is not one of {list(self.ranges)}"
            )
        predicate.set(self.target, self.ranges[value])


class TextSearchField(FilterField):
    """Single text-index query across a declared set of text fields."""

    def __init__(self, param: str, fields: Sequence[str]) -> None:
        if not fields:
            raise ValueError("TextSearchField needs at least one text field")
        self.param = param
        self.fields = tuple(fields)

    @property
    def params(self) -> tuple[str, ...]:
        return (self.param,)

    @property
    def target(self) -> str:
        return TEXT_SEARCH_KEY

    def apply(self, raw: Mapping[str, Any], predicate: FilterPredicate) -> None:
        value = _last(raw.get(self.param))
        if value is None:
            return
        predicate.set(self.target, TextSearch(value, self.fields))


class FilterSchema:
    """Per-resource set of declared filter fields."""

    def __init__(self, resource: str, fields: Sequence[FilterField]) -> None:
        seen: dict[str, FilterField] = {}
        for field in fields:
            for param in field.params:
                if param in seen:
                    raise ValueError(
                        f"Parameter {param!r} declared twice in {resource} schema"
                    )
                seen[param] = field
        self.resource = resource
        self.fields = tuple(fields)
        self._by_param = seen

    @property
    def params(self) -> frozenset[str]:
        return frozenset(self._by_param)

    @property
    def targets(self) -> frozenset[str]:
        return frozenset(f.target for f in self.fields)

    def field_for(self, param: str) -> FilterField | None:
        return self._by_param.get(param)
