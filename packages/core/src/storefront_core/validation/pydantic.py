"""Pydantic validation helpers — convert model errors to ValidationError."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import ValidationError

TModel = TypeVar("TModel", bound=BaseModel)


def errors_from_pydantic(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by dotted field location."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
        msg = error.get("msg", "validation error")
        errors.setdefault(loc, []).append(msg)
    return errors


def validate_model(model_cls: type[TModel], data: Any) -> TModel:
    """Validate *data* as *model_cls*, raising :class:`ValidationError`.

    All field errors are collected, not only the first one.
    """
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(errors_from_pydantic(exc)) from exc
