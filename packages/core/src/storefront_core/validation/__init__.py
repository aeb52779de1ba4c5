"""Validation helpers built on pydantic."""

from __future__ import annotations

from .pydantic import errors_from_pydantic, validate_model

__all__ = [
    "errors_from_pydantic",
    "validate_model",
]
