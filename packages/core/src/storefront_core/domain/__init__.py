"""Domain primitives: records and specifications."""

from __future__ import annotations

from .record import Record, to_document, touch
from .specification import ISpecification

__all__: list[str] = [
    "ISpecification",
    "Record",
    "to_document",
    "touch",
]
