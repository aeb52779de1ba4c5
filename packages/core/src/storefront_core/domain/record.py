"""Record base model and the free functions that operate on records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..utils import utc_now

TRecord = TypeVar("TRecord", bound="Record")


class Record(BaseModel):
    """Base class for stored documents.

    Stored field names are camelCase (``createdAt``, ``isActive``); Python
    attribute names are snake_case. Either spelling is accepted on input.
    ``id`` stays ``None`` until the collection assigns one on insert.

    Records carry data only: lifecycle operations are plain functions that
    take a record and return a new one.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        frozen=True,
    )

    id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


def to_document(record: Record, *, include_id: bool = True) -> dict[str, Any]:
    """Dump a record to its stored (camelCase) document form."""
    exclude = None if include_id else {"id"}
    return record.model_dump(by_alias=True, exclude=exclude)


def touch(record: TRecord) -> TRecord:
    """Return a copy with ``updated_at`` set to now."""
    return record.model_copy(update={"updated_at": utc_now()})
