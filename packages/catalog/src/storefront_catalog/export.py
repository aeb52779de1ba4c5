"""CSV export of enquiry documents."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

CSV_HEADER = "Name,Email,Phone,City,State,Status,Priority,Created Date"
CSV_COLUMNS = ("name", "email", "phone", "city", "state", "status", "priority")


def iso_timestamp(value: datetime | None) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def enquiries_to_csv(documents: Iterable[dict[str, Any]]) -> str:
    """Header line, then one quoted row per document joined by newlines."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for doc in documents:
        row = ["" if doc.get(col) is None else str(doc.get(col)) for col in CSV_COLUMNS]
        row.append(iso_timestamp(doc.get("createdAt")))
        writer.writerow(row)
    return CSV_HEADER + "\n" + buffer.getvalue().removesuffix("\n")
