from .collection import (
    Bucket,
    GroupKey,
    GroupOrder,
    GroupQuery,
    IRecordCollection,
    UpdateResult,
)

__all__ = [
    "Bucket",
    "GroupKey",
    "GroupOrder",
    "GroupQuery",
    "IRecordCollection",
    "UpdateResult",
]
