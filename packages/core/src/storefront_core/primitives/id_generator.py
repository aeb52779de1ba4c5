from typing import Protocol

from bson import ObjectId


class IIDGenerator(Protocol):
    """
    Protocol for ID generation strategies.
    Identifiers must be strings that sort in creation order.
    """

    def next_id(self) -> str:
        """Generates the next unique identifier."""
        ...


class ObjectIdGenerator(IIDGenerator):
    """
    Default ID generator using BSON ObjectIds.
    Matches the identifiers MongoDB assigns, so in-memory and Mongo-backed
    collections hand out ids of the same shape.
    """

    def next_id(self) -> str:
        """Returns the 24-character hex form of a fresh ObjectId."""
        return str(ObjectId())


def is_valid_id(value: object) -> bool:
    """Return True if *value* is a 24-character hex ObjectId string."""
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)
