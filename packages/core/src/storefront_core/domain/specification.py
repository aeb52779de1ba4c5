"""Specification pattern primitives."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ISpecification(Protocol):
    """
    Protocol for the Specification pattern.
    Used to encapsulate "which records match" independently of the store.
    """

    def is_satisfied_by(self, candidate: Any) -> bool:
        """
        Check whether a stored document satisfies the specification.
        Used primarily for in-memory filtering.
        """
        ...

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the specification.
        Backends compile this tree to their native query language.
        """
        ...
