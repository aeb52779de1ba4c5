"""Collection adapters: in-memory store and decorators."""

from .decorators import TimeoutCollection
from .memory import InMemoryCollection

__all__ = [
    "InMemoryCollection",
    "TimeoutCollection",
]
