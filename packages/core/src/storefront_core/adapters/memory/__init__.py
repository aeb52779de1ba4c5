from .collection import InMemoryCollection

__all__ = [
    "InMemoryCollection",
]
