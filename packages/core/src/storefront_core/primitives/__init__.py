"""Primitives: exceptions, ID generation."""

from __future__ import annotations

from .exceptions import (
    DomainError,
    InfrastructureError,
    InvalidIdentifierError,
    NotFoundError,
    PersistenceError,
    RecordNotFoundError,
    StorageTimeoutError,
    StorageUnavailableError,
    StorefrontError,
    ValidationError,
)
from .id_generator import IIDGenerator, ObjectIdGenerator, is_valid_id

__all__ = [
    "DomainError",
    "IIDGenerator",
    "InfrastructureError",
    "InvalidIdentifierError",
    "NotFoundError",
    "ObjectIdGenerator",
    "PersistenceError",
    "RecordNotFoundError",
    "StorageTimeoutError",
    "StorageUnavailableError",
    "StorefrontError",
    "ValidationError",
    "is_valid_id",
]
