"""storefront-core — Foundation package for the storefront query engine.

Error taxonomy, record base model, storage port and collection adapters.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters import InMemoryCollection, TimeoutCollection

# ── Domain ───────────────────────────────────────────────────────
from .domain import ISpecification, Record, to_document, touch

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    Bucket,
    GroupKey,
    GroupOrder,
    GroupQuery,
    IRecordCollection,
    UpdateResult,
)

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    DomainError,
    IIDGenerator,
    InfrastructureError,
    InvalidIdentifierError,
    NotFoundError,
    ObjectIdGenerator,
    PersistenceError,
    RecordNotFoundError,
    StorageTimeoutError,
    StorageUnavailableError,
    StorefrontError,
    ValidationError,
    is_valid_id,
)
from .utils import resolve_path, utc_now

# ── Validation ───────────────────────────────────────────────────
from .validation import errors_from_pydantic, validate_model

__all__ = [
    # Adapters
    "InMemoryCollection",
    "TimeoutCollection",
    # Domain
    "ISpecification",
    "Record",
    "to_document",
    "touch",
    # Ports
    "Bucket",
    "GroupKey",
    "GroupOrder",
    "GroupQuery",
    "IRecordCollection",
    "UpdateResult",
    # Primitives
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
    # Utilities
    "resolve_path",
    "utc_now",
    # Validation
    "errors_from_pydantic",
    "validate_model",
]
