"""Domain and infrastructure exceptions for storefront-core."""

from __future__ import annotations


class StorefrontError(Exception):
    """Root exception for the entire storefront toolkit."""


class DomainError(StorefrontError):
    """Base class for all domain-related errors."""


class NotFoundError(DomainError):
    """Raised when a record or resource is not found."""


class RecordNotFoundError(NotFoundError):
    """Raised when a specific record cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class InvalidIdentifierError(DomainError):
    """Raised when an identifier is not in the storage identifier format."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"Invalid {entity_type} ID format: {entity_id!r}")


class ValidationError(StorefrontError):
    """Raised when input or record validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))

    @property
    def messages(self) -> list[str]:
        """Flat list of messages, prefixed with the field name where known."""
        out: list[str] = []
        for field_name, messages in self.errors.items():
            for message in messages:
                if field_name == "__root__":
                    out.append(message)
                else:
                    out.append(f"{field_name}: {message}")
        return out


class InfrastructureError(StorefrontError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class StorageUnavailableError(PersistenceError):
    """Raised when the underlying store cannot be reached.

    Never retried inside the engine; callers decide.
    """

    retryable = False


class StorageTimeoutError(StorageUnavailableError):
    """Raised when a storage call exceeds its caller-supplied timeout."""

    retryable = True

    def __init__(self, operation: str, timeout: float) -> None:
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"Storage operation {operation!r} timed out after {timeout}s")
