"""Map storefront exceptions to JSON error responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from storefront_core.primitives.exceptions import (
    InvalidIdentifierError,
    RecordNotFoundError,
    StorageUnavailableError,
    ValidationError,
)

from ...exceptions import InvalidRequestError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger("storefront.catalog")


def _messages(exc: ValidationError) -> list[str]:
    return [message for messages in exc.errors.values() for message in messages]


async def invalid_request_handler(
    request: Request, exc: InvalidRequestError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": _messages(exc)},
    )


async def invalid_identifier_handler(
    request: Request, exc: InvalidIdentifierError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid {exc.entity_type.lower()} ID format"},
    )


async def not_found_handler(
    request: Request, exc: RecordNotFoundError
) -> JSONResponse:
    return JSONResponse(
        status_code=404, content={"error": f"{exc.entity_type} not found"}
    )


async def storage_unavailable_handler(
    request: Request, exc: StorageUnavailableError
) -> JSONResponse:
    logger.error("Storage unavailable during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"error": "Storage unavailable", "retryable": exc.retryable},
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register handlers; the most specific exception class wins."""
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(InvalidIdentifierError, invalid_identifier_handler)
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(StorageUnavailableError, storage_unavailable_handler)
