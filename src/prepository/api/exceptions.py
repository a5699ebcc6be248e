"""Exception handlers for the Prepository API.

Domain errors from ``prepository.core.errors`` are translated here. All
credential failures produce one uniform 401; the specific reason is logged
but never returned.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from prepository.core.errors import (
    ConflictError,
    CredentialError,
    InvalidLoginError,
    NotFoundError,
    PrepositoryError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}

# Most specific first
_STATUS_MAP: list[tuple[type[PrepositoryError], int]] = [
    (ValidationError, 422),
    (InvalidLoginError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def _error_body(message: str, details: Any = None) -> dict[str, Any]:
    return {"error": message, "details": details if details is not None else {}}


async def credential_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    """Handle missing, malformed and invalid credentials identically."""
    logger.info(
        "Unauthorized %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=_error_body("Unauthorized"),
        headers=UNAUTHORIZED_HEADERS,
    )


async def domain_error_handler(request: Request, exc: PrepositoryError) -> JSONResponse:
    """Handle domain errors raised by services."""
    for exc_type, status_code in _STATUS_MAP:
        if isinstance(exc, exc_type):
            break
    else:
        logger.error("Unmapped domain error: %r", exc)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return JSONResponse(status_code=status_code, content=_error_body("Internal server error"))

    details: dict[str, Any] = {}
    if isinstance(exc, ValidationError) and exc.fields:
        details["fields"] = exc.fields

    headers = UNAUTHORIZED_HEADERS if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.message, details),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body/parameter validation errors."""
    return JSONResponse(
        status_code=422,
        content=_error_body("Validation error", jsonable_errors(exc)),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Reduce pydantic error entries to JSON-safe fields."""
    return [
        {
            "loc": list(err.get("loc", ())),
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unexpected error", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""
    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(PrepositoryError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
