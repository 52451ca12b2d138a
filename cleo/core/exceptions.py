"""
Domain error taxonomy and global exception handlers.

Every domain failure is a ``CleoError``; at the HTTP boundary all of them,
and every database error, collapse into one "bad request" response
carrying a human-readable message.  Stack traces never reach clients.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class CleoError(Exception):
    """Base class for every failure surfaced to API clients."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CleoError):
    """A lookup by id, secret or username found no row."""


class InvalidCredentialsError(CleoError):
    """Password verification failed."""


class NotOwnerError(CleoError):
    """The acting user does not own the resource."""


class NotAdminError(CleoError):
    """The acting user is not an administrator."""


class InvalidInputError(CleoError):
    """The request conflicts with existing state or is semantically invalid."""


class DownstreamError(CleoError):
    """The database, the SMTP relay or the file store failed."""


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": message, "success": False},
    )


async def _cleo_error_handler(_request: Request, exc: CleoError) -> JSONResponse:
    return _bad_request(exc.message)


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "success": False},
    )


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for error in exc.errors():
        field = ".".join(str(p) for p in error.get("loc", ())[1:])
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return _bad_request("; ".join(parts) or "Invalid request.")


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Database integrity error: %s", exc, exc_info=True)
    return _bad_request("Database constraint violation")


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _bad_request("Internal database error")


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "success": False},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(CleoError, _cleo_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
