"""
Error Handling

Domain exceptions for the notes API and the FastAPI handlers that turn
them into JSON error payloads of the form ``{"error": "..."}``.

Taxonomy:
    validation failure   400  missing/blank fields or overlong title (not logged)
    NoteNotFoundError    404  referenced note does not exist
    StoreError           500  database unreachable or query failed
    unmatched route      404  ``{"error": "Route not found"}``
    anything else        500  catch-all, process keeps serving
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_service.core.config import settings
from notes_service.models import TITLE_MAX_LENGTH

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Title and content are required"
TITLE_LENGTH_MESSAGE = f"Title must be at most {TITLE_MAX_LENGTH} characters"


class NotesError(Exception):
    """
    Base class for errors with a client-safe message.

    Attributes:
        status_code: HTTP status returned to the caller.
        message: Text safe to show to any client.
        detail: Internal detail, echoed only in development.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NoteNotFoundError(NotesError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Note not found"):
        super().__init__(message)


class StoreError(NotesError):
    """The store could not be reached or a query failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Convert driver/connection failures inside the block into a StoreError.

    Args:
        operation: Client-facing message, e.g. "Failed to fetch notes".
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.exception("%s: %s", operation, e)
        raise StoreError(operation, detail=str(e)) from e


def _error_body(error: str, detail: str | None = None) -> dict[str, str]:
    body = {"error": error}
    if detail and settings.is_development:
        body["message"] = detail
    return body


async def notes_error_handler(request: Request, exc: NotesError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.detail),
    )


def _validation_message(errors: Sequence[Any]) -> str:
    """Name the length limit when an overlong title is the only problem."""
    if errors and all(
        e.get("type") == "string_too_long"
        and tuple(e.get("loc", ()))[-1:] == ("title",)
        for e in errors
    ):
        return TITLE_LENGTH_MESSAGE
    return VALIDATION_MESSAGE


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or incomplete request bodies are a 400, never a server fault."""
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": _validation_message(exc.errors()),
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors (no matching path) get their own 404 payload."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = "Route not found"
    else:
        error = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and answer with a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Something went wrong!",
            "message": str(exc) if settings.is_development else "Internal server error",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all JSON error handlers on the application."""
    app.add_exception_handler(NotesError, notes_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)  # type: ignore[arg-type]
