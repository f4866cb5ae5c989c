"""Translate failures into HTTP responses.

Every error leaves the API as ``{"error": "<message>"}`` with the status the
error carries, and is logged server-side before the response is written.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.catalog.core.errors import (
    CatalogError,
    InternalError,
    RouteNotFoundError,
    ValidationError,
)


def error_response(
    error: CatalogError, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.message},
        headers=headers,
    )


def log_failure(error: CatalogError, request: Request | None = None) -> None:
    bound = logger.bind(
        status_code=error.status_code,
        error_type=type(error).__name__,
        path=request.url.path if request is not None else None,
    )
    if error.status_code >= 500:
        bound.opt(exception=error.__cause__ or error).error(
            "request.failed: {}", error.message
        )
    else:
        bound.warning("request.rejected: {}", error.message)


def translate(error: Exception) -> CatalogError:
    """Map any exception onto a catalog error kind."""
    if isinstance(error, CatalogError):
        return error
    if isinstance(error, RequestValidationError):
        # Only raised for bodies FastAPI could not decode as JSON
        return ValidationError("Invalid JSON payload")
    if isinstance(error, StarletteHTTPException):
        if error.status_code == 404:
            return RouteNotFoundError()
        return CatalogError(str(error.detail), status_code=error.status_code)
    return InternalError()


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    error = translate(exc)
    if error is not exc and isinstance(error, InternalError):
        error.__cause__ = exc
    log_failure(error, request)
    headers = getattr(exc, "headers", None)
    return error_response(error, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, handle_error)
    app.add_exception_handler(RequestValidationError, handle_error)
    app.add_exception_handler(StarletteHTTPException, handle_error)
