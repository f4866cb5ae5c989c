"""Error kinds raised across the catalog.

Every error carries the HTTP status it maps to and a client-facing message.
The HTTP layer turns them into JSON responses; nothing below it knows about
responses.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog failures."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(CatalogError):
    """A payload field is missing, has the wrong type or is out of bounds."""

    status_code = 400
    default_message = "Invalid payload"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidIdentifierError(CatalogError):
    """A path identifier is not well-formed for the store."""

    status_code = 400
    default_message = "Invalid ID"


class NotFoundError(CatalogError):
    """A well-formed identifier matched no entity."""

    status_code = 404
    default_message = "Not found"


class RouteNotFoundError(CatalogError):
    status_code = 404
    default_message = "Route not found"


class InternalError(CatalogError):
    """Unexpected failure, e.g. the database is unavailable."""

    status_code = 500
    default_message = "Internal Server Error"
