"""Core building blocks: errors, validation, handler chains and stores."""

from .errors import (
    CatalogError,
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
    RouteNotFoundError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "InternalError",
    "InvalidIdentifierError",
    "NotFoundError",
    "RouteNotFoundError",
    "ValidationError",
]
