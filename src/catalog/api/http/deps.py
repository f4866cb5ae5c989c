"""FastAPI dependency implementations."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.errors import InternalError, ValidationError
from src.catalog.core.storage.memory_store import InMemoryBookStore
from src.catalog.entities import AuthorRepository, BookRepository, CategoryRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session for the duration of one request."""
    app_deps = get_app_dependencies(request)
    if app_deps.database_service is None:
        raise InternalError("Database store is not configured")
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_book_repository(db: Session = Depends(get_db_session)) -> BookRepository:
    return BookRepository(db)


def get_author_repository(db: Session = Depends(get_db_session)) -> AuthorRepository:
    return AuthorRepository(db)


def get_category_repository(
    db: Session = Depends(get_db_session),
) -> CategoryRepository:
    return CategoryRepository(db)


def get_memory_store(request: Request) -> InMemoryBookStore:
    """Get the in-memory book store instance."""
    app_deps = get_app_dependencies(request)
    if app_deps.memory_store is None:
        raise InternalError("In-memory store is not configured")
    return app_deps.memory_store


async def read_json_payload(request: Request) -> Any:
    """Decode the request body as JSON, returning None for an empty body.

    Schema checks happen later in the handler chain; this only rejects
    bodies that are not JSON at all.
    """
    body = await request.body()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError:
        raise ValidationError("Invalid JSON payload") from None
