"""Book API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from src.catalog.api.http.deps import get_book_repository, read_json_payload
from src.catalog.api.http.routers._chains import (
    create_chain,
    delete_chain,
    get_chain,
    json_body,
    list_chain,
    update_chain,
)
from src.catalog.core.validation.identifiers import validate_object_id
from src.catalog.core.validation.specs import BOOK_SCHEMA
from src.catalog.entities.service.book import Book, BookRepository

router = APIRouter(prefix="/books", tags=["Books"])


@router.get("", response_model=list[Book], summary="Get all books")
def list_books(
    response: Response,
    title: str | None = Query(None, description="Case-insensitive title filter"),
    page: str | None = Query(None, description="Page number, starting at 1"),
    limit: str | None = Query(None, description="Page size"),
    repository: BookRepository = Depends(get_book_repository),
) -> list[Book]:
    """Fetch books with their associated authors and categories.

    The total number of matching books is returned in ``X-Total-Count``.
    """
    result = list_chain(repository, {"title": title, "page": page, "limit": limit})
    response.headers["X-Total-Count"] = str(result.total)
    return result.data


@router.get("/{item_id}", response_model=Book, summary="Get a book by ID")
def get_book(
    item_id: str,
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Fetch a single book along with its author and category."""
    return get_chain(repository, validate_object_id, item_id)


@router.post(
    "",
    response_model=Book,
    status_code=201,
    summary="Create a new book",
    openapi_extra=json_body(BOOK_SCHEMA),
)
def create_book(
    payload: Any = Depends(read_json_payload),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    return create_chain(repository, BOOK_SCHEMA, payload)


@router.put(
    "/{item_id}",
    response_model=Book,
    summary="Update a book by ID",
    openapi_extra=json_body(BOOK_SCHEMA, partial=True),
)
def update_book(
    item_id: str,
    payload: Any = Depends(read_json_payload),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Update the supplied fields of a book; other fields are left unchanged."""
    return update_chain(repository, BOOK_SCHEMA, validate_object_id, item_id, payload)


@router.delete("/{item_id}", summary="Delete a book by ID")
def delete_book(
    item_id: str,
    repository: BookRepository = Depends(get_book_repository),
) -> dict[str, str]:
    return delete_chain(repository, validate_object_id, item_id)
