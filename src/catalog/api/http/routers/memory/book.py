"""In-memory book API router.

Serves ``/books`` when the catalog runs without a database. Books carry the
author inline and identifiers are positive integers.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from src.catalog.api.http.deps import get_memory_store, read_json_payload
from src.catalog.api.http.routers._chains import (
    create_chain,
    delete_chain,
    get_chain,
    json_body,
    list_chain,
    update_chain,
)
from src.catalog.core.storage.base import Page
from src.catalog.core.storage.memory_store import InMemoryBookStore
from src.catalog.core.validation.identifiers import validate_integer_id
from src.catalog.core.validation.specs import MEMORY_BOOK_SCHEMA
from src.catalog.entities.memory import MemoryBook

router = APIRouter(prefix="/books", tags=["Books"])

# ``genre`` is the public name of the category filter.
FILTER_ALIASES = {"genre": "category"}


@router.get("", response_model=Page[MemoryBook], summary="Get all books")
def list_books(
    author: str | None = Query(None, description="Case-insensitive author filter"),
    genre: str | None = Query(None, description="Case-insensitive genre filter"),
    page: str | None = Query(None, description="Page number, starting at 1"),
    limit: str | None = Query(None, description="Page size"),
    store: InMemoryBookStore = Depends(get_memory_store),
) -> Page[MemoryBook]:
    return list_chain(
        store,
        {"author": author, "genre": genre, "page": page, "limit": limit},
        filter_aliases=FILTER_ALIASES,
    )


@router.get("/{item_id}", response_model=MemoryBook, summary="Get a book by ID")
def get_book(
    item_id: str,
    store: InMemoryBookStore = Depends(get_memory_store),
) -> MemoryBook:
    return get_chain(store, validate_integer_id, item_id)


@router.post(
    "",
    response_model=MemoryBook,
    status_code=201,
    summary="Create a new book",
    openapi_extra=json_body(MEMORY_BOOK_SCHEMA),
)
def create_book(
    payload: Any = Depends(read_json_payload),
    store: InMemoryBookStore = Depends(get_memory_store),
) -> MemoryBook:
    return create_chain(store, MEMORY_BOOK_SCHEMA, payload)


@router.put(
    "/{item_id}",
    response_model=MemoryBook,
    summary="Update a book by ID",
    openapi_extra=json_body(MEMORY_BOOK_SCHEMA, partial=True),
)
def update_book(
    item_id: str,
    payload: Any = Depends(read_json_payload),
    store: InMemoryBookStore = Depends(get_memory_store),
) -> MemoryBook:
    return update_chain(
        store, MEMORY_BOOK_SCHEMA, validate_integer_id, item_id, payload
    )


@router.delete("/{item_id}", summary="Delete a book by ID")
def delete_book(
    item_id: str,
    store: InMemoryBookStore = Depends(get_memory_store),
) -> dict[str, str]:
    return delete_chain(store, validate_integer_id, item_id)
