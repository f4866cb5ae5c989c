"""Author API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from src.catalog.api.http.deps import get_author_repository, read_json_payload
from src.catalog.api.http.routers._chains import (
    create_chain,
    delete_chain,
    get_chain,
    json_body,
    list_chain,
    update_chain,
)
from src.catalog.core.validation.identifiers import validate_object_id
from src.catalog.core.validation.specs import AUTHOR_SCHEMA
from src.catalog.entities.service.author import Author, AuthorRepository

router = APIRouter(prefix="/authors", tags=["Authors"])


@router.get("", response_model=list[Author], summary="Get all authors")
def list_authors(
    response: Response,
    name: str | None = Query(None, description="Case-insensitive name filter"),
    page: str | None = Query(None, description="Page number, starting at 1"),
    limit: str | None = Query(None, description="Page size"),
    repository: AuthorRepository = Depends(get_author_repository),
) -> list[Author]:
    result = list_chain(repository, {"name": name, "page": page, "limit": limit})
    response.headers["X-Total-Count"] = str(result.total)
    return result.data


@router.get("/{item_id}", response_model=Author, summary="Get an author by ID")
def get_author(
    item_id: str,
    repository: AuthorRepository = Depends(get_author_repository),
) -> Author:
    return get_chain(repository, validate_object_id, item_id)


@router.post(
    "",
    response_model=Author,
    status_code=201,
    summary="Create a new author",
    openapi_extra=json_body(AUTHOR_SCHEMA),
)
def create_author(
    payload: Any = Depends(read_json_payload),
    repository: AuthorRepository = Depends(get_author_repository),
) -> Author:
    return create_chain(repository, AUTHOR_SCHEMA, payload)


@router.put(
    "/{item_id}",
    response_model=Author,
    summary="Update an author by ID",
    openapi_extra=json_body(AUTHOR_SCHEMA, partial=True),
)
def update_author(
    item_id: str,
    payload: Any = Depends(read_json_payload),
    repository: AuthorRepository = Depends(get_author_repository),
) -> Author:
    return update_chain(
        repository, AUTHOR_SCHEMA, validate_object_id, item_id, payload
    )


@router.delete("/{item_id}", summary="Delete an author by ID")
def delete_author(
    item_id: str,
    repository: AuthorRepository = Depends(get_author_repository),
) -> dict[str, str]:
    """Delete an author. Books referencing it keep the reference and read back
    with ``author: null``."""
    return delete_chain(repository, validate_object_id, item_id)
