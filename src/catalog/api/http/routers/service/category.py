"""Category API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from src.catalog.api.http.deps import get_category_repository, read_json_payload
from src.catalog.api.http.routers._chains import (
    create_chain,
    delete_chain,
    get_chain,
    json_body,
    list_chain,
    update_chain,
)
from src.catalog.core.validation.identifiers import validate_object_id
from src.catalog.core.validation.specs import CATEGORY_SCHEMA
from src.catalog.entities.service.category import Category, CategoryRepository

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[Category], summary="Get all categories")
def list_categories(
    response: Response,
    name: str | None = Query(None, description="Case-insensitive name filter"),
    page: str | None = Query(None, description="Page number, starting at 1"),
    limit: str | None = Query(None, description="Page size"),
    repository: CategoryRepository = Depends(get_category_repository),
) -> list[Category]:
    result = list_chain(repository, {"name": name, "page": page, "limit": limit})
    response.headers["X-Total-Count"] = str(result.total)
    return result.data


@router.get("/{item_id}", response_model=Category, summary="Get a category by ID")
def get_category(
    item_id: str,
    repository: CategoryRepository = Depends(get_category_repository),
) -> Category:
    return get_chain(repository, validate_object_id, item_id)


@router.post(
    "",
    response_model=Category,
    status_code=201,
    summary="Create a new category",
    openapi_extra=json_body(CATEGORY_SCHEMA),
)
def create_category(
    payload: Any = Depends(read_json_payload),
    repository: CategoryRepository = Depends(get_category_repository),
) -> Category:
    return create_chain(repository, CATEGORY_SCHEMA, payload)


@router.put(
    "/{item_id}",
    response_model=Category,
    summary="Update a category by ID",
    openapi_extra=json_body(CATEGORY_SCHEMA, partial=True),
)
def update_category(
    item_id: str,
    payload: Any = Depends(read_json_payload),
    repository: CategoryRepository = Depends(get_category_repository),
) -> Category:
    return update_chain(
        repository, CATEGORY_SCHEMA, validate_object_id, item_id, payload
    )


@router.delete("/{item_id}", summary="Delete a category by ID")
def delete_category(
    item_id: str,
    repository: CategoryRepository = Depends(get_category_repository),
) -> dict[str, str]:
    return delete_chain(repository, validate_object_id, item_id)
