"""Store contract shared by the in-memory store and the database repositories."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")
EntityT = TypeVar("EntityT", covariant=True)


class Page(BaseModel, Generic[T]):
    """One page of a filtered listing."""

    total: int = Field(description="Number of entities matching the filters")
    page: int = Field(description="Requested page, 1-based")
    limit: int = Field(description="Requested page size")
    data: list[T] = Field(default_factory=list)


class ResourceStore(Protocol[EntityT]):
    """Operations every entity store exposes."""

    def list(
        self, filters: Mapping[str, str | None], page: int, limit: int
    ) -> Page[Any]: ...

    def get(self, entity_id: Any) -> EntityT: ...

    def create(self, fields: Mapping[str, Any]) -> EntityT: ...

    def update(self, entity_id: Any, fields: Mapping[str, Any]) -> EntityT: ...

    def delete(self, entity_id: Any) -> dict[str, str]: ...


def page_bounds(page: int, limit: int) -> tuple[int, int]:
    """Return the ``[start, stop)`` slice for a 1-based page."""
    start = (page - 1) * limit
    return start, start + limit


def active_filters(filters: Mapping[str, str | None]) -> dict[str, str]:
    """Drop unset or blank filter values and lowercase the rest."""
    return {key: value.lower() for key, value in filters.items() if value}
