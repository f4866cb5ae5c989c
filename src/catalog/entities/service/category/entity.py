"""Entity: Category."""

from typing import Any

from pydantic import Field

from src.catalog.entities._base import Entity


class Category(Entity):
    """Category entity grouping books by subject or genre."""

    name: str = Field(description="Category name")
    description: str = Field(description="Category description")

    def __eq__(self, other: Any) -> bool:
        """Compare categories by business attributes, ignoring timestamps."""
        if not isinstance(other, Category):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
        ))
