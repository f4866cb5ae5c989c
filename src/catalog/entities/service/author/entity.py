"""Entity: Author."""

from typing import Any

from pydantic import Field

from src.catalog.entities._base import Entity


class Author(Entity):
    """Author entity representing a writer in the catalog.

    This is the domain model returned by the API and embedded into books
    when their author reference is resolved.
    """

    name: str = Field(description="Author name")
    biography: str = Field(description="Author biography")

    def __eq__(self, other: Any) -> bool:
        """Compare authors by business attributes, ignoring timestamps."""
        if not isinstance(other, Author):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.biography == other.biography
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.biography,
        ))
