"""Entity: Book."""

from typing import Any

from pydantic import Field

from src.catalog.entities._base import Entity
from src.catalog.entities.service.author.entity import Author
from src.catalog.entities.service.category.entity import Category


class Book(Entity):
    """Book entity with its author and category resolved.

    The database keeps only the author and category identifiers; the
    repository fills in the referenced entities when reading. A reference
    whose target no longer exists resolves to ``None``.
    """

    title: str = Field(description="Book title")
    author: Author | None = Field(default=None, description="Author details")
    category: Category | None = Field(default=None, description="Category details")
    publication_year: int = Field(description="Year of publication")

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.category == other.category
            and self.publication_year == other.publication_year
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.title,
            self.author,
            self.category,
            self.publication_year,
        ))
