"""Entity: in-memory Book."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MemoryBook(BaseModel):
    """Book held by the in-memory store.

    The author is kept inline as a plain string and ``category`` is the genre.
    Identifiers are positive integers assigned by the store.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(description="Book ID")
    title: str = Field(description="Book title")
    author: str = Field(description="Author name")
    category: str | None = Field(default=None, description="Genre")
    publication_year: int = Field(description="Year of publication")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MemoryBook):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.category == other.category
            and self.publication_year == other.publication_year
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.title,
            self.author,
            self.category,
            self.publication_year,
        ))
