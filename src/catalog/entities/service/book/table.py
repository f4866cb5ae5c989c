"""Book database table model."""

from sqlmodel import Field

from src.catalog.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    Author and category are stored as plain identifier references and are
    resolved at read time, so deleting an author or category leaves the
    book in place.
    """

    __tablename__ = "books"

    title: str = Field(index=True)
    author_id: str = Field(max_length=32, index=True)
    category_id: str = Field(max_length=32, index=True)
    publication_year: int
