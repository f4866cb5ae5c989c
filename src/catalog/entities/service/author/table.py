"""Author database table model."""

from sqlmodel import Field

from src.catalog.entities._base import EntityTable


class AuthorTable(EntityTable, table=True):
    """Database persistence model for authors."""

    __tablename__ = "authors"

    name: str = Field(max_length=100, index=True)
    biography: str
