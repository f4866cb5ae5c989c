"""Category database table model."""

from sqlmodel import Field

from src.catalog.entities._base import EntityTable


class CategoryTable(EntityTable, table=True):
    """Database persistence model for categories."""

    __tablename__ = "categories"

    name: str = Field(max_length=100, index=True)
    description: str
