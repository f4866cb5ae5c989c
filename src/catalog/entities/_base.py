from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel

from src.catalog.core.validation.identifiers import new_object_id


class Entity(BaseModel):
    """Base entity class with an auto-generated hexadecimal identifier.

    Entities serialize with camelCase keys (``createdAt``) and accept either
    camelCase or snake_case on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = PydanticField(
        default_factory=new_object_id,
        description="Unique identifier for the entity",
    )

    created_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))


class EntityTable(SQLModel, table=False):
    """Base table with an auto-generated hexadecimal identifier."""

    id: str = Field(
        primary_key=True,
        default_factory=new_object_id,
        max_length=32,
        description="Unique identifier for the entity",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
