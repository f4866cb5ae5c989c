"""Field specifications for every payload the API accepts."""

from datetime import datetime

from src.catalog.core.validation.schema import FieldSpec, FieldType, Schema

MIN_PUBLICATION_YEAR = 1900
MIN_MEMORY_PUBLICATION_YEAR = 1000


def current_year() -> int:
    return datetime.now().year


BOOK_SCHEMA: Schema = {
    "title": FieldSpec(FieldType.STRING, min=3, description="Book title"),
    "author": FieldSpec(
        FieldType.IDENTIFIER, attribute="author_id", description="Author ID"
    ),
    "category": FieldSpec(
        FieldType.IDENTIFIER, attribute="category_id", description="Category ID"
    ),
    "publicationYear": FieldSpec(
        FieldType.INTEGER,
        min=MIN_PUBLICATION_YEAR,
        max=current_year,
        attribute="publication_year",
        description="Year of publication",
    ),
}

AUTHOR_SCHEMA: Schema = {
    "name": FieldSpec(FieldType.STRING, min=3, max=100, description="Author name"),
    "biography": FieldSpec(FieldType.STRING, description="Author biography"),
}

CATEGORY_SCHEMA: Schema = {
    "name": FieldSpec(FieldType.STRING, min=3, max=100, description="Category name"),
    "description": FieldSpec(FieldType.STRING, description="Category description"),
}

# In-memory variant: the author is an inline string and the category doubles
# as the genre used for filtering.
MEMORY_BOOK_SCHEMA: Schema = {
    "title": FieldSpec(FieldType.STRING, max=50, description="Book title"),
    "author": FieldSpec(FieldType.STRING, max=50, description="Author name"),
    "category": FieldSpec(
        FieldType.STRING, required=False, max=30, description="Genre"
    ),
    "publicationYear": FieldSpec(
        FieldType.INTEGER,
        min=MIN_MEMORY_PUBLICATION_YEAR,
        max=current_year,
        attribute="publication_year",
        description="Year of publication",
    ),
}


def pagination_schema(max_limit: int) -> Schema:
    return {
        "page": FieldSpec(FieldType.INTEGER, required=False, min=1),
        "limit": FieldSpec(FieldType.INTEGER, required=False, min=1, max=max_limit),
    }
