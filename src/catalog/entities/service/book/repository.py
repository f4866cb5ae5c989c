"""Book data-access layer with read-time reference resolution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlmodel import col, select

from src.catalog.core.errors import ValidationError
from src.catalog.entities._base import EntityTable
from src.catalog.entities._repository import Repository
from src.catalog.entities.service.author import Author, AuthorTable
from src.catalog.entities.service.book.entity import Book
from src.catalog.entities.service.book.table import BookTable
from src.catalog.entities.service.category import Category, CategoryTable

# attribute -> (wire name, referenced table, label)
_REFERENCES: dict[str, tuple[str, type[EntityTable], str]] = {
    "author_id": ("author", AuthorTable, "author"),
    "category_id": ("category", CategoryTable, "category"),
}


class BookRepository(Repository[Book, BookTable]):
    """Data-access layer for books.

    Reads fetch the book rows first, then the referenced authors and
    categories by id (one query each), then merge them into ``Book``.
    """

    entity = Book
    table = BookTable
    label = "Book"
    search_fields = ("title",)

    def _fetch(self, table: type[EntityTable], ids: Iterable[str]) -> dict[str, Any]:
        wanted = set(ids)
        if not wanted:
            return {}
        rows = self._session.exec(select(table).where(col(table.id).in_(wanted))).all()
        return {row.id: row for row in rows}

    def _to_entities(self, rows: Sequence[BookTable]) -> list[Book]:
        authors = self._fetch(AuthorTable, (row.author_id for row in rows))
        categories = self._fetch(CategoryTable, (row.category_id for row in rows))

        books = []
        for row in rows:
            author = authors.get(row.author_id)
            category = categories.get(row.category_id)
            books.append(
                Book(
                    id=row.id,
                    title=row.title,
                    author=Author.model_validate(author.model_dump()) if author else None,
                    category=(
                        Category.model_validate(category.model_dump())
                        if category
                        else None
                    ),
                    publication_year=row.publication_year,
                    created_at=row.created_at,
                    updated_at=row.updated_at,
                )
            )
        return books

    def _to_entity(self, row: BookTable) -> Book:
        return self._to_entities([row])[0]

    def _check_references(self, fields: Mapping[str, Any]) -> None:
        for attribute, (wire_name, table, label) in _REFERENCES.items():
            if attribute not in fields:
                continue
            if self._session.get(table, fields[attribute]) is None:
                raise ValidationError(
                    f'"{wire_name}" references an unknown {label}', field=wire_name
                )

    def create(self, fields: Mapping[str, Any]) -> Book:
        self._check_references(fields)
        return super().create(fields)

    def update(self, entity_id: str, fields: Mapping[str, Any]) -> Book:
        # Missing book wins over a bad reference
        self._get_row(entity_id)
        self._check_references(fields)
        return super().update(entity_id, fields)
