"""Process-local book store used by the in-memory API variant."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping
from threading import RLock
from typing import Any

from loguru import logger

from src.catalog.core.errors import NotFoundError
from src.catalog.core.storage.base import Page, active_filters, page_bounds
from src.catalog.entities.memory import MemoryBook

# Sample catalog served when the store is seeded.
SEED_BOOKS: tuple[dict[str, Any], ...] = (
    {
        "title": "The Silent Forest",
        "author": "John Doe",
        "publication_year": 1999,
        "category": "Fiction",
    },
    {
        "title": "Winds of Change",
        "author": "Jane Smith",
        "publication_year": 2005,
        "category": "Drama",
    },
    {
        "title": "The Forgotten Path",
        "author": "Emily Johnson",
        "publication_year": 2010,
        "category": "Thriller",
    },
    {
        "title": "Echoes of Time",
        "author": "Michael Brown",
        "publication_year": 2020,
        "category": "Sci-Fi",
    },
)

FILTERABLE_FIELDS = ("author", "category")


class InMemoryBookStore:
    """Owns the in-memory book collection.

    Identifiers come from a monotonic counter, so an id is never handed out
    twice even after deletions. Callers only ever receive copies.
    """

    def __init__(self, books: Iterable[Mapping[str, Any]] = ()) -> None:
        self._books: dict[int, MemoryBook] = {}
        self._ids = itertools.count(1)
        self._lock = RLock()
        for fields in books:
            self.create(fields)

    @classmethod
    def seeded(cls) -> InMemoryBookStore:
        store = cls(SEED_BOOKS)
        logger.info("Seeded in-memory book store with {} books", len(store))
        return store

    def __len__(self) -> int:
        return len(self._books)

    def list(
        self, filters: Mapping[str, str | None], page: int, limit: int
    ) -> Page[MemoryBook]:
        """Filter by case-insensitive substring, then slice the requested page."""
        wanted = active_filters(
            {k: v for k, v in filters.items() if k in FILTERABLE_FIELDS}
        )

        with self._lock:
            books = list(self._books.values())

        matches = [
            book
            for book in books
            if all(
                needle in (getattr(book, name) or "").lower()
                for name, needle in wanted.items()
            )
        ]
        start, stop = page_bounds(page, limit)
        return Page[MemoryBook](
            total=len(matches),
            page=page,
            limit=limit,
            data=[book.model_copy() for book in matches[start:stop]],
        )

    def get(self, entity_id: int) -> MemoryBook:
        with self._lock:
            book = self._books.get(entity_id)
        if book is None:
            raise NotFoundError("Book not found")
        return book.model_copy()

    def create(self, fields: Mapping[str, Any]) -> MemoryBook:
        with self._lock:
            book = MemoryBook(id=next(self._ids), **fields)
            self._books[book.id] = book
        logger.debug("Created in-memory book {}", book.id)
        return book.model_copy()

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> MemoryBook:
        with self._lock:
            current = self._books.get(entity_id)
            if current is None:
                raise NotFoundError("Book not found")
            updated = current.model_copy(update=dict(fields))
            self._books[entity_id] = updated
        return updated.model_copy()

    def delete(self, entity_id: int) -> dict[str, str]:
        with self._lock:
            if self._books.pop(entity_id, None) is None:
                raise NotFoundError("Book not found")
        logger.debug("Deleted in-memory book {}", entity_id)
        return {"message": "Book deleted successfully"}
