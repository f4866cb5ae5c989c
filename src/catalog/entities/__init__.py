"""Entities module with hybrid entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model returned by the API
- table.py: Database persistence model
- repository.py: Data access layer

The in-memory Book lives in ``entities.memory`` and has no table.
"""

from .memory import MemoryBook
from .service.author import Author, AuthorRepository, AuthorTable
from .service.book import Book, BookRepository, BookTable
from .service.category import Category, CategoryRepository, CategoryTable

__all__ = [
    "Author",
    "AuthorRepository",
    "AuthorTable",
    "Book",
    "BookRepository",
    "BookTable",
    "Category",
    "CategoryRepository",
    "CategoryTable",
    "MemoryBook",
]
