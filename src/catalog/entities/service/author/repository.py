"""Author data-access layer."""

from src.catalog.entities._repository import Repository
from src.catalog.entities.service.author.entity import Author
from src.catalog.entities.service.author.table import AuthorTable


class AuthorRepository(Repository[Author, AuthorTable]):
    """Data-access layer for authors."""

    entity = Author
    table = AuthorTable
    label = "Author"
    search_fields = ("name",)
