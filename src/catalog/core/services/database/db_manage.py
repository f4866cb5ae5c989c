"""Schema management for the catalog database."""

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    @staticmethod
    def _register_tables() -> None:
        from src.catalog.entities.service.author import AuthorTable  # noqa: F401
        from src.catalog.entities.service.book import BookTable  # noqa: F401
        from src.catalog.entities.service.category import CategoryTable  # noqa: F401

    def create_all(self) -> None:
        """Create all database tables."""
        self._register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all catalog tables."""
        self._register_tables()
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Dropped all catalog tables.")
