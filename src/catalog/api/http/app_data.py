from dataclasses import dataclass

from src.catalog.core.services import DbSessionService
from src.catalog.core.storage.memory_store import InMemoryBookStore


@dataclass
class ApplicationDependencies:
    store_backend: str
    database_service: DbSessionService | None = None
    memory_store: InMemoryBookStore | None = None
