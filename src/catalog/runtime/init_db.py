"""Database initialization script."""

from src.catalog.core.services import DbManageService, DbSessionService


def init_db(drop: bool = False) -> None:
    """Create all catalog tables, optionally dropping the existing ones first."""
    database_service = DbSessionService()
    db_manage_service = DbManageService(database_service.engine)
    try:
        if drop:
            db_manage_service.drop_all()
        db_manage_service.create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
