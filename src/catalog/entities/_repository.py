"""Generic SQLModel-backed repository used by every database entity."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, col, select

from src.catalog.core.errors import NotFoundError
from src.catalog.core.storage.base import Page, active_filters, page_bounds
from src.catalog.entities._base import Entity, EntityTable

EntityT = TypeVar("EntityT", bound=Entity)
TableT = TypeVar("TableT", bound=EntityTable)


class Repository(Generic[EntityT, TableT]):
    """Data-access layer mapping table rows to domain entities.

    Subclasses set ``entity``, ``table``, ``label`` and the text columns that
    ``list`` filters on.
    """

    entity: ClassVar[type[Entity]]
    table: ClassVar[type[EntityTable]]
    label: ClassVar[str]
    search_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- mapping ---

    def _to_entity(self, row: TableT) -> EntityT:
        return self.entity.model_validate(row.model_dump())  # type: ignore[return-value]

    def _to_entities(self, rows: Sequence[TableT]) -> list[EntityT]:
        return [self._to_entity(row) for row in rows]

    def _get_row(self, entity_id: str) -> TableT:
        row = self._session.get(self.table, entity_id)
        if row is None:
            raise NotFoundError(f"{self.label} not found")
        return row  # type: ignore[return-value]

    def commit(self) -> None:
        self._session.commit()

    # --- store operations ---

    def exists(self, entity_id: str) -> bool:
        return self._session.get(self.table, entity_id) is not None

    def get(self, entity_id: str) -> EntityT:
        return self._to_entity(self._get_row(entity_id))

    def list(
        self, filters: Mapping[str, str | None], page: int, limit: int
    ) -> Page[EntityT]:
        wanted = active_filters(
            {k: v for k, v in filters.items() if k in self.search_fields}
        )
        conditions = [
            col(getattr(self.table, name)).icontains(needle, autoescape=True)
            for name, needle in wanted.items()
        ]

        count_statement = select(func.count()).select_from(self.table)
        statement = select(self.table)
        if conditions:
            count_statement = count_statement.where(*conditions)
            statement = statement.where(*conditions)

        total = self._session.exec(count_statement).one()
        start, _ = page_bounds(page, limit)
        if start >= total:
            # Past the last match; the offset may not even fit a database integer
            return Page[Any](total=total, page=page, limit=limit, data=[])

        rows = self._session.exec(
            statement.order_by(col(self.table.created_at), col(self.table.id))
            .offset(start)
            .limit(limit)
        ).all()

        return Page[Any](
            total=total, page=page, limit=limit, data=self._to_entities(rows)
        )

    def create(self, fields: Mapping[str, Any]) -> EntityT:
        row = self.table(**fields)
        self._session.add(row)
        self._session.flush()
        return self._to_entity(row)  # type: ignore[arg-type]

    def update(self, entity_id: str, fields: Mapping[str, Any]) -> EntityT:
        row = self._get_row(entity_id)
        for name, value in fields.items():
            setattr(row, name, value)
        row.updated_at = datetime.now(UTC)
        self._session.add(row)
        self._session.flush()
        return self._to_entity(row)

    def delete(self, entity_id: str) -> dict[str, str]:
        row = self._get_row(entity_id)
        self._session.delete(row)
        self._session.flush()
        return {"message": f"{self.label} deleted successfully"}
