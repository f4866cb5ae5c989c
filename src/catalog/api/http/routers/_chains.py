"""Handler chains shared by the CRUD routers.

Each function binds the steps for one kind of route and runs them; the
result is returned to FastAPI for serialization, a failure is raised for
the error translator.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from src.catalog.core.pipeline import (
    Step,
    check_identifier,
    check_schema,
    passthrough,
    run_chain,
    run_step,
)
from src.catalog.core.storage.base import Page, ResourceStore
from src.catalog.core.validation.schema import (
    FieldSpec,
    FieldType,
    Schema,
    to_json_schema,
)
from src.catalog.core.validation.specs import pagination_schema
from src.catalog.runtime.context import get_config

IdParser = Callable[[Any], Any]


def json_body(schema: Schema, *, partial: bool = False) -> dict[str, Any]:
    """OpenAPI request body generated from a field specification."""
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": to_json_schema(schema, partial=partial),
                }
            },
        }
    }


def list_query_schema(filters: Iterable[str]) -> Schema:
    schema: dict[str, FieldSpec] = {
        name: FieldSpec(FieldType.STRING, required=False) for name in filters
    }
    schema.update(pagination_schema(get_config().catalog.pagination.max_limit))
    return schema


def _commit_step(store: ResourceStore) -> list[Step]:
    commit = getattr(store, "commit", None)
    return [passthrough(commit)] if commit is not None else []


def list_chain(
    store: ResourceStore,
    query: Mapping[str, Any],
    filter_aliases: Mapping[str, str] | None = None,
) -> Page[Any]:
    """Validate list query parameters, then filter and paginate.

    ``filter_aliases`` maps query parameter names onto store filter fields
    (e.g. ``genre`` -> ``category``).
    """
    aliases = dict(filter_aliases or {})
    filter_names = [name for name in query if name not in ("page", "limit")]
    default_limit = get_config().catalog.pagination.default_limit

    def list_entities(ctx) -> Page[Any]:
        filters: dict[str, str | None] = {}
        for name in filter_names:
            value = ctx.fields.get(name)
            if value:
                filters.setdefault(aliases.get(name, name), value)
        return store.list(
            filters,
            page=ctx.fields.get("page", 1),
            limit=ctx.fields.get("limit", default_limit),
        )

    return run_chain(
        check_schema(list_query_schema(filter_names)),
        run_step(list_entities),
        query=query,
    )


def get_chain(store: ResourceStore, parse_id: IdParser, entity_id: str) -> Any:
    return run_chain(
        check_identifier(parse_id),
        run_step(lambda ctx: store.get(ctx.identifier)),
        identifier=entity_id,
    )


def create_chain(store: ResourceStore, schema: Schema, payload: Any) -> Any:
    return run_chain(
        check_schema(schema),
        run_step(lambda ctx: store.create(ctx.fields)),
        *_commit_step(store),
        payload=payload,
    )


def update_chain(
    store: ResourceStore,
    schema: Schema,
    parse_id: IdParser,
    entity_id: str,
    payload: Any,
) -> Any:
    return run_chain(
        check_identifier(parse_id),
        check_schema(schema, partial=True),
        run_step(lambda ctx: store.update(ctx.identifier, ctx.fields)),
        *_commit_step(store),
        identifier=entity_id,
        payload=payload,
    )


def delete_chain(store: ResourceStore, parse_id: IdParser, entity_id: str) -> Any:
    return run_chain(
        check_identifier(parse_id),
        run_step(lambda ctx: store.delete(ctx.identifier)),
        *_commit_step(store),
        identifier=entity_id,
    )
