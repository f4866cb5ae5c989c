"""Ordered handler chains with explicit success/failure results.

A route binds a ``HandlerChain`` of steps, typically::

    identifier check -> schema check -> store operation -> commit

Each step receives the shared ``RequestContext`` and returns ``Success`` or
``Failure``. The first failure ends the chain and is handed to the error
translator; the value of the last success becomes the response body.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, NoReturn, TypeVar

from loguru import logger

from src.catalog.core.errors import CatalogError, InternalError
from src.catalog.core.validation.schema import Schema, validate_payload

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: CatalogError

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @property
    def message(self) -> str:
        return self.error.message

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Success[Any] | Failure


@dataclass
class RequestContext:
    """State shared by the steps of one chain run."""

    identifier: Any = None
    payload: Any = None
    fields: dict[str, Any] = field(default_factory=dict)
    result: Any = None


Step = Callable[[RequestContext], Result]


class HandlerChain:
    """Runs steps in order and short-circuits on the first failure."""

    def __init__(self, *steps: Step) -> None:
        if not steps:
            raise ValueError("A handler chain needs at least one step")
        self._steps = steps

    def run(self, context: RequestContext | None = None) -> Result:
        ctx = context or RequestContext()
        for step in self._steps:
            try:
                outcome = step(ctx)
            except CatalogError as exc:
                outcome = Failure(exc)
            except Exception as exc:
                logger.bind(
                    step=getattr(step, "__name__", repr(step)),
                    error_type=type(exc).__name__,
                ).exception("chain.step_failed")
                outcome = Failure(InternalError())

            if isinstance(outcome, Failure):
                return outcome
            ctx.result = outcome.value

        return Success(ctx.result)


# --- Reusable steps ---


def check_identifier(parse: Callable[[Any], Any]) -> Step:
    """Validate and normalize ``ctx.identifier`` with ``parse``."""

    def _step(ctx: RequestContext) -> Result:
        ctx.identifier = parse(ctx.identifier)
        return Success(ctx.identifier)

    _step.__name__ = "check_identifier"
    return _step


def check_schema(
    schema: Schema, *, partial: bool = False, allow_unknown: bool = False
) -> Step:
    """Validate ``ctx.payload`` and store the accepted fields on ``ctx.fields``."""

    def _step(ctx: RequestContext) -> Result:
        ctx.fields = validate_payload(
            schema, ctx.payload, partial=partial, allow_unknown=allow_unknown
        )
        return Success(ctx.fields)

    _step.__name__ = "check_schema"
    return _step


def run_step(operation: Callable[[RequestContext], Any]) -> Step:
    """Wrap a plain operation (e.g. a store call) as a step."""

    def _step(ctx: RequestContext) -> Result:
        return Success(operation(ctx))

    _step.__name__ = getattr(operation, "__name__", "run_step")
    return _step


def passthrough(action: Callable[[], Any]) -> Step:
    """Run a side effect (e.g. a commit) and keep the previous result."""

    def _step(ctx: RequestContext) -> Result:
        action()
        return Success(ctx.result)

    _step.__name__ = getattr(action, "__name__", "passthrough")
    return _step


def run_chain(
    *steps: Step,
    identifier: Any = None,
    payload: Any = None,
    query: Mapping[str, Any] | None = None,
) -> Any:
    """Build and run a chain, returning the value or raising the failure."""
    context = RequestContext(identifier=identifier, payload=payload)
    if query is not None:
        context.payload = {k: v for k, v in query.items() if v not in (None, "")}
    return HandlerChain(*steps).run(context).unwrap()
