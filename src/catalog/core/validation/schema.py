"""Field specifications and the payload validator that interprets them.

A schema is an ordered mapping of wire field name to ``FieldSpec``. The
validator is a pure function: it never touches a store and it stops at the
first failing field.

Example:
    AUTHOR_SCHEMA = {
        "name": FieldSpec(FieldType.STRING, min=3, max=100),
        "biography": FieldSpec(FieldType.STRING),
    }
    fields = validate_payload(AUTHOR_SCHEMA, {"name": "Ursula", "biography": "..."})
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.catalog.core.errors import ValidationError
from src.catalog.core.validation.identifiers import is_object_id

Bound = int | Callable[[], int] | None


class FieldType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class FieldSpec:
    """Describes one accepted payload field.

    ``min``/``max`` bound the length of strings and the value of integers.
    A callable bound is evaluated on every validation, which keeps
    "current year" limits correct in long-running processes.
    ``attribute`` renames the field in the validated output.
    """

    type: FieldType
    required: bool = True
    min: Bound = None
    max: Bound = None
    attribute: str | None = None
    description: str | None = None

    @property
    def min_value(self) -> int | None:
        return _resolve(self.min)

    @property
    def max_value(self) -> int | None:
        return _resolve(self.max)


Schema = Mapping[str, FieldSpec]


def _resolve(bound: Bound) -> int | None:
    if callable(bound):
        return bound()
    return bound


def _check_string(name: str, spec: FieldSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f'"{name}" must be a string', field=name)
    if value == "":
        raise ValidationError(f'"{name}" is not allowed to be empty', field=name)

    low, high = spec.min_value, spec.max_value
    if low is not None and len(value) < low:
        raise ValidationError(
            f'"{name}" length must be at least {low} characters long', field=name
        )
    if high is not None and len(value) > high:
        raise ValidationError(
            f'"{name}" length must be less than or equal to {high} characters long',
            field=name,
        )
    return value


def _coerce_integer(name: str, value: Any) -> int:
    # bool is an int subclass; JSON true/false is never a number here
    if isinstance(value, bool):
        raise ValidationError(f'"{name}" must be a number', field=name)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f'"{name}" must be an integer', field=name)
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise ValidationError(f'"{name}" must be a number', field=name) from None
        if not number.is_integer():
            raise ValidationError(f'"{name}" must be an integer', field=name)
        return int(number)
    raise ValidationError(f'"{name}" must be a number', field=name)


def _check_integer(name: str, spec: FieldSpec, value: Any) -> int:
    number = _coerce_integer(name, value)

    low, high = spec.min_value, spec.max_value
    if low is not None and number < low:
        raise ValidationError(
            f'"{name}" must be greater than or equal to {low}', field=name
        )
    if high is not None and number > high:
        raise ValidationError(
            f'"{name}" must be less than or equal to {high}', field=name
        )
    return number


def _check_identifier(name: str, spec: FieldSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f'"{name}" must be a string', field=name)
    if not is_object_id(value):
        raise ValidationError(f'"{name}" must be a valid identifier', field=name)
    return value.lower()


_CHECKS: dict[FieldType, Callable[[str, FieldSpec, Any], Any]] = {
    FieldType.STRING: _check_string,
    FieldType.INTEGER: _check_integer,
    FieldType.IDENTIFIER: _check_identifier,
}


def validate_field(name: str, spec: FieldSpec, value: Any) -> Any:
    """Validate and coerce a single value against its spec."""
    return _CHECKS[spec.type](name, spec, value)


def validate_payload(
    schema: Schema,
    payload: Any,
    *,
    partial: bool = False,
    allow_unknown: bool = False,
) -> dict[str, Any]:
    """Validate ``payload`` against ``schema`` and return the accepted fields.

    Args:
        schema: Ordered mapping of wire field name to FieldSpec.
        payload: Candidate payload, normally a decoded JSON object.
        partial: Skip required-ness checks (partial updates). An empty
            payload is still rejected.
        allow_unknown: Ignore keys that the schema does not declare instead
            of rejecting them.

    Returns:
        Validated and coerced values keyed by each spec's ``attribute``
        (or the wire name when no attribute is set). Absent optional fields
        are omitted.

    Raises:
        ValidationError: For the first failing field.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError('"value" must be of type object')

    if partial and not payload:
        raise ValidationError('"value" must contain at least one field')

    accepted: dict[str, Any] = {}
    for name, spec in schema.items():
        if name not in payload:
            if spec.required and not partial:
                raise ValidationError(f'"{name}" is required', field=name)
            continue
        accepted[spec.attribute or name] = validate_field(name, spec, payload[name])

    if not allow_unknown:
        for name in payload:
            if name not in schema:
                raise ValidationError(f'"{name}" is not allowed', field=name)

    return accepted


def to_json_schema(schema: Schema, *, partial: bool = False) -> dict[str, Any]:
    """Render a field specification as a JSON Schema object for OpenAPI."""
    properties: dict[str, Any] = {}
    required: list[str] = []

    for name, spec in schema.items():
        prop: dict[str, Any]
        if spec.type is FieldType.INTEGER:
            prop = {"type": "integer"}
            if spec.min_value is not None:
                prop["minimum"] = spec.min_value
            if spec.max_value is not None:
                prop["maximum"] = spec.max_value
        else:
            prop = {"type": "string", "minLength": spec.min_value or 1}
            if spec.max_value is not None:
                prop["maxLength"] = spec.max_value
            if spec.type is FieldType.IDENTIFIER:
                prop["pattern"] = "^[0-9a-fA-F]{32}$"
        if spec.description:
            prop["description"] = spec.description
        properties[name] = prop
        if spec.required and not partial:
            required.append(name)

    rendered: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        rendered["required"] = required
    if partial:
        rendered["minProperties"] = 1
    return rendered
