"""Payload and identifier validation."""

from .identifiers import (
    is_object_id,
    new_object_id,
    validate_integer_id,
    validate_object_id,
)
from .schema import FieldSpec, FieldType, Schema, to_json_schema, validate_payload

__all__ = [
    "FieldSpec",
    "FieldType",
    "Schema",
    "is_object_id",
    "new_object_id",
    "to_json_schema",
    "validate_integer_id",
    "validate_object_id",
    "validate_payload",
]
