"""Path identifier checks.

These run before any store lookup so that a malformed identifier is reported
as a bad request instead of a missing entity.
"""

import re
import uuid

from src.catalog.core.errors import InvalidIdentifierError

OBJECT_ID_LENGTH = 32

_OBJECT_ID_RE = re.compile(rf"^[0-9a-fA-F]{{{OBJECT_ID_LENGTH}}}$")
_INTEGER_ID_RE = re.compile(r"^[1-9][0-9]*$")


def new_object_id() -> str:
    """Generate a database identifier."""
    return uuid.uuid4().hex


def is_object_id(value: object) -> bool:
    return isinstance(value, str) and bool(_OBJECT_ID_RE.match(value))


def validate_object_id(raw: str) -> str:
    """Return the normalized database identifier or raise InvalidIdentifierError."""
    if not is_object_id(raw):
        raise InvalidIdentifierError()
    return raw.lower()


def validate_integer_id(raw: str | int) -> int:
    """Return the in-memory identifier as a positive int or raise InvalidIdentifierError."""
    if isinstance(raw, bool):
        raise InvalidIdentifierError()
    if isinstance(raw, int):
        if raw < 1:
            raise InvalidIdentifierError()
        return raw
    if not isinstance(raw, str) or not _INTEGER_ID_RE.match(raw):
        raise InvalidIdentifierError()
    return int(raw)
