"""Tests for field specifications and the payload validator."""

import pytest

from src.catalog.core.errors import ValidationError
from src.catalog.core.validation import schema as schema_module
from src.catalog.core.validation.schema import (
    FieldSpec,
    FieldType,
    to_json_schema,
    validate_field,
    validate_payload,
)
from src.catalog.core.validation.specs import (
    AUTHOR_SCHEMA,
    BOOK_SCHEMA,
    MEMORY_BOOK_SCHEMA,
    current_year,
    pagination_schema,
)

AUTHOR_ID = "a" * 32
CATEGORY_ID = "b" * 32


def book_payload(**overrides):
    payload = {
        "title": "Dune",
        "author": AUTHOR_ID,
        "category": CATEGORY_ID,
        "publicationYear": 1965,
    }
    payload.update(overrides)
    return payload


class TestValidatePayload:
    """Full and partial payload validation."""

    def test_valid_book_is_renamed_to_attributes(self):
        """Accepted fields are keyed by attribute name, not wire name."""
        fields = validate_payload(BOOK_SCHEMA, book_payload())

        assert fields == {
            "title": "Dune",
            "author_id": AUTHOR_ID,
            "category_id": CATEGORY_ID,
            "publication_year": 1965,
        }

    def test_missing_required_field(self):
        payload = book_payload()
        del payload["category"]

        with pytest.raises(ValidationError, match='"category" is required') as exc:
            validate_payload(BOOK_SCHEMA, payload)
        assert exc.value.field == "category"
        assert exc.value.status_code == 400

    def test_first_failure_wins(self):
        """Fields are checked in declaration order and validation stops early."""
        with pytest.raises(ValidationError) as exc:
            validate_payload(BOOK_SCHEMA, {"title": "ab", "publicationYear": 3000})
        assert exc.value.field == "title"

    def test_year_in_the_future_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_payload(BOOK_SCHEMA, book_payload(publicationYear=3000))
        assert exc.value.field == "publicationYear"
        assert str(current_year()) in exc.value.message

    def test_year_bounds_are_inclusive(self):
        fields = validate_payload(
            BOOK_SCHEMA, book_payload(publicationYear=current_year())
        )
        assert fields["publication_year"] == current_year()
        assert validate_payload(BOOK_SCHEMA, book_payload(publicationYear=1900))

        with pytest.raises(ValidationError, match="greater than or equal to 1900"):
            validate_payload(BOOK_SCHEMA, book_payload(publicationYear=1899))

    def test_callable_bound_is_evaluated_per_call(self):
        """The upper year bound follows the clock instead of import time."""
        spec = FieldSpec(FieldType.INTEGER, max=lambda: 2000)
        assert spec.max_value == 2000

        calls = iter([2001, 2002])
        spec = FieldSpec(FieldType.INTEGER, max=lambda: next(calls))
        assert spec.max_value == 2001
        assert spec.max_value == 2002

    def test_unknown_key_is_rejected(self):
        with pytest.raises(ValidationError, match='"isbn" is not allowed'):
            validate_payload(BOOK_SCHEMA, book_payload(isbn="123"))

    def test_unknown_key_allowed_when_requested(self):
        fields = validate_payload(
            BOOK_SCHEMA, book_payload(isbn="123"), allow_unknown=True
        )
        assert "isbn" not in fields

    def test_non_object_payload(self):
        for payload in (None, [], "Dune", 42):
            with pytest.raises(ValidationError, match="must be of type object"):
                validate_payload(BOOK_SCHEMA, payload)

    def test_partial_update_accepts_subset(self):
        fields = validate_payload(
            BOOK_SCHEMA, {"publicationYear": 1966}, partial=True
        )
        assert fields == {"publication_year": 1966}

    def test_partial_update_rejects_empty_payload(self):
        with pytest.raises(ValidationError, match="at least one field"):
            validate_payload(BOOK_SCHEMA, {}, partial=True)

    def test_partial_update_still_validates_values(self):
        with pytest.raises(ValidationError, match='"name" length must be at least 3'):
            validate_payload(AUTHOR_SCHEMA, {"name": "Al"}, partial=True)

    def test_optional_field_may_be_absent(self):
        fields = validate_payload(
            MEMORY_BOOK_SCHEMA,
            {"title": "Dune", "author": "Frank Herbert", "publicationYear": 1965},
        )
        assert "category" not in fields

    def test_memory_book_limits(self):
        with pytest.raises(ValidationError, match="less than or equal to 50"):
            validate_payload(
                MEMORY_BOOK_SCHEMA,
                {"title": "x" * 51, "author": "A", "publicationYear": 1965},
            )
        fields = validate_payload(
            MEMORY_BOOK_SCHEMA,
            {"title": "Beowulf", "author": "Unknown", "publicationYear": 1000},
        )
        assert fields["publication_year"] == 1000


class TestValidateField:
    """Per-type checks and coercion."""

    def test_empty_string_is_rejected(self):
        with pytest.raises(ValidationError, match="not allowed to be empty"):
            validate_field("title", FieldSpec(FieldType.STRING), "")

    def test_string_type(self):
        with pytest.raises(ValidationError, match='"title" must be a string'):
            validate_field("title", FieldSpec(FieldType.STRING), 12)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1965, 1965), (1965.0, 1965), ("1965", 1965), (" 1965 ", 1965), ("1965.0", 1965)],
    )
    def test_integer_coercion(self, value, expected):
        assert validate_field("year", FieldSpec(FieldType.INTEGER), value) == expected

    @pytest.mark.parametrize("value", [True, "nineteen", None, [1965]])
    def test_integer_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError, match="must be a number"):
            validate_field("year", FieldSpec(FieldType.INTEGER), value)

    @pytest.mark.parametrize("value", [1965.5, "1965.5"])
    def test_integer_rejects_fractions(self, value):
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_field("year", FieldSpec(FieldType.INTEGER), value)

    def test_identifier_is_normalized(self):
        spec = FieldSpec(FieldType.IDENTIFIER)
        assert validate_field("author", spec, "A" * 32) == "a" * 32

    def test_identifier_shape(self):
        with pytest.raises(ValidationError, match="must be a valid identifier"):
            validate_field("author", FieldSpec(FieldType.IDENTIFIER), "not-an-id")

    def test_pagination_limit_is_capped(self):
        with pytest.raises(ValidationError, match="less than or equal to 100"):
            validate_payload(pagination_schema(100), {"limit": "101"})
        assert validate_payload(pagination_schema(100), {"page": "2"}) == {"page": 2}


class TestJsonSchema:
    """OpenAPI rendering of field specifications."""

    def test_full_schema(self):
        rendered = to_json_schema(BOOK_SCHEMA)

        assert rendered["required"] == [
            "title",
            "author",
            "category",
            "publicationYear",
        ]
        assert rendered["additionalProperties"] is False
        assert rendered["properties"]["title"]["minLength"] == 3
        assert rendered["properties"]["publicationYear"]["minimum"] == 1900
        assert rendered["properties"]["publicationYear"]["maximum"] == current_year()
        assert "pattern" in rendered["properties"]["author"]

    def test_partial_schema(self):
        rendered = to_json_schema(BOOK_SCHEMA, partial=True)

        assert "required" not in rendered
        assert rendered["minProperties"] == 1

    def test_checks_cover_every_field_type(self):
        assert set(schema_module._CHECKS) == set(FieldType)
