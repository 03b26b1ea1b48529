"""
Tests for Dynaval Coercion Engine
"""
import math
from datetime import date, datetime, timezone

import pytest

from dynaval.engine.coercion import coerce, coerce_schema
from dynaval.models import NumberSchema, SchemaType


class TestCoerce:
    """Tests for coerce."""

    @pytest.mark.parametrize("raw,expected", [
        ("12", 12),
        (" 1.5 ", 1.5),
        (True, 1),
        (7, 7),
    ])
    def test_number(self, raw, expected):
        """Strings and booleans become numbers."""
        assert coerce(SchemaType.NUMBER, raw) == expected

    def test_number_unparseable_is_nan(self):
        """Garbage becomes nan so the type check rejects it."""
        assert math.isnan(coerce(SchemaType.NUMBER, "abc"))

    def test_boolean(self):
        """Only the literal strings map to booleans, anything else by truthiness."""
        assert coerce(SchemaType.BOOLEAN, "true") is True
        assert coerce(SchemaType.BOOLEAN, "false") is False
        assert coerce(SchemaType.BOOLEAN, 0) is False
        assert coerce(SchemaType.BOOLEAN, "yes") is True

    def test_string(self):
        """Numbers and booleans become strings."""
        assert coerce(SchemaType.STRING, 12) == "12"
        assert coerce(SchemaType.STRING, False) == "false"
        assert coerce(SchemaType.STRING, {"a": 1}) == {"a": 1}

    def test_array(self):
        """Iterables become lists, mappings are left alone."""
        assert coerce(SchemaType.ARRAY, ("a", "b")) == ["a", "b"]
        assert coerce(SchemaType.ARRAY, "ab") == ["a", "b"]
        assert coerce(SchemaType.ARRAY, {"a": 1}) == {"a": 1}

    def test_date(self):
        """ISO strings and timestamps become datetimes."""
        assert coerce(SchemaType.DATE, "2024-06-10") == datetime(2024, 6, 10)
        assert coerce(SchemaType.DATE, 0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert coerce(SchemaType.DATE, date(2024, 1, 1)) == date(2024, 1, 1)
        assert coerce(SchemaType.DATE, "not a date") == "not a date"

    def test_none_passes_through(self):
        """Absence is never coerced."""
        assert coerce(SchemaType.NUMBER, None) is None

    def test_kinds_without_coercion(self):
        """Objects and options are returned as is."""
        assert coerce(SchemaType.OPTIONS, "12") == "12"
        assert coerce(SchemaType.OBJECT, "x") == "x"

    @pytest.mark.parametrize("kind,raw", [
        (SchemaType.NUMBER, "12"),
        (SchemaType.NUMBER, " 1.5 "),
        (SchemaType.NUMBER, True),
        (SchemaType.BOOLEAN, "false"),
        (SchemaType.BOOLEAN, "yes"),
        (SchemaType.BOOLEAN, 0),
        (SchemaType.STRING, 12),
        (SchemaType.STRING, 1.5),
        (SchemaType.STRING, True),
        (SchemaType.ARRAY, "ab"),
        (SchemaType.ARRAY, ("a", "b")),
        (SchemaType.DATE, 0),
        (SchemaType.DATE, "2024-06-10"),
        (SchemaType.DATE, "not a date"),
        (SchemaType.DATE_STRING, "10-06-2024"),
        (SchemaType.OPTIONS, "12"),
        (SchemaType.STRING, None),
    ])
    def test_idempotent(self, kind, raw):
        """Coercing an already coerced value changes nothing."""
        once = coerce(kind, raw)
        assert coerce(kind, once) == once


class TestCoerceSchema:
    """Tests for coerce_schema."""

    def test_only_when_asked(self):
        """Schemas without coerce leave values untouched."""
        assert coerce_schema(NumberSchema(), "12") == "12"
        assert coerce_schema(NumberSchema(coerce=True), "12") == 12
