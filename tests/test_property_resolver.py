"""
Tests for Dynaval Property & Rule Resolver
"""
import pytest

from dynaval.engine.property_resolver import (
    is_included,
    is_mutable,
    is_required,
    resolve_property,
    resolve_rules,
)
from dynaval.exceptions import CyclicReferenceError
from dynaval.models import (
    ArraySchema,
    NumberSchema,
    RuleType,
    SchemaProperty,
    StringSchema,
    eq,
    max_length,
    min_length,
    when,
)

from tests.conftest import make_context, make_object_schema


@pytest.fixture
def schema():
    return make_object_schema(
        one=NumberSchema(),
        two=NumberSchema(included=eq("one", 1), required=False, mutable=eq("one", 2)),
        three=StringSchema(
            required=eq("$.one", 3),
            rules=[
                min_length(1),
                when(eq("one", 1), max_length(5)),
            ],
        ),
        items=ArraySchema(schema=make_object_schema(
            kind=StringSchema(),
            note=StringSchema(required=eq("kind", "other")),
        )),
    )


class TestResolveProperty:
    """Tests for resolve_property."""

    def test_absent_property_uses_default(self, schema):
        context = make_context(schema, {})
        assert resolve_property(schema.fields["one"], SchemaProperty.REQUIRED, "$.one", True, context) is True
        assert resolve_property(schema.fields["one"], SchemaProperty.INCLUDED, "$.one", False, context) is False

    def test_literal_property(self, schema):
        context = make_context(schema, {})
        assert resolve_property(schema.fields["two"], SchemaProperty.REQUIRED, "$.two", True, context) is False

    def test_conditional_property(self, schema):
        context = make_context(schema, {"one": 3})
        assert resolve_property(schema.fields["three"], SchemaProperty.REQUIRED, "$.three", True, context) is True

    def test_accepts_string_name(self, schema):
        """Property names may be passed as plain strings."""
        context = make_context(schema, {"one": 1})
        assert resolve_property(schema.fields["two"], "included", "$.two", True, context) is True


class TestResolveRules:
    """Tests for resolve_rules."""

    def test_conditional_rule_in_force(self, schema):
        context = make_context(schema, {"one": 1})
        rules = resolve_rules(schema.fields["three"], "$.three", context)
        assert [r.type for r in rules] == [RuleType.MIN_LENGTH, RuleType.MAX_LENGTH]

    def test_conditional_rule_dropped(self, schema):
        context = make_context(schema, {"one": 2})
        rules = resolve_rules(schema.fields["three"], "$.three", context)
        assert [r.type for r in rules] == [RuleType.MIN_LENGTH]

    @pytest.mark.parametrize("values", [{"one": 1}, {"one": 2}, {}])
    def test_repeated_calls_agree(self, schema, values):
        """The same document always yields the same rules, in schema order."""
        context = make_context(schema, values)
        first = resolve_rules(schema.fields["three"], "$.three", context)
        for _ in range(3):
            assert resolve_rules(schema.fields["three"], "$.three", context) == first


class TestPathLevelHelpers:
    """Tests for is_included / is_required / is_mutable."""

    def test_is_included(self, schema):
        assert is_included(schema, "$.two", {"one": 1}) is True
        assert is_included(schema, "$.two", {"one": 2}) is False

    def test_is_included_default(self, schema):
        assert is_included(schema, "$.one", {}) is True

    def test_is_required(self, schema):
        assert is_required(schema, "$.three", {"one": 3}) is True
        assert is_required(schema, "$.three", {"one": 1}) is False
        assert is_required(schema, "$.one", {}) is True

    def test_is_mutable(self, schema):
        assert is_mutable(schema, "$.two", {"one": 2}) is True
        assert is_mutable(schema, "$.two", {"one": 1}) is False

    def test_array_element_path(self, schema):
        """Relative paths below array elements read the element's siblings."""
        values = {"items": [{"kind": "other"}, {"kind": "book"}]}
        assert is_required(schema, "$.items[0].note", values) is True
        assert is_required(schema, "$.items.[1].note", values) is False

    def test_cyclic_included(self):
        schema = make_object_schema(
            a=NumberSchema(included=eq("b", 1)),
            b=NumberSchema(included=eq("a", 1)),
        )
        with pytest.raises(CyclicReferenceError):
            is_included(schema, "$.a", {"a": 1, "b": 1})

    def test_included_reading_own_child(self):
        schema = make_object_schema(
            a=make_object_schema(included=eq("$.a.flag", "y"), flag=StringSchema()),
        )
        assert is_included(schema, "$.a", {"a": {"flag": "y"}}) is True
        assert is_included(schema, "$.a", {"a": {"flag": "n"}}) is False
