"""
Tests for the Dynaval rule catalog and rule executor

Tests cover:
- Every built-in rule kind
- Static and referenced parameters
- Malformed parameters
- Dispatch per schema type
- Custom rules
"""
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from dynaval.engine import ValidateOptions
from dynaval.engine.rule_executor import (
    CustomRuleInput,
    RuleContext,
    execute_rule,
    supported_rules,
)
from dynaval.engine.rules import get_precision
from dynaval.exceptions import (
    RuleNotSupportedError,
    RuleParameterError,
    UnknownCustomRuleError,
)
from dynaval.models import (
    ArraySchema,
    BooleanSchema,
    DateSchema,
    DateStringSchema,
    FileSchema,
    NumberSchema,
    ObjectSchema,
    OptionsSchema,
    RuleType,
    SchemaType,
    StringSchema,
    after,
    before,
    custom,
    email,
    equals,
    is_numeric,
    max_date,
    max_entries,
    max_length,
    max_precision,
    max_size,
    max_value,
    mime_type,
    min_date,
    min_entries,
    min_length,
    min_precision,
    min_size,
    min_value,
    one_of,
    ref,
    regex,
)

from tests.conftest import make_context, make_file, make_object_schema


def run(rule, value, schema, values=None, root=None, options=None, path="$.field"):
    """Execute a rule for a node at `path` of a document with one field."""
    root = root or make_object_schema(field=schema)
    context = make_context(root, values if values is not None else {"field": value},
                           options=options or ValidateOptions())
    return execute_rule(RuleContext(rule=rule, value=value, path=path, schema=schema, context=context))


# =============================================================================
# Length / Size / Entries
# =============================================================================

class TestLengthRules:
    """Tests for length, size and entry count rules."""

    def test_min_length(self):
        assert run(min_length(3), "abc", StringSchema()) is None
        violation = run(min_length(3), "ab", StringSchema())
        assert violation["code"] == "min_length"
        assert violation["min"] == 3

    def test_max_length(self):
        assert run(max_length(3), "abc", StringSchema()) is None
        assert run(max_length(3), "abcd", StringSchema())["max"] == 3

    def test_length_of_array(self):
        schema = ArraySchema(schema=StringSchema())
        assert run(min_length(2), ["a"], schema)["code"] == "min_length"
        assert run(max_length(2), ["a", "b"], schema) is None

    def test_size(self):
        schema = FileSchema()
        assert run(min_size(100), make_file(size=50), schema)["code"] == "min_size"
        assert run(max_size(100), make_file(size=150), schema)["max"] == 100
        assert run(max_size(100), make_file(size=100), schema) is None

    def test_entries(self):
        schema = ObjectSchema()
        assert run(min_entries(2), {"a": 1}, schema)["code"] == "min_entries"
        assert run(max_entries(1), {"a": 1, "b": 2}, schema)["code"] == "max_entries"
        assert run(max_entries(2), {"a": 1, "b": 2}, schema) is None

    def test_bad_static_parameter(self):
        """A non-numeric bound is a schema mistake."""
        with pytest.raises(RuleParameterError):
            run(min_length("3"), "abc", StringSchema())


# =============================================================================
# Numbers
# =============================================================================

class TestNumberRules:
    """Tests for min, max and precision."""

    def test_min_max(self):
        assert run(min_value(10), 10, NumberSchema()) is None
        assert run(min_value(10), 9.5, NumberSchema())["min"] == 10
        assert run(max_value(10), 11, NumberSchema())["code"] == "max"

    def test_referenced_bound(self):
        """Bounds may reference other fields."""
        root = make_object_schema(field=NumberSchema(), limit=NumberSchema())
        violation = run(max_value(ref("limit")), 50, NumberSchema(), values={"field": 50, "limit": 40}, root=root)
        assert violation["max"] == 40

    def test_absent_reference_skips_rule(self):
        root = make_object_schema(field=NumberSchema(), limit=NumberSchema())
        assert run(max_value(ref("limit")), 50, NumberSchema(), values={"field": 50}, root=root) is None

    def test_reference_is_coerced(self):
        """A referenced string holding a number can serve as a bound."""
        root = make_object_schema(field=NumberSchema(), limit=StringSchema())
        violation = run(max_value(ref("limit")), 50, NumberSchema(), values={"field": 50, "limit": "40"}, root=root)
        assert violation["max"] == 40

    @pytest.mark.parametrize("value,expected", [
        (1, 0),
        (1.5, 1),
        (1.25, 2),
        (Decimal("1.50"), 2),
        (100, 0),
    ])
    def test_get_precision(self, value, expected):
        assert get_precision(value) == expected

    def test_precision_rules(self):
        assert run(max_precision(2), 1.234, NumberSchema())["code"] == "max_precision"
        assert run(max_precision(2), 1.23, NumberSchema()) is None
        assert run(min_precision(2), 1.2, NumberSchema())["min_precision"] == 2


# =============================================================================
# Strings
# =============================================================================

class TestStringRules:
    """Tests for regex, email and is_numeric."""

    def test_regex(self):
        assert run(regex(r"^\d{4}"), "1234 AB", StringSchema()) is None
        violation = run(regex(r"^\d{4}$"), "12", StringSchema())
        assert violation["code"] == "regex"
        assert violation["regex"] == r"^\d{4}$"

    def test_regex_invalid_pattern(self):
        with pytest.raises(RuleParameterError):
            run(regex("("), "x", StringSchema())

    @pytest.mark.parametrize("value", ["info@acme.example", "first.last+tag@mail.example.org"])
    def test_email_valid(self, value):
        assert run(email(), value, StringSchema()) is None

    @pytest.mark.parametrize("value", ["info", "info@", "@acme.example", "a..b@acme.example", ".a@acme.example"])
    def test_email_invalid(self, value):
        assert run(email(), value, StringSchema())["code"] == "email"

    @pytest.mark.parametrize("value,valid", [
        ("12", True),
        (" 1.5 ", True),
        ("-3e2", True),
        ("abc", False),
        ("", False),
        ("   ", False),
        ("inf", False),
    ])
    def test_is_numeric(self, value, valid):
        result = run(is_numeric(), value, StringSchema())
        assert (result is None) is valid


# =============================================================================
# Equality / Membership
# =============================================================================

class TestEqualityRules:
    """Tests for equals and one_of."""

    def test_equals(self):
        assert run(equals("yes"), "yes", StringSchema()) is None
        assert run(equals("yes"), "no", StringSchema())["equals"] == "yes"

    def test_equals_boolean(self):
        assert run(equals(True), True, BooleanSchema()) is None
        assert run(equals(True), False, BooleanSchema())["code"] == "equals"

    def test_equals_reference(self):
        """Password confirmation style equality."""
        root = make_object_schema(field=StringSchema(), password=StringSchema())
        values = {"field": "secret", "password": "secret"}
        assert run(equals(ref("password")), "secret", StringSchema(), values=values, root=root) is None
        values = {"field": "secret", "password": "other"}
        assert run(equals(ref("password")), "secret", StringSchema(), values=values, root=root)["code"] == "equals"

    def test_equals_dates(self):
        assert run(equals(date(2024, 1, 1)), datetime(2024, 1, 1), DateSchema()) is None

    def test_equals_without_value(self):
        with pytest.raises(RuleParameterError):
            run(equals(None), "x", StringSchema())

    def test_one_of(self):
        schema = OptionsSchema(options=["a", "b", "c"])
        assert run(one_of(["a", "b"]), "a", schema) is None
        violation = run(one_of(["a", "b"]), "c", schema)
        assert violation["code"] == "one_of"
        assert violation["values"] == ["a", "b"]

    def test_one_of_with_reference(self):
        root = make_object_schema(field=StringSchema(), preferred=StringSchema())
        values = {"field": "x", "preferred": "x"}
        assert run(one_of([ref("preferred"), "y"]), "x", StringSchema(), values=values, root=root) is None


# =============================================================================
# Files
# =============================================================================

class TestMimeTypeRule:
    """Tests for mime_type."""

    def test_single(self):
        assert run(mime_type("application/pdf"), make_file(), FileSchema()) is None

    def test_list(self):
        violation = run(mime_type(["image/png", "image/jpeg"]), make_file(), FileSchema())
        assert violation["code"] == "mime_type"
        assert violation["mime_type"] == "application/pdf"

    def test_bad_parameter(self):
        with pytest.raises(RuleParameterError):
            run(mime_type([1, 2]), make_file(), FileSchema())


# =============================================================================
# Dates
# =============================================================================

class TestDateRules:
    """Tests for before, after, min_date and max_date."""

    def test_before_after(self):
        value = date(2024, 6, 10)
        assert run(before(date(2024, 7, 1)), value, DateSchema()) is None
        assert run(before(date(2024, 6, 10)), value, DateSchema())["code"] == "before"
        assert run(after(date(2024, 6, 10)), value, DateSchema())["code"] == "after"
        assert run(after(date(2024, 6, 9)), value, DateSchema()) is None

    def test_min_max_date_are_inclusive(self):
        value = date(2024, 6, 10)
        assert run(min_date(date(2024, 6, 10)), value, DateSchema()) is None
        assert run(max_date(date(2024, 6, 10)), value, DateSchema()) is None
        assert run(min_date(date(2024, 6, 11)), value, DateSchema())["code"] == "min_date"
        assert run(max_date(date(2024, 6, 9)), value, DateSchema())["code"] == "max_date"

    def test_aware_and_naive_compare(self):
        """Aware datetimes are compared in UTC."""
        value = datetime(2024, 6, 10, 12, tzinfo=timezone.utc)
        assert run(before(datetime(2024, 6, 10, 13)), value, DateSchema()) is None

    def test_date_string_values(self):
        """Date strings parse with the schema format, also in parameters."""
        schema = DateStringSchema(format="%d-%m-%Y")
        assert run(before("01-07-2024"), "10-06-2024", schema) is None
        assert run(after("01-07-2024"), "10-06-2024", schema)["code"] == "after"

    def test_referenced_date_string(self):
        """A date string reference is parsed with the referenced format."""
        root = make_object_schema(
            field=DateSchema(),
            start=DateStringSchema(format="%d/%m/%Y"),
        )
        values = {"field": date(2024, 6, 10), "start": "01/07/2024"}
        violation = run(after(ref("start")), date(2024, 6, 10), DateSchema(), values=values, root=root)
        assert violation["code"] == "after"

    def test_bad_parameter(self):
        with pytest.raises(RuleParameterError):
            run(before("tomorrow"), date(2024, 6, 10), DateSchema())


# =============================================================================
# Custom Rules
# =============================================================================

class TestCustomRules:
    """Tests for custom rules."""

    def test_passing(self):
        calls = []

        def even(input, params, path, schema):
            calls.append((input, params, path))
            return input.value % 2 == 0

        options = ValidateOptions(custom_rules={"even": even})
        assert run(custom("even"), 4, NumberSchema(), options=options) is None
        assert isinstance(calls[0][0], CustomRuleInput)
        assert calls[0][2] == "$.field"

    def test_failing(self):
        options = ValidateOptions(custom_rules={"even": lambda i, p, path, s: i.value % 2 == 0})
        violation = run(custom("even", {"strict": True}), 3, NumberSchema(), options=options)
        assert violation["code"] == "custom"
        assert violation["name"] == "even"
        assert violation["params"] == {"strict": True}

    def test_dict_result(self):
        """A result dict may carry a message and extra details."""
        def check(i, params, path, schema):
            return {"success": False, "message": "Not allowed", "reason": "blocked"}

        options = ValidateOptions(custom_rules={"check": check})
        violation = run(custom("check"), "x", StringSchema(), options=options)
        assert violation["message"] == "Not allowed"
        assert violation["result"] == {"reason": "blocked"}

    def test_dict_success(self):
        options = ValidateOptions(custom_rules={"check": lambda *a: {"success": True}})
        assert run(custom("check"), "x", StringSchema(), options=options) is None

    def test_params_references_resolved(self):
        seen = {}

        def check(i, params, path, schema):
            seen.update(params)
            return True

        root = make_object_schema(field=StringSchema(), country=StringSchema())
        options = ValidateOptions(custom_rules={"check": check})
        run(custom("check", {"country": ref("country")}), "x", StringSchema(),
            values={"field": "x", "country": "NL"}, root=root, options=options)
        assert seen == {"country": "NL"}

    def test_unknown(self):
        with pytest.raises(UnknownCustomRuleError):
            run(custom("missing"), "x", StringSchema())


# =============================================================================
# Dispatch
# =============================================================================

class TestDispatch:
    """Tests for the per schema type dispatch tables."""

    def test_every_schema_type_accepts_custom(self):
        for schema_type in SchemaType:
            assert RuleType.CUSTOM in supported_rules(schema_type)

    def test_unsupported_rule(self):
        """email on a number is a schema mistake."""
        with pytest.raises(RuleNotSupportedError):
            run(email(), 3, NumberSchema())

    def test_date_string_shares_date_rules(self):
        assert supported_rules(SchemaType.DATE_STRING) == supported_rules(SchemaType.DATE)
