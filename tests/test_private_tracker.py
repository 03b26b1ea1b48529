"""
Tests for Dynaval Private-Value Tracker
"""
import pytest

from dynaval.engine.private_tracker import (
    PrivateValueTracker,
    asterisks,
    get_private_data,
    is_value_masked,
    unwrap_private,
    value_changed,
)
from dynaval.exceptions import PrivateValueError
from dynaval.models import (
    ArraySchema,
    PrivateState,
    PrivateValue,
    StringSchema,
)

from tests.conftest import make_object_schema, masked, plain


@pytest.fixture
def tracker():
    return PrivateValueTracker(mask_fn=asterisks)


class TestPrivateValue:
    """Tests for the PrivateValue wrapper."""

    def test_masked_requires_string(self):
        with pytest.raises(PrivateValueError):
            PrivateValue(PrivateState.MASKED, 1234)

    def test_to_dict(self):
        assert masked("**").to_dict() == {"state": "masked", "value": "**"}


class TestHelpers:
    """Tests for the inspection helpers."""

    def test_get_private_data_absent(self):
        """Absence must be wrapped as well."""
        with pytest.raises(PrivateValueError):
            get_private_data(None, "$.iban")
        assert get_private_data(plain(None)) == plain(None)

    def test_get_private_data_unwrapped(self):
        with pytest.raises(PrivateValueError):
            get_private_data("secret", "$.iban")

    def test_is_value_masked(self):
        assert is_value_masked(StringSchema(private=True), masked()) is True
        assert is_value_masked(StringSchema(private=True), plain("x")) is False
        assert is_value_masked(StringSchema(), masked()) is False

    def test_unwrap_private(self):
        assert unwrap_private(StringSchema(private=True), plain("x")) == "x"
        assert unwrap_private(StringSchema(), "x") == "x"

    def test_unwrap_private_absent(self):
        schema = StringSchema(private=True)
        assert unwrap_private(schema, None, allow_absent=True) is None
        with pytest.raises(PrivateValueError):
            unwrap_private(schema, None, "$.iban")


class TestValueChanged:
    """Tests for change detection."""

    def test_plain_values(self):
        schema = StringSchema(private=True)
        assert value_changed(schema, plain("a"), plain("b")) is True
        assert value_changed(schema, plain("a"), plain("a")) is False

    def test_masked_never_changes(self):
        schema = StringSchema(private=True)
        assert value_changed(schema, plain("a"), masked()) is False
        assert value_changed(schema, masked(), plain("b")) is False

    def test_absent_current(self):
        schema = StringSchema(private=True)
        assert value_changed(schema, None, plain(None)) is False
        assert value_changed(schema, None, plain("a")) is True
        with pytest.raises(PrivateValueError):
            value_changed(schema, plain("a"), None)

    def test_deep_values(self):
        schema = make_object_schema(a=StringSchema())
        assert value_changed(schema, {"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]}) is False
        assert value_changed(schema, {"a": [1, {"b": 2}]}, {"a": [1, {"b": 3}]}) is True

    def test_boolean_is_not_number(self):
        assert value_changed(StringSchema(), True, 1) is True


class TestTracker:
    """Tests for PrivateValueTracker."""

    def test_plain_and_mask(self, tracker):
        assert tracker.plain("x") == plain("x")
        assert tracker.mask("NL91ABNA0417164300") == masked("***")

    def test_custom_mask_fn(self):
        tracker = PrivateValueTracker(mask_fn=lambda v: "*" * (len(v) - 4) + v[-4:])
        assert tracker.mask("NL91ABNA0417164300").value == "**************4300"

    def test_mask_values(self, tracker):
        schema = make_object_schema(
            name=StringSchema(),
            iban=StringSchema(private=True),
            cards=ArraySchema(schema=StringSchema(private=True)),
        )
        values = {
            "name": "Bob",
            "iban": plain("NL91ABNA0417164300"),
            "cards": [plain("4111111111111111"), masked()],
        }
        assert tracker.mask_values(schema, values) == {
            "name": "Bob",
            "iban": masked(),
            "cards": [masked(), masked()],
        }

    def test_masked_document_validates(self, tracker):
        """A masked document can be sent back and passes validation."""
        from dynaval import validate

        schema = make_object_schema(iban=StringSchema(private=True, mutable=False))
        current = {"iban": plain("NL91ABNA0417164300")}
        result = validate(schema, current, tracker.mask_values(schema, current))
        assert result.success is True
