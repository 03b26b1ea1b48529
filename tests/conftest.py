"""
Pytest configuration and fixtures for Dynaval tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
from pathlib import Path

import pytest

from dynaval.engine import ResolveContext, ValidateOptions, ValidationContext
from dynaval.models import (
    ArraySchema,
    DateStringSchema,
    FileSchema,
    FileUpload,
    NumberSchema,
    ObjectSchema,
    OptionsSchema,
    PrivateState,
    PrivateValue,
    StringSchema,
    eq,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Factory Helpers
# =============================================================================

def make_object_schema(required=None, included=None, mutable=None, rules=None, **fields):
    """Create an ObjectSchema from keyword fields."""
    return ObjectSchema(
        fields=fields,
        required=required,
        included=included,
        mutable=mutable,
        rules=rules or [],
    )


def make_context(schema, values, **kwargs) -> ValidationContext:
    """Create a ValidationContext for rule and property tests."""
    return ValidationContext(
        schema=schema,
        values=values,
        current_values=kwargs.pop("current_values", None),
        options=kwargs.pop("options", ValidateOptions()),
        validate_mutable=kwargs.pop("validate_mutable", False),
        **kwargs,
    )


def make_resolve_context(schema, values) -> ResolveContext:
    return ResolveContext(schema=schema, values=values)


def make_file(
    name: str = "passport.pdf",
    size: int = 2048,
    mime_type: str = "application/pdf",
) -> FileUpload:
    """Create a FileUpload."""
    return FileUpload(name=name, size=size, mime_type=mime_type)


def plain(value) -> PrivateValue:
    return PrivateValue(PrivateState.PLAIN, value)


def masked(value: str = "***") -> PrivateValue:
    return PrivateValue(PrivateState.MASKED, value)


# =============================================================================
# Common Fixtures
# =============================================================================

@pytest.fixture
def customer_schema():
    """Customer document with a conditional email, a private IBAN and contacts."""
    return make_object_schema(
        type=OptionsSchema(options=["personal", "business"]),
        name=StringSchema(),
        email=StringSchema(required=eq("type", "business")),
        vat_number=StringSchema(required=False, included=eq("type", "business")),
        iban=StringSchema(required=False, private=True),
        birth_date=DateStringSchema(required=False),
        contacts=ArraySchema(
            required=False,
            schema=make_object_schema(
                name=StringSchema(),
                phone=StringSchema(required=False),
            ),
        ),
    )


@pytest.fixture
def business_customer():
    return {
        "type": "business",
        "name": "Acme B.V.",
        "email": "info@acme.example",
        "vat_number": "NL123456789B01",
        "iban": plain("NL91ABNA0417164300"),
    }


@pytest.fixture
def limits_schema():
    """Schema whose rules reference other fields."""
    return make_object_schema(
        min_amount=NumberSchema(required=False),
        max_amount=NumberSchema(required=False),
        amount=NumberSchema(required=False),
        attachment=FileSchema(required=False),
    )


@pytest.fixture
def packs_dir() -> Path:
    return FIXTURES_DIR / "packs"
