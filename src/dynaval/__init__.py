"""
Dynaval - Declarative Document Validation

A schema describes the shape, constraints and cross-field dependencies of
a document; validate() walks a candidate document against it and returns
either the normalized values or every violation at once.

Key Features:
- Conditional required / included / mutable properties
- Rules that reference other fields of the same document
- Conditional rules that only apply in certain document states
- Private values that can be masked on the way out and accepted back
- Error reports with one entry per violating path
- Schema packs authored as YAML or JSON

Quick Start:
    from dynaval import (
        ObjectSchema, StringSchema, OptionsSchema,
        eq, email, validate,
    )

    schema = ObjectSchema(fields={
        "type": OptionsSchema(options=["personal", "business"]),
        "email": StringSchema(required=eq("type", "business"), rules=[email()]),
    })

    result = validate(schema, None, {"type": "business"})
    if not result.success:
        for error in result.errors:
            print(error.path, error.code)   # $.email required

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    ConditionType,
    ErrorCode,
    PrivateState,
    RuleType,
    SchemaProperty,
    SchemaType,
    # Schema
    ArraySchema,
    BooleanSchema,
    DateSchema,
    DateStringSchema,
    FileSchema,
    FileUpload,
    NumberSchema,
    ObjectSchema,
    OptionsSchema,
    Schema,
    StringSchema,
    # References & conditions
    Reference,
    and_,
    eq,
    gt,
    gte,
    is_in,
    is_not_in,
    lt,
    lte,
    matches,
    neq,
    or_,
    ref,
    # Rules
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
    regex,
    when,
    # Private values & results
    ErrorMessage,
    PrivateValue,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    ConditionEvaluator,
    PrivateValueTracker,
    ValidateOptions,
    Validator,
    asterisks,
    get_rules_dependencies_map,
    is_included,
    is_mutable,
    is_required,
    validate,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    CyclicReferenceError,
    DynavalError,
    PathError,
    PrivateValueError,
    RuleError,
    SchemaPackError,
    ValidationInputError,
)

__all__ = [
    "__version__",
    # Enums
    "ConditionType",
    "ErrorCode",
    "PrivateState",
    "RuleType",
    "SchemaProperty",
    "SchemaType",
    # Schema
    "ArraySchema",
    "BooleanSchema",
    "DateSchema",
    "DateStringSchema",
    "FileSchema",
    "FileUpload",
    "NumberSchema",
    "ObjectSchema",
    "OptionsSchema",
    "Schema",
    "StringSchema",
    # References & conditions
    "Reference",
    "and_",
    "eq",
    "gt",
    "gte",
    "is_in",
    "is_not_in",
    "lt",
    "lte",
    "matches",
    "neq",
    "or_",
    "ref",
    # Rules
    "after",
    "before",
    "custom",
    "email",
    "equals",
    "is_numeric",
    "max_date",
    "max_entries",
    "max_length",
    "max_precision",
    "max_size",
    "max_value",
    "mime_type",
    "min_date",
    "min_entries",
    "min_length",
    "min_precision",
    "min_size",
    "min_value",
    "one_of",
    "regex",
    "when",
    # Private values & results
    "ErrorMessage",
    "PrivateValue",
    "ValidationFailure",
    "ValidationResult",
    "ValidationSuccess",
    # Engine
    "ConditionEvaluator",
    "PrivateValueTracker",
    "ValidateOptions",
    "Validator",
    "asterisks",
    "get_rules_dependencies_map",
    "is_included",
    "is_mutable",
    "is_required",
    "validate",
    # Exceptions
    "CyclicReferenceError",
    "DynavalError",
    "PathError",
    "PrivateValueError",
    "RuleError",
    "SchemaPackError",
    "ValidationInputError",
]
