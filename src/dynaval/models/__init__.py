"""
Dynaval Models

All data models of the validation engine.

    from dynaval.models import (
        # Enums
        SchemaType, ConditionType, RuleType, ErrorCode, PrivateState,
        # Schema
        ObjectSchema, ArraySchema, StringSchema, NumberSchema, ...
        # References & Conditions
        Reference, ref, and_, or_, eq, neq, gt, gte, lt, lte, matches, is_in,
        # Rules
        min_length, max_length, min_value, max_value, email, custom, when, ...
        # Private values
        PrivateValue,
        # Results
        ErrorMessage, ValidationSuccess, ValidationFailure,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    ConditionType,
    ErrorCode,
    PrivateState,
    RuleType,
    SchemaProperty,
    SchemaType,
)

# =============================================================================
# References & Conditions
# =============================================================================
from .conditions import (
    AndCondition,
    ComparisonCondition,
    Condition,
    OrCondition,
    Reference,
    and_,
    eq,
    gt,
    gte,
    is_condition,
    is_in,
    is_not_in,
    is_reference,
    lt,
    lte,
    matches,
    neq,
    or_,
    ref,
)

# =============================================================================
# Rules
# =============================================================================
from .rules import (
    AfterRule,
    BaseRule,
    BeforeRule,
    ConditionalRule,
    CustomRule,
    EmailRule,
    EqualsRule,
    IsNumericRule,
    MaxDateRule,
    MaxEntriesRule,
    MaxLengthRule,
    MaxPrecisionRule,
    MaxRule,
    MaxSizeRule,
    MimeTypeRule,
    MinDateRule,
    MinEntriesRule,
    MinLengthRule,
    MinPrecisionRule,
    MinRule,
    MinSizeRule,
    OneOfRule,
    RegexRule,
    Rule,
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
)

# =============================================================================
# Schema
# =============================================================================
from .schema import (
    DEFAULT_DATE_FORMAT,
    ArraySchema,
    BaseSchema,
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
)

# =============================================================================
# Private Values & Results
# =============================================================================
from .private import PrivateValue
from .results import (
    ErrorMessage,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
)

__all__ = [
    # Enums
    "ConditionType",
    "ErrorCode",
    "PrivateState",
    "RuleType",
    "SchemaProperty",
    "SchemaType",
    # References & Conditions
    "AndCondition",
    "ComparisonCondition",
    "Condition",
    "OrCondition",
    "Reference",
    "and_",
    "eq",
    "gt",
    "gte",
    "is_condition",
    "is_in",
    "is_not_in",
    "is_reference",
    "lt",
    "lte",
    "matches",
    "neq",
    "or_",
    "ref",
    # Rules
    "AfterRule",
    "BaseRule",
    "BeforeRule",
    "ConditionalRule",
    "CustomRule",
    "EmailRule",
    "EqualsRule",
    "IsNumericRule",
    "MaxDateRule",
    "MaxEntriesRule",
    "MaxLengthRule",
    "MaxPrecisionRule",
    "MaxRule",
    "MaxSizeRule",
    "MimeTypeRule",
    "MinDateRule",
    "MinEntriesRule",
    "MinLengthRule",
    "MinPrecisionRule",
    "MinRule",
    "MinSizeRule",
    "OneOfRule",
    "RegexRule",
    "Rule",
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
    # Schema
    "DEFAULT_DATE_FORMAT",
    "ArraySchema",
    "BaseSchema",
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
    # Private values & results
    "PrivateValue",
    "ErrorMessage",
    "ValidationFailure",
    "ValidationResult",
    "ValidationSuccess",
]
