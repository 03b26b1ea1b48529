"""
Dynaval Enumerations

All enumeration types used throughout the validation engine.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Schema Types
# =============================================================================

class SchemaType(str, Enum):
    """Kinds of schema nodes."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATE_STRING = "date_string"    # date serialized as a string in a fixed format
    FILE = "file"
    OPTIONS = "options"            # one of an enumerated list of values
    OBJECT = "object"
    ARRAY = "array"


# =============================================================================
# Conditional Schema Properties
# =============================================================================

class SchemaProperty(str, Enum):
    """Schema properties that may be given as a literal or as a condition."""
    REQUIRED = "required"
    INCLUDED = "included"
    MUTABLE = "mutable"


# =============================================================================
# Conditions
# =============================================================================

class ConditionType(str, Enum):
    """Condition node types."""
    # Logical
    AND = "and"
    OR = "or"

    # Comparison
    EQUALS = "eq"
    NOT_EQUALS = "neq"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    LOWER_THAN = "lt"
    LOWER_THAN_OR_EQUAL = "lte"
    MATCHES = "matches"
    IS_IN = "in"
    IS_NOT_IN = "nin"

    @property
    def is_logical(self) -> bool:
        return self in (ConditionType.AND, ConditionType.OR)


# =============================================================================
# Rules
# =============================================================================

class RuleType(str, Enum):
    """Rule kinds. The value doubles as the error code of a failing rule."""
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN = "min"
    MAX = "max"
    MIN_PRECISION = "min_precision"
    MAX_PRECISION = "max_precision"
    MIN_SIZE = "min_size"
    MAX_SIZE = "max_size"
    MIN_ENTRIES = "min_entries"
    MAX_ENTRIES = "max_entries"
    REGEX = "regex"
    EQUALS = "equals"
    ONE_OF = "one_of"
    EMAIL = "email"
    IS_NUMERIC = "is_numeric"
    MIME_TYPE = "mime_type"
    BEFORE = "before"
    AFTER = "after"
    MIN_DATE = "min_date"
    MAX_DATE = "max_date"
    CUSTOM = "custom"
    CONDITIONAL = "conditional"


# =============================================================================
# Validation Errors
# =============================================================================

class ErrorCode(str, Enum):
    """Codes reported by the validation driver itself (not by rules)."""
    INCLUDED = "included"
    IMMUTABLE = "immutable"
    REQUIRED = "required"
    TYPE = "type"


# =============================================================================
# Private Values
# =============================================================================

class PrivateState(str, Enum):
    """State of a private value wrapper."""
    PLAIN = "plain"      # real value, trackable for change detection
    MASKED = "masked"    # redacted placeholder, never compared or re-validated
