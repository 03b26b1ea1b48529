"""
Dynaval Exception Hierarchy

Configuration and programming errors raised by the validation engine.

Data-dependent problems (a missing required value, a value of the wrong
type, a failing rule) are never raised: they are returned as
ErrorMessage entries of a ValidationFailure. Everything in this module
signals a mistake in the schema, in the options passed to validate(), or
in the shape of the values handed over by the caller.

Exception codes follow the pattern: DV_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class DynavalError(Exception):
    """
    Base exception for all Dynaval errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (DV_*)
        details: Additional context about the error
        path: Document path the error was raised for, if any
    """
    message: str
    code: str = "DV_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    path: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.path:
            parts.append(f"(path: {self.path})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.path:
            result["path"] = self.path
        return result


# =============================================================================
# Schema Definition Errors
# =============================================================================

@dataclass
class InvalidSchemaError(DynavalError):
    """A schema node is malformed."""
    code: str = "DV_SCHEMA_INVALID"


# =============================================================================
# Path Resolution Errors
# =============================================================================

@dataclass
class PathError(DynavalError):
    """A path could not be resolved against the schema."""
    code: str = "DV_PATH_ERROR"


@dataclass
class BadPathError(PathError):
    """A path segment is malformed (e.g. a non-numeric array index)."""
    code: str = "DV_PATH_BAD_SEGMENT"


@dataclass
class SchemaNotFoundError(PathError):
    """A path names a field the object schema does not declare."""
    code: str = "DV_PATH_SCHEMA_NOT_FOUND"


@dataclass
class NotTraversableError(PathError):
    """A path descends into a schema that is neither an object nor an array."""
    code: str = "DV_PATH_NOT_TRAVERSABLE"


@dataclass
class PrivateAccessDeniedError(PathError):
    """A path walks through a private schema node."""
    code: str = "DV_PATH_PRIVATE_ACCESS_DENIED"


@dataclass
class SchemaTypeMismatchError(PathError):
    """The schema found at a path is not of the expected type."""
    code: str = "DV_PATH_SCHEMA_TYPE_MISMATCH"


# =============================================================================
# Condition Errors
# =============================================================================

@dataclass
class ConditionError(DynavalError):
    """Condition evaluation failed."""
    code: str = "DV_CONDITION_ERROR"


@dataclass
class InvalidConditionError(ConditionError):
    """Condition structure is invalid."""
    code: str = "DV_CONDITION_INVALID"


@dataclass
class CyclicReferenceError(ConditionError):
    """Resolving a condition led back to a path that is still being resolved."""
    code: str = "DV_CONDITION_CYCLIC_REFERENCE"


# =============================================================================
# Rule Errors
# =============================================================================

@dataclass
class RuleError(DynavalError):
    """A rule is misconfigured."""
    code: str = "DV_RULE_ERROR"


@dataclass
class RuleParameterError(RuleError):
    """A static rule parameter has the wrong type."""
    code: str = "DV_RULE_BAD_PARAMETER"


@dataclass
class RuleNotSupportedError(RuleError):
    """A rule was attached to a schema type that cannot execute it."""
    code: str = "DV_RULE_NOT_SUPPORTED"


@dataclass
class UnknownCustomRuleError(RuleError):
    """A custom rule name has no registered implementation."""
    code: str = "DV_RULE_UNKNOWN_CUSTOM"


# =============================================================================
# Value Errors
# =============================================================================

@dataclass
class PrivateValueError(DynavalError):
    """A private schema received a value that is not a private value wrapper."""
    code: str = "DV_PRIVATE_VALUE_EXPECTED"


@dataclass
class ValidationInputError(DynavalError):
    """The current value tree does not match the shape of the schema."""
    code: str = "DV_VALIDATION_INPUT_INVALID"


# =============================================================================
# Schema Pack Errors
# =============================================================================

@dataclass
class SchemaPackError(DynavalError):
    """Base error for schema pack handling."""
    code: str = "DV_PACK_ERROR"


@dataclass
class SchemaPackLoadError(SchemaPackError):
    """Failed to load schema pack from file."""
    code: str = "DV_PACK_LOAD_ERROR"


@dataclass
class SchemaPackValidationError(SchemaPackError):
    """Schema pack document validation failed."""
    code: str = "DV_PACK_VALIDATION_ERROR"


@dataclass
class SchemaPackVersionMismatch(SchemaPackError):
    """Schema pack version doesn't match the supported version."""
    code: str = "DV_PACK_VERSION_MISMATCH"
