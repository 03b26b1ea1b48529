"""
Dynaval Validation Results

A validation call returns either a ValidationSuccess carrying the
normalized values or a ValidationFailure carrying every violation found,
one ErrorMessage per violating path. Never both.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Optional, Union

if TYPE_CHECKING:
    from .schema import Schema


@dataclass
class ErrorMessage:
    """
    A single validation violation.

    Attributes:
        code: Error code of the check that failed ("required", "type",
            "min_length", "custom", ...)
        custom_code: Same as code unless the failing rule set its own code
        path: Path at which the violation was detected
        schema: The offending schema node
        value: The new value at path
        current: The current value at path (None for fresh data)
        message: Human-readable description
        details: Check specific fields, e.g. {"min": 3} or
            {"expected_type": "number"}
    """
    code: str
    custom_code: str
    path: str
    schema: Schema
    value: Any
    current: Any
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        """Access check specific fields as error["min"]."""
        return self.details[key]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging/API responses. The schema is reported by type."""
        result: dict[str, Any] = {
            "code": self.code,
            "custom_code": self.custom_code,
            "path": self.path,
            "schema_type": self.schema.type.value,
            "value": self.value,
            "current": self.current,
            "message": self.message,
        }
        result.update(self.details)
        return result


@dataclass
class ValidationSuccess:
    """Validation passed; `values` holds the normalized value tree."""
    values: Any = None
    success: Literal[True] = field(default=True, init=False)

    def __bool__(self) -> bool:
        return True


@dataclass
class ValidationFailure:
    """Validation failed; `errors` lists every violation."""
    errors: list[ErrorMessage] = field(default_factory=list)
    success: Literal[False] = field(default=False, init=False)

    def __bool__(self) -> bool:
        return False

    def errors_at(self, path: str) -> list[ErrorMessage]:
        """Errors reported for exactly this path."""
        return [error for error in self.errors if error.path == path]

    def first(self, path: Optional[str] = None) -> Optional[ErrorMessage]:
        errors = self.errors_at(path) if path is not None else self.errors
        return errors[0] if errors else None


ValidationResult = Union[ValidationSuccess, ValidationFailure]
