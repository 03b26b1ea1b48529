"""
Dynaval Type Checks

Kind-specific predicates used by the validation driver (full, schema
level checks) and by the reference evaluator (shallow, primitive level
checks).
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable

from ..models import DEFAULT_DATE_FORMAT, FileUpload, Schema, SchemaType


# =============================================================================
# Primitive Predicates
# =============================================================================

def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    """Finite int, float or Decimal. Booleans are not numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return False


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_date(value: Any) -> bool:
    return isinstance(value, date)


def is_object(value: Any) -> bool:
    """A mapping; lists and other containers are not objects."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_file(value: Any) -> bool:
    return isinstance(value, FileUpload)


def parse_date_string(value: str, fmt: str = DEFAULT_DATE_FORMAT) -> datetime:
    """Parse a date string; raises ValueError when it does not match fmt."""
    return datetime.strptime(value, fmt)


def is_date_string(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_date_string(value, fmt)
    except ValueError:
        return False
    return True


def to_datetime(value: date) -> datetime:
    """
    Normalize a date or datetime to a naive UTC datetime so that dates,
    naive datetimes and aware datetimes can be compared with each other.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def values_equal(left: Any, right: Any) -> bool:
    """
    Exact equality by runtime value.

    Unlike ==, booleans never equal numbers (True != 1).
    """
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False


def is_option(options: list[Any], value: Any) -> bool:
    return any(values_equal(option, value) for option in options)


# =============================================================================
# Dispatch Tables
# =============================================================================

def ensure_exhaustive(table: Mapping[Enum, Any], enum_type: type[Enum], name: str) -> None:
    """Fail at import time when a dispatch table misses a member of enum_type."""
    missing = [member.value for member in enum_type if member not in table]
    if missing:
        raise RuntimeError(f"{name} does not handle: {', '.join(missing)}")


_SHALLOW_CHECKS: dict[SchemaType, Callable[[Any], bool]] = {
    SchemaType.STRING: is_string,
    SchemaType.NUMBER: is_number,
    SchemaType.BOOLEAN: is_boolean,
    SchemaType.DATE: is_date,
    SchemaType.DATE_STRING: is_string,
    SchemaType.FILE: is_file,
    SchemaType.OPTIONS: lambda v: is_number(v) or is_string(v) or is_boolean(v),
    SchemaType.OBJECT: is_object,
    SchemaType.ARRAY: is_array,
}

ensure_exhaustive(_SHALLOW_CHECKS, SchemaType, "shallow type checks")


def validate_shallow_type(kind: SchemaType, value: Any) -> bool:
    """
    Primitive level type check.

    Does not look at schema details: any string passes for date_string,
    any primitive passes for options.
    """
    return _SHALLOW_CHECKS[kind](value)


def validate_type(schema: Schema, value: Any) -> bool:
    """
    Schema level type check.

    Date strings must parse with the schema's format and options values
    must be one of the declared options.
    """
    if schema.type == SchemaType.DATE_STRING:
        return is_date_string(value, schema.format)
    if schema.type == SchemaType.OPTIONS:
        return is_option(schema.options, value)
    return _SHALLOW_CHECKS[schema.type](value)
