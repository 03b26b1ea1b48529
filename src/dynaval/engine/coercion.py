"""
Dynaval Coercion Engine

Best-effort conversion of raw input towards a schema kind:

    coerce(SchemaType.NUMBER, "12")      -> 12
    coerce(SchemaType.BOOLEAN, "false")  -> False
    coerce(SchemaType.STRING, 12)        -> "12"

Coercion never raises. A value that cannot be converted is either left
as is or turned into something the type check rejects (nan for numbers),
so type checking stays the safety net.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any

from ..models import Schema, SchemaType
from .type_checks import is_boolean, is_number, is_string


def _to_number(value: Any) -> Any:
    if is_number(value):
        return value
    if isinstance(value, bool):
        return int(value)
    text = value.strip() if is_string(value) else value
    try:
        return int(text)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return float(text)
    except (TypeError, ValueError, OverflowError):
        return float("nan")


def _to_boolean(value: Any) -> bool:
    if is_boolean(value):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return bool(value)


def to_string(value: Any) -> Any:
    """String form of booleans and numbers; other values pass through."""
    if is_boolean(value):
        return "true" if value else "false"
    if is_number(value):
        return str(value)
    return value


def _to_array(value: Any) -> Any:
    if isinstance(value, list):
        return value
    if is_string(value):
        return list(value)
    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        return list(value)
    return value


def _to_date(value: Any) -> Any:
    if isinstance(value, date):
        return value
    if is_number(value):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return value
    if is_string(value):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


_COERCERS = {
    SchemaType.NUMBER: _to_number,
    SchemaType.BOOLEAN: _to_boolean,
    SchemaType.STRING: to_string,
    SchemaType.ARRAY: _to_array,
    SchemaType.DATE: _to_date,
}


def coerce(kind: SchemaType, value: Any) -> Any:
    """
    Convert value towards kind.

    None passes through unchanged; kinds without a coercion (objects,
    options, files, date strings) return the value as is.
    """
    if value is None:
        return value
    coercer = _COERCERS.get(kind)
    if coercer is None:
        return value
    return coercer(value)


def coerce_schema(schema: Schema, value: Any) -> Any:
    """Coerce value for schema, but only when the schema asks for it."""
    if not schema.coerce:
        return value
    return coerce(schema.type, value)
