"""
Dynaval Path Resolver

Walks a path expression over a schema/value pair.

Path syntax:
- "$"                       the root
- "$.user.email"            field descent
- "$.contacts[0]"           array index ("$.contacts.[0]" is equivalent)
- "email"                   sibling-relative: resolved against the parent
                            of the path currently being evaluated

Private nodes are never readable through a path: conditions and
references must not leak private data.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import (
    BadPathError,
    NotTraversableError,
    PrivateAccessDeniedError,
    SchemaNotFoundError,
    SchemaTypeMismatchError,
)
from ..models import Schema, SchemaType
from .coercion import coerce_schema

ROOT = "$"

_SEGMENT_SEPARATORS = re.compile(r"[.\[\]]")


# =============================================================================
# Path Helpers
# =============================================================================

def split_path(path: str) -> list[str]:
    """
    Split a path into its segments, without the root marker.

    Example:
        split_path("$.user.contacts[0].email") == ["user", "contacts", "0", "email"]
    """
    segments = [segment for segment in _SEGMENT_SEPARATORS.split(path) if segment]
    if segments and segments[0] == ROOT:
        segments = segments[1:]
    return segments


def parent_path(path: str) -> str:
    """Parent of a path; the root is its own parent."""
    if path == ROOT:
        return ROOT
    return path.rsplit(".", 1)[0] if "." in path else ROOT


def ensure_absolute_path(field_path: str, current_path: str) -> str:
    """
    Rewrite a sibling-relative path to an absolute one.

    Example:
        ensure_absolute_path("type", "$.customer.email") == "$.customer.type"
    """
    if field_path.startswith(ROOT):
        return field_path
    return f"{parent_path(current_path)}.{field_path}"


def normalize_path(path: str) -> str:
    """Spell array indices the way error paths do: "$.list[0]" -> "$.list.[0]"."""
    return re.sub(r"(?<!\.)\[", ".[", path)


def join_path(path: str, segment: str) -> str:
    return f"{path}.{segment}"


def _parse_index(segment: str, path: str) -> int:
    try:
        index = int(segment)
    except ValueError:
        raise BadPathError(
            message=f"Expected an array index at path {path}, but got '{segment}'",
            path=path,
            details={"segment": segment},
        ) from None
    if index < 0:
        raise BadPathError(
            message=f"Array index must not be negative at path {path}",
            path=path,
            details={"segment": segment},
        )
    return index


def _child_schema(schema: Schema, segment: str, path: str) -> Schema:
    if schema.type == SchemaType.ARRAY:
        _parse_index(segment, path)
        return schema.schema

    if schema.type == SchemaType.OBJECT:
        child = schema.fields.get(segment)
        if child is None:
            raise SchemaNotFoundError(
                message=f"No schema found for path {path}",
                path=path,
                details={"segment": segment},
            )
        return child

    raise NotTraversableError(
        message=f"Cannot descend into schema of type '{schema.type.value}' at path {path}",
        path=path,
        details={"segment": segment},
    )


# =============================================================================
# Schema Lookup
# =============================================================================

def find_schema_by_path(
    path: str,
    schema: Schema,
    expected_type: Optional[SchemaType] = None,
) -> Schema:
    """
    Find the schema node at an absolute path, ignoring values.

    Private nodes may be looked up: only their values are protected.

    Raises:
        BadPathError, SchemaNotFoundError, NotTraversableError
        SchemaTypeMismatchError: If expected_type is given and differs
    """
    current = schema
    for segment in split_path(path):
        current = _child_schema(current, segment, path)

    if expected_type is not None and current.type != expected_type:
        raise SchemaTypeMismatchError(
            message=f"Expected schema of type {expected_type.value} at path {path}, "
                    f"but got {current.type.value}",
            path=path,
        )
    return current


# =============================================================================
# Value Resolution
# =============================================================================

@dataclass
class ResolvedPath:
    """
    Result of walking a path.

    Attributes:
        schema: Schema node at the end of the path
        value: Value at the end of the path (defaults substituted, coerced
            when the schema asks for it); None when absent
        trail: (path, schema) of every node walked, root first
    """
    schema: Schema
    value: Any
    trail: list[tuple[str, Schema]] = field(default_factory=list)


def _deny_private(schema: Schema, path: str) -> None:
    if schema.private:
        raise PrivateAccessDeniedError(
            message=f"Cannot access private schema at path {path}",
            path=path,
        )


def resolve_path(path: str, schema: Schema, value: Any) -> ResolvedPath:
    """
    Resolve an absolute path against a root schema and root value.

    Absent values are replaced by the schema default of the node they
    belong to; values that are not a container where the schema expects
    one resolve to absence.

    Raises:
        BadPathError: Non-integer segment below an array schema
        SchemaNotFoundError: Unknown field below an object schema
        NotTraversableError: Segment below any other schema type
        PrivateAccessDeniedError: A private node lies on the path
    """
    _deny_private(schema, path)

    current_schema = schema
    current_value = value
    current_path = ROOT
    trail: list[tuple[str, Schema]] = [(ROOT, schema)]

    for segment in split_path(path):
        child_schema = _child_schema(current_schema, segment, path)
        _deny_private(child_schema, path)

        if current_schema.type == SchemaType.ARRAY:
            index = int(segment)
            child_value = None
            if isinstance(current_value, Sequence) and not isinstance(current_value, str):
                if index < len(current_value):
                    child_value = current_value[index]
            current_path = join_path(current_path, f"[{index}]")
        else:
            child_value = None
            if isinstance(current_value, Mapping):
                child_value = current_value.get(segment)
            current_path = join_path(current_path, segment)

        current_schema = child_schema
        current_value = child_schema.default if child_value is None else child_value
        trail.append((current_path, current_schema))

    return ResolvedPath(
        schema=current_schema,
        value=coerce_schema(current_schema, current_value),
        trail=trail,
    )
