"""
Dynaval Reference Evaluator

Turns a value-or-reference into a concrete value.

Static values are returned as they are. References are resolved against
the new value tree of the document; a referenced value that cannot be
used (wrong kind, node not included) resolves to absence (None) instead
of raising, so that conditions and rules pointing at fields that are not
filled in yet degrade gracefully.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import CyclicReferenceError
from ..models import Schema, SchemaType, is_condition, is_reference
from .coercion import coerce
from .context import ResolveContext
from .path_resolver import ensure_absolute_path, resolve_path
from .type_checks import (
    is_string,
    parse_date_string,
    validate_shallow_type,
    validate_type,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnpackedReference:
    """
    Attributes:
        value: The static value, or the resolved value (None when absent)
        static: True when no reference was resolved
        schema: Schema of the referenced node; None for static values
    """
    value: Any
    static: bool
    schema: Optional[Schema] = None


# =============================================================================
# Inclusion Along The Reference Trail
# =============================================================================

def _node_included(schema: Schema, path: str, context: ResolveContext) -> bool:
    included = schema.included
    if included is None:
        return True
    if not is_condition(included):
        return bool(included)

    if path in context.resolving:
        raise CyclicReferenceError(
            message=f"Cyclic reference while resolving whether {path} is included",
            path=path,
            details={"resolving": sorted(context.resolving)},
        )

    # Imported here: condition evaluation itself unpacks references.
    from .condition_evaluator import evaluate_condition

    return evaluate_condition(included, path, context.entering(path))


def _trail_included(trail: list[tuple[str, Schema]], context: ResolveContext) -> bool:
    """
    Whether every node from the root down to the referenced node is included.

    An ancestor whose inclusion is being resolved right now counts as
    included: its own condition may read its children. Only the referenced
    node itself being in progress is a cycle.
    """
    target = trail[-1][0]
    for path, schema in trail:
        if path != target and path in context.resolving:
            continue
        if not _node_included(schema, path, context):
            return False
    return True


# =============================================================================
# Unpacking
# =============================================================================

def _to_expected_kind(
    schema: Schema,
    value: Any,
    expected: tuple[SchemaType, ...],
) -> tuple[SchemaType, Any]:
    kind = schema.type if schema.type in expected else expected[0]

    if schema.type == SchemaType.DATE_STRING and kind == SchemaType.DATE and is_string(value):
        try:
            return kind, parse_date_string(value, schema.format)
        except ValueError:
            return kind, None

    return kind, coerce(kind, value)


def unpack_reference(
    value_or_ref: Any,
    path: str,
    context: ResolveContext,
    *expected: SchemaType,
) -> UnpackedReference:
    """
    Unpack a value-or-reference.

    Args:
        value_or_ref: A static value or a Reference
        path: Path of the node being evaluated; sibling-relative reference
            paths are resolved against its parent
        context: Resolve context holding the document
        *expected: Schema types the caller can work with. The resolved
            value is coerced toward one of them and shallow type checked.
            Without expected types the referenced schema's own type
            check applies.

    Returns:
        UnpackedReference with the concrete value

    Raises:
        PathError: If the reference path cannot be resolved
        CyclicReferenceError: If the referenced node is the one whose inclusion
            is being resolved
    """
    if not is_reference(value_or_ref):
        return UnpackedReference(value=value_or_ref, static=True)

    target = ensure_absolute_path(value_or_ref.path, path)
    resolved = resolve_path(target, context.schema, context.values)

    if not _trail_included(resolved.trail, context):
        logger.debug("Reference %s from %s points at a node that is not included", target, path)
        return UnpackedReference(value=None, static=False, schema=resolved.schema)

    value = resolved.value
    if value is None:
        return UnpackedReference(value=None, static=False, schema=resolved.schema)

    if expected:
        kind, value = _to_expected_kind(resolved.schema, value, expected)
        if value is None or not validate_shallow_type(kind, value):
            logger.warning(
                "Reference %s from %s resolved to a value that is not of type %s",
                target, path, ", ".join(e.value for e in expected),
            )
            value = None
    elif not validate_type(resolved.schema, value):
        value = None

    return UnpackedReference(value=value, static=False, schema=resolved.schema)


def unpack_reference_value(
    value_or_ref: Any,
    path: str,
    context: ResolveContext,
    *expected: SchemaType,
) -> Any:
    """Shortcut for unpack_reference(...).value."""
    return unpack_reference(value_or_ref, path, context, *expected).value
