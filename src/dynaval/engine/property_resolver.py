"""
Dynaval Property & Rule Resolver

Resolves the conditional schema properties (required, included, mutable)
and the rules in force for the current state of a document.
"""
from __future__ import annotations

import logging
from typing import Any

from ..models import (
    BaseRule,
    ConditionalRule,
    Rule,
    Schema,
    SchemaProperty,
    is_condition,
)
from .condition_evaluator import evaluate_condition
from .context import ResolveContext
from .path_resolver import find_schema_by_path, normalize_path

logger = logging.getLogger(__name__)


def resolve_property(
    schema: Schema,
    name: SchemaProperty,
    path: str,
    default: bool,
    context: ResolveContext,
) -> bool:
    """
    Resolve a conditional property of the node at path.

    Absent properties resolve to `default`, literal booleans to
    themselves and conditions to their evaluation result.
    """
    value = getattr(schema, SchemaProperty(name).value)
    if value is None:
        return default
    if is_condition(value):
        result = evaluate_condition(value, path, context)
        logger.debug("Property %s of %s resolved to %s", SchemaProperty(name).value, path, result)
        return result
    return bool(value)


def resolve_rules(schema: Schema, path: str, context: ResolveContext) -> list[Rule]:
    """
    Rules in force for the node at path, in declaration order.

    A conditional rule is replaced by its inner rule when its condition
    holds and dropped otherwise.
    """
    rules: list[Rule] = []
    for rule in schema.rules:
        if isinstance(rule, ConditionalRule):
            if evaluate_condition(rule.when, path, context):
                rules.append(rule.then)
            else:
                logger.debug("Skipping conditional %s rule at %s", rule.then.type.value, path)
        elif isinstance(rule, BaseRule):
            rules.append(rule)
    return rules


# =============================================================================
# Path Level Helpers
# =============================================================================

def _resolve_at(schema: Schema, path: str, values: Any, name: SchemaProperty) -> bool:
    path = normalize_path(path)
    node = find_schema_by_path(path, schema)
    context = ResolveContext(schema=schema, values=values)
    if name == SchemaProperty.INCLUDED:
        context = context.entering(path)
    return resolve_property(node, name, path, True, context)


def is_included(schema: Schema, path: str, values: Any) -> bool:
    """
    Whether the node at path is included for the given document.

    Example:
        schema = ObjectSchema(fields={
            "one": NumberSchema(),
            "two": NumberSchema(included=eq("one", 1)),
        })
        is_included(schema, "$.two", {"one": 1})  # True
    """
    return _resolve_at(schema, path, values, SchemaProperty.INCLUDED)


def is_required(schema: Schema, path: str, values: Any) -> bool:
    return _resolve_at(schema, path, values, SchemaProperty.REQUIRED)


def is_mutable(schema: Schema, path: str, values: Any) -> bool:
    return _resolve_at(schema, path, values, SchemaProperty.MUTABLE)
