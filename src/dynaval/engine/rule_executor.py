"""
Dynaval Rule Executor

Dispatches a resolved rule to its implementation in the rule catalog.

Which rules a schema type accepts is fixed by one table per type; a rule
attached to a schema type outside its table is a schema mistake and
raises RuleNotSupportedError.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..exceptions import RuleNotSupportedError
from ..models import Rule, RuleType, Schema, SchemaType
from . import rules as catalog
from .context import ValidationContext
from .type_checks import ensure_exhaustive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomRuleInput:
    """First argument of a custom rule function."""
    schema: Schema
    value: Any


@dataclass(frozen=True)
class RuleContext:
    """
    Everything a rule implementation gets to see.

    Attributes:
        rule: The resolved (unconditional) rule
        value: The type checked, non-absent value of the node
        path: Path of the node
        schema: Schema of the node
        context: Validation context of the call
    """
    rule: Rule
    value: Any
    path: str
    schema: Schema
    context: ValidationContext


RuleFn = Callable[[RuleContext], Optional[dict[str, Any]]]


# =============================================================================
# Dispatch Tables
# =============================================================================

_DATE_RULES: dict[RuleType, RuleFn] = {
    RuleType.EQUALS: catalog.equals_rule,
    RuleType.BEFORE: catalog.before_rule,
    RuleType.AFTER: catalog.after_rule,
    RuleType.MIN_DATE: catalog.min_date_rule,
    RuleType.MAX_DATE: catalog.max_date_rule,
    RuleType.CUSTOM: catalog.custom_rule,
}

RULES_BY_SCHEMA_TYPE: dict[SchemaType, dict[RuleType, RuleFn]] = {
    SchemaType.STRING: {
        RuleType.MIN_LENGTH: catalog.min_length_rule,
        RuleType.MAX_LENGTH: catalog.max_length_rule,
        RuleType.EQUALS: catalog.equals_rule,
        RuleType.REGEX: catalog.regex_rule,
        RuleType.IS_NUMERIC: catalog.is_numeric_rule,
        RuleType.EMAIL: catalog.email_rule,
        RuleType.ONE_OF: catalog.one_of_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
    SchemaType.NUMBER: {
        RuleType.MIN: catalog.min_rule,
        RuleType.MAX: catalog.max_rule,
        RuleType.MIN_PRECISION: catalog.min_precision_rule,
        RuleType.MAX_PRECISION: catalog.max_precision_rule,
        RuleType.EQUALS: catalog.equals_rule,
        RuleType.ONE_OF: catalog.one_of_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
    SchemaType.BOOLEAN: {
        RuleType.EQUALS: catalog.equals_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
    SchemaType.OPTIONS: {
        RuleType.EQUALS: catalog.equals_rule,
        RuleType.ONE_OF: catalog.one_of_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
    SchemaType.DATE: _DATE_RULES,
    SchemaType.DATE_STRING: _DATE_RULES,
    SchemaType.FILE: {
        RuleType.MIN_SIZE: catalog.min_size_rule,
        RuleType.MAX_SIZE: catalog.max_size_rule,
        RuleType.MIME_TYPE: catalog.mime_type_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
    SchemaType.OBJECT: {
        RuleType.MIN_ENTRIES: catalog.min_entries_rule,
        RuleType.MAX_ENTRIES: catalog.max_entries_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
    SchemaType.ARRAY: {
        RuleType.MIN_LENGTH: catalog.min_length_rule,
        RuleType.MAX_LENGTH: catalog.max_length_rule,
        RuleType.CUSTOM: catalog.custom_rule,
    },
}

ensure_exhaustive(RULES_BY_SCHEMA_TYPE, SchemaType, "rule dispatch")


def supported_rules(schema_type: SchemaType) -> frozenset[RuleType]:
    """Rule types a schema type accepts."""
    return frozenset(RULES_BY_SCHEMA_TYPE[schema_type])


def execute_rule(ctx: RuleContext) -> Optional[dict[str, Any]]:
    """
    Execute one resolved rule.

    Returns:
        None when the rule holds, otherwise the violation dict

    Raises:
        RuleNotSupportedError: If the schema type does not accept the rule
        RuleParameterError: If a static rule parameter is malformed
        UnknownCustomRuleError: If a custom rule has no implementation
    """
    fn = RULES_BY_SCHEMA_TYPE[ctx.schema.type].get(ctx.rule.type)
    if fn is None:
        raise RuleNotSupportedError(
            message=f"Rule '{ctx.rule.type.value}' is not supported for schema type "
                    f"'{ctx.schema.type.value}'",
            path=ctx.path,
            details={"rule": ctx.rule.type.value, "schema_type": ctx.schema.type.value},
        )

    result = fn(ctx)
    if result is not None:
        logger.debug("Rule %s failed at %s", ctx.rule.type.value, ctx.path)
    return result
