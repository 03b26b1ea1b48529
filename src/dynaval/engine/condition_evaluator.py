"""
Dynaval Condition Evaluator

Evaluates condition trees against the document being validated.

Key features:
- AND / OR with short-circuit evaluation
- Comparisons whose right operand may be a reference to another field
- Sibling-relative paths ("type" next to the field being evaluated)
- Absent operands make a comparison false instead of raising
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..exceptions import InvalidConditionError
from ..models import (
    AndCondition,
    ComparisonCondition,
    Condition,
    ConditionType,
    OrCondition,
    Reference,
    Schema,
    SchemaType,
)
from .coercion import to_string
from .context import ResolveContext
from .dependencies import get_condition_dependencies
from .path_resolver import ROOT
from .reference_evaluator import unpack_reference, unpack_reference_value
from .type_checks import (
    is_array,
    is_file,
    is_number,
    is_string,
    parse_date_string,
    to_datetime,
    values_equal,
)

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1)

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


# =============================================================================
# Operand Helpers
# =============================================================================

def _size_compare_value(value: Any) -> Optional[Any]:
    """
    Map a value onto a number for ordering comparisons.

    Numbers compare as they are, strings and arrays by length, dates by
    timestamp and files by size. Anything else is not comparable.
    """
    if is_number(value):
        return value
    if is_string(value) or is_array(value):
        return len(value)
    if isinstance(value, date):
        return (to_datetime(value) - _EPOCH).total_seconds()
    if is_file(value):
        return value.size
    return None


def _compare_operand(value: Any, schema: Optional[Schema]) -> Optional[Any]:
    """Ordering value of an operand; date strings are read with their node's format."""
    if schema is not None and schema.type == SchemaType.DATE_STRING and is_string(value):
        try:
            value = parse_date_string(value, schema.format)
        except ValueError:
            return None
    return _size_compare_value(value)


def _compile(condition: ComparisonCondition) -> re.Pattern[str]:
    flags = 0
    for flag in condition.flags or "":
        flags |= _REGEX_FLAGS[flag]
    try:
        return re.compile(condition.value, flags)
    except re.error as e:
        raise InvalidConditionError(
            message=f"Invalid pattern in matches condition: {e}",
            path=condition.path,
            details={"pattern": condition.value},
        ) from e


_ORDERING = {
    ConditionType.GREATER_THAN: lambda a, b: a > b,
    ConditionType.GREATER_THAN_OR_EQUAL: lambda a, b: a >= b,
    ConditionType.LOWER_THAN: lambda a, b: a < b,
    ConditionType.LOWER_THAN_OR_EQUAL: lambda a, b: a <= b,
}


# =============================================================================
# Evaluation
# =============================================================================

def _evaluate_comparison(
    condition: ComparisonCondition,
    path: str,
    context: ResolveContext,
) -> bool:
    left_ref = unpack_reference(Reference(condition.path), path, context)
    left = left_ref.value
    if left is None:
        return False

    op = condition.type

    if op == ConditionType.MATCHES:
        return _compile(condition).search(str(to_string(left))) is not None

    if op in (ConditionType.IS_IN, ConditionType.IS_NOT_IN):
        candidates = condition.value if isinstance(condition.value, (list, tuple)) else [condition.value]
        right = [unpack_reference_value(c, path, context) for c in candidates]
        found = any(values_equal(left, r) for r in right if r is not None)
        return found if op == ConditionType.IS_IN else not found

    right_ref = unpack_reference(condition.value, path, context)
    right = right_ref.value
    if right is None:
        return False

    if op == ConditionType.EQUALS:
        return values_equal(left, right)
    if op == ConditionType.NOT_EQUALS:
        return not values_equal(left, right)

    # A static operand is read like the node it is compared with
    a = _compare_operand(left, left_ref.schema)
    b = _compare_operand(right, left_ref.schema if right_ref.static else right_ref.schema)
    if a is None or b is None:
        return False
    try:
        return _ORDERING[op](a, b)
    except TypeError:
        return False


def evaluate_condition(condition: Condition, path: str, context: ResolveContext) -> bool:
    """
    Evaluate a condition for the node at path.

    Args:
        condition: The condition to evaluate
        path: Path of the node the condition belongs to
        context: Resolve context holding the document

    Returns:
        True if the condition holds
    """
    if isinstance(condition, AndCondition):
        return all(evaluate_condition(c, path, context) for c in condition.conditions)
    if isinstance(condition, OrCondition):
        return any(evaluate_condition(c, path, context) for c in condition.conditions)
    if isinstance(condition, ComparisonCondition):
        return _evaluate_comparison(condition, path, context)

    raise InvalidConditionError(
        message=f"Unknown condition: {condition!r}",
        path=path,
    )


# =============================================================================
# Condition Evaluator
# =============================================================================

@dataclass
class ConditionEvaluator:
    """
    Evaluates conditions against one document.

    Usage:
        evaluator = ConditionEvaluator(schema, values)
        if evaluator.evaluate(eq("type", "business"), "$.vat_number"):
            ...
    """
    schema: Any
    values: Any = None
    debug: bool = False
    _evaluation_log: list[str] = field(default_factory=list)

    @property
    def evaluation_log(self) -> list[str]:
        return list(self._evaluation_log)

    def evaluate(self, condition: Condition, path: str = ROOT) -> bool:
        context = ResolveContext(schema=self.schema, values=self.values)
        result = evaluate_condition(condition, path, context)
        if self.debug:
            self._evaluation_log.append(f"{path}: {condition.type.value} -> {result}")
        logger.debug("Condition %s at %s evaluated to %s", condition.type.value, path, result)
        return result

    def required_paths(self, condition: Condition, path: str = ROOT) -> set[str]:
        """
        Get all absolute paths a condition reads.

        Useful for finding out which fields must be filled in before a
        condition can become true.
        """
        return set(get_condition_dependencies(condition, path))
