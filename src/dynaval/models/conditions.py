"""
Dynaval References and Conditions

References point at another location of the document being validated;
conditions are boolean trees evaluated against the live document.

Key components:
- Reference: "substitute the value found at this path"
- AndCondition / OrCondition: logical composition
- ComparisonCondition: leaf comparison of the value at a path with a
  static value or a reference
- Helper functions: ref(), and_(), or_(), eq(), neq(), gt(), gte(), lt(),
  lte(), matches(), is_in(), is_not_in()

Paths starting with "$" are absolute. Any other path is relative to the
parent of the node the condition is attached to, so eq("type", "business")
on field "$.email" reads "$.type".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ..exceptions import InvalidConditionError
from .enums import ConditionType


# =============================================================================
# Reference
# =============================================================================

@dataclass(frozen=True)
class Reference:
    """
    Pointer to the value at another path of the document.

    Wherever a rule parameter or a condition operand accepts a value, a
    Reference may be given instead; it is resolved against the new values
    at validation time.
    """
    path: str

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path:
            raise InvalidConditionError(
                message="Reference path must be a non-empty string",
                details={"path": repr(self.path)},
            )


def ref(path: str) -> Reference:
    """
    Create a reference to another path.

    Example:
        max_value(ref("$.limits.max_amount"))
    """
    return Reference(path)


def is_reference(value: Any) -> bool:
    """Check whether a value is a Reference."""
    return isinstance(value, Reference)


# =============================================================================
# Conditions
# =============================================================================

_REGEX_FLAGS = frozenset("ims")


@dataclass(frozen=True)
class AndCondition:
    """All child conditions must hold."""
    conditions: list[Condition] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.conditions:
            raise InvalidConditionError(message="Logical operator 'and' requires conditions")

    @property
    def type(self) -> ConditionType:
        return ConditionType.AND


@dataclass(frozen=True)
class OrCondition:
    """At least one child condition must hold."""
    conditions: list[Condition] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.conditions:
            raise InvalidConditionError(message="Logical operator 'or' requires conditions")

    @property
    def type(self) -> ConditionType:
        return ConditionType.OR


@dataclass(frozen=True)
class ComparisonCondition:
    """
    A leaf comparison in a condition tree.

    Attributes:
        type: Comparison operator
        path: Path of the left operand (absolute or sibling-relative)
        value: Right operand; a static value, a Reference, or for
            IS_IN / IS_NOT_IN a list of values and references
        flags: Regex flags for MATCHES ("i", "m", "s")
    """
    type: ConditionType
    path: str
    value: Any = None
    flags: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type.is_logical:
            raise InvalidConditionError(
                message=f"Comparison cannot use logical operator '{self.type.value}'. "
                        f"Use AndCondition/OrCondition instead.",
            )
        if not isinstance(self.path, str) or not self.path:
            raise InvalidConditionError(
                message=f"Condition '{self.type.value}' requires a path",
            )
        if self.type == ConditionType.MATCHES and not isinstance(self.value, str):
            raise InvalidConditionError(
                message="Condition 'matches' requires a regex string as value",
                details={"path": self.path},
            )
        if self.flags is not None:
            if self.type != ConditionType.MATCHES:
                raise InvalidConditionError(
                    message=f"Flags are only allowed on 'matches', not on '{self.type.value}'",
                )
            unknown = set(self.flags) - _REGEX_FLAGS
            if unknown:
                raise InvalidConditionError(
                    message=f"Unsupported regex flags: {''.join(sorted(unknown))}",
                    details={"path": self.path},
                )


Condition = Union[AndCondition, OrCondition, ComparisonCondition]


def is_condition(value: Any) -> bool:
    """Check whether a value is any kind of condition."""
    return isinstance(value, (AndCondition, OrCondition, ComparisonCondition))


# =============================================================================
# Helper Functions for Building Conditions
# =============================================================================

def and_(*conditions: Condition) -> AndCondition:
    """
    Create an AND condition from multiple child conditions.

    Example:
        included=and_(eq("country", "NL"), gte("age", 18))
    """
    return AndCondition(conditions=list(conditions))


def or_(*conditions: Condition) -> OrCondition:
    """
    Create an OR condition from multiple child conditions.

    Example:
        required=or_(eq("type", "business"), eq("type", "non_profit"))
    """
    return OrCondition(conditions=list(conditions))


def eq(path: str, value: Any) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.EQUALS, path, value)


def neq(path: str, value: Any) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.NOT_EQUALS, path, value)


def gt(path: str, value: Any) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.GREATER_THAN, path, value)


def gte(path: str, value: Any) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.GREATER_THAN_OR_EQUAL, path, value)


def lt(path: str, value: Any) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.LOWER_THAN, path, value)


def lte(path: str, value: Any) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.LOWER_THAN_OR_EQUAL, path, value)


def matches(path: str, pattern: str, flags: Optional[str] = None) -> ComparisonCondition:
    """
    Create a regex condition; the pattern is searched in the string form
    of the value at path.

    Example:
        included=matches("postcode", r"^\\d{4}\\s?[A-Z]{2}$", flags="i")
    """
    return ComparisonCondition(ConditionType.MATCHES, path, pattern, flags)


def is_in(path: str, values: list[Any]) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.IS_IN, path, list(values))


def is_not_in(path: str, values: list[Any]) -> ComparisonCondition:
    return ComparisonCondition(ConditionType.IS_NOT_IN, path, list(values))
