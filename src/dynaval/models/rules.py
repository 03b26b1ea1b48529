"""
Dynaval Rules

Declarative validation rules attached to schema nodes.

Every rule is a small frozen dataclass. Numeric, date and equality
parameters accept either a static value or a Reference to another path.
Each rule accepts an optional `code`, reported as the `custom_code` of the
error when the rule fails.

A ConditionalRule wraps another rule and only puts it in force when its
condition holds for the current document:

    when(eq("type", "business"), min_length(8))
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from ..exceptions import RuleParameterError
from .conditions import Condition, Reference, is_condition
from .enums import RuleType


class BaseRule:
    """Common behaviour of all rule dataclasses."""
    rule_type: ClassVar[RuleType]

    @property
    def type(self) -> RuleType:
        return self.rule_type


# =============================================================================
# Length / Size / Entries
# =============================================================================

@dataclass(frozen=True)
class MinLengthRule(BaseRule):
    """Minimum length of a string or array."""
    rule_type: ClassVar[RuleType] = RuleType.MIN_LENGTH
    min: Union[int, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MaxLengthRule(BaseRule):
    """Maximum length of a string or array."""
    rule_type: ClassVar[RuleType] = RuleType.MAX_LENGTH
    max: Union[int, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MinSizeRule(BaseRule):
    """Minimum size in bytes of a file."""
    rule_type: ClassVar[RuleType] = RuleType.MIN_SIZE
    min: Union[int, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MaxSizeRule(BaseRule):
    """Maximum size in bytes of a file."""
    rule_type: ClassVar[RuleType] = RuleType.MAX_SIZE
    max: Union[int, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MinEntriesRule(BaseRule):
    """Minimum number of entries of an object."""
    rule_type: ClassVar[RuleType] = RuleType.MIN_ENTRIES
    min: Union[int, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MaxEntriesRule(BaseRule):
    """Maximum number of entries of an object."""
    rule_type: ClassVar[RuleType] = RuleType.MAX_ENTRIES
    max: Union[int, Reference]
    code: Optional[str] = None


# =============================================================================
# Numbers
# =============================================================================

@dataclass(frozen=True)
class MinRule(BaseRule):
    rule_type: ClassVar[RuleType] = RuleType.MIN
    min: Union[int, float, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MaxRule(BaseRule):
    rule_type: ClassVar[RuleType] = RuleType.MAX
    max: Union[int, float, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MinPrecisionRule(BaseRule):
    """Minimum number of decimals."""
    rule_type: ClassVar[RuleType] = RuleType.MIN_PRECISION
    min_precision: Union[int, Reference]
    code: Optional[str] = None


@dataclass(frozen=True)
class MaxPrecisionRule(BaseRule):
    """Maximum number of decimals, e.g. 2 for currency amounts."""
    rule_type: ClassVar[RuleType] = RuleType.MAX_PRECISION
    max_precision: Union[int, Reference]
    code: Optional[str] = None


# =============================================================================
# Strings
# =============================================================================

@dataclass(frozen=True)
class RegexRule(BaseRule):
    rule_type: ClassVar[RuleType] = RuleType.REGEX
    regex: str
    code: Optional[str] = None


@dataclass(frozen=True)
class EmailRule(BaseRule):
    rule_type: ClassVar[RuleType] = RuleType.EMAIL
    code: Optional[str] = None


@dataclass(frozen=True)
class IsNumericRule(BaseRule):
    """The string parses as a number."""
    rule_type: ClassVar[RuleType] = RuleType.IS_NUMERIC
    code: Optional[str] = None


# =============================================================================
# Equality / Membership
# =============================================================================

@dataclass(frozen=True)
class EqualsRule(BaseRule):
    rule_type: ClassVar[RuleType] = RuleType.EQUALS
    equals: Any
    code: Optional[str] = None


@dataclass(frozen=True)
class OneOfRule(BaseRule):
    rule_type: ClassVar[RuleType] = RuleType.ONE_OF
    values: list[Any] = field(default_factory=list)
    code: Optional[str] = None


# =============================================================================
# Files
# =============================================================================

@dataclass(frozen=True)
class MimeTypeRule(BaseRule):
    """Accepted mime type(s) of a file."""
    rule_type: ClassVar[RuleType] = RuleType.MIME_TYPE
    mime_type: Union[str, list[str], Reference]
    code: Optional[str] = None


# =============================================================================
# Dates
# =============================================================================

@dataclass(frozen=True)
class BeforeRule(BaseRule):
    """Strictly before the given date."""
    rule_type: ClassVar[RuleType] = RuleType.BEFORE
    before: Any
    code: Optional[str] = None


@dataclass(frozen=True)
class AfterRule(BaseRule):
    """Strictly after the given date."""
    rule_type: ClassVar[RuleType] = RuleType.AFTER
    after: Any
    code: Optional[str] = None


@dataclass(frozen=True)
class MinDateRule(BaseRule):
    """On or after the given date."""
    rule_type: ClassVar[RuleType] = RuleType.MIN_DATE
    min: Any
    code: Optional[str] = None


@dataclass(frozen=True)
class MaxDateRule(BaseRule):
    """On or before the given date."""
    rule_type: ClassVar[RuleType] = RuleType.MAX_DATE
    max: Any
    code: Optional[str] = None


# =============================================================================
# Custom / Conditional
# =============================================================================

@dataclass(frozen=True)
class CustomRule(BaseRule):
    """
    Rule implemented by a function registered under `name` in
    ValidateOptions.custom_rules. References in params are resolved
    before the function is called.
    """
    rule_type: ClassVar[RuleType] = RuleType.CUSTOM
    name: str
    params: dict[str, Any] = field(default_factory=dict)
    code: Optional[str] = None


Rule = Union[
    MinLengthRule, MaxLengthRule, MinSizeRule, MaxSizeRule,
    MinEntriesRule, MaxEntriesRule, MinRule, MaxRule,
    MinPrecisionRule, MaxPrecisionRule, RegexRule, EmailRule,
    IsNumericRule, EqualsRule, OneOfRule, MimeTypeRule,
    BeforeRule, AfterRule, MinDateRule, MaxDateRule, CustomRule,
]


@dataclass(frozen=True)
class ConditionalRule(BaseRule):
    """Puts `then` in force only while `when` holds."""
    rule_type: ClassVar[RuleType] = RuleType.CONDITIONAL
    when: Condition
    then: Rule

    def __post_init__(self) -> None:
        if not is_condition(self.when):
            raise RuleParameterError(
                message="Conditional rule requires a condition as 'when'",
                details={"when": repr(self.when)},
            )
        if isinstance(self.then, ConditionalRule) or not isinstance(self.then, BaseRule):
            raise RuleParameterError(
                message="Conditional rule requires a plain rule as 'then'",
                details={"then": repr(self.then)},
            )


# =============================================================================
# Helper Functions for Building Rules
# =============================================================================

def min_length(min: Union[int, Reference], code: Optional[str] = None) -> MinLengthRule:
    return MinLengthRule(min=min, code=code)


def max_length(max: Union[int, Reference], code: Optional[str] = None) -> MaxLengthRule:
    return MaxLengthRule(max=max, code=code)


def min_size(min: Union[int, Reference], code: Optional[str] = None) -> MinSizeRule:
    return MinSizeRule(min=min, code=code)


def max_size(max: Union[int, Reference], code: Optional[str] = None) -> MaxSizeRule:
    return MaxSizeRule(max=max, code=code)


def min_entries(min: Union[int, Reference], code: Optional[str] = None) -> MinEntriesRule:
    return MinEntriesRule(min=min, code=code)


def max_entries(max: Union[int, Reference], code: Optional[str] = None) -> MaxEntriesRule:
    return MaxEntriesRule(max=max, code=code)


def min_value(min: Union[int, float, Reference], code: Optional[str] = None) -> MinRule:
    return MinRule(min=min, code=code)


def max_value(max: Union[int, float, Reference], code: Optional[str] = None) -> MaxRule:
    return MaxRule(max=max, code=code)


def min_precision(precision: Union[int, Reference], code: Optional[str] = None) -> MinPrecisionRule:
    return MinPrecisionRule(min_precision=precision, code=code)


def max_precision(precision: Union[int, Reference], code: Optional[str] = None) -> MaxPrecisionRule:
    return MaxPrecisionRule(max_precision=precision, code=code)


def regex(pattern: str, code: Optional[str] = None) -> RegexRule:
    return RegexRule(regex=pattern, code=code)


def email(code: Optional[str] = None) -> EmailRule:
    return EmailRule(code=code)


def is_numeric(code: Optional[str] = None) -> IsNumericRule:
    return IsNumericRule(code=code)


def equals(value: Any, code: Optional[str] = None) -> EqualsRule:
    return EqualsRule(equals=value, code=code)


def one_of(values: list[Any], code: Optional[str] = None) -> OneOfRule:
    return OneOfRule(values=list(values), code=code)


def mime_type(mime: Union[str, list[str], Reference], code: Optional[str] = None) -> MimeTypeRule:
    return MimeTypeRule(mime_type=mime, code=code)


def before(value: Any, code: Optional[str] = None) -> BeforeRule:
    return BeforeRule(before=value, code=code)


def after(value: Any, code: Optional[str] = None) -> AfterRule:
    return AfterRule(after=value, code=code)


def min_date(value: Any, code: Optional[str] = None) -> MinDateRule:
    return MinDateRule(min=value, code=code)


def max_date(value: Any, code: Optional[str] = None) -> MaxDateRule:
    return MaxDateRule(max=value, code=code)


def custom(name: str, params: Optional[dict[str, Any]] = None, code: Optional[str] = None) -> CustomRule:
    """
    Create a custom rule.

    Example:
        custom("iban", {"country": ref("country")})
    """
    return CustomRule(name=name, params=dict(params or {}), code=code)


def when(condition: Condition, rule: Rule) -> ConditionalRule:
    """
    Create a conditional rule.

    Example:
        when(eq("type", "business"), regex(r"^NL\\d{9}B\\d{2}$"))
    """
    return ConditionalRule(when=condition, then=rule)
