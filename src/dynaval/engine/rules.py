"""
Dynaval Rule Catalog

One function per rule kind. Each function receives the RuleContext of a
node whose value already passed its type check and returns None when the
rule holds, or a violation dict with at least `code` and `message`.

Parameters follow one standard: a malformed static parameter is a schema
mistake and raises RuleParameterError; a reference that resolves to
absence skips the rule.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import RuleParameterError, UnknownCustomRuleError
from ..models import RuleType, SchemaType, is_reference
from .reference_evaluator import unpack_reference_value
from .type_checks import (
    is_array,
    is_number,
    is_string,
    parse_date_string,
    to_datetime,
    values_equal,
)

if TYPE_CHECKING:
    from .rule_executor import RuleContext


Violation = Optional[dict[str, Any]]

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([a-z0-9_'+\-.]*)[a-z0-9_'+-]@([a-z0-9][a-z0-9-]*\.)+[a-z]{2,}$",
    re.IGNORECASE,
)


# =============================================================================
# Parameter Helpers
# =============================================================================

def _bad_parameter(ctx: RuleContext, name: str, value: Any, expected: str) -> RuleParameterError:
    return RuleParameterError(
        message=f"Rule '{ctx.rule.type.value}' expects {expected} as '{name}', got {value!r}",
        path=ctx.path,
        details={"rule": ctx.rule.type.value, "parameter": name},
    )


def _number_param(ctx: RuleContext, name: str) -> Any:
    value = getattr(ctx.rule, name)
    if is_reference(value):
        return unpack_reference_value(value, ctx.path, ctx.context, SchemaType.NUMBER)
    if not is_number(value):
        raise _bad_parameter(ctx, name, value, "a number")
    return value


def _date_param(ctx: RuleContext, name: str) -> Optional[datetime]:
    value = getattr(ctx.rule, name)
    if is_reference(value):
        resolved = unpack_reference_value(value, ctx.path, ctx.context, SchemaType.DATE)
        return None if resolved is None else to_datetime(resolved)
    if isinstance(value, date):
        return to_datetime(value)
    if is_string(value) and ctx.schema.type == SchemaType.DATE_STRING:
        try:
            return parse_date_string(value, ctx.schema.format)
        except ValueError:
            pass
    raise _bad_parameter(ctx, name, value, "a date")


def _date_value(ctx: RuleContext) -> datetime:
    if ctx.schema.type == SchemaType.DATE_STRING:
        return parse_date_string(ctx.value, ctx.schema.format)
    return to_datetime(ctx.value)


def get_precision(value: Any) -> int:
    """
    Number of decimals of a number, e.g. 1.23 has a precision of 2.

    Decimals keep their declared exponent (Decimal("1.50") -> 2).
    """
    try:
        exponent = Decimal(str(value)).as_tuple().exponent
    except InvalidOperation:
        return 0
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


# =============================================================================
# Length / Size / Entries
# =============================================================================

def min_length_rule(ctx: RuleContext) -> Violation:
    minimum = _number_param(ctx, "min")
    if minimum is None or len(ctx.value) >= minimum:
        return None
    return {
        "code": RuleType.MIN_LENGTH.value,
        "min": minimum,
        "message": f"The value {ctx.value!r} for schema {ctx.path} should have at least a length of {minimum}",
    }


def max_length_rule(ctx: RuleContext) -> Violation:
    maximum = _number_param(ctx, "max")
    if maximum is None or len(ctx.value) <= maximum:
        return None
    return {
        "code": RuleType.MAX_LENGTH.value,
        "max": maximum,
        "message": f"The value {ctx.value!r} for schema {ctx.path} should have at most a length of {maximum}",
    }


def min_size_rule(ctx: RuleContext) -> Violation:
    minimum = _number_param(ctx, "min")
    if minimum is None or ctx.value.size >= minimum:
        return None
    return {
        "code": RuleType.MIN_SIZE.value,
        "min": minimum,
        "message": f"The file {ctx.value.name} for schema {ctx.path} should be at least {minimum} bytes",
    }


def max_size_rule(ctx: RuleContext) -> Violation:
    maximum = _number_param(ctx, "max")
    if maximum is None or ctx.value.size <= maximum:
        return None
    return {
        "code": RuleType.MAX_SIZE.value,
        "max": maximum,
        "message": f"The file {ctx.value.name} for schema {ctx.path} should be at most {maximum} bytes",
    }


def min_entries_rule(ctx: RuleContext) -> Violation:
    minimum = _number_param(ctx, "min")
    if minimum is None or len(ctx.value) >= minimum:
        return None
    return {
        "code": RuleType.MIN_ENTRIES.value,
        "min": minimum,
        "message": f"The value for schema {ctx.path} should have at least {minimum} entries",
    }


def max_entries_rule(ctx: RuleContext) -> Violation:
    maximum = _number_param(ctx, "max")
    if maximum is None or len(ctx.value) <= maximum:
        return None
    return {
        "code": RuleType.MAX_ENTRIES.value,
        "max": maximum,
        "message": f"The value for schema {ctx.path} should have at most {maximum} entries",
    }


# =============================================================================
# Numbers
# =============================================================================

def min_rule(ctx: RuleContext) -> Violation:
    minimum = _number_param(ctx, "min")
    if minimum is None or ctx.value >= minimum:
        return None
    return {
        "code": RuleType.MIN.value,
        "min": minimum,
        "message": f"The value {ctx.value} for schema {ctx.path} should be at least {minimum}",
    }


def max_rule(ctx: RuleContext) -> Violation:
    maximum = _number_param(ctx, "max")
    if maximum is None or ctx.value <= maximum:
        return None
    return {
        "code": RuleType.MAX.value,
        "max": maximum,
        "message": f"The value {ctx.value} for schema {ctx.path} should be at most {maximum}",
    }


def min_precision_rule(ctx: RuleContext) -> Violation:
    minimum = _number_param(ctx, "min_precision")
    if minimum is None:
        return None
    precision = get_precision(ctx.value)
    if precision >= minimum:
        return None
    return {
        "code": RuleType.MIN_PRECISION.value,
        "min_precision": minimum,
        "message": f"The value {ctx.value} for schema {ctx.path} has a precision of {precision}, "
                   f"which is less than the minimum precision of {minimum}",
    }


def max_precision_rule(ctx: RuleContext) -> Violation:
    maximum = _number_param(ctx, "max_precision")
    if maximum is None:
        return None
    precision = get_precision(ctx.value)
    if precision <= maximum:
        return None
    return {
        "code": RuleType.MAX_PRECISION.value,
        "max_precision": maximum,
        "message": f"The value {ctx.value} for schema {ctx.path} has a precision of {precision}, "
                   f"which is greater than the maximum precision of {maximum}",
    }


# =============================================================================
# Strings
# =============================================================================

def regex_rule(ctx: RuleContext) -> Violation:
    pattern = ctx.rule.regex
    if not is_string(pattern):
        raise _bad_parameter(ctx, "regex", pattern, "a string")
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise _bad_parameter(ctx, "regex", pattern, "a valid regular expression") from e
    if compiled.search(ctx.value):
        return None
    return {
        "code": RuleType.REGEX.value,
        "regex": pattern,
        "message": f"The value {ctx.value!r} for schema {ctx.path} does not match the pattern {pattern}",
    }


def email_rule(ctx: RuleContext) -> Violation:
    if EMAIL_PATTERN.match(ctx.value):
        return None
    return {
        "code": RuleType.EMAIL.value,
        "message": f"The value {ctx.value!r} for schema {ctx.path} is not a valid email address",
    }


def is_numeric_rule(ctx: RuleContext) -> Violation:
    try:
        numeric = math.isfinite(float(ctx.value.strip()))
    except ValueError:
        numeric = False
    if numeric:
        return None
    return {
        "code": RuleType.IS_NUMERIC.value,
        "message": f"The value {ctx.value!r} is not a valid numeric value",
    }


# =============================================================================
# Equality / Membership
# =============================================================================

def equals_rule(ctx: RuleContext) -> Violation:
    expected = ctx.rule.equals
    if is_reference(expected):
        expected = unpack_reference_value(expected, ctx.path, ctx.context, ctx.schema.type)
        if expected is None:
            return None
    elif expected is None:
        raise _bad_parameter(ctx, "equals", expected, "a value")

    if ctx.schema.type in (SchemaType.DATE, SchemaType.DATE_STRING):
        equal = _dates_equal(ctx, expected)
    else:
        equal = values_equal(ctx.value, expected)

    if equal:
        return None
    return {
        "code": RuleType.EQUALS.value,
        "equals": expected,
        "message": f"The value {ctx.value!r} for schema {ctx.path} does not equal {expected!r}",
    }


def _dates_equal(ctx: RuleContext, expected: Any) -> bool:
    if ctx.schema.type == SchemaType.DATE_STRING:
        if isinstance(expected, date):
            return _date_value(ctx) == to_datetime(expected)
        return values_equal(ctx.value, expected)
    if not isinstance(expected, date):
        raise _bad_parameter(ctx, "equals", expected, "a date")
    return _date_value(ctx) == to_datetime(expected)


def one_of_rule(ctx: RuleContext) -> Violation:
    values = ctx.rule.values
    if not is_array(values):
        raise _bad_parameter(ctx, "values", values, "a list")
    allowed = [
        unpack_reference_value(v, ctx.path, ctx.context, ctx.schema.type) if is_reference(v) else v
        for v in values
    ]
    allowed = [v for v in allowed if v is not None]
    if any(values_equal(ctx.value, v) for v in allowed):
        return None
    return {
        "code": RuleType.ONE_OF.value,
        "values": allowed,
        "message": f"The value {ctx.value!r} for schema {ctx.path} is not one of {allowed!r}",
    }


# =============================================================================
# Files
# =============================================================================

def mime_type_rule(ctx: RuleContext) -> Violation:
    accepted = ctx.rule.mime_type
    if is_reference(accepted):
        accepted = unpack_reference_value(accepted, ctx.path, ctx.context)
        if accepted is None:
            return None
    accepted_types = list(accepted) if is_array(accepted) else [accepted]
    if not all(is_string(m) for m in accepted_types):
        raise _bad_parameter(ctx, "mime_type", accepted, "a string or a list of strings")
    if ctx.value.mime_type in accepted_types:
        return None
    return {
        "code": RuleType.MIME_TYPE.value,
        "mime_type": ctx.value.mime_type,
        "message": f"The mime type {ctx.value.mime_type} for schema {ctx.path} is not one of {accepted_types}",
    }


# =============================================================================
# Dates
# =============================================================================

def before_rule(ctx: RuleContext) -> Violation:
    bound = _date_param(ctx, "before")
    if bound is None or _date_value(ctx) < bound:
        return None
    return {
        "code": RuleType.BEFORE.value,
        "before": bound,
        "message": f"The value {ctx.value} for schema {ctx.path} should be before {bound}",
    }


def after_rule(ctx: RuleContext) -> Violation:
    bound = _date_param(ctx, "after")
    if bound is None or _date_value(ctx) > bound:
        return None
    return {
        "code": RuleType.AFTER.value,
        "after": bound,
        "message": f"The value {ctx.value} for schema {ctx.path} should be after {bound}",
    }


def min_date_rule(ctx: RuleContext) -> Violation:
    bound = _date_param(ctx, "min")
    if bound is None or _date_value(ctx) >= bound:
        return None
    return {
        "code": RuleType.MIN_DATE.value,
        "min": bound,
        "message": f"The value {ctx.value} for schema {ctx.path} should be on or after {bound}",
    }


def max_date_rule(ctx: RuleContext) -> Violation:
    bound = _date_param(ctx, "max")
    if bound is None or _date_value(ctx) <= bound:
        return None
    return {
        "code": RuleType.MAX_DATE.value,
        "max": bound,
        "message": f"The value {ctx.value} for schema {ctx.path} should be on or before {bound}",
    }


# =============================================================================
# Custom
# =============================================================================

def custom_rule(ctx: RuleContext) -> Violation:
    """
    Run a custom rule from ValidateOptions.custom_rules.

    The function is called as fn(CustomRuleInput, params, path, schema)
    with every reference in params already resolved. It returns True when
    the value is valid, False or a dict describing the failure otherwise.
    A "message" key in that dict replaces the default message.
    """
    from .rule_executor import CustomRuleInput

    rule = ctx.rule
    fn = ctx.context.options.custom_rules.get(rule.name)
    if fn is None:
        raise UnknownCustomRuleError(
            message=f'Custom rule "{rule.name}" is not defined in the custom rules map',
            path=ctx.path,
            details={"name": rule.name},
        )

    params = {
        key: unpack_reference_value(value, ctx.path, ctx.context)
        for key, value in rule.params.items()
    }
    result = fn(CustomRuleInput(schema=ctx.schema, value=ctx.value), params, ctx.path, ctx.schema)
    if result is True or (isinstance(result, dict) and result.get("success") is True):
        return None

    violation: dict[str, Any] = {
        "code": RuleType.CUSTOM.value,
        "name": rule.name,
        "params": params,
        "result": {},
        "message": f'The value for schema {ctx.path} did not pass the custom validation rule "{rule.name}"',
    }
    if isinstance(result, dict):
        payload = {k: v for k, v in result.items() if k != "success"}
        if "message" in payload:
            violation["message"] = payload.pop("message")
        violation["result"] = payload
    return violation
