"""
Dynaval Private-Value Tracker

Helpers around PrivateValue wrappers.

The tracker owns the redaction function; there is no module level
default, so every place that masks data states how it does so:

    tracker = PrivateValueTracker(mask_fn=asterisks)
    tracker.mask("NL91ABNA0417164300")   # PrivateValue(MASKED, "***")
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from ..exceptions import PrivateValueError
from ..models import PrivateState, PrivateValue, Schema, SchemaType

MaskFn = Callable[[Any], str]


def asterisks(value: Any) -> str:
    """Redact any value to "***"."""
    return "***"


# =============================================================================
# Inspection
# =============================================================================

def is_private_value(value: Any) -> bool:
    return isinstance(value, PrivateValue)


def get_private_data(value: Any, path: str = "$") -> PrivateValue:
    """
    Return the wrapper of a private node value.

    Private values are always wrapped, absence included.

    Raises:
        PrivateValueError: If value is not wrapped
    """
    if not is_private_value(value):
        raise PrivateValueError(
            message=f"Value of private schema at {path} must be a private value",
            path=path,
            details={"value_type": type(value).__name__},
        )
    return value


def is_value_masked(schema: Schema, value: Any) -> bool:
    """Whether value is a masked wrapper for a private schema."""
    return schema.private and is_private_value(value) and value.is_masked


def unwrap_private(
    schema: Schema, value: Any, path: str = "$", allow_absent: bool = False
) -> Any:
    """
    Underlying value of a node; non-private schemas pass through.

    allow_absent accepts None for private schemas; only stored (current)
    values are read that way.
    """
    if not schema.private or (allow_absent and value is None):
        return value
    return get_private_data(value, path).value


def value_changed(schema: Schema, current: Any, new: Any, path: str = "$") -> bool:
    """
    Whether the value of a node changed between current and new.

    For private schemas only plain values are compared: a masked value on
    either side never counts as a change. An absent current value counts
    as a plain None.
    """
    if schema.private:
        if current is None:
            current_data = PrivateValue(PrivateState.PLAIN, None)
        else:
            current_data = get_private_data(current, path)
        new_data = get_private_data(new, path)
        if current_data.is_masked or new_data.is_masked:
            return False
        return not _deep_equal(current_data.value, new_data.value)
    return not _deep_equal(current, new)


def _deep_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if set(left) != set(right):
            return False
        return all(_deep_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(_deep_equal(a, b) for a, b in zip(left, right))
    return left == right


# =============================================================================
# Tracker
# =============================================================================

@dataclass(frozen=True)
class PrivateValueTracker:
    """Creates private value wrappers with an explicit redaction function."""
    mask_fn: MaskFn

    def plain(self, value: Any) -> PrivateValue:
        return PrivateValue(PrivateState.PLAIN, value)

    def mask(self, value: Any) -> PrivateValue:
        masked = self.mask_fn(value)
        return PrivateValue(PrivateState.MASKED, masked)

    def mask_values(self, schema: Schema, values: Any) -> Any:
        """
        Mask every plain private value of a value tree.

        Used before sending a document to a client: the result can be
        sent back unchanged and will pass validation.
        """
        if values is None:
            return None

        if schema.private:
            data = get_private_data(values)
            if data.is_masked or data.value is None:
                return data
            return self.mask(data.value)

        if schema.type == SchemaType.OBJECT and isinstance(values, Mapping):
            result = dict(values)
            for key, child in schema.fields.items():
                if key in result:
                    result[key] = self.mask_values(child, result[key])
            return result

        if schema.type == SchemaType.ARRAY and isinstance(values, (list, tuple)):
            return [self.mask_values(schema.schema, item) for item in values]

        return values
