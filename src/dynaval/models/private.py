"""
Dynaval Private Values

Values of private schema nodes always travel wrapped in a PrivateValue,
even when absent, so that changes can be tracked without the real value
ever leaving the server:

    PrivateValue(PrivateState.PLAIN, "NL91ABNA0417164300")   # real value
    PrivateValue(PrivateState.MASKED, "***")                  # redacted

Masked values are opaque: they are never compared with plain values and
never re-validated.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import PrivateValueError
from .enums import PrivateState


@dataclass(frozen=True)
class PrivateValue:
    """Wrapper around the value of a private schema node."""
    state: PrivateState
    value: Any = None

    def __post_init__(self) -> None:
        if self.state == PrivateState.MASKED and not isinstance(self.value, str):
            raise PrivateValueError(
                message='Private value with state "masked" must have a string as value',
                details={"value": repr(self.value)},
            )

    @property
    def is_masked(self) -> bool:
        return self.state == PrivateState.MASKED

    @property
    def is_plain(self) -> bool:
        return self.state == PrivateState.PLAIN

    def to_dict(self) -> dict[str, Any]:
        return {"state": self.state.value, "value": self.value}
