"""
Dynaval Evaluation Context

Immutable state threaded through one validation call.

ResolveContext is all that condition and reference evaluation needs: the
root schema, the root of the new value tree and the set of paths whose
`included` condition is currently being evaluated (used to detect
reference cycles). ValidationContext adds what the validation driver
needs on top of that.

Contexts are never mutated; derived contexts are created with
dataclasses.replace.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping

from ..models import Schema


CustomRuleFn = Callable[..., Any]


@dataclass(frozen=True)
class ValidateOptions:
    """
    Options of a validate() call.

    Attributes:
        custom_rules: Implementations of custom rules, keyed by rule name
        strip_not_included_values: Silently drop values of nodes that are
            not included instead of reporting an "included" error
    """
    custom_rules: Mapping[str, CustomRuleFn] = field(
        default_factory=lambda: MappingProxyType({})
    )
    strip_not_included_values: bool = False


@dataclass(frozen=True)
class ResolveContext:
    """Context for resolving references and conditions."""
    schema: Schema
    values: Any
    resolving: frozenset[str] = frozenset()

    def entering(self, path: str) -> ResolveContext:
        """Derive a context that marks the `included` condition of path as in progress."""
        return replace(self, resolving=self.resolving | {path})


@dataclass(frozen=True)
class ValidationContext(ResolveContext):
    """Context of the validation driver."""
    current_values: Any = None
    options: ValidateOptions = field(default_factory=ValidateOptions)
    validate_mutable: bool = False
