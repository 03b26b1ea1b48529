"""
Dynaval Engine

Services that interpret the schema model.

Services:
- validate / Validator: Validate a document against a schema
- resolve_path: Walk a path over a schema/value pair
- unpack_reference: Resolve a value-or-reference
- ConditionEvaluator: Evaluate conditions against a document
- resolve_property / resolve_rules: Conditional properties and rules
- PrivateValueTracker: Wrap and mask private values
- get_rules_dependencies_map: Which fields depend on which

Usage:
    from dynaval.engine import (
        validate,
        Validator,
        ValidateOptions,
        ConditionEvaluator,
        PrivateValueTracker,
    )
"""
from __future__ import annotations

from .coercion import coerce, coerce_schema
from .condition_evaluator import ConditionEvaluator, evaluate_condition
from .context import ResolveContext, ValidateOptions, ValidationContext
from .dependencies import (
    RulesDependencyMap,
    get_condition_dependencies,
    get_rules_dependencies,
    get_rules_dependencies_map,
)
from .path_resolver import (
    ROOT,
    ResolvedPath,
    ensure_absolute_path,
    find_schema_by_path,
    normalize_path,
    parent_path,
    resolve_path,
    split_path,
)
from .private_tracker import (
    PrivateValueTracker,
    asterisks,
    get_private_data,
    is_private_value,
    is_value_masked,
    unwrap_private,
    value_changed,
)
from .property_resolver import (
    is_included,
    is_mutable,
    is_required,
    resolve_property,
    resolve_rules,
)
from .reference_evaluator import (
    UnpackedReference,
    unpack_reference,
    unpack_reference_value,
)
from .rule_executor import (
    RULES_BY_SCHEMA_TYPE,
    CustomRuleInput,
    RuleContext,
    execute_rule,
    supported_rules,
)
from .type_checks import (
    is_date_string,
    validate_shallow_type,
    validate_type,
    values_equal,
)
from .validator import Validator, validate

__all__ = [
    # Coercion
    "coerce",
    "coerce_schema",
    # Conditions
    "ConditionEvaluator",
    "evaluate_condition",
    # Context
    "ResolveContext",
    "ValidateOptions",
    "ValidationContext",
    # Dependencies
    "RulesDependencyMap",
    "get_condition_dependencies",
    "get_rules_dependencies",
    "get_rules_dependencies_map",
    # Paths
    "ROOT",
    "ResolvedPath",
    "ensure_absolute_path",
    "find_schema_by_path",
    "normalize_path",
    "parent_path",
    "resolve_path",
    "split_path",
    # Private values
    "PrivateValueTracker",
    "asterisks",
    "get_private_data",
    "is_private_value",
    "is_value_masked",
    "unwrap_private",
    "value_changed",
    # Properties & rules
    "is_included",
    "is_mutable",
    "is_required",
    "resolve_property",
    "resolve_rules",
    # References
    "UnpackedReference",
    "unpack_reference",
    "unpack_reference_value",
    # Rule execution
    "RULES_BY_SCHEMA_TYPE",
    "CustomRuleInput",
    "RuleContext",
    "execute_rule",
    "supported_rules",
    # Type checks
    "is_date_string",
    "validate_shallow_type",
    "validate_type",
    "values_equal",
    # Validation
    "Validator",
    "validate",
]
