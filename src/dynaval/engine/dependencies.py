"""
Dynaval Dependency Analysis

Static analysis of which document paths the rules of a schema depend on.

A form that revalidates a field on every keystroke uses the reverse map
to find the other fields whose rules must be revalidated as well:

    deps = get_rules_dependencies_map(schema)
    deps.reverse["$.start"]   # {"$.end"}  (end has after(ref("start")))

All paths are reported in absolute form. Rules of array elements are
keyed as "<array path>.[]".
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields

from ..models import (
    AndCondition,
    BaseRule,
    ConditionalRule,
    Condition,
    CustomRule,
    OneOfRule,
    OrCondition,
    Schema,
    SchemaType,
    is_reference,
)
from .path_resolver import ROOT, ensure_absolute_path, join_path


@dataclass
class RulesDependencyMap:
    """
    Attributes:
        dependencies: Path of a node -> paths its rules depend on
        reverse: Path -> paths of the nodes whose rules depend on it
    """
    dependencies: dict[str, set[str]] = field(default_factory=dict)
    reverse: dict[str, set[str]] = field(default_factory=dict)

    def add(self, path: str, deps: list[str]) -> None:
        if deps:
            self.dependencies.setdefault(path, set()).update(deps)
        for dep in deps:
            self.reverse.setdefault(dep, set()).add(path)

    def merge(self, other: RulesDependencyMap) -> None:
        for path, deps in other.dependencies.items():
            self.dependencies.setdefault(path, set()).update(deps)
        for dep, dependents in other.reverse.items():
            self.reverse.setdefault(dep, set()).update(dependents)


def get_condition_dependencies(condition: Condition, path: str) -> list[str]:
    """Absolute paths a condition reads, including references in its values."""
    if isinstance(condition, (AndCondition, OrCondition)):
        result: list[str] = []
        for child in condition.conditions:
            result.extend(get_condition_dependencies(child, path))
        return result

    result = [ensure_absolute_path(condition.path, path)]
    values = condition.value if isinstance(condition.value, (list, tuple)) else [condition.value]
    result.extend(ensure_absolute_path(v.path, path) for v in values if is_reference(v))
    return result


def _rule_dependencies(rule: BaseRule, path: str) -> list[str]:
    if isinstance(rule, ConditionalRule):
        return get_condition_dependencies(rule.when, path) + _rule_dependencies(rule.then, path)

    if isinstance(rule, CustomRule):
        candidates = list(rule.params.values())
    elif isinstance(rule, OneOfRule):
        candidates = list(rule.values)
    else:
        candidates = [getattr(rule, f.name) for f in fields(rule)]

    return [ensure_absolute_path(v.path, path) for v in candidates if is_reference(v)]


def get_rules_dependencies(schema: Schema, path: str) -> list[str]:
    """Absolute paths the rules of a single schema node depend on."""
    result: list[str] = []
    for rule in schema.rules:
        result.extend(_rule_dependencies(rule, path))
    return result


def get_rules_dependencies_map(schema: Schema, path: str = ROOT) -> RulesDependencyMap:
    """Dependencies of every node in a schema tree, plus the reverse map."""
    result = RulesDependencyMap()
    result.add(path, get_rules_dependencies(schema, path))

    if schema.type == SchemaType.ARRAY:
        result.merge(get_rules_dependencies_map(schema.schema, join_path(path, "[]")))
    elif schema.type == SchemaType.OBJECT:
        for key, child in schema.fields.items():
            result.merge(get_rules_dependencies_map(child, join_path(path, key)))

    return result
