"""
Dynaval Schema Pack Loader

Loads and validates schema packs from YAML or JSON files.

Converts Pydantic document models to Dynaval schema models.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import get_settings
from ..exceptions import (
    ConditionError,
    InvalidSchemaError,
    RuleError,
    SchemaPackLoadError,
    SchemaPackValidationError,
    SchemaPackVersionMismatch,
)
from ..models import (
    AfterRule,
    AndCondition,
    ArraySchema,
    BeforeRule,
    BooleanSchema,
    ComparisonCondition,
    Condition,
    ConditionalRule,
    ConditionType,
    CustomRule,
    DateSchema,
    DateStringSchema,
    EmailRule,
    EqualsRule,
    FileSchema,
    IsNumericRule,
    MaxDateRule,
    MaxEntriesRule,
    MaxLengthRule,
    MaxPrecisionRule,
    MaxRule,
    MaxSizeRule,
    MimeTypeRule,
    MinDateRule,
    MinEntriesRule,
    MinLengthRule,
    MinPrecisionRule,
    MinRule,
    MinSizeRule,
    NumberSchema,
    ObjectSchema,
    OneOfRule,
    OptionsSchema,
    OrCondition,
    Reference,
    RegexRule,
    Rule,
    Schema,
    StringSchema,
)
from .schema import (
    REFERENCE_KEY,
    SCHEMA_VERSION,
    ConditionModel,
    RuleModel,
    SchemaNodeModel,
    SchemaPackModel,
    check_schema_version,
    validate_schema_pack,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Document to Model Converters
# =============================================================================

def _convert_value(value: Any) -> Any:
    """Turn {"$ref": path} into a Reference, recursing into lists."""
    if isinstance(value, dict) and set(value) == {REFERENCE_KEY}:
        return Reference(path=value[REFERENCE_KEY])
    if isinstance(value, list):
        return [_convert_value(v) for v in value]
    return value


def _convert_condition(model: ConditionModel) -> Condition:
    """Convert ConditionModel to a Condition."""
    if model.op == "and":
        return AndCondition(conditions=[_convert_condition(c) for c in model.conditions or []])
    if model.op == "or":
        return OrCondition(conditions=[_convert_condition(c) for c in model.conditions or []])

    return ComparisonCondition(
        type=ConditionType(model.op),
        path=model.path,
        value=_convert_value(model.value),
        flags=model.flags,
    )


def _convert_property(value: Any) -> Any:
    if isinstance(value, ConditionModel):
        return _convert_condition(value)
    return value


_SIMPLE_RULES = {
    "min_length": (MinLengthRule, "min"),
    "max_length": (MaxLengthRule, "max"),
    "min": (MinRule, "min"),
    "max": (MaxRule, "max"),
    "min_precision": (MinPrecisionRule, "min_precision"),
    "max_precision": (MaxPrecisionRule, "max_precision"),
    "min_size": (MinSizeRule, "min"),
    "max_size": (MaxSizeRule, "max"),
    "min_entries": (MinEntriesRule, "min"),
    "max_entries": (MaxEntriesRule, "max"),
    "equals": (EqualsRule, "equals"),
    "mime_type": (MimeTypeRule, "mime_type"),
    "before": (BeforeRule, "before"),
    "after": (AfterRule, "after"),
    "min_date": (MinDateRule, "min"),
    "max_date": (MaxDateRule, "max"),
}


def _convert_rule(model: RuleModel) -> Union[Rule, ConditionalRule]:
    """Convert RuleModel to a rule."""
    if model.type in _SIMPLE_RULES:
        rule_cls, param = _SIMPLE_RULES[model.type]
        return rule_cls(**{param: _convert_value(getattr(model, param))}, code=model.code)

    if model.type == "regex":
        return RegexRule(regex=model.regex, code=model.code)
    if model.type == "email":
        return EmailRule(code=model.code)
    if model.type == "is_numeric":
        return IsNumericRule(code=model.code)
    if model.type == "one_of":
        return OneOfRule(values=_convert_value(model.values), code=model.code)
    if model.type == "custom":
        return CustomRule(
            name=model.name,
            params={k: _convert_value(v) for k, v in model.params.items()},
            code=model.code,
        )

    return ConditionalRule(
        when=_convert_condition(model.when),
        then=_convert_rule(model.then),
    )


_NODE_CLASSES = {
    "string": StringSchema,
    "number": NumberSchema,
    "boolean": BooleanSchema,
    "date": DateSchema,
    "file": FileSchema,
}


def _convert_node(model: SchemaNodeModel, date_format: str) -> Schema:
    """Convert SchemaNodeModel (recursively) to a schema node."""
    common: dict[str, Any] = {
        "default": model.default,
        "required": _convert_property(model.required),
        "included": _convert_property(model.included),
        "mutable": _convert_property(model.mutable),
        "private": model.private,
        "coerce": model.coerce,
        "rules": [_convert_rule(r) for r in model.rules],
    }

    if model.type == "date_string":
        return DateStringSchema(format=model.format or date_format, **common)
    if model.type == "options":
        return OptionsSchema(options=list(model.options or []), **common)
    if model.type == "object":
        fields = {
            key: _convert_node(child, date_format)
            for key, child in (model.fields or {}).items()
        }
        return ObjectSchema(fields=fields, **common)
    if model.type == "array":
        return ArraySchema(schema=_convert_node(model.element, date_format), **common)

    return _NODE_CLASSES[model.type](**common)


def _convert_schema_pack(pack: SchemaPackModel, date_format: str, source: str = "") -> Schema:
    try:
        return _convert_node(pack.document, date_format)
    except (InvalidSchemaError, ConditionError, RuleError) as e:
        raise SchemaPackValidationError(
            message=f"Schema pack '{pack.id}' contains an invalid schema: {e.message}",
            details={"error": e.to_dict(), "source": source},
        ) from e


# =============================================================================
# Schema Pack Loader
# =============================================================================

class SchemaPackLoader:
    """
    Loads schema packs and caches the resulting schemas by pack id.

    Usage:
        loader = SchemaPackLoader()
        schema = loader.load("packs/customer.yaml")
        result = validate(schema, None, payload)

        # Later
        schema = loader.get_schema("customer")
    """

    def __init__(
        self,
        strict_version: Optional[bool] = None,
        default_date_format: Optional[str] = None,
    ):
        """
        Args:
            strict_version: Reject packs of another major version
                (defaults to the DV_STRICT_SCHEMA_VERSION setting)
            default_date_format: Format for date_string nodes without one
                (defaults to the DV_DEFAULT_DATE_FORMAT setting)
        """
        settings = get_settings()
        self.strict_version = (
            settings.strict_schema_version if strict_version is None else strict_version
        )
        self.default_date_format = default_date_format or settings.default_date_format
        self._schemas: dict[str, Schema] = {}
        self._packs: dict[str, SchemaPackModel] = {}

    def load(self, path: Union[str, Path]) -> Schema:
        """
        Load a schema pack from a file.

        Raises:
            SchemaPackLoadError: If file cannot be read or parsed
            SchemaPackVersionMismatch: If schema version is incompatible
            SchemaPackValidationError: If the document is invalid
        """
        path = Path(path)
        try:
            data = self._load_file(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise SchemaPackLoadError(
                message=f"Failed to load schema pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        schema = self._build(data, str(path))
        logger.info("Loaded schema pack from %s", path)
        return schema

    def load_from_string(self, content: str, format: str = "yaml") -> Schema:
        """Load a schema pack from a YAML or JSON string."""
        try:
            if format.lower() == "json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SchemaPackLoadError(
                message=f"Failed to parse schema pack: {e}",
                details={"format": format, "error": str(e)},
            ) from e
        return self._build(data, "<string>")

    def load_from_dict(self, data: dict[str, Any]) -> Schema:
        return self._build(data, "<dict>")

    def _build(self, data: Any, source: str) -> Schema:
        if not isinstance(data, dict):
            raise SchemaPackValidationError(
                message="Schema pack must be a mapping",
                details={"source": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise SchemaPackVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            pack = validate_schema_pack(data)
        except ValidationError as e:
            raise SchemaPackValidationError(
                message=f"Schema pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "source": source},
            ) from e

        schema = _convert_schema_pack(pack, self.default_date_format, source)
        self._packs[pack.id] = pack
        self._schemas[pack.id] = schema
        logger.debug("Cached schema pack %s (%s)", pack.id, pack.name)
        return schema

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def get_schema(self, pack_id: str) -> Optional[Schema]:
        """Get a cached schema by pack ID."""
        return self._schemas.get(pack_id)

    def get_pack(self, pack_id: str) -> Optional[SchemaPackModel]:
        """Get the validated document of a cached pack."""
        return self._packs.get(pack_id)

    def list_schemas(self) -> list[str]:
        """List IDs of all loaded packs."""
        return list(self._schemas.keys())


# =============================================================================
# Convenience Functions
# =============================================================================

def load_schema_pack(path: Union[str, Path]) -> Schema:
    """
    Load a schema pack from a file.

    Convenience function that creates a temporary loader.
    """
    return SchemaPackLoader().load(path)


def load_schema_from_dict(data: dict[str, Any]) -> Schema:
    """Load a schema pack from an already parsed document."""
    return SchemaPackLoader().load_from_dict(data)


def load_schema_pack_from_string(content: str, format: str = "yaml") -> Schema:
    """Load a schema pack from a YAML or JSON string."""
    return SchemaPackLoader().load_from_string(content, format)
