"""
Dynaval Schema Pack Documents

Pydantic models for validating schema pack YAML/JSON files.

A schema pack holds one document schema:

    schema_version: "1.0.0"
    id: customer
    name: Customer
    schema:
      type: object
      fields:
        type:
          type: options
          options: [personal, business]
        email:
          type: string
          required: {op: eq, path: type, value: business}
          rules:
            - {type: email}

References to other fields are written as {"$ref": "<path>"} wherever a
rule parameter or condition value accepts one.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"

REFERENCE_KEY = "$ref"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

SchemaTypeValue = Literal[
    "string", "number", "boolean", "date", "date_string",
    "file", "options", "object", "array",
]

ConditionOpValue = Literal[
    "and", "or",
    "eq", "neq", "gt", "gte", "lt", "lte",
    "matches", "in", "nin",
]

RuleTypeValue = Literal[
    "min_length", "max_length", "min", "max", "min_precision", "max_precision",
    "min_size", "max_size", "min_entries", "max_entries", "regex", "equals",
    "one_of", "email", "is_numeric", "mime_type", "before", "after",
    "min_date", "max_date", "custom", "conditional",
]

# Parameters each rule type must carry
RULE_PARAMETERS: dict[str, tuple[str, ...]] = {
    "min_length": ("min",),
    "max_length": ("max",),
    "min": ("min",),
    "max": ("max",),
    "min_precision": ("min_precision",),
    "max_precision": ("max_precision",),
    "min_size": ("min",),
    "max_size": ("max",),
    "min_entries": ("min",),
    "max_entries": ("max",),
    "regex": ("regex",),
    "equals": ("equals",),
    "one_of": ("values",),
    "email": (),
    "is_numeric": (),
    "mime_type": ("mime_type",),
    "before": ("before",),
    "after": ("after",),
    "min_date": ("min",),
    "max_date": ("max",),
    "custom": ("name",),
    "conditional": ("when", "then"),
}


# =============================================================================
# Conditions
# =============================================================================

class ConditionModel(BaseModel):
    """
    Schema for a condition.

    For logical operators (and, or), use conditions.
    For comparisons, use path and value.
    """
    model_config = ConfigDict(extra="forbid")

    op: ConditionOpValue = Field(..., description="Operator")
    conditions: Optional[list[ConditionModel]] = Field(
        None, description="Child conditions for and/or"
    )
    path: Optional[str] = Field(None, description="Path of the left operand")
    value: Any = Field(None, description="Right operand; value or {$ref: path}")
    flags: Optional[str] = Field(None, description="Regex flags for matches (i, m, s)")

    @model_validator(mode="after")
    def validate_structure(self) -> ConditionModel:
        """Validate condition structure based on operator type."""
        if self.op in ("and", "or"):
            if not self.conditions:
                raise ValueError(f"Logical operator '{self.op}' requires 'conditions'")
            return self

        if not self.path:
            raise ValueError(f"Comparison operator '{self.op}' requires 'path'")
        if self.op == "matches" and not isinstance(self.value, str):
            raise ValueError("Operator 'matches' requires a string pattern as 'value'")
        if self.op in ("in", "nin") and not isinstance(self.value, list):
            raise ValueError(f"Operator '{self.op}' requires a list as 'value'")
        if self.flags is not None and self.op != "matches":
            raise ValueError("Only operator 'matches' accepts 'flags'")
        return self


# =============================================================================
# Rules
# =============================================================================

class RuleModel(BaseModel):
    """Schema for a rule. Which parameters apply depends on type."""
    model_config = ConfigDict(extra="forbid")

    type: RuleTypeValue = Field(..., description="Rule type")
    code: Optional[str] = Field(None, description="Custom error code")

    min: Any = None
    max: Any = None
    min_precision: Any = None
    max_precision: Any = None
    regex: Optional[str] = None
    equals: Any = None
    values: Optional[list[Any]] = None
    mime_type: Any = None
    before: Any = None
    after: Any = None

    # Custom rules
    name: Optional[str] = None
    params: dict[str, Any] = Field(default_factory=dict)

    # Conditional rules
    when: Optional[ConditionModel] = None
    then: Optional[RuleModel] = None

    @model_validator(mode="after")
    def validate_parameters(self) -> RuleModel:
        missing = [p for p in RULE_PARAMETERS[self.type] if getattr(self, p) is None]
        if missing:
            raise ValueError(f"Rule '{self.type}' requires: {', '.join(missing)}")
        if self.then is not None and self.then.type == "conditional":
            raise ValueError("Conditional rules cannot be nested")
        return self


# =============================================================================
# Schema Nodes
# =============================================================================

PropertyModel = Union[bool, ConditionModel, None]


class SchemaNodeModel(BaseModel):
    """Schema for one schema node and, recursively, its children."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: SchemaTypeValue = Field(..., description="Node type")
    default: Any = None
    required: PropertyModel = None
    included: PropertyModel = None
    mutable: PropertyModel = None
    private: bool = False
    coerce: bool = False
    rules: list[RuleModel] = Field(default_factory=list)

    # Type specific
    format: Optional[str] = Field(None, description="strptime format of date_string nodes")
    options: Optional[list[Any]] = Field(None, description="Values of options nodes")
    fields: Optional[dict[str, SchemaNodeModel]] = Field(None, description="Fields of object nodes")
    element: Optional[SchemaNodeModel] = Field(
        None, alias="schema", description="Element schema of array nodes"
    )

    @model_validator(mode="after")
    def validate_type_specific(self) -> SchemaNodeModel:
        """Type specific attributes must match the node type."""
        if self.type == "options" and not self.options:
            raise ValueError("Options nodes require 'options'")
        if self.type == "array" and self.element is None:
            raise ValueError("Array nodes require 'schema'")
        if self.type != "array" and self.element is not None:
            raise ValueError("Only array nodes accept 'schema'")
        if self.type != "object" and self.fields is not None:
            raise ValueError("Only object nodes accept 'fields'")
        if self.type != "options" and self.options is not None:
            raise ValueError("Only options nodes accept 'options'")
        if self.type != "date_string" and self.format is not None:
            raise ValueError("Only date_string nodes accept 'format'")
        return self


# =============================================================================
# Schema Pack
# =============================================================================

class SchemaPackModel(BaseModel):
    """Top-level schema for a schema pack YAML/JSON file."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    id: str = Field(..., description="Unique identifier (e.g., 'customer')")
    name: str = Field(..., description="Human-readable name")
    description: Optional[str] = None
    document: SchemaNodeModel = Field(..., alias="schema", description="Root schema node")


ConditionModel.model_rebuild()
RuleModel.model_rebuild()
SchemaNodeModel.model_rebuild()
SchemaPackModel.model_rebuild()


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_schema_pack(data: dict[str, Any]) -> SchemaPackModel:
    """
    Validate a schema pack dictionary against the document schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return SchemaPackModel.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """Major version of the pack must match SCHEMA_VERSION."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
