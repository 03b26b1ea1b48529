"""
Dynaval Schema Model

Static description of a document: node kinds, constraints and nesting.
Schema nodes carry no behaviour; the engine package interprets them.

Every node supports:
- default: value substituted when a path resolves to an absent value
- required / included / mutable: None (use the default, True), a literal
  bool, or a Condition evaluated against the document
- private: the value must be wrapped in a PrivateValue and is never
  readable from conditions or references
- coerce: convert raw input towards the node's kind before type checking
- rules: ordered list of rules and conditional rules

Example:
    schema = ObjectSchema(fields={
        "type": OptionsSchema(options=["personal", "business"]),
        "email": StringSchema(
            required=eq("type", "business"),
            rules=[email()],
        ),
    })
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from ..exceptions import InvalidSchemaError
from .conditions import Condition, is_condition
from .enums import SchemaProperty, SchemaType
from .rules import BaseRule, ConditionalRule, Rule


PropertyValue = Union[bool, Condition, None]

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class BaseSchema:
    """Fields shared by every schema node."""
    schema_type: ClassVar[SchemaType]

    default: Any = None
    required: PropertyValue = None
    included: PropertyValue = None
    mutable: PropertyValue = None
    private: bool = False
    coerce: bool = False
    rules: list[Union[Rule, ConditionalRule]] = field(default_factory=list)

    def __post_init__(self) -> None:
        for prop in SchemaProperty:
            value = getattr(self, prop.value)
            if value is not None and not isinstance(value, bool) and not is_condition(value):
                raise InvalidSchemaError(
                    message=f"Property '{prop.value}' must be a bool or a condition",
                    details={"value": repr(value)},
                )
        for rule in self.rules:
            if not isinstance(rule, BaseRule):
                raise InvalidSchemaError(
                    message="Schema rules must be rule instances",
                    details={"rule": repr(rule)},
                )

    @property
    def type(self) -> SchemaType:
        return self.schema_type


@dataclass(frozen=True)
class StringSchema(BaseSchema):
    schema_type: ClassVar[SchemaType] = SchemaType.STRING


@dataclass(frozen=True)
class NumberSchema(BaseSchema):
    schema_type: ClassVar[SchemaType] = SchemaType.NUMBER


@dataclass(frozen=True)
class BooleanSchema(BaseSchema):
    schema_type: ClassVar[SchemaType] = SchemaType.BOOLEAN


@dataclass(frozen=True)
class DateSchema(BaseSchema):
    """Values are datetime.date or datetime.datetime instances."""
    schema_type: ClassVar[SchemaType] = SchemaType.DATE


@dataclass(frozen=True)
class DateStringSchema(BaseSchema):
    """Values are strings that parse with `format` (strptime syntax)."""
    schema_type: ClassVar[SchemaType] = SchemaType.DATE_STRING
    format: str = DEFAULT_DATE_FORMAT


@dataclass(frozen=True)
class FileSchema(BaseSchema):
    """Values are FileUpload instances."""
    schema_type: ClassVar[SchemaType] = SchemaType.FILE


@dataclass(frozen=True)
class OptionsSchema(BaseSchema):
    """Values must be one of `options`."""
    schema_type: ClassVar[SchemaType] = SchemaType.OPTIONS
    options: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class ObjectSchema(BaseSchema):
    """Mapping of field name to child schema."""
    schema_type: ClassVar[SchemaType] = SchemaType.OBJECT
    fields: dict[str, Schema] = field(default_factory=dict)


@dataclass(frozen=True)
class ArraySchema(BaseSchema):
    """List whose elements all share one element schema."""
    schema_type: ClassVar[SchemaType] = SchemaType.ARRAY
    schema: Optional[Schema] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.schema, BaseSchema):
            raise InvalidSchemaError(
                message="Array schema requires an element schema",
                details={"schema": repr(self.schema)},
            )


Schema = Union[
    StringSchema,
    NumberSchema,
    BooleanSchema,
    DateSchema,
    DateStringSchema,
    FileSchema,
    OptionsSchema,
    ObjectSchema,
    ArraySchema,
]


# =============================================================================
# File Values
# =============================================================================

@dataclass(frozen=True)
class FileUpload:
    """Value of a file node."""
    name: str
    size: int
    mime_type: str
