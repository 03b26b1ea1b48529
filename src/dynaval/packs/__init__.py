"""
Dynaval Schema Packs

Schema validation and loading for schema packs.

Schema packs are YAML or JSON files that describe a document schema:
its fields, their rules and the conditions that tie them together.

Usage:
    from dynaval.packs import load_schema_pack, SchemaPackLoader

    # Load a single schema pack
    schema = load_schema_pack("path/to/customer.yaml")

    # Use a loader for multiple packs (caches schemas by pack id)
    loader = SchemaPackLoader()
    loader.load("path/to/customer.yaml")
    loader.load("path/to/order.yaml")
    schema = loader.get_schema("customer")
"""
from __future__ import annotations

from .loader import (
    SchemaPackLoader,
    load_schema_from_dict,
    load_schema_pack,
    load_schema_pack_from_string,
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

__all__ = [
    # Version
    "SCHEMA_VERSION",
    "REFERENCE_KEY",
    # Loader
    "SchemaPackLoader",
    "load_schema_pack",
    "load_schema_pack_from_string",
    "load_schema_from_dict",
    # Validation
    "validate_schema_pack",
    "check_schema_version",
    # Document models (for advanced usage)
    "SchemaPackModel",
    "SchemaNodeModel",
    "ConditionModel",
    "RuleModel",
]
