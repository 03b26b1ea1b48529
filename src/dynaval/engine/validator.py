"""
Dynaval Validation Driver

Validates a value tree against a schema.

Every node passes the same checks, in order:

    included -> masked shortcut -> value extraction -> mutable ->
    required -> type -> rules -> recurse into fields / elements

The first failing check of a node produces that node's single error.
Errors of sibling fields and array elements are all collected, so one
call reports everything that is wrong with a document.

Usage:
    result = validate(schema, current_values, new_values)
    if result.success:
        save(result.values)
    else:
        for error in result.errors:
            print(error.path, error.code, error.message)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..exceptions import ValidationInputError
from ..models import (
    ErrorCode,
    ErrorMessage,
    PrivateState,
    PrivateValue,
    Schema,
    SchemaProperty,
    SchemaType,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
)
from .coercion import coerce_schema
from .context import ValidateOptions, ValidationContext
from .path_resolver import ROOT, join_path
from .private_tracker import is_value_masked, unwrap_private, value_changed
from .property_resolver import resolve_property, resolve_rules
from .rule_executor import RuleContext, execute_rule
from .type_checks import is_array, is_object, validate_type

logger = logging.getLogger(__name__)


def _error(
    code: str,
    path: str,
    schema: Schema,
    value: Any,
    current: Any,
    message: str,
    custom_code: Optional[str] = None,
    **details: Any,
) -> ValidationFailure:
    return ValidationFailure(errors=[
        ErrorMessage(
            code=code,
            custom_code=custom_code or code,
            path=path,
            schema=schema,
            value=value,
            current=current,
            message=message,
            details=details,
        )
    ])


@dataclass
class Validator:
    """
    Validates documents with a fixed set of options.

    Usage:
        validator = Validator(ValidateOptions(custom_rules={"iban": check_iban}))
        result = validator.validate(schema, None, {"iban": "NL91ABNA0417164300"})
    """
    options: ValidateOptions = field(default_factory=ValidateOptions)

    def validate(self, schema: Schema, current_value: Any, new_value: Any) -> ValidationResult:
        """
        Validate new_value against schema.

        Args:
            schema: Root schema
            current_value: The stored document, or None for fresh data
                (disables mutability checks)
            new_value: The candidate document

        Returns:
            ValidationSuccess with the normalized values, or
            ValidationFailure with every violation

        Raises:
            DynavalError: On schema or configuration mistakes
        """
        context = ValidationContext(
            schema=schema,
            values=new_value,
            current_values=current_value,
            options=self.options,
            validate_mutable=current_value is not None,
        )
        result = self._validate(schema, current_value, new_value, ROOT, context)
        if not result.success:
            logger.debug("Validation failed with %d error(s)", len(result.errors))
        return result

    # -------------------------------------------------------------------------
    # Per Node
    # -------------------------------------------------------------------------

    def _validate(
        self,
        schema: Schema,
        current: Any,
        new: Any,
        path: str,
        context: ValidationContext,
    ) -> ValidationResult:
        if not resolve_property(schema, SchemaProperty.INCLUDED, path, True, context.entering(path)):
            if self.options.strip_not_included_values or new is None:
                return ValidationSuccess(values=None)
            return _error(
                ErrorCode.INCLUDED.value, path, schema, new, current,
                f"A value is present for a schema that is not included: {path}",
            )

        if is_value_masked(schema, new):
            return ValidationSuccess(values=new)

        new_value = coerce_schema(schema, unwrap_private(schema, new, path))
        current_value = unwrap_private(schema, current, path, allow_absent=True)

        if context.validate_mutable and not resolve_property(
            schema, SchemaProperty.MUTABLE, path, True, context
        ):
            if value_changed(schema, current, new, path):
                return _error(
                    ErrorCode.IMMUTABLE.value, path, schema, new, current,
                    f"The value for a schema that is not mutable has changed: {path}",
                )

        if new_value is None:
            if resolve_property(schema, SchemaProperty.REQUIRED, path, True, context):
                return _error(
                    ErrorCode.REQUIRED.value, path, schema, new_value, current_value,
                    f"A required value is missing for schema: {path}",
                )
            return ValidationSuccess(values=None)

        if not validate_type(schema, new_value):
            if schema.type == SchemaType.DATE_STRING:
                return _error(
                    ErrorCode.TYPE.value, path, schema, new_value, current_value,
                    f"The value for schema {path} is not a valid date string in the format {schema.format}",
                    expected_type=schema.type.value,
                    expected_format=schema.format,
                )
            return _error(
                ErrorCode.TYPE.value, path, schema, new_value, current_value,
                f"The value for schema {path} is not of type {schema.type.value}",
                expected_type=schema.type.value,
            )

        for rule in resolve_rules(schema, path, context):
            violation = execute_rule(RuleContext(
                rule=rule, value=new_value, path=path, schema=schema, context=context,
            ))
            if violation is not None:
                details = dict(violation)
                code = details.pop("code")
                message = details.pop("message")
                return _error(
                    code, path, schema, new_value, current_value, message,
                    custom_code=rule.code, **details,
                )

        if schema.type == SchemaType.OBJECT:
            return self._validate_object(schema, current_value, new_value, path, context)
        if schema.type == SchemaType.ARRAY:
            return self._validate_array(schema, current_value, new_value, path, context)

        if schema.private:
            return ValidationSuccess(values=PrivateValue(PrivateState.PLAIN, new_value))
        return ValidationSuccess(values=new_value)

    # -------------------------------------------------------------------------
    # Containers
    # -------------------------------------------------------------------------

    def _validate_object(
        self,
        schema: Schema,
        current: Any,
        new: Any,
        path: str,
        context: ValidationContext,
    ) -> ValidationResult:
        if current is not None and not is_object(current):
            raise ValidationInputError(
                message=f"Current value at {path} is not an object",
                path=path,
                details={"value_type": type(current).__name__},
            )

        values: dict[str, Any] = {}
        errors: list[ErrorMessage] = []
        for key, child in schema.fields.items():
            result = self._validate(
                child,
                current.get(key) if current is not None else None,
                new.get(key),
                join_path(path, key),
                context,
            )
            if result.success:
                if result.values is not None:
                    values[key] = result.values
            else:
                errors.extend(result.errors)

        if errors:
            return ValidationFailure(errors=errors)
        return ValidationSuccess(values=values)

    def _validate_array(
        self,
        schema: Schema,
        current: Any,
        new: Any,
        path: str,
        context: ValidationContext,
    ) -> ValidationResult:
        if current is not None and not is_array(current):
            raise ValidationInputError(
                message=f"Current value at {path} is not an array",
                path=path,
                details={"value_type": type(current).__name__},
            )

        # Array elements are always mutable
        element_context = replace(context, validate_mutable=False)

        values: list[Any] = []
        errors: list[ErrorMessage] = []
        for index, item in enumerate(new):
            result = self._validate(
                schema.schema,
                current[index] if current is not None and index < len(current) else None,
                item,
                join_path(path, f"[{index}]"),
                element_context,
            )
            if result.success:
                values.append(result.values)
            else:
                errors.extend(result.errors)

        if errors:
            return ValidationFailure(errors=errors)
        return ValidationSuccess(values=values)


def validate(
    schema: Schema,
    current_value: Any,
    new_value: Any,
    options: Optional[ValidateOptions] = None,
) -> ValidationResult:
    """
    Validate new_value against schema.

    Convenience function that creates a temporary Validator.
    """
    return Validator(options or ValidateOptions()).validate(schema, current_value, new_value)
