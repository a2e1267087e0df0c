"""
Request validation for code generation.

Validation never stops at the first problem: every independent issue in a
request is collected so callers can show them all at once.
"""

import re
from typing import List, Set

from ...logging_config import get_logger
from ..languages.go.naming import is_reserved_word, is_valid_identifier
from .schema import ComponentType, FieldDefinition, GenerateRequest

logger = get_logger(__name__)

MAX_MODEL_NAME_LENGTH = 50
MAX_FIELDS = 50
MAX_TABLE_NAME_LENGTH = 64

_TABLE_NAME_PATTERN = re.compile(r"[a-z0-9_]+")


class ValidationError(Exception):
    """A single field-level validation problem."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.field, self.message) == (other.field, other.message)

    def __hash__(self):
        return hash((self.field, self.message))

    def to_dict(self):
        return {"field": self.field, "message": self.message}


class Validator:
    """Validates generation requests structurally and semantically."""

    def validate(self, request: GenerateRequest) -> List[ValidationError]:
        """
        Validate a request.

        Args:
            request: Request to check

        Returns:
            Every validation error found, empty when the request is valid
        """
        errors: List[ValidationError] = []

        errors.extend(self._validate_component_type(request.component_type))
        errors.extend(self._validate_model_name(request.model_name))
        errors.extend(self._validate_fields(request.fields))
        if request.table_name:
            errors.extend(self._validate_table_name(request.table_name))

        if errors:
            logger.debug(
                "Request for model %r failed validation with %d error(s)",
                request.model_name,
                len(errors),
            )
        return errors

    def _validate_component_type(self, component_type) -> List[ValidationError]:
        if isinstance(component_type, ComponentType):
            return []
        valid = ", ".join(c.value for c in ComponentType)
        return [
            ValidationError(
                "component_type",
                f"invalid component type {component_type!r} (expected one of: {valid})",
            )
        ]

    def _validate_model_name(self, model_name: str) -> List[ValidationError]:
        message = None
        if not model_name:
            message = "model name must not be empty"
        elif len(model_name) > MAX_MODEL_NAME_LENGTH:
            message = f"model name must not exceed {MAX_MODEL_NAME_LENGTH} characters"
        elif not is_valid_identifier(model_name):
            message = f"model name {model_name!r} is not a valid identifier"
        elif is_reserved_word(model_name):
            message = f"model name {model_name!r} is a reserved word"
        elif not ("A" <= model_name[0] <= "Z"):
            message = f"model name {model_name!r} must start with an uppercase letter"

        return [ValidationError("model_name", message)] if message else []

    def _validate_fields(self, fields: List[FieldDefinition]) -> List[ValidationError]:
        if not fields:
            return [ValidationError("fields", "at least one field is required")]

        errors: List[ValidationError] = []
        if len(fields) > MAX_FIELDS:
            errors.append(ValidationError("fields", f"at most {MAX_FIELDS} fields are allowed"))

        seen: Set[str] = set()
        for index, field_def in enumerate(fields):
            prefix = f"fields[{index}]"
            name = field_def.name

            name_message = None
            if not name:
                name_message = "field name must not be empty"
            elif not is_valid_identifier(name):
                name_message = f"field name {name!r} is not a valid identifier"
            elif is_reserved_word(name):
                name_message = f"field name {name!r} is a reserved word"
            elif name in seen:
                name_message = f"duplicate field name {name!r}"

            if name_message:
                errors.append(ValidationError(f"{prefix}.name", name_message))
            if name:
                seen.add(name)

            if not field_def.logical_type:
                label = name or f"#{index}"
                errors.append(
                    ValidationError(f"{prefix}.type", f"field {label!r} must declare a type")
                )

        return errors

    def _validate_table_name(self, table_name: str) -> List[ValidationError]:
        errors = []
        if len(table_name) > MAX_TABLE_NAME_LENGTH:
            errors.append(
                ValidationError(
                    "table_name",
                    f"table name must not exceed {MAX_TABLE_NAME_LENGTH} characters",
                )
            )
        if not _TABLE_NAME_PATTERN.fullmatch(table_name):
            errors.append(
                ValidationError(
                    "table_name",
                    "table name may only contain lowercase letters, digits and underscores",
                )
            )
        return errors


def format_validation_errors(errors: List[ValidationError]) -> List[str]:
    """Render validation errors as ``field: message`` strings."""
    return [str(error) for error in errors]
