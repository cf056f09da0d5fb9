"""
Field validation for the Shirokuma SDK.

This module provides validation utilities:
- Field-level validation against FieldKind
- Operation fields validation against a schema
- Helpful error messages with suggestions

Invariants:
    - Validation errors are deterministic
    - Error messages include context for fixing
    - Unknown fields suggest similar valid fields
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Tuple

from .errors import UnknownFieldError, ValidationError
from .schema import FieldKind, SchemaDef


def validate_fields(
    schema: SchemaDef,
    fields: Dict[str, Any],
    *,
    partial: bool = False,
) -> Tuple[bool, List[str]]:
    """Validate operation fields against a schema.

    Args:
        schema: Schema to validate against
        fields: Field values to validate
        partial: Whether a subset of the schema fields is allowed

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors: List[str] = []

    if not fields:
        errors.append("Operation fields cannot be empty")
        return False, errors

    # Check for unknown fields
    known_fields = set(schema.field_names)
    for field_name in fields:
        if field_name in known_fields:
            continue
        suggestions = get_close_matches(field_name, list(known_fields), n=3)
        if suggestions:
            errors.append(f"Unknown field '{field_name}'. Did you mean: {suggestions}?")
        else:
            errors.append(f"Unknown field '{field_name}'")

    for field_def in schema.fields:
        if field_def.name not in fields:
            # Create operations must contain every schema field
            if not partial:
                errors.append(f"Field '{field_def.name}' is required")
            continue

        error = _validate_field_value(field_def.name, field_def.kind, fields[field_def.name])
        if error:
            errors.append(error)

    return len(errors) == 0, errors


def _is_view_id(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value)
    return isinstance(value, list) and bool(value) and all(
        isinstance(v, str) and v for v in value
    )


def _validate_field_value(
    name: str,
    kind: FieldKind,
    value: Any,
) -> Optional[str]:
    """Validate a single field value.

    Returns error message if invalid, None if valid.
    """
    if value is None:
        return f"Field '{name}' cannot be null"

    if kind == FieldKind.STRING:
        if not isinstance(value, str):
            return f"Field '{name}' must be a string, got {type(value).__name__}"

    elif kind == FieldKind.INTEGER:
        if not isinstance(value, int) or isinstance(value, bool):
            return f"Field '{name}' must be an integer, got {type(value).__name__}"

    elif kind == FieldKind.FLOAT:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return f"Field '{name}' must be a number, got {type(value).__name__}"

    elif kind == FieldKind.BOOLEAN:
        if not isinstance(value, bool):
            return f"Field '{name}' must be a boolean, got {type(value).__name__}"

    elif kind == FieldKind.RELATION:
        if not isinstance(value, str) or not value:
            return f"Field '{name}' must be a document id"

    elif kind == FieldKind.RELATION_LIST:
        if not isinstance(value, list):
            return f"Field '{name}' must be a list, got {type(value).__name__}"
        for i, item in enumerate(value):
            if not isinstance(item, str) or not item:
                return f"Field '{name}[{i}]' must be a document id"

    elif kind == FieldKind.PINNED_RELATION:
        if not _is_view_id(value):
            return f"Field '{name}' must be a document view id"

    elif kind == FieldKind.PINNED_RELATION_LIST:
        if not isinstance(value, list):
            return f"Field '{name}' must be a list, got {type(value).__name__}"
        for i, item in enumerate(value):
            if not _is_view_id(item):
                return f"Field '{name}[{i}]' must be a document view id"

    return None


def validate_or_raise(
    schema: SchemaDef,
    fields: Dict[str, Any],
    *,
    partial: bool = False,
) -> None:
    """Validate fields and raise if invalid.

    Args:
        schema: Schema to validate against
        fields: Field values to validate
        partial: Whether a subset of the schema fields is allowed

    Raises:
        UnknownFieldError: If unknown field is provided
        ValidationError: If validation fails
    """
    # Check unknown fields first (for better error messages)
    known_fields = set(schema.field_names)
    unknown = [name for name in fields if name not in known_fields]

    if unknown:
        field_name = unknown[0]
        suggestions = get_close_matches(field_name, list(known_fields), n=3)
        raise UnknownFieldError(field_name, schema.name, suggestions)

    is_valid, errors = validate_fields(schema, fields, partial=partial)
    if not is_valid:
        raise ValidationError(
            f"Validation failed for {schema.name}: {'; '.join(errors)}",
            errors=errors,
        )
