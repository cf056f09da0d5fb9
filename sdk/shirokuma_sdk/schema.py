"""
Schema types and field marshalling for the Shirokuma SDK.

This module provides the typed field representation handed to the encoder:
- FieldKind: Field types understood by the network
- FieldDef: Individual field definition
- SchemaDef: Definition of an application schema
- OperationFields: Typed operation fields
- marshall_fields: Convert plain values to OperationFields

Invariants:
    - Every value in OperationFields carries an explicit FieldKind
    - With a SchemaDef, kinds come from the schema, never from the value
    - Field order is preserved

Example:
    >>> Chat = SchemaDef(
    ...     schema_id="chat_0020c65567ae37efea293e34a9c7d13f8f2bf23dbdc3b5c7b9ab46293111c48fc78b",
    ...     name="chat",
    ...     fields=(field("message", "str"),),
    ... )
    >>> marshall_fields({"message": "ahoy"}, Chat)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import ValidationError


class FieldKind(Enum):
    """Supported field types."""

    STRING = "str"
    INTEGER = "int"
    FLOAT = "float"
    BOOLEAN = "bool"
    RELATION = "relation"
    RELATION_LIST = "relation_list"
    PINNED_RELATION = "pinned_relation"
    PINNED_RELATION_LIST = "pinned_relation_list"

    @classmethod
    def from_str(cls, value: str) -> FieldKind:
        """Convert string to FieldKind."""
        for kind in cls:
            if kind.value == value:
                return kind
        raise ValueError(f"Invalid field kind: {value}")


@dataclass(frozen=True)
class FieldDef:
    """Field definition within a schema.

    Attributes:
        name: Field name
        kind: Data type
        description: Documentation
    """

    name: str
    kind: FieldKind
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name cannot be empty")


def field(name: str, kind: str | FieldKind, *, description: str = "") -> FieldDef:
    """Convenience function to create a FieldDef.

    Example:
        >>> message = field("message", "str")
        >>> parent = field("parent", FieldKind.RELATION)
    """
    if isinstance(kind, str):
        kind = FieldKind.from_str(kind)
    return FieldDef(name=name, kind=kind, description=description)


@dataclass(frozen=True)
class SchemaDef:
    """Definition of an application schema.

    Attributes:
        schema_id: Schema identifier used in operations
        name: Human-readable name
        fields: Field definitions
        description: Documentation
    """

    schema_id: str
    name: str
    fields: tuple[FieldDef, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.schema_id:
            raise ValueError("schema_id cannot be empty")
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field names in schema '{self.name}'")

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FieldDef | None:
        """Get field definition by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


class OperationFields:
    """Typed field values of a create or update operation."""

    def __init__(self) -> None:
        self._fields: dict[str, tuple[FieldKind, Any]] = {}

    def insert(self, name: str, kind: FieldKind, value: Any) -> None:
        """Add a typed value."""
        if name in self._fields:
            raise ValidationError(f"Field '{name}' was already inserted", field_name=name)
        self._fields[name] = (kind, value)

    def get(self, name: str) -> Any:
        """Return the value of a field, or None."""
        entry = self._fields.get(name)
        return entry[1] if entry else None

    def kind(self, name: str) -> FieldKind | None:
        entry = self._fields.get(name)
        return entry[0] if entry else None

    def items(self) -> Iterator[tuple[str, FieldKind, Any]]:
        for name, (kind, value) in self._fields.items():
            yield name, kind, value

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Convert to a plain `{name: {"type": ..., "value": ...}}` mapping."""
        return {
            name: {"type": kind.value, "value": value}
            for name, (kind, value) in self._fields.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        inner = ", ".join(f"{n}={k.value}:{v!r}" for n, (k, v) in self._fields.items())
        return f"OperationFields({inner})"


def infer_kind(name: str, value: Any) -> FieldKind:
    """Pick a field kind from a plain Python value.

    Relations cannot be told apart from strings without a schema, so lists of
    strings map to relation lists and plain strings stay strings.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return FieldKind.BOOLEAN
    if isinstance(value, int):
        return FieldKind.INTEGER
    if isinstance(value, float):
        return FieldKind.FLOAT
    if isinstance(value, str):
        return FieldKind.STRING
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return FieldKind.RELATION_LIST
    raise ValidationError(
        f"Cannot infer type of field '{name}' from {type(value).__name__}",
        field_name=name,
    )


def marshall_fields(
    fields: dict[str, Any],
    schema: SchemaDef | None = None,
    *,
    partial: bool = False,
) -> OperationFields:
    """Convert plain field values to OperationFields.

    Args:
        fields: Field values keyed by name
        schema: Optional schema providing the field kinds
        partial: Allow a subset of the schema fields (updates)

    Returns:
        OperationFields ready for the encoder

    Raises:
        UnknownFieldError: If a field is not part of the schema
        ValidationError: If a value does not match its kind
    """
    result = OperationFields()

    if schema is None:
        for name, value in fields.items():
            result.insert(name, infer_kind(name, value), value)
        return result

    # Local import avoids a cycle, validate imports this module
    from .validate import validate_or_raise

    validate_or_raise(schema, fields, partial=partial)
    kinds = {f.name: f.kind for f in schema.fields}
    for name, value in fields.items():
        result.insert(name, kinds[name], value)

    return result
