"""
Core value types for the Shirokuma SDK.

This module provides the data passed along the publishing pipeline:
- EntryArgs: Log position of the next entry (log id, seq num, links)
- DocumentViewId: One or more operation ids identifying a document state
- OperationAction: create, update or delete
- SignedOperation: Hex-encoded signed entry and its encoded operation

Invariants:
    - DocumentViewId serialises canonically (sorted ids joined by "_")
    - EntryArgs parse directly from the GraphQL camelCase payload
    - backlink and skiplink are absent only for the first entry of a log
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidArgumentError

# Separator used when a view id with several operation ids is serialised
VIEW_ID_SEPARATOR = "_"


class OperationAction(Enum):
    """Supported operation actions."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class EntryArgs(BaseModel):
    """Arguments required to place the next entry in an author's log.

    Attributes:
        log_id: Log identifier (u64 as string)
        seq_num: Sequence number of the next entry (u64 as string)
        backlink: Hash of the previous entry in the same log
        skiplink: Hash of the skiplink entry
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    log_id: str = Field(..., alias="logId")
    seq_num: str = Field(..., alias="seqNum")
    backlink: str | None = None
    skiplink: str | None = None

    @field_validator("log_id", "seq_num", mode="before")
    @classmethod
    def _stringify_u64(cls, value: Any) -> Any:
        # Nodes may serialise u64 values as JSON numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


@dataclass(frozen=True)
class DocumentViewId:
    """Identifier of one, possibly merged, state of a document.

    Order of the operation ids carries no meaning, they are kept sorted so
    that two views over the same ids compare and serialise identically.

    Example:
        >>> view_id = DocumentViewId.from_value(["0020b", "0020a"])
        >>> str(view_id)
        '0020a_0020b'
    """

    operation_ids: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate and normalise the operation ids."""
        if not self.operation_ids:
            raise InvalidArgumentError(
                "Document view id needs at least one operation id",
                argument="view_id",
            )
        if any(not op_id for op_id in self.operation_ids):
            raise InvalidArgumentError(
                "Document view id contains an empty operation id",
                argument="view_id",
            )
        object.__setattr__(self, "operation_ids", tuple(sorted(self.operation_ids)))

    @classmethod
    def from_value(cls, value: ViewIdLike) -> DocumentViewId:
        """Build a view id from a string, a sequence of ids or a view id."""
        if isinstance(value, DocumentViewId):
            return value
        if isinstance(value, str):
            return cls(tuple(value.split(VIEW_ID_SEPARATOR)))
        if isinstance(value, Sequence):
            return cls(tuple(value))
        raise InvalidArgumentError(
            f"Cannot build document view id from {type(value).__name__}",
            argument="view_id",
        )

    def __str__(self) -> str:
        return VIEW_ID_SEPARATOR.join(self.operation_ids)


ViewIdLike = Union[DocumentViewId, str, Sequence[str]]


@dataclass(frozen=True)
class SignedOperation:
    """A signed entry together with the operation it carries.

    Attributes:
        entry: Hex-encoded signed entry
        operation: Hex-encoded operation
    """

    entry: str
    operation: str
