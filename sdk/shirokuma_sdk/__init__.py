"""
Shirokuma Python SDK - Client library for p2panda-style nodes.

This SDK creates, updates and deletes documents stored as signed entries in
append-only logs, published through a node's GraphQL endpoint:
- Session for publishing operations
- Entry argument cache avoiding a query per chained operation
- Schema definitions for typed operation fields
- Document and Schema wrappers

Signing, hashing and operation encoding are provided by an external engine
implementing the SigningEngine protocol.

Example:
    >>> from shirokuma_sdk import Session
    >>>
    >>> async with Session("http://localhost:2020/graphql", engine) as session:
    ...     session.set_key_pair(key_pair).set_schema_id(schema_id)
    ...     v1 = await session.create({"message": "1"})
    ...     v2 = await session.update({"message": "2"}, v1)

Invariants:
    - Cached entry arguments are consumed at most once
    - update and delete always reference a previous view id
    - Failed calls leave the cache untouched

Version: 0.1.0
"""

__version__ = "0.1.0"

from .cache import ArgumentCache, cache_key
from .config import SessionSettings
from .document import Document, Schema
from .engine import KeyPair, SigningEngine
from .errors import (
    ConfigurationError,
    FieldNotFoundError,
    InvalidArgumentError,
    ShirokumaError,
    TransportError,
    UnknownFieldError,
    ValidationError,
)
from .operation import OperationArgs, OperationBuilder
from .publisher import Publisher
from .resolver import NextArgsResolver
from .schema import (
    FieldDef,
    FieldKind,
    OperationFields,
    SchemaDef,
    field,
    marshall_fields,
)
from .session import Session
from .types import (
    DocumentViewId,
    EntryArgs,
    OperationAction,
    SignedOperation,
)

__all__ = [
    # Version
    "__version__",
    # Session
    "Session",
    "SessionSettings",
    # Pipeline
    "ArgumentCache",
    "cache_key",
    "NextArgsResolver",
    "OperationArgs",
    "OperationBuilder",
    "Publisher",
    # Engine
    "KeyPair",
    "SigningEngine",
    # Types
    "DocumentViewId",
    "EntryArgs",
    "OperationAction",
    "SignedOperation",
    # Schema
    "FieldDef",
    "FieldKind",
    "OperationFields",
    "SchemaDef",
    "field",
    "marshall_fields",
    # Wrappers
    "Document",
    "Schema",
    # Errors
    "ShirokumaError",
    "InvalidArgumentError",
    "ConfigurationError",
    "TransportError",
    "ValidationError",
    "UnknownFieldError",
    "FieldNotFoundError",
]
