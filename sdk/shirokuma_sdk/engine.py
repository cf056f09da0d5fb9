"""
Signing and encoding capabilities consumed by the SDK.

Key management, entry signing, hashing and operation encoding live in an
external engine. The SDK only depends on the protocols below, any object
providing these methods can be handed to a Session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .schema import OperationFields
    from .types import EntryArgs


@runtime_checkable
class KeyPair(Protocol):
    """Signing identity of an author."""

    def public_key(self) -> str:
        """Hex-encoded public key."""
        ...


@runtime_checkable
class SigningEngine(Protocol):
    """External signing, hashing and encoding engine."""

    def encode_operation(
        self,
        action: str,
        schema_id: str,
        fields: OperationFields | None = None,
        previous: list[str] | None = None,
    ) -> str:
        """Encode an operation, returns it hex-encoded."""
        ...

    def sign_and_encode_entry(
        self,
        entry_args: EntryArgs,
        operation: str,
        key_pair: KeyPair,
    ) -> str:
        """Sign an entry carrying the operation, returns it hex-encoded."""
        ...

    def generate_hash(self, value: str) -> str:
        """Hash of a hex-encoded value, used as entry and operation id."""
        ...
