"""
Operation encoding and entry signing.

OperationBuilder turns an action, a schema id, fields and previous view ids
into an encoded operation, then signs an entry carrying it at the position
described by EntryArgs. Encoding and signing are delegated to the
SigningEngine, the builder itself holds no state.

Invariants:
    - create carries fields and no previous
    - update carries fields and a non-empty previous
    - delete carries a non-empty previous and no fields
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .engine import KeyPair, SigningEngine
from .errors import InvalidArgumentError
from .schema import OperationFields
from .types import DocumentViewId, EntryArgs, OperationAction, SignedOperation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationArgs:
    """Content of an operation apart from its action.

    Attributes:
        schema_id: Schema the document follows
        fields: Typed field values (create and update)
        previous: View id being superseded (update and delete)
    """

    schema_id: str
    fields: OperationFields | None = None
    previous: DocumentViewId | None = None

    def check(self, action: OperationAction) -> None:
        """Raise if the arguments do not fit the action."""
        if not self.schema_id:
            raise InvalidArgumentError("Schema id must be provided", argument="schema_id")

        if action == OperationAction.CREATE:
            if self.previous is not None:
                raise InvalidArgumentError(
                    "CREATE operations cannot reference previous operations",
                    argument="previous",
                )
        elif self.previous is None:
            raise InvalidArgumentError(
                f"{action.value.upper()} operations need a previous view id",
                argument="previous",
            )

        if action == OperationAction.DELETE:
            if self.fields is not None:
                raise InvalidArgumentError(
                    "DELETE operations cannot carry fields",
                    argument="fields",
                )
        elif not self.fields:
            raise InvalidArgumentError(
                f"{action.value.upper()} operations need fields",
                argument="fields",
            )


class OperationBuilder:
    """Encode operations and sign the entries carrying them."""

    def __init__(self, engine: SigningEngine) -> None:
        self._engine = engine

    def encode(self, action: OperationAction, args: OperationArgs) -> str:
        """Encode an operation, returns it hex-encoded."""
        args.check(action)
        previous = list(args.previous.operation_ids) if args.previous else None
        return self._engine.encode_operation(
            action.value,
            args.schema_id,
            fields=args.fields,
            previous=previous,
        )

    def build(
        self,
        action: OperationAction,
        args: OperationArgs,
        entry_args: EntryArgs,
        key_pair: KeyPair,
    ) -> SignedOperation:
        """Encode an operation and sign an entry for it.

        Args:
            action: create, update or delete
            args: Schema id, fields and previous view id
            entry_args: Position of the new entry in the author's log
            key_pair: Key pair signing the entry

        Returns:
            SignedOperation with hex-encoded entry and operation

        Raises:
            InvalidArgumentError: If args do not fit the action
        """
        operation = self.encode(action, args)
        entry = self._engine.sign_and_encode_entry(entry_args, operation, key_pair)
        logger.debug(
            f"Signed {action.value} entry log_id={entry_args.log_id} "
            f"seq_num={entry_args.seq_num}"
        )
        return SignedOperation(entry=entry, operation=operation)
