"""
Session for the Shirokuma SDK.

This module provides the main entry point:
- Session: Connection to a node, creates, updates and deletes documents

A session is configured with the GraphQL endpoint of a node. A key pair and
a schema can be fixed for the whole session with `set_key_pair()` and
`set_schema_id()`, or passed to each method.

Example:
    >>> async with Session("http://localhost:2020/graphql", engine) as session:
    ...     session.set_key_pair(key_pair).set_schema_id(schema_id)
    ...     view_id = await session.create({"message": "ahoy"})
    ...     view_id = await session.update({"message": "ahoy!"}, view_id)
    ...     await session.delete(view_id)

Invariants:
    - Every mutating call resolves entry args, signs and publishes in order
    - Argument and configuration errors are raised before any network call
    - The returned view id is the hash of the entry just published
    - A failed operation leaves cached entry args in place
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx

from ._graphql_client import GraphQLClient
from .cache import ArgumentCache
from .config import SessionSettings
from .engine import KeyPair, SigningEngine
from .errors import ConfigurationError, InvalidArgumentError
from .operation import OperationArgs, OperationBuilder
from .publisher import Publisher
from .resolver import NextArgsResolver
from .schema import OperationFields, SchemaDef, marshall_fields
from .types import DocumentViewId, EntryArgs, OperationAction, ViewIdLike

logger = logging.getLogger(__name__)

T = TypeVar("T")

SchemaLike = str | SchemaDef
FieldsLike = dict[str, Any] | OperationFields


def resolve_option(explicit: T | None, default: T | None, setting: str) -> T:
    """Pick the per-call value, fall back to the session default.

    Raises:
        ConfigurationError: If neither is set
    """
    if explicit is not None:
        return explicit
    if default is not None:
        return default
    raise ConfigurationError(
        f"Configure a {setting} with `session.set_{setting}()` or pass it "
        "to the method",
        setting=setting,
    )


class Session:
    """Communicate with a node through GraphQL.

    Owns the cache of next entry arguments. A value cached after publishing
    an operation is consumed by the next operation on the resulting view,
    so chained create/update/delete calls need a single query per chain.

    Example:
        >>> session = Session("http://localhost:2020/graphql", engine)
        >>> session.set_key_pair(key_pair)
        >>> view_id = await session.create({"message": "ahoy"}, schema_id=chat)
    """

    def __init__(
        self,
        endpoint: str,
        engine: SigningEngine,
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            endpoint: GraphQL endpoint of the node
            engine: Signing, hashing and encoding engine
            timeout: Request timeout in seconds
            headers: Extra HTTP headers
            transport: Optional httpx transport (used by tests)
        """
        if not endpoint:
            raise InvalidArgumentError(
                "Missing `endpoint` parameter for creating a session",
                argument="endpoint",
            )

        self.endpoint = endpoint
        self._engine = engine
        self._client = GraphQLClient(
            endpoint,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )
        self._cache: ArgumentCache[EntryArgs] = ArgumentCache()
        self._resolver = NextArgsResolver(self._client, self._cache)
        self._builder = OperationBuilder(engine)
        self._publisher = Publisher(self._client, self._cache, engine)

        self._key_pair: KeyPair | None = None
        self._schema: SchemaLike | None = None

    @classmethod
    def from_settings(
        cls,
        engine: SigningEngine,
        settings: SessionSettings | None = None,
    ) -> Session:
        """Create a session from SessionSettings (or the environment)."""
        settings = settings or SessionSettings()
        session = cls(
            settings.endpoint,
            engine,
            timeout=settings.request_timeout,
            headers=settings.headers,
        )
        if settings.schema_id:
            session.set_schema_id(settings.schema_id)
        return session

    async def close(self) -> None:
        """Close the HTTP connection."""
        await self._client.close()

    async def __aenter__(self) -> Session:
        await self._client.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # Configuration

    @property
    def key_pair(self) -> KeyPair:
        """Configured key pair, raises ConfigurationError if unset."""
        return resolve_option(None, self._key_pair, "key_pair")

    def set_key_pair(self, key_pair: KeyPair) -> Session:
        """Set a fixed key pair for this session.

        This does not check the integrity of the supplied key pair.
        """
        self._key_pair = key_pair
        return self

    @property
    def schema_id(self) -> str:
        """Configured schema id, raises ConfigurationError if unset."""
        schema = resolve_option(None, self._schema, "schema_id")
        return schema.schema_id if isinstance(schema, SchemaDef) else schema

    def set_schema_id(self, schema: SchemaLike) -> Session:
        """Set a fixed schema for this session.

        A SchemaDef also enables field validation and typing.
        """
        self._schema = schema
        return self

    @property
    def cache(self) -> ArgumentCache[EntryArgs]:
        return self._cache

    # Low-level API

    async def next_args(
        self,
        public_key: str,
        view_id: ViewIdLike | None = None,
    ) -> EntryArgs:
        """Return arguments for constructing the next entry.

        Uses the cache filled by `publish()` when view_id is set.

        Args:
            public_key: Public key of the author
            view_id: Optional document view id

        Returns:
            EntryArgs for the next entry
        """
        return await self._resolver.next_args(public_key, view_id)

    async def publish(self, entry: str, operation: str) -> DocumentViewId:
        """Publish an encoded entry and operation.

        Caches the returned next entry arguments under the local view id,
        namespaced by the public key of the session key pair.

        Returns:
            Local view id of the published operation
        """
        if not entry or not operation:
            raise InvalidArgumentError(
                "Encoded entry and operation must be provided",
                argument="entry" if not entry else "operation",
            )
        public_key = self.key_pair.public_key()
        return await self._publisher.publish(entry, operation, public_key)

    # Document operations

    async def create(
        self,
        fields: FieldsLike,
        *,
        key_pair: KeyPair | None = None,
        schema_id: SchemaLike | None = None,
    ) -> DocumentViewId:
        """Sign and publish a CREATE operation.

        Args:
            fields: Application data, needs to match the schema
            key_pair: Key pair signing the entry (defaults to session key pair)
            schema_id: Schema id or SchemaDef (defaults to session schema)

        Returns:
            View id of the new document, which is also its document id

        Example:
            >>> await session.create({"message": "ahoy"}, schema_id=chat)
        """
        if not fields:
            raise InvalidArgumentError("Operation fields must be provided", argument="fields")

        logger.debug(f"Create document {fields}")
        return await self._publish_operation(
            OperationAction.CREATE,
            fields=fields,
            previous=None,
            key_pair=key_pair,
            schema=schema_id,
        )

    async def update(
        self,
        fields: FieldsLike,
        previous: ViewIdLike,
        *,
        key_pair: KeyPair | None = None,
        schema_id: SchemaLike | None = None,
    ) -> DocumentViewId:
        """Sign and publish an UPDATE operation.

        Args:
            fields: Changed application data, needs to match the schema
            previous: View id of the document state being updated, one
                operation id per un-merged branch tip
            key_pair: Key pair signing the entry (defaults to session key pair)
            schema_id: Schema id or SchemaDef (defaults to session schema)

        Returns:
            Local view id of the updated document
        """
        if not previous:
            raise InvalidArgumentError("Previous view id must be provided", argument="previous")
        if not fields:
            raise InvalidArgumentError("Operation fields must be provided", argument="fields")

        logger.debug(f"Update document view {previous} with {fields}")
        return await self._publish_operation(
            OperationAction.UPDATE,
            fields=fields,
            previous=DocumentViewId.from_value(previous),
            key_pair=key_pair,
            schema=schema_id,
        )

    async def delete(
        self,
        previous: ViewIdLike,
        *,
        key_pair: KeyPair | None = None,
        schema_id: SchemaLike | None = None,
    ) -> DocumentViewId:
        """Sign and publish a DELETE operation.

        Args:
            previous: View id of the document state being deleted
            key_pair: Key pair signing the entry (defaults to session key pair)
            schema_id: Schema id or SchemaDef (defaults to session schema)

        Returns:
            Local view id of the deleted document
        """
        if not previous:
            raise InvalidArgumentError("Previous view id must be provided", argument="previous")

        logger.debug(f"Delete document view {previous}")
        return await self._publish_operation(
            OperationAction.DELETE,
            fields=None,
            previous=DocumentViewId.from_value(previous),
            key_pair=key_pair,
            schema=schema_id,
        )

    async def _publish_operation(
        self,
        action: OperationAction,
        *,
        fields: FieldsLike | None,
        previous: DocumentViewId | None,
        key_pair: KeyPair | None,
        schema: SchemaLike | None,
    ) -> DocumentViewId:
        """Resolve entry args, sign and publish one operation."""
        key_pair = resolve_option(key_pair, self._key_pair, "key_pair")
        schema = resolve_option(schema, self._schema, "schema_id")

        if isinstance(schema, SchemaDef):
            schema_def: SchemaDef | None = schema
            schema_id = schema.schema_id
        else:
            schema_def = None
            schema_id = schema

        operation_fields: OperationFields | None = None
        if fields is not None:
            if isinstance(fields, OperationFields):
                operation_fields = fields
            else:
                operation_fields = marshall_fields(
                    fields,
                    schema_def,
                    partial=action == OperationAction.UPDATE,
                )

        args = OperationArgs(schema_id=schema_id, fields=operation_fields, previous=previous)
        args.check(action)

        public_key = key_pair.public_key()
        entry_args, cached_key = await self._resolver.resolve(public_key, previous)
        try:
            signed = self._builder.build(action, args, entry_args, key_pair)
            view_id = await self._publisher.publish(signed.entry, signed.operation, public_key)
        except BaseException:
            if cached_key is not None:
                self._resolver.restore(cached_key, entry_args)
            raise
        logger.debug(f"{action.value} published, local view id {view_id}")
        return view_id

    def __repr__(self) -> str:
        key_pair_str = ""
        if self._key_pair is not None:
            key_pair_str = f" key pair {self._key_pair.public_key()[-8:]}"
        schema_str = ""
        if self._schema is not None:
            schema_str = f" schema {self.schema_id[-8:]}"
        return f"<Session {self.endpoint}{key_pair_str}{schema_str}>"
