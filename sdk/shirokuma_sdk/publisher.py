"""
Publishing of signed entries.

After the node accepts an entry, the arguments it returns for the next entry
are cached under the local view id, the hash of the published entry. A
follow-up operation on that view then skips the `nextArgs` query.
"""

from __future__ import annotations

import logging

from ._graphql_client import GraphQLClient
from .cache import ArgumentCache, cache_key
from .engine import SigningEngine
from .errors import InvalidArgumentError
from .types import DocumentViewId, EntryArgs

logger = logging.getLogger(__name__)


class Publisher:
    """Send entries to the node and cache the arguments for the next one."""

    def __init__(
        self,
        client: GraphQLClient,
        cache: ArgumentCache[EntryArgs],
        engine: SigningEngine,
    ) -> None:
        self._client = client
        self._cache = cache
        self._engine = engine

    async def publish(
        self,
        entry: str,
        operation: str,
        public_key: str,
    ) -> DocumentViewId:
        """Publish an encoded entry and operation.

        Args:
            entry: Hex-encoded signed entry
            operation: Hex-encoded operation
            public_key: Public key of the active key pair

        Returns:
            Local view id of the published operation

        Raises:
            InvalidArgumentError: If entry or operation is empty
            TransportError: If the mutation fails, nothing is cached then
        """
        if not entry or not operation:
            raise InvalidArgumentError(
                "Encoded entry and operation must be provided",
                argument="entry" if not entry else "operation",
            )
        if not public_key:
            raise InvalidArgumentError(
                "Author's public key must be provided",
                argument="public_key",
            )

        local_view_id = DocumentViewId((self._engine.generate_hash(entry),))

        next_args = await self._client.publish(entry, operation)
        logger.debug(f"Published entry {local_view_id}, next args {next_args}")

        self._cache.insert(cache_key(public_key, local_view_id), next_args)
        logger.debug(f"Cached next args for view {local_view_id}")

        return local_view_id
