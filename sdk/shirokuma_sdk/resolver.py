"""
Resolution of next entry arguments.

Arguments for a follow-up operation on a document view this session just
published are served from the cache; everything else is asked from the node.

Invariants:
    - A cached value is returned at most once, unless restored after a failed use
    - A network answer is never written to the cache
    - Without a view id the node is always asked, log ids are not tracked locally
"""

from __future__ import annotations

import logging

from ._graphql_client import GraphQLClient
from .cache import ArgumentCache, cache_key
from .errors import InvalidArgumentError
from .types import DocumentViewId, EntryArgs, ViewIdLike

logger = logging.getLogger(__name__)


class NextArgsResolver:
    """Resolve entry arguments, preferring the session cache."""

    def __init__(
        self,
        client: GraphQLClient,
        cache: ArgumentCache[EntryArgs],
    ) -> None:
        self._client = client
        self._cache = cache

    async def next_args(
        self,
        public_key: str,
        view_id: ViewIdLike | None = None,
    ) -> EntryArgs:
        """Return arguments for the next entry of an author.

        Args:
            public_key: Public key of the author
            view_id: Optional document view the entry will follow

        Returns:
            EntryArgs for the next entry

        Raises:
            InvalidArgumentError: If public_key is empty
            TransportError: If the node query fails
        """
        args, _ = await self.resolve(public_key, view_id)
        return args

    async def resolve(
        self,
        public_key: str,
        view_id: ViewIdLike | None = None,
    ) -> tuple[EntryArgs, str | None]:
        """Like next_args(), also returning the cache key of a cache hit.

        The key is None when the arguments came from the node. Callers that
        fail to use cached arguments put them back with `restore()`.
        """
        if not public_key:
            raise InvalidArgumentError(
                "Author's public key must be provided",
                argument="public_key",
            )

        if not view_id:
            args = await self._client.next_args(public_key)
            logger.debug(f"Fetched next args for {public_key[-8:]}: {args}")
            return args, None

        view_id_str = str(DocumentViewId.from_value(view_id))
        key = cache_key(public_key, view_id_str)
        cached = self._cache.take(key)
        if cached is not None:
            logger.debug(f"Using cached next args for view {view_id_str}: {cached}")
            return cached, key

        args = await self._client.next_args(public_key, view_id_str)
        logger.debug(f"Fetched next args for view {view_id_str}: {args}")
        return args, None

    def restore(self, key: str, args: EntryArgs) -> None:
        """Put back cached arguments that were taken but not used."""
        self._cache.insert(key, args)
        logger.debug(f"Restored cached next args under {key}")
