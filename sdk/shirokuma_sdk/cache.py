"""
Ephemeral cache for next entry arguments.

Entries are inserted after a successful publish and consumed by the next
operation on the same document view. There is no eviction, size bound or
TTL: an entry lives until it is taken or the owning Session goes away.

Invariants:
    - take() returns a value at most once per insert
    - Keys are namespaced by public key
    - Not synchronised, one Session issues mutating calls sequentially
"""

from __future__ import annotations

from typing import Generic, TypeVar

from .types import DocumentViewId

T = TypeVar("T")


def cache_key(public_key: str, view_id: DocumentViewId | str) -> str:
    """Build the cache key for an author and document view."""
    return f"{public_key}/{view_id}"


class ArgumentCache(Generic[T]):
    """Process-local key value store with single-use reads.

    Example:
        >>> cache = ArgumentCache()
        >>> cache.insert("key", args)
        >>> cache.take("key") is args
        True
        >>> cache.take("key") is None
        True
    """

    def __init__(self) -> None:
        self._storage: dict[str, T] = {}

    def insert(self, key: str, value: T) -> None:
        """Insert or replace a value."""
        self._storage[key] = value

    def get(self, key: str) -> T | None:
        """Return the value for key without removing it."""
        return self._storage.get(key)

    def remove(self, key: str) -> None:
        """Remove key if present."""
        self._storage.pop(key, None)

    def take(self, key: str) -> T | None:
        """Return the value for key and remove it."""
        return self._storage.pop(key, None)

    def clear(self) -> None:
        """Drop all entries."""
        self._storage.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._storage

    def __len__(self) -> int:
        return len(self._storage)
