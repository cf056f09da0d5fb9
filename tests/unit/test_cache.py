"""
Unit tests for the entry argument cache.

Tests cover:
- Insert, get and remove
- Single-use take
- Cache key namespacing
"""

from shirokuma_sdk.cache import ArgumentCache, cache_key
from shirokuma_sdk.types import DocumentViewId, EntryArgs


class TestArgumentCache:
    """Tests for ArgumentCache."""

    def test_get_missing_returns_none(self):
        """Missing key returns None."""
        cache = ArgumentCache()
        assert cache.get("missing") is None

    def test_insert_and_get(self):
        """Inserted value can be read without removal."""
        cache = ArgumentCache()
        args = EntryArgs(log_id="0", seq_num="2", backlink="0020aa")

        cache.insert("key", args)

        assert cache.get("key") == args
        assert cache.get("key") == args
        assert "key" in cache

    def test_take_consumes_value(self):
        """take() returns the value exactly once."""
        cache = ArgumentCache()
        args = EntryArgs(log_id="0", seq_num="2")
        cache.insert("key", args)

        assert cache.take("key") == args
        assert cache.take("key") is None
        assert len(cache) == 0

    def test_insert_replaces(self):
        """Inserting twice keeps the latest value."""
        cache = ArgumentCache()
        cache.insert("key", EntryArgs(log_id="0", seq_num="2"))
        cache.insert("key", EntryArgs(log_id="0", seq_num="3"))

        assert cache.get("key").seq_num == "3"
        assert len(cache) == 1

    def test_remove(self):
        """remove() drops the key and tolerates missing keys."""
        cache = ArgumentCache()
        cache.insert("key", EntryArgs(log_id="0", seq_num="2"))

        cache.remove("key")
        cache.remove("key")

        assert "key" not in cache

    def test_clear(self):
        """clear() drops all entries."""
        cache = ArgumentCache()
        cache.insert("a", EntryArgs(log_id="0", seq_num="2"))
        cache.insert("b", EntryArgs(log_id="1", seq_num="2"))

        cache.clear()

        assert len(cache) == 0


class TestCacheKey:
    """Tests for cache_key."""

    def test_key_format(self):
        """Key joins public key and view id."""
        assert cache_key("abc", "0020ff") == "abc/0020ff"

    def test_key_uses_canonical_view_id(self):
        """Multi-id view ids produce the same key regardless of order."""
        a = cache_key("abc", DocumentViewId(("0020bb", "0020aa")))
        b = cache_key("abc", DocumentViewId(("0020aa", "0020bb")))
        assert a == b == "abc/0020aa_0020bb"

    def test_keys_namespaced_by_public_key(self):
        """Different authors never share a key."""
        assert cache_key("alice", "0020ff") != cache_key("bob", "0020ff")
