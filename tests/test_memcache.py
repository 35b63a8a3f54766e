"""Tests for the memcache backend."""

from unittest.mock import MagicMock, patch

import pytest
from pymemcache.client.base import PooledClient
from pymemcache.client.hash import HashClient
from pymemcache.exceptions import MemcacheClientError, MemcacheUnexpectedCloseError

from cacheport.backends.base import Cache
from cacheport.backends.memcache import MemcacheCache
from cacheport.errors import ERR_CACHE_MISS, ERR_NOT_STORED, CacheMissError, NotStoredError

from conftest import MEMCACHE_SERVER, server_available


@pytest.fixture
def cache():
    """Provide a memcache backend whose driver is a mock."""
    c = MemcacheCache("localhost:11211")
    c._client = MagicMock()
    return c


class TestMemcacheConstruction:
    """Test building the driver from options."""

    def test_single_server_uses_pooled_client(self):
        c = MemcacheCache("localhost:11211")

        assert isinstance(c._client, PooledClient)
        assert c.servers == ["localhost:11211"]

    def test_multiple_servers_use_hash_client(self):
        c = MemcacheCache(["host1:11211", "host2:11211"])

        assert isinstance(c._client, HashClient)

    def test_comma_separated_servers(self):
        c = MemcacheCache("host1:11211, host2:11211")

        assert c.servers == ["host1:11211", "host2:11211"]

    def test_options_passed_to_driver(self):
        with patch("cacheport.backends.memcache.PooledClient") as mock_cls:
            MemcacheCache("localhost:11211", idle_conns=12, timeout=1.5, connect_timeout=2)

        mock_cls.assert_called_once_with(
            "localhost:11211",
            connect_timeout=2,
            timeout=1.5,
            default_noreply=False,
            max_pool_size=12,
        )

    def test_no_servers(self):
        with pytest.raises(ValueError):
            MemcacheCache([])
        with pytest.raises(ValueError):
            MemcacheCache("")


class TestMemcacheMapping:
    """Test translation of driver results onto the contract."""

    def test_get_hit(self, cache):
        cache._client.get.return_value = b"foobar"

        assert cache.get("test").as_string() == "foobar"
        cache._client.get.assert_called_once_with("test")

    def test_get_miss(self, cache):
        cache._client.get.return_value = None

        assert cache.get("test").err is ERR_CACHE_MISS

    def test_get_carries_driver_error(self, cache):
        err = MemcacheUnexpectedCloseError()
        cache._client.get.side_effect = err

        item = cache.get("test")

        assert item.err is err
        with pytest.raises(MemcacheUnexpectedCloseError):
            item.as_string()

    def test_get_carries_socket_error(self, cache):
        cache._client.get.side_effect = ConnectionRefusedError()

        assert isinstance(cache.get("test").err, ConnectionRefusedError)

    def test_get_multi(self, cache):
        cache._client.get_many.return_value = {"b": b"2", "a": b"1"}

        items = cache.get_multi("a", "b", "_")

        cache._client.get_many.assert_called_once_with(["a", "b", "_"])
        assert [i.as_string() for i in items[:2]] == ["1", "2"]
        assert items[2].err is ERR_CACHE_MISS

    def test_get_multi_batch_error(self, cache):
        cache._client.get_many.side_effect = ConnectionResetError()

        with pytest.raises(ConnectionResetError):
            cache.get_multi("a")

    def test_get_multi_no_keys(self, cache):
        assert cache.get_multi() == []
        cache._client.get_many.assert_not_called()

    def test_set_encodes_value(self, cache):
        cache._client.set.return_value = True

        cache.set("k", 1.5, 10)

        cache._client.set.assert_called_once_with("k", b"1.500000", expire=10)

    def test_set_encode_error_skips_driver(self, cache):
        with pytest.raises(TypeError):
            cache.set("k", object())

        cache._client.set.assert_not_called()

    def test_add_not_stored(self, cache):
        cache._client.add.return_value = False

        with pytest.raises(NotStoredError) as exc_info:
            cache.add("k", "v")
        assert exc_info.value is not ERR_NOT_STORED

    def test_replace_not_stored(self, cache):
        cache._client.replace.return_value = False

        with pytest.raises(NotStoredError):
            cache.replace("k", "v")

    def test_replace_stored(self, cache):
        cache._client.replace.return_value = True

        cache.replace("k", True, 2.9)

        cache._client.replace.assert_called_once_with("k", b"1", expire=2)

    def test_delete_absent(self, cache):
        cache._client.delete.return_value = False

        with pytest.raises(CacheMissError):
            cache.delete("k")

    def test_inc(self, cache):
        cache._client.incr.return_value = 2

        assert cache.inc("n", 1) == 2
        cache._client.incr.assert_called_once_with("n", 1, noreply=False)

    def test_inc_absent(self, cache):
        cache._client.incr.return_value = None

        with pytest.raises(CacheMissError):
            cache.inc("n", 1)

    def test_dec_absent(self, cache):
        cache._client.decr.return_value = None

        with pytest.raises(CacheMissError):
            cache.dec("n", 1)

    def test_inc_non_numeric_propagates(self, cache):
        cache._client.incr.side_effect = MemcacheClientError("non-numeric value")

        with pytest.raises(MemcacheClientError):
            cache.inc("n", 1)

    def test_negative_delta_rejected(self, cache):
        with pytest.raises(ValueError):
            cache.inc("n", -1)
        with pytest.raises(ValueError):
            cache.dec("n", -1)

        cache._client.incr.assert_not_called()
        cache._client.decr.assert_not_called()

    def test_close(self, cache):
        cache.close()

        cache._client.close.assert_called_once()


@pytest.mark.skipif(
    not server_available(MEMCACHE_SERVER),
    reason="no running memcache server at localhost:11211",
)
class TestMemcacheLive:
    """Run the contract scenario against a real memcache server."""

    def test_memcache_cache(self):
        c = MemcacheCache("localhost:11211")

        assert isinstance(c, Cache)

        # Set
        c.set("test", "foobar", 0)

        # Get
        assert c.get("test").as_string() == "foobar"
        assert c.get("_").err is ERR_CACHE_MISS

        # Add
        if c.get("test1").hit:
            c.delete("test1")
        c.add("test1", "foobar", 0)
        with pytest.raises(NotStoredError):
            c.add("test1", "foobar", 0)

        # Replace
        c.replace("test1", "foobar", 0)
        with pytest.raises(NotStoredError):
            c.replace("_", "foobar", 0)

        # GetMulti
        items = c.get_multi("test", "test1", "_")
        assert len(items) == 3
        assert items[2].err is ERR_CACHE_MISS

        # Delete
        c.delete("test1")
        assert c.get("test1").err is ERR_CACHE_MISS

        # Inc
        c.set("test2", 1, 0)
        assert c.inc("test2", 1) == 2

        # Dec
        c.set("test2", 1, 0)
        assert c.dec("test2", 1) == 0

        c.close()
