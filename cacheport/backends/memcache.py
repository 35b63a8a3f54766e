"""Memcache cache backend using pymemcache."""

import logging
from typing import Any

from pymemcache.client.base import PooledClient
from pymemcache.client.hash import HashClient
from pymemcache.exceptions import MemcacheError

from ..decoder import StringDecoder
from ..errors import ERR_CACHE_MISS, CacheMissError, NotStoredError
from ..item import Item
from ..serializers import encode_value
from .base import Cache, Expire, check_delta, expire_seconds

logger = logging.getLogger(__name__)


class MemcacheCache(Cache):
    """
    Memcache cache backend.

    Deleting an absent key raises CacheMissError, as does inc/dec of an
    absent key. inc/dec of a non-numeric value raises the driver's
    MemcacheClientError, and dec never goes below 0.
    """

    def __init__(
        self,
        servers: str | list[str],
        *,
        idle_conns: int | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
    ):
        """Initialize memcache backend for one or more "host:port" servers."""
        if isinstance(servers, str):
            servers = [s.strip() for s in servers.split(",") if s.strip()]
        if not servers:
            raise ValueError("At least one memcache server is required")

        self.servers = list(servers)

        # Conditional writes only report NOT_STORED when a reply is awaited
        kwargs: dict[str, Any] = {
            "connect_timeout": connect_timeout,
            "timeout": timeout,
            "default_noreply": False,
        }
        if idle_conns is not None:
            kwargs["max_pool_size"] = idle_conns

        if len(self.servers) == 1:
            self._client = PooledClient(self.servers[0], **kwargs)
        else:
            self._client = HashClient(self.servers, use_pooling=True, **kwargs)
        self._decoder = StringDecoder()
        logger.debug(f"Memcache backend created for {', '.join(self.servers)}")

    def get(self, key: str) -> Item:
        try:
            raw = self._client.get(key)
        except (MemcacheError, OSError) as e:
            logger.warning(f"Memcache get failed for {key}: {e}")
            return Item(self._decoder, None, e)

        if raw is None:
            return Item(self._decoder, None, ERR_CACHE_MISS)
        return Item(self._decoder, raw)

    def get_multi(self, *keys: str) -> list[Item]:
        if not keys:
            return []

        found = self._client.get_many(list(keys))

        items = []
        for key in keys:
            raw = found.get(key)
            if raw is None:
                items.append(Item(self._decoder, None, ERR_CACHE_MISS))
            else:
                items.append(Item(self._decoder, raw))
        return items

    def set(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        if not self._client.set(key, b, expire=int(expire_seconds(expire))):
            raise NotStoredError()

    def add(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        if not self._client.add(key, b, expire=int(expire_seconds(expire))):
            raise NotStoredError()

    def replace(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        if not self._client.replace(key, b, expire=int(expire_seconds(expire))):
            raise NotStoredError()

    def delete(self, key: str) -> None:
        if not self._client.delete(key):
            raise CacheMissError()

    def inc(self, key: str, delta: int = 1) -> int:
        n = self._client.incr(key, check_delta(delta), noreply=False)
        if n is None:
            raise CacheMissError()
        return int(n)

    def dec(self, key: str, delta: int = 1) -> int:
        n = self._client.decr(key, check_delta(delta), noreply=False)
        if n is None:
            raise CacheMissError()
        return int(n)

    def close(self) -> None:
        """Close all pooled connections."""
        self._client.close()
