"""Redis cache backend using redis-py."""

import logging
from typing import Any

import redis

from ..decoder import StringDecoder
from ..errors import ERR_CACHE_MISS, NotStoredError
from ..item import Item
from ..serializers import encode_value
from .base import Cache, Expire, check_delta, expire_seconds

logger = logging.getLogger(__name__)


class RedisCache(Cache):
    """
    Redis cache backend.

    Deleting an absent key succeeds. inc/dec treat an absent key as 0 and
    raise the driver's ResponseError for a non-numeric value.
    """

    def __init__(
        self,
        uri: str,
        *,
        pool_size: int | None = None,
        pool_timeout: float | None = None,
        read_timeout: float | None = None,
        write_timeout: float | None = None,
        connect_timeout: float | None = None,
    ):
        """
        Initialize redis backend from a redis://, rediss:// or unix:// URI.

        Raises ValueError when the URI cannot be parsed.
        """
        kwargs: dict[str, Any] = {"decode_responses": False}
        if pool_size is not None:
            kwargs["max_connections"] = pool_size
        # redis-py has a single socket timeout for reads and writes
        timeouts = [t for t in (read_timeout, write_timeout) if t is not None]
        if timeouts:
            kwargs["socket_timeout"] = max(timeouts)
        if connect_timeout is not None:
            kwargs["socket_connect_timeout"] = connect_timeout

        if pool_timeout is not None:
            pool = redis.BlockingConnectionPool.from_url(
                uri, timeout=pool_timeout, **kwargs
            )
        else:
            pool = redis.ConnectionPool.from_url(uri, **kwargs)

        self.uri = uri
        self._client = redis.Redis(connection_pool=pool)
        self._decoder = StringDecoder()
        logger.debug(f"Redis backend created for {uri}")

    @staticmethod
    def _px(expire: Expire) -> int | None:
        seconds = expire_seconds(expire)
        if not seconds:
            return None
        return max(int(seconds * 1000), 1)

    def get(self, key: str) -> Item:
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Redis get failed for {key}: {e}")
            return Item(self._decoder, None, e)

        if raw is None:
            return Item(self._decoder, None, ERR_CACHE_MISS)
        return Item(self._decoder, raw)

    def get_multi(self, *keys: str) -> list[Item]:
        if not keys:
            return []

        values = self._client.mget(keys)

        items = []
        for raw in values:
            if raw is None:
                items.append(Item(self._decoder, None, ERR_CACHE_MISS))
            else:
                items.append(Item(self._decoder, raw))
        return items

    def set(self, key: str, value: Any, expire: Expire = 0) -> None:
        self._client.set(key, encode_value(value), px=self._px(expire))

    def add(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        if not self._client.set(key, b, px=self._px(expire), nx=True):
            raise NotStoredError()

    def replace(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        if not self._client.set(key, b, px=self._px(expire), xx=True):
            raise NotStoredError()

    def delete(self, key: str) -> None:
        self._client.delete(key)

    def inc(self, key: str, delta: int = 1) -> int:
        return self._client.incrby(key, check_delta(delta))

    def dec(self, key: str, delta: int = 1) -> int:
        return self._client.decrby(key, check_delta(delta))

    def close(self) -> None:
        """Disconnect every pooled connection."""
        self._client.close()
        self._client.connection_pool.disconnect()
