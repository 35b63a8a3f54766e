"""Disk-based cache backend using diskcache."""

import logging
import time
from pathlib import Path
from typing import Any

import diskcache

from ..decoder import INT64_MAX, INT64_MIN, StringDecoder
from ..errors import ERR_CACHE_MISS, NotStoredError
from ..item import Item
from ..serializers import encode_value
from .base import Cache, Expire, check_delta, expire_seconds

logger = logging.getLogger(__name__)


class DiskCache(Cache):
    """
    Disk-based cache backend using diskcache.

    Semantics match the memory backend: deleting an absent key succeeds,
    and inc/dec treat an absent key as 0.
    """

    def __init__(self, cache_dir: str = "./.cache"):
        """Initialize disk cache backend."""
        self.cache_dir = cache_dir
        Path(cache_dir).mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(cache_dir)
        self._decoder = StringDecoder()
        logger.debug(f"Disk cache opened at {cache_dir}")

    @staticmethod
    def _expire(expire: Expire) -> float | None:
        seconds = expire_seconds(expire)
        return seconds or None

    def get(self, key: str) -> Item:
        try:
            raw = self._cache.get(key)
        except (diskcache.Timeout, OSError) as e:
            logger.warning(f"Disk cache read failed for {key}: {e}")
            return Item(self._decoder, None, e)

        if raw is None:
            return Item(self._decoder, None, ERR_CACHE_MISS)
        return Item(self._decoder, raw)

    def get_multi(self, *keys: str) -> list[Item]:
        items = []
        with self._cache.transact():
            for key in keys:
                raw = self._cache.get(key)
                if raw is None:
                    items.append(Item(self._decoder, None, ERR_CACHE_MISS))
                else:
                    items.append(Item(self._decoder, raw))
        return items

    def set(self, key: str, value: Any, expire: Expire = 0) -> None:
        self._cache.set(key, encode_value(value), expire=self._expire(expire))

    def add(self, key: str, value: Any, expire: Expire = 0) -> None:
        if not self._cache.add(key, encode_value(value), expire=self._expire(expire)):
            raise NotStoredError()

    def replace(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        with self._cache.transact():
            if key not in self._cache:
                raise NotStoredError()
            self._cache.set(key, b, expire=self._expire(expire))

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def inc(self, key: str, delta: int = 1) -> int:
        return self._adjust(key, check_delta(delta))

    def dec(self, key: str, delta: int = 1) -> int:
        return self._adjust(key, -check_delta(delta))

    def _adjust(self, key: str, delta: int) -> int:
        with self._cache.transact():
            raw, expire_time = self._cache.get(key, expire_time=True)
            current = 0 if raw is None else self._decoder.as_int64(raw)
            n = current + delta
            if not INT64_MIN <= n <= INT64_MAX:
                raise ValueError(f"increment or decrement would overflow: {key}")

            # Keep whatever lifetime the key had left
            expire = None
            if expire_time is not None:
                expire = max(expire_time - time.time(), 0)
            self._cache.set(key, encode_value(n), expire=expire)
            return n

    def close(self) -> None:
        """Close the underlying diskcache handle."""
        self._cache.close()

    def __del__(self):
        """Close the cache when the object is destroyed."""
        if hasattr(self, "_cache"):
            self._cache.close()
