"""In-memory cache backend."""

import logging
import threading
import time
from typing import Any

from ..decoder import INT64_MAX, INT64_MIN, StringDecoder
from ..errors import ERR_CACHE_MISS, NotStoredError
from ..item import Item
from ..serializers import encode_value
from .base import Cache, Expire, check_delta, expire_seconds

logger = logging.getLogger(__name__)


class MemoryCache(Cache):
    """
    In-process cache backend.

    Values are stored encoded, exactly as a network backend would store
    them. Deleting an absent key succeeds, and inc/dec treat an absent key
    as 0.
    """

    def __init__(self):
        """Initialize memory cache backend."""
        self._cache: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._decoder = StringDecoder()

    def _lookup(self, key: str) -> bytes | None:
        """Return the stored bytes for key, dropping the entry if expired."""
        entry = self._cache.get(key)
        if entry is None:
            return None

        # Check if expired
        if entry.get("expires") and time.time() > entry["expires"]:
            del self._cache[key]
            return None

        return entry["value"]

    def _store(self, key: str, value: bytes, expire: Expire) -> None:
        entry: dict[str, Any] = {"value": value}
        seconds = expire_seconds(expire)
        if seconds:
            entry["expires"] = time.time() + seconds
        self._cache[key] = entry

    def get(self, key: str) -> Item:
        with self._lock:
            raw = self._lookup(key)
        if raw is None:
            return Item(self._decoder, None, ERR_CACHE_MISS)
        return Item(self._decoder, raw)

    def get_multi(self, *keys: str) -> list[Item]:
        return [self.get(key) for key in keys]

    def set(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        with self._lock:
            self._store(key, b, expire)

    def add(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        with self._lock:
            if self._lookup(key) is not None:
                raise NotStoredError()
            self._store(key, b, expire)

    def replace(self, key: str, value: Any, expire: Expire = 0) -> None:
        b = encode_value(value)
        with self._lock:
            if self._lookup(key) is None:
                raise NotStoredError()
            self._store(key, b, expire)

    def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def inc(self, key: str, delta: int = 1) -> int:
        return self._adjust(key, check_delta(delta))

    def dec(self, key: str, delta: int = 1) -> int:
        return self._adjust(key, -check_delta(delta))

    def _adjust(self, key: str, delta: int) -> int:
        with self._lock:
            raw = self._lookup(key)
            current = 0 if raw is None else self._decoder.as_int64(raw)
            n = current + delta
            if not INT64_MIN <= n <= INT64_MAX:
                raise ValueError(f"increment or decrement would overflow: {key}")

            entry = self._cache.get(key)
            if entry is None:
                self._cache[key] = {"value": encode_value(n)}
            else:
                # Keep the existing expiry, like INCRBY does
                entry["value"] = encode_value(n)
            return n

    def close(self) -> None:
        """Drop every stored entry."""
        with self._lock:
            self._cache.clear()
        logger.debug("Memory cache closed")
