"""Abstract base class for cache backends."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

from ..item import Item

Expire = int | float | timedelta | None


def expire_seconds(expire: Expire) -> float:
    """Normalize an expiration to seconds, 0 meaning no expiration."""
    if expire is None:
        return 0
    if isinstance(expire, timedelta):
        expire = expire.total_seconds()
    if expire < 0:
        raise ValueError(f"expire must not be negative, got {expire}")
    return expire


def check_delta(delta: int) -> int:
    """Validate an inc/dec amount, which is unsigned like the memcache protocol."""
    if delta < 0:
        raise ValueError(f"delta must not be negative, got {delta}")
    return delta


class Cache(ABC):
    """
    The operation set every cache backend implements.

    Reads never raise for fetch failures: a miss or a transport error is
    carried in the returned Item. Writes raise NotStoredError for rejected
    conditional writes and let every other driver error propagate.
    """

    @abstractmethod
    def get(self, key: str) -> Item:
        """Get the item for the given key."""
        pass

    @abstractmethod
    def get_multi(self, *keys: str) -> list[Item]:
        """Get one item per key, in the order the keys were given."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any, expire: Expire = 0) -> None:
        """Set the value for the given key."""
        pass

    @abstractmethod
    def add(self, key: str, value: Any, expire: Expire = 0) -> None:
        """Set the value only if the key does not already exist."""
        pass

    @abstractmethod
    def replace(self, key: str, value: Any, expire: Expire = 0) -> None:
        """Set the value only if the key already exists."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the given key."""
        pass

    @abstractmethod
    def inc(self, key: str, delta: int = 1) -> int:
        """Increment a key by delta and return the new value."""
        pass

    @abstractmethod
    def dec(self, key: str, delta: int = 1) -> int:
        """Decrement a key by delta and return the new value."""
        pass

    def close(self) -> None:
        """Release any connections held by the backend."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
