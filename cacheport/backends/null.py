"""Storage-free cache backend."""

from typing import Any

from ..decoder import StringDecoder
from ..item import Item
from .base import Cache, Expire


class NullCache(Cache):
    """
    A cache that stores nothing.

    Every read succeeds and decodes to the zero value of the requested type,
    every write succeeds and is dropped. Use it to disable caching without
    touching call sites.
    """

    def __init__(self):
        """Initialize null cache backend."""
        self._decoder = StringDecoder()

    def get(self, key: str) -> Item:
        return Item(self._decoder)

    def get_multi(self, *keys: str) -> list[Item]:
        return [Item(self._decoder) for _ in keys]

    def set(self, key: str, value: Any, expire: Expire = 0) -> None:
        pass

    def add(self, key: str, value: Any, expire: Expire = 0) -> None:
        pass

    def replace(self, key: str, value: Any, expire: Expire = 0) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def inc(self, key: str, delta: int = 1) -> int:
        return 0

    def dec(self, key: str, delta: int = 1) -> int:
        return 0


NULL = NullCache()
