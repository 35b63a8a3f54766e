"""Cache backend implementations."""

from .base import Cache, expire_seconds
from .disk import DiskCache
from .memcache import MemcacheCache
from .memory import MemoryCache
from .null import NULL, NullCache
from .redis import RedisCache

__all__ = [
    "NULL",
    "Cache",
    "DiskCache",
    "MemcacheCache",
    "MemoryCache",
    "NullCache",
    "RedisCache",
    "expire_seconds",
]
