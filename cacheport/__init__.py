"""cacheport - one cache contract over memcache, Redis and local stores."""

__version__ = "0.1.0"

# Backends
from .backends import (
    NULL,
    Cache,
    DiskCache,
    MemcacheCache,
    MemoryCache,
    NullCache,
    RedisCache,
)

# Configuration
from .config import configure, create_backend, get_config, reset_config
from .core import get_cache

# Core types
from .decoder import Decoder, StringDecoder
from .errors import (
    ERR_CACHE_MISS,
    ERR_NOT_STORED,
    CacheError,
    CacheMissError,
    DecodeError,
    NotStoredError,
)
from .item import Item

# Utilities
from .serializers import encode_value

__all__ = [
    "ERR_CACHE_MISS",
    "ERR_NOT_STORED",
    "NULL",
    # Backends
    "Cache",
    # Errors
    "CacheError",
    "CacheMissError",
    # Core types
    "DecodeError",
    "Decoder",
    "DiskCache",
    "Item",
    "MemcacheCache",
    "MemoryCache",
    "NotStoredError",
    "NullCache",
    "RedisCache",
    "StringDecoder",
    # Configuration
    "configure",
    "create_backend",
    "encode_value",
    "get_cache",
    "get_config",
    "reset_config",
]
