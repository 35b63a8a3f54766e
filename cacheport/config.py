"""Configuration system for cacheport."""

import os
from dataclasses import dataclass, field
from typing import Any

from .backends import (
    Cache,
    DiskCache,
    MemcacheCache,
    MemoryCache,
    NullCache,
    RedisCache,
)


@dataclass
class CacheConfig:
    """Configuration for the default cache backend."""

    enabled: bool = True
    backend: str = "memory"
    cache_dir: str = "./.cache"
    debug: bool = False

    # Backend-specific settings
    memcache_servers: str = "localhost:11211"
    redis_url: str = "redis://localhost:6379/0"
    pool_size: int | None = None
    timeout: float | None = None

    # Internal
    _backend_instance: Cache | None = field(default=None, init=False)

    def __post_init__(self):
        """Load configuration from environment variables."""
        self.enabled = self._get_bool_env("CACHEPORT_ENABLED", self.enabled)
        self.backend = os.getenv("CACHEPORT_BACKEND", self.backend)
        self.cache_dir = os.getenv("CACHEPORT_CACHE_DIR", self.cache_dir)
        self.debug = self._get_bool_env("CACHEPORT_DEBUG", self.debug)

        # Backend-specific settings
        self.memcache_servers = os.getenv(
            "CACHEPORT_MEMCACHE_SERVERS", self.memcache_servers
        )
        self.redis_url = os.getenv("CACHEPORT_REDIS_URL", self.redis_url)
        self.pool_size = self._get_int_env("CACHEPORT_POOL_SIZE", self.pool_size)
        self.timeout = self._get_float_env("CACHEPORT_TIMEOUT", self.timeout)

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean value from environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("true", "1", "yes", "on")

    def _get_int_env(self, key: str, default: int | None) -> int | None:
        """Get integer value from environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float_env(self, key: str, default: float | None) -> float | None:
        """Get float value from environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def get_backend(self) -> Cache:
        """Get or create the cache backend instance."""
        if self._backend_instance is None:
            if not self.enabled:
                self._backend_instance = NullCache()
            else:
                self._backend_instance = create_backend(
                    self.backend,
                    cache_dir=self.cache_dir,
                    memcache_servers=self.memcache_servers,
                    redis_url=self.redis_url,
                    pool_size=self.pool_size,
                    timeout=self.timeout,
                )
        return self._backend_instance

    def reset_backend(self) -> None:
        """Close and forget the backend instance (useful for testing)."""
        if self._backend_instance is not None:
            self._backend_instance.close()
        self._backend_instance = None


def create_backend(backend: str, **kwargs: Any) -> Cache:
    """Create a cache backend instance based on configuration."""
    if backend == "null":
        return NullCache()
    elif backend == "memory":
        return MemoryCache()
    elif backend == "disk":
        return DiskCache(cache_dir=kwargs.get("cache_dir", "./.cache"))
    elif backend == "memcache":
        return MemcacheCache(
            kwargs.get("memcache_servers", "localhost:11211"),
            idle_conns=kwargs.get("pool_size"),
            timeout=kwargs.get("timeout"),
            connect_timeout=kwargs.get("timeout"),
        )
    elif backend == "redis":
        return RedisCache(
            kwargs.get("redis_url", "redis://localhost:6379/0"),
            pool_size=kwargs.get("pool_size"),
            read_timeout=kwargs.get("timeout"),
            connect_timeout=kwargs.get("timeout"),
        )
    else:
        raise ValueError(f"Unknown backend: {backend}")


# Global configuration instance
_config = CacheConfig()

_BACKEND_KEYS = (
    "enabled",
    "backend",
    "cache_dir",
    "memcache_servers",
    "redis_url",
    "pool_size",
    "timeout",
)


def configure(**kwargs: Any) -> None:
    """Update global cache configuration."""
    for key in kwargs:
        if key.startswith("_") or not hasattr(_config, key):
            raise ValueError(f"Unknown configuration key: {key}")

    # Reset backend if backend-related settings changed
    if any(key in kwargs for key in _BACKEND_KEYS):
        _config.reset_backend()

    for key, value in kwargs.items():
        setattr(_config, key, value)


def get_config() -> CacheConfig:
    """Get current global configuration."""
    return _config


def reset_config() -> None:
    """Reset configuration to defaults (useful for testing)."""
    global _config  # noqa: PLW0603
    _config.reset_backend()
    _config = CacheConfig()
