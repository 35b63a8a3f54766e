"""Pytest configuration and fixtures for cacheport tests."""

import shutil
import socket
import tempfile

import pytest

from cacheport.backends.disk import DiskCache
from cacheport.backends.memory import MemoryCache
from cacheport.config import configure, reset_config

MEMCACHE_SERVER = ("localhost", 11211)
REDIS_SERVER = ("localhost", 6379)


def server_available(address: tuple[str, int]) -> bool:
    """Check whether something is listening on address."""
    try:
        with socket.create_connection(address, timeout=0.5):
            return True
    except OSError:
        return False


@pytest.fixture(autouse=True)
def reset_cache_config():
    """Reset cache configuration before each test."""
    reset_config()
    # Use memory backend for testing to avoid persistent cache
    configure(backend="memory")
    yield
    reset_config()


@pytest.fixture
def memory_cache():
    """Provide a fresh memory backend for testing."""
    return MemoryCache()


@pytest.fixture
def temp_cache_dir():
    """Provide a temporary directory for disk cache tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def disk_cache(temp_cache_dir):
    """Provide a disk backend with temporary directory."""
    cache = DiskCache(cache_dir=temp_cache_dir)
    yield cache
    cache.close()


@pytest.fixture(params=["memory", "disk"])
def local_cache(request, temp_cache_dir):
    """Provide each local backend in turn."""
    if request.param == "memory":
        yield MemoryCache()
    else:
        cache = DiskCache(cache_dir=temp_cache_dir)
        yield cache
        cache.close()
