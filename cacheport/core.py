"""Module-level access to the configured default cache."""

import logging
from typing import Any

from .backends import Cache
from .backends.base import Expire
from .config import get_config
from .item import Item

logger = logging.getLogger(__name__)


def get_cache() -> Cache:
    """Return the configured default cache backend."""
    return get_config().get_backend()


def get(key: str) -> Item:
    """Get the item for key from the default cache."""
    config = get_config()
    item = config.get_backend().get(key)

    if config.debug:
        if item.hit:
            logger.info(f"Cache hit: {key}")
        else:
            logger.info(f"Cache miss: {key} ({item.err})")

    return item


def get_multi(*keys: str) -> list[Item]:
    """Get one item per key from the default cache."""
    config = get_config()
    items = config.get_backend().get_multi(*keys)

    if config.debug:
        hits = sum(1 for item in items if item.hit)
        logger.info(f"Cache get_multi: {hits}/{len(keys)} hits")

    return items


def set(key: str, value: Any, expire: Expire = 0) -> None:
    """Set key in the default cache."""
    config = get_config()
    config.get_backend().set(key, value, expire)

    if config.debug:
        logger.info(f"Cached value: {key}")


def add(key: str, value: Any, expire: Expire = 0) -> None:
    """Add key to the default cache if it does not exist."""
    config = get_config()
    config.get_backend().add(key, value, expire)

    if config.debug:
        logger.info(f"Added value: {key}")


def replace(key: str, value: Any, expire: Expire = 0) -> None:
    """Replace key in the default cache if it exists."""
    config = get_config()
    config.get_backend().replace(key, value, expire)

    if config.debug:
        logger.info(f"Replaced value: {key}")


def delete(key: str) -> None:
    """Delete key from the default cache."""
    config = get_config()
    config.get_backend().delete(key)

    if config.debug:
        logger.info(f"Deleted: {key}")


def inc(key: str, delta: int = 1) -> int:
    """Increment key in the default cache."""
    config = get_config()
    n = config.get_backend().inc(key, delta)

    if config.debug:
        logger.info(f"Incremented: {key} -> {n}")

    return n


def dec(key: str, delta: int = 1) -> int:
    """Decrement key in the default cache."""
    config = get_config()
    n = config.get_backend().dec(key, delta)

    if config.debug:
        logger.info(f"Decremented: {key} -> {n}")

    return n
