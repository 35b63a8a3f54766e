"""Shared error taxonomy for cache backends."""


class CacheError(Exception):
    """Base class for errors raised by cacheport."""


class CacheMissError(CacheError):
    """The requested key does not exist in the backend."""

    def __init__(self, message: str = "cache: miss"):
        super().__init__(message)


class NotStoredError(CacheError):
    """A conditional write was rejected by the backend."""

    def __init__(self, message: str = "cache: not stored"):
        super().__init__(message)


class DecodeError(CacheError, ValueError):
    """Stored bytes could not be converted to the requested type."""


# Every backend normalizes its driver's miss / not-stored signals onto
# these instances, so callers may compare Item.err with `is`. They are
# never raised directly; raise a new instance or raisable(err).
ERR_CACHE_MISS = CacheMissError()
ERR_NOT_STORED = NotStoredError()


def raisable(err: BaseException) -> BaseException:
    """Return a fresh exception to raise in place of a shared sentinel."""
    if err is ERR_CACHE_MISS:
        return CacheMissError()
    if err is ERR_NOT_STORED:
        return NotStoredError()
    return err
