"""Deferred-decode result of a cache read."""

from dataclasses import dataclass

from .decoder import Decoder
from .errors import raisable


@dataclass(frozen=True)
class Item:
    """
    A single key's fetch result.

    Decoding is deferred until a typed accessor is called. When ``err`` is
    set every accessor raises it without looking at ``raw``; a shared
    sentinel such as ERR_CACHE_MISS is raised as a fresh instance of its
    class. A ``raw`` of None with no error decodes to the zero value of
    each type.
    """

    decoder: Decoder
    raw: bytes | None = None
    err: BaseException | None = None

    @property
    def hit(self) -> bool:
        """True when the fetch carried no error."""
        return self.err is None

    def as_bool(self) -> bool:
        """Decode the item as a boolean."""
        self._raise_carried()
        if self.raw is None:
            return False
        return self.decoder.as_bool(self.raw)

    def as_bytes(self) -> bytes:
        """Decode the item as bytes."""
        self._raise_carried()
        if self.raw is None:
            return b""
        return self.decoder.as_bytes(self.raw)

    def as_int64(self) -> int:
        """Decode the item as a signed 64-bit integer."""
        self._raise_carried()
        if self.raw is None:
            return 0
        return self.decoder.as_int64(self.raw)

    def as_uint64(self) -> int:
        """Decode the item as an unsigned 64-bit integer."""
        self._raise_carried()
        if self.raw is None:
            return 0
        return self.decoder.as_uint64(self.raw)

    def as_float64(self) -> float:
        """Decode the item as a float."""
        self._raise_carried()
        if self.raw is None:
            return 0.0
        return self.decoder.as_float64(self.raw)

    def as_string(self) -> str:
        """Decode the item as text."""
        self._raise_carried()
        if self.raw is None:
            return ""
        return self.decoder.as_string(self.raw)

    def _raise_carried(self) -> None:
        if self.err is not None:
            raise raisable(self.err)
