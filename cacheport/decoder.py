"""Decoders that turn raw stored bytes into Python scalars."""

import math
import re
from abc import ABC, abstractmethod
from typing import Any

from .errors import DecodeError

_INT_RE = re.compile(rb"[+-]?[0-9]+")
_UINT_RE = re.compile(rb"[0-9]+")
_NONFINITE_RE = re.compile(rb"[+-]?(inf|infinity|nan)", re.IGNORECASE)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class Decoder(ABC):
    """Converts an opaque stored value into a requested type."""

    @abstractmethod
    def as_bool(self, value: Any) -> bool:
        """Decode value as a boolean."""
        pass

    @abstractmethod
    def as_bytes(self, value: Any) -> bytes:
        """Decode value as bytes."""
        pass

    @abstractmethod
    def as_int64(self, value: Any) -> int:
        """Decode value as a signed 64-bit integer."""
        pass

    @abstractmethod
    def as_uint64(self, value: Any) -> int:
        """Decode value as an unsigned 64-bit integer."""
        pass

    @abstractmethod
    def as_float64(self, value: Any) -> float:
        """Decode value as a float."""
        pass

    @abstractmethod
    def as_string(self, value: Any) -> str:
        """Decode value as text."""
        pass


def to_bytes(value: Any) -> bytes:
    """Return value as bytes, rejecting anything that is not a byte sequence."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise DecodeError(
        f"decoder: expected byte sequence, got {type(value).__name__}"
    )


class StringDecoder(Decoder):
    """
    Decoder for values stored as plain text.

    Numbers are read as base-10 text, never as binary encodings. Booleans
    are lenient: only ``b"1"`` is true, everything else is false without
    an error.
    """

    def as_bool(self, value: Any) -> bool:
        """Decode value as a boolean."""
        return to_bytes(value) == b"1"

    def as_bytes(self, value: Any) -> bytes:
        """Decode value as bytes."""
        return to_bytes(value)

    def as_int64(self, value: Any) -> int:
        """Decode value as a signed 64-bit integer."""
        b = to_bytes(value)
        if not _INT_RE.fullmatch(b):
            raise DecodeError(f"decoder: invalid integer {b!r}")

        n = int(b.decode("ascii"))
        if not INT64_MIN <= n <= INT64_MAX:
            raise DecodeError(f"decoder: integer {b!r} out of range")
        return n

    def as_uint64(self, value: Any) -> int:
        """Decode value as an unsigned 64-bit integer."""
        b = to_bytes(value)
        if not _UINT_RE.fullmatch(b):
            raise DecodeError(f"decoder: invalid unsigned integer {b!r}")

        n = int(b.decode("ascii"))
        if n > UINT64_MAX:
            raise DecodeError(f"decoder: unsigned integer {b!r} out of range")
        return n

    def as_float64(self, value: Any) -> float:
        """Decode value as a float."""
        b = to_bytes(value)
        # float() tolerates padding and digit separators, stored text must not
        if not b or b != b.strip() or b"_" in b:
            raise DecodeError(f"decoder: invalid float {b!r}")

        try:
            f = float(b.decode("ascii"))
        except ValueError as e:
            raise DecodeError(f"decoder: invalid float {b!r}") from e

        # Out-of-range literals such as 1e400 overflow to inf
        if not math.isfinite(f) and not _NONFINITE_RE.fullmatch(b):
            raise DecodeError(f"decoder: float out of range {b!r}")
        return f

    def as_string(self, value: Any) -> str:
        """Decode value as text."""
        return to_bytes(value).decode("utf-8", errors="surrogateescape")
