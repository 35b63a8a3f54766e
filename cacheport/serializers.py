"""Value encoding shared by every cache backend."""

import json
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel


def json_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer that handles:
    - Pydantic BaseModel objects
    - Enum members
    - datetime objects
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Cannot serialize object {obj} of type {type(obj)}")


def encode_value(value: Any) -> bytes:
    """
    Encode a value into the bytes written to a backend.

    bool -> b"1"/b"0", int -> base-10 text, float -> fixed-point text with
    six decimals, str -> UTF-8, bytes -> unchanged, anything else -> JSON.
    Raises TypeError or ValueError when the JSON fallback fails.
    """
    # bool is an int subclass, so it must be matched first
    if isinstance(value, bool):
        return b"1" if value else b"0"
    elif isinstance(value, int):
        return str(value).encode()
    elif isinstance(value, float):
        return f"{value:f}".encode()
    elif isinstance(value, str):
        return value.encode("utf-8", errors="surrogateescape")
    elif isinstance(value, (bytes, bytearray)):
        return bytes(value)

    return json.dumps(value, default=json_serializer).encode()
