from __future__ import annotations

import sys
from typing import Any

from .errors import InvalidArgumentError, InvalidLengthError

_BYTES_LIKE = (bytes, bytearray, memoryview)


def require_name(value: Any, label: str = "Algorithm") -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{label} must be a string")
    return value


def require_bytes(value: Any, label: str) -> bytes:
    """Return an immutable copy of a bytes-like argument."""
    if not isinstance(value, _BYTES_LIKE):
        raise InvalidArgumentError(f"{label} must be a bytes-like object")
    if isinstance(value, memoryview):
        return value.tobytes()
    return bytes(value)


def require_length(data: bytes, expected: int, label: str) -> None:
    if len(data) != expected:
        raise InvalidLengthError(label, f"exactly {expected} bytes", len(data))


def require_min_length(data: bytes, minimum: int, label: str) -> None:
    if len(data) < minimum:
        raise InvalidLengthError(label, f"at least {minimum} bytes", len(data))


def require_max_length(data: bytes, maximum: int, label: str) -> None:
    if len(data) > maximum:
        raise InvalidLengthError(label, f"at most {maximum} bytes", len(data))


def require_count(value: Any, label: str = "Bytes") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{label} must be an integer")
    if value < 0:
        raise InvalidArgumentError(f"{label} must be non-negative")
    if value > sys.maxsize:
        raise InvalidArgumentError(f"{label} must be at most {sys.maxsize}")
    return value
