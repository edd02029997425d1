"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .sync import BufferValidationError


def ensure_bytes(value: object) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise BufferValidationError(
        f"Expected bytes or str, got {type(value).__name__}", value=value
    )
