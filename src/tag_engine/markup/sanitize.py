"""Identifier cleanup for tag and attribute names."""

from __future__ import annotations

import string

from tag_engine.limits import DEFAULT_LIMITS

_TRIM = b" \t\r\n"
_ALLOWED = frozenset((string.ascii_letters + string.digits + "_-~").encode("ascii"))


def _build_table() -> bytes:
    table = bytearray(b"~" * 256)
    for byte in _ALLOWED:
        table[byte] = byte
    table[ord(" ")] = ord("_")
    return bytes(table)


_NAME_TABLE = _build_table()


def sanitize_name(raw: bytes, *, capacity: int = DEFAULT_LIMITS.token_capacity) -> bytes:
    """Trim whitespace, turn spaces into ``_`` and anything unsupported into ``~``.

    >>> sanitize_name(b"  my.tag ")
    b'my~tag'
    >>> sanitize_name(b"data point")
    b'data_point'
    """

    return bytes(raw).strip(_TRIM).translate(_NAME_TABLE)[:capacity]


__all__ = ["sanitize_name"]
