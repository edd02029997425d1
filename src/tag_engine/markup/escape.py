"""Entity escaping for attribute values."""

from __future__ import annotations

from typing import Iterator, Protocol

ENTITIES: dict[int, bytes] = {
    ord('"'): b"&quot;",
    ord("&"): b"&amp;",
    ord("<"): b"&lt;",
    ord(">"): b"&gt;",
}
LONGEST_ENTITY = max(len(entity) for entity in ENTITIES.values())


class ByteSink(Protocol):
    @property
    def remaining(self) -> int: ...

    def write(self, fragment: bytes) -> None: ...


def iter_escaped(value: bytes) -> Iterator[bytes]:
    """Yield ``value`` one byte (or one entity) at a time."""

    for byte in value:
        yield ENTITIES.get(byte) or bytes((byte,))


def escape_value(value: bytes) -> bytes:
    return b"".join(iter_escaped(value))


def write_escaped(sink: ByteSink, value: bytes) -> None:
    """Stream the escaped ``value`` into ``sink``.

    Copying stops once the sink has no more room than the longest entity,
    so a substitution is never cut in half.
    """

    for fragment in iter_escaped(value):
        if sink.remaining <= LONGEST_ENTITY:
            break
        sink.write(fragment)


__all__ = [
    "ENTITIES",
    "LONGEST_ENTITY",
    "ByteSink",
    "iter_escaped",
    "escape_value",
    "write_escaped",
]
