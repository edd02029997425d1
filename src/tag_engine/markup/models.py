"""Value types produced by one parse pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RenderMode(str, Enum):
    """How the serializer closes the generated tag."""

    REGULAR = "regular"  # <tag>\n\n</tag>
    SELF_CLOSING = "self_closing"  # <tag />\n

    def toggled(self) -> "RenderMode":
        if self is RenderMode.REGULAR:
            return RenderMode.SELF_CLOSING
        return RenderMode.REGULAR

    @property
    def label(self) -> str:
        return "self-closing tags" if self is RenderMode.SELF_CLOSING else "regular tags"


@dataclass(frozen=True, slots=True)
class Token:
    """One delimiter-free run of the raw buffer, already capped to capacity."""

    data: bytes = b""

    @classmethod
    def from_slice(cls, chunk: bytes, *, capacity: int) -> "Token":
        return cls(data=bytes(chunk[:capacity]))

    @property
    def is_empty(self) -> bool:
        return not self.data

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class Attribute:
    name: bytes
    value: Optional[bytes] = None
    demoted: bool = False

    @property
    def is_boolean(self) -> bool:
        return self.value is None

    @property
    def slots(self) -> int:
        return 1 if self.value is None else 2


@dataclass(slots=True)
class ParsedInput:
    """Sanitized tag name plus its classified attributes.

    ``slots`` and ``boolean_flags`` expose the flat slot-table view: each
    attribute name occupies one slot and a value-bearing attribute's value
    occupies the slot right after it.
    """

    tag_name: bytes = b""
    attributes: list[Attribute] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tag_name

    @property
    def slot_count(self) -> int:
        return sum(attribute.slots for attribute in self.attributes)

    @property
    def slots(self) -> tuple[bytes, ...]:
        table: list[bytes] = []
        for attribute in self.attributes:
            table.append(attribute.name)
            if attribute.value is not None:
                table.append(attribute.value)
        return tuple(table)

    @property
    def boolean_flags(self) -> tuple[bool, ...]:
        flags: list[bool] = []
        for attribute in self.attributes:
            flags.append(attribute.is_boolean)
            if attribute.value is not None:
                flags.append(False)
        return tuple(flags)


def decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class OutputText:
    """Both renderings of one parse pass."""

    compact: bytes
    display: bytes

    @property
    def compact_text(self) -> str:
        return decode(self.compact)

    @property
    def display_text(self) -> str:
        return decode(self.display)


__all__ = [
    "RenderMode",
    "Token",
    "Attribute",
    "ParsedInput",
    "OutputText",
    "decode",
]
