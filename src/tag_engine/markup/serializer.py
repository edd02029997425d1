"""Renders a :class:`ParsedInput` into the compact and display outputs."""

from __future__ import annotations

from tag_engine.limits import DEFAULT_LIMITS, NEWLINE, PLACEHOLDER, Limits

from .escape import write_escaped
from .models import OutputText, ParsedInput, RenderMode

COMPACT_GAP = b"\n\n"
DISPLAY_GAP = b"\n\n\n"
SELF_CLOSE = b" />\n"


class OutputWriter:
    """Fixed-capacity byte sink; whatever does not fit is dropped."""

    def __init__(self, capacity: int = DEFAULT_LIMITS.output_capacity) -> None:
        self.capacity = capacity
        self._buffer = bytearray()

    @property
    def remaining(self) -> int:
        return self.capacity - len(self._buffer)

    def write(self, fragment: bytes) -> None:
        if self.remaining > 0:
            self._buffer += fragment[: self.remaining]

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class WrappingWriter(OutputWriter):
    """Byte sink that breaks lines once they reach ``column`` bytes.

    The check runs per byte as fragments stream through, so a single write may
    wrap mid-fragment. Newlines reset the running count and never wrap.
    Columns are counted in bytes, so a break can land inside a multi-byte
    UTF-8 character; decoded display text then shows U+FFFD at that point.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_LIMITS.output_capacity,
        *,
        column: int = DEFAULT_LIMITS.wrap_column,
    ) -> None:
        super().__init__(capacity)
        self.column = column
        self._line_length = 0

    def write(self, fragment: bytes) -> None:
        for byte in fragment:
            if self.remaining <= 0:
                return
            if byte != NEWLINE and self._line_length >= self.column:
                self._buffer.append(NEWLINE)
                self._line_length = 0
                if self.remaining <= 0:
                    return
            self._buffer.append(byte)
            self._line_length = 0 if byte == NEWLINE else self._line_length + 1


def _render_into(
    writer: OutputWriter, parsed: ParsedInput, mode: RenderMode, *, gap: bytes
) -> None:
    if parsed.is_empty:
        writer.write(PLACEHOLDER)
        return

    writer.write(b"<")
    writer.write(parsed.tag_name)
    for attribute in parsed.attributes:
        # A name that sanitizes to nothing (whitespace-only token) is skipped
        # along with its value: "div\t \tval\tx" renders "<div x>".
        if not attribute.name:
            continue
        writer.write(b" ")
        writer.write(attribute.name)
        if attribute.value is not None:
            writer.write(b'="')
            write_escaped(writer, attribute.value)
            writer.write(b'"')

    if mode is RenderMode.SELF_CLOSING:
        writer.write(SELF_CLOSE)
    else:
        writer.write(b">")
        writer.write(gap)
        writer.write(b"</")
        writer.write(parsed.tag_name)
        writer.write(b">")


def render_compact(
    parsed: ParsedInput,
    mode: RenderMode = RenderMode.REGULAR,
    *,
    capacity: int = DEFAULT_LIMITS.output_capacity,
) -> bytes:
    writer = OutputWriter(capacity)
    _render_into(writer, parsed, mode, gap=COMPACT_GAP)
    return writer.getvalue()


def render_display(
    parsed: ParsedInput,
    mode: RenderMode = RenderMode.REGULAR,
    *,
    capacity: int = DEFAULT_LIMITS.output_capacity,
    column: int = DEFAULT_LIMITS.wrap_column,
) -> bytes:
    writer = WrappingWriter(capacity, column=column)
    _render_into(writer, parsed, mode, gap=DISPLAY_GAP)
    return writer.getvalue()


def render(
    parsed: ParsedInput,
    mode: RenderMode = RenderMode.REGULAR,
    *,
    limits: Limits = DEFAULT_LIMITS,
) -> OutputText:
    return OutputText(
        compact=render_compact(parsed, mode, capacity=limits.output_capacity),
        display=render_display(
            parsed,
            mode,
            capacity=limits.output_capacity,
            column=limits.wrap_column,
        ),
    )


__all__ = [
    "OutputWriter",
    "WrappingWriter",
    "render",
    "render_compact",
    "render_display",
]
