"""Adapter boundary types for syncing sessions with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from tag_engine.markup import RenderMode


@dataclass(slots=True)
class SessionMirror:
    """Host-friendly snapshot describing the current session state."""

    text: str
    compact: str
    display: str
    mode: RenderMode
    can_undo: bool = False
    can_redo: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """Protocol describing how adapters exchange data with the session."""

    def pull_buffer(self) -> SessionMirror:
        """Return the latest session snapshot that the host should render."""
        ...

    def push_host_edit(self, text: str) -> None:
        """Submit an external edit (e.g., IME insert, clipboard paste) to the buffer."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when hosts hand the buffer something that is not text or bytes."""

    def __init__(self, message: str, *, value: object | None = None) -> None:
        super().__init__(message)
        self.value = value


__all__ = ["SessionMirror", "BufferSync", "BufferValidationError"]
