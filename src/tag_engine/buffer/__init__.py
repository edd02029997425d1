"""Raw input buffer and undo/redo history."""

from .buffer import Buffer, BufferDelta, Transaction
from .sync import BufferSync, BufferValidationError, SessionMirror
from .undo import BoundedStack, HistoryStacks, Snapshot
from .validation import ensure_bytes

__all__ = [
    "Buffer",
    "BufferDelta",
    "Transaction",
    "BoundedStack",
    "HistoryStacks",
    "Snapshot",
    "SessionMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_bytes",
]
