"""Snapshot-based undo/redo history with bounded stacks."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Generic, Iterator, Optional, TypeVar

from tag_engine.limits import DEFAULT_LIMITS

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Value copy of the raw buffer at one point in time."""

    data: bytes = b""

    @classmethod
    def capture(
        cls, data: bytes, *, capacity: int = DEFAULT_LIMITS.input_capacity
    ) -> "Snapshot":
        return cls(data=bytes(data[:capacity]))

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def is_empty(self) -> bool:
        return not self.data


class BoundedStack(Generic[T]):
    """LIFO stack that evicts its oldest entry when pushed at capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: Deque[T] = deque(maxlen=capacity)

    def push(self, item: T) -> Optional[T]:
        """Push ``item``; return the evicted entry, if any."""

        evicted = self._items[0] if len(self._items) == self.capacity else None
        self._items.append(item)
        return evicted

    def pop(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items[-1]

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)


class HistoryStacks:
    """Undo and redo stacks of full-buffer snapshots.

    ``undo``/``redo`` only move snapshots between the stacks and hand back the
    state to restore; the caller owns the buffer and applies it.
    """

    def __init__(
        self,
        depth: int = DEFAULT_LIMITS.history_depth,
        *,
        snapshot_capacity: int = DEFAULT_LIMITS.input_capacity,
    ) -> None:
        self.snapshot_capacity = snapshot_capacity
        self.undo_stack: BoundedStack[Snapshot] = BoundedStack(depth)
        self.redo_stack: BoundedStack[Snapshot] = BoundedStack(depth)
        self.evictions = 0

    def _capture(self, data: bytes) -> Snapshot:
        return Snapshot.capture(data, capacity=self.snapshot_capacity)

    def _push(self, stack: BoundedStack[Snapshot], data: bytes) -> None:
        if stack.push(self._capture(data)) is not None:
            self.evictions += 1

    def push_undo(self, current: bytes) -> None:
        self._push(self.undo_stack, current)

    def undo(self, current: bytes) -> Optional[Snapshot]:
        if not self.undo_stack:
            return None
        self._push(self.redo_stack, current)
        return self.undo_stack.pop()

    def redo(self, current: bytes) -> Optional[Snapshot]:
        if not self.redo_stack:
            return None
        self._push(self.undo_stack, current)
        return self.redo_stack.pop()

    def clear_redo(self) -> None:
        self.redo_stack.clear()

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

    def can_undo(self) -> bool:
        return len(self.undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self.redo_stack) > 0

    @property
    def undo_depth(self) -> int:
        return len(self.undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self.redo_stack)


__all__ = ["Snapshot", "BoundedStack", "HistoryStacks"]
