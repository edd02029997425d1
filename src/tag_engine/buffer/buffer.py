"""High-level buffer façade combining raw bytes and undo/redo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from tag_engine.limits import DEFAULT_LIMITS, TAB
from tag_engine.runtime import telemetry

from .undo import HistoryStacks, Snapshot
from .validation import ensure_bytes


@dataclass(slots=True)
class BufferDelta:
    version: int
    data: bytes
    label: str
    changed: bool
    accepted: int = 0
    status: str = "ok"  # ok, truncated, noop, rejected


class Buffer:
    """Length-tracked byte buffer that records a snapshot before every edit.

    Edits only ever touch the end of the buffer (typing, tab, backspace,
    paste) or replace it wholesale. Input past ``capacity`` is dropped.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        data: bytes = b"",
        capacity: int = DEFAULT_LIMITS.input_capacity,
        history: Optional[HistoryStacks] = None,
    ) -> None:
        self.name = name
        self.capacity = capacity
        self._data = bytearray(ensure_bytes(data)[:capacity])
        self.history = history or HistoryStacks(snapshot_capacity=capacity)
        self.version = 0

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return self.capacity - len(self._data)

    def has_delimiter(self) -> bool:
        return TAB in self._data

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self._data, capacity=self.capacity)

    def append(self, data: bytes | str, *, label: str = "insert") -> BufferDelta:
        payload = ensure_bytes(data)
        with Transaction(self, label) as tx:
            accepted = payload[: max(self.remaining, 0)]
            if accepted:
                self._data += accepted
                tx.commit()

        if not accepted:
            status = "noop"
        elif len(accepted) < len(payload):
            status = "truncated"
        else:
            status = "ok"
        return self._delta(label, changed=bool(accepted), accepted=len(accepted), status=status)

    def insert_tab(self) -> BufferDelta:
        return self.append(bytes((TAB,)), label="tab")

    def backspace(self) -> BufferDelta:
        with Transaction(self, "backspace") as tx:
            changed = bool(self._data)
            if changed:
                del self._data[-1]
                tx.commit()
        return self._delta("backspace", changed=changed, status="ok" if changed else "noop")

    def paste(self, data: bytes | str) -> BufferDelta:
        """Append clipboard content; only allowed once a tag name is complete."""

        payload = ensure_bytes(data)
        if not self.has_delimiter():
            return self._delta("paste", changed=False, status="rejected")
        return self.append(payload, label="paste")

    def replace(self, data: bytes | str, *, label: str = "replace") -> BufferDelta:
        payload = ensure_bytes(data)[: self.capacity]
        with Transaction(self, label) as tx:
            changed = payload != self._data
            if changed:
                self._data = bytearray(payload)
                tx.commit()
        return self._delta(
            label, changed=changed, accepted=len(payload), status="ok" if changed else "noop"
        )

    def push_undo_snapshot(self) -> None:
        self.history.push_undo(self.data)

    def undo(self) -> Optional[Snapshot]:
        snapshot = self.history.undo(self.data)
        if snapshot is not None:
            self._restore(snapshot)
        return snapshot

    def redo(self) -> Optional[Snapshot]:
        snapshot = self.history.redo(self.data)
        if snapshot is not None:
            self._restore(snapshot)
        return snapshot

    def _restore(self, snapshot: Snapshot) -> None:
        self._data = bytearray(snapshot.data[: self.capacity])
        self.version += 1

    def _delta(
        self, label: str, *, changed: bool, accepted: int = 0, status: str = "ok"
    ) -> BufferDelta:
        return BufferDelta(
            version=self.version,
            data=self.data,
            label=label,
            changed=changed,
            accepted=accepted,
            status=status,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one edit: captures the pre-edit state and commits it to history.

    Committing pushes the captured snapshot onto the undo stack and drops the
    redo stack, since a fresh edit invalidates any undone future.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.committed = False
        self._before: Snapshot | None = None
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._before = self.buffer.snapshot()
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self) -> None:
        if self.committed or self._before is None:
            return
        history = self.buffer.history
        history.push_undo(self._before.data)
        history.clear_redo()
        self.buffer.version += 1
        self.committed = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "BufferDelta", "Transaction"]
