"""The editing session: one buffer, its history, render mode and outputs."""

from __future__ import annotations

from typing import Callable, Optional

from tag_engine.buffer import (
    Buffer,
    BufferDelta,
    HistoryStacks,
    SessionMirror,
    Snapshot,
    ensure_bytes,
)
from tag_engine.limits import DEFAULT_LIMITS, Limits
from tag_engine.markup import (
    OutputText,
    ParsedInput,
    RenderMode,
    compile_markup,
    parse_input,
)
from tag_engine.runtime import telemetry
from tag_engine.submit import SubmitAction, Submission


class EditingSession:
    """Owns the live buffer and regenerates both outputs after every change.

    Every edit that changes the buffer records the pre-edit state on the undo
    stack and clears the redo stack. Undo and redo restore a snapshot and
    reparse in one step.
    """

    def __init__(
        self,
        *,
        limits: Optional[Limits] = None,
        mode: RenderMode = RenderMode.REGULAR,
        name: str = "session",
        initial: bytes | str = b"",
    ) -> None:
        self.limits = limits or DEFAULT_LIMITS
        self.name = name
        self.buffer = Buffer(
            name=name,
            data=ensure_bytes(initial),
            capacity=self.limits.input_capacity,
            history=HistoryStacks(
                self.limits.history_depth,
                snapshot_capacity=self.limits.input_capacity,
            ),
        )
        self._mode = RenderMode(mode)
        self.buffer.push_undo_snapshot()
        self._output = self._compile(self.buffer.data)
        telemetry.record_event(
            "session.start",
            level="debug",
            data={"session": name, "mode": self._mode.value},
        )

    @property
    def output(self) -> OutputText:
        return self._output

    @property
    def compact(self) -> bytes:
        return self._output.compact

    @property
    def display(self) -> bytes:
        return self._output.display

    @property
    def history(self) -> HistoryStacks:
        return self.buffer.history

    def parse(self, data: bytes | str | None = None) -> OutputText:
        """Compile ``data`` with the session's mode and limits.

        Without ``data`` the live buffer is compiled and the session outputs
        are refreshed.
        """

        if data is not None:
            return self._compile(ensure_bytes(data))
        self._output = self._compile(self.buffer.data)
        return self._output

    def parsed(self) -> ParsedInput:
        return parse_input(self.buffer.data, limits=self.limits)

    def _compile(self, data: bytes) -> OutputText:
        return compile_markup(data, self._mode, limits=self.limits)

    @property
    def mode(self) -> RenderMode:
        return self._mode

    def get_mode(self) -> RenderMode:
        return self._mode

    def set_mode(self, mode: RenderMode | str) -> RenderMode:
        self._mode = RenderMode(mode)
        self.parse()
        telemetry.record_event(
            "session.mode", data={"session": self.name, "mode": self._mode.value}
        )
        return self._mode

    def toggle_mode(self) -> RenderMode:
        return self.set_mode(self._mode.toggled())

    def type_text(self, data: bytes | str) -> BufferDelta:
        return self._edit("insert", lambda: self.buffer.append(data))

    def insert_tab(self) -> BufferDelta:
        return self._edit("tab", self.buffer.insert_tab)

    def backspace(self) -> BufferDelta:
        return self._edit("backspace", self.buffer.backspace)

    def paste(self, data: bytes | str) -> BufferDelta:
        delta = self._edit("paste", lambda: self.buffer.paste(data))
        if delta.status == "rejected":
            telemetry.record_event(
                "session.paste_rejected",
                level="warning",
                data={"session": self.name, "reason": "no value field yet"},
            )
        elif delta.status == "truncated":
            telemetry.record_event(
                "session.paste_truncated",
                level="warning",
                data={"session": self.name, "accepted": delta.accepted},
            )
        return delta

    def replace(self, data: bytes | str) -> BufferDelta:
        return self._edit("replace", lambda: self.buffer.replace(data))

    def _edit(self, label: str, apply: Callable[[], BufferDelta]) -> BufferDelta:
        with telemetry.span(
            f"session::{label}",
            component="session",
            metadata={"session": self.name},
        ) as handle:
            delta = apply()
            handle.add_metadata("status", delta.status)
            if delta.changed:
                self.parse()
            return delta

    def push_undo_snapshot(self, data: bytes | str | None = None) -> None:
        if data is None:
            self.buffer.push_undo_snapshot()
        else:
            self.history.push_undo(ensure_bytes(data))

    def undo(self) -> Optional[Snapshot]:
        return self._travel("undo", self.buffer.undo)

    def redo(self) -> Optional[Snapshot]:
        return self._travel("redo", self.buffer.redo)

    def _travel(
        self, label: str, step: Callable[[], Optional[Snapshot]]
    ) -> Optional[Snapshot]:
        with telemetry.span(
            f"session::{label}",
            component="session",
            metadata={"session": self.name},
        ):
            snapshot = step()
            if snapshot is None:
                return None
            self.parse()
        telemetry.record_event(
            f"session.{label}",
            data={
                "session": self.name,
                "undo_depth": self.history.undo_depth,
                "redo_depth": self.history.redo_depth,
            },
        )
        return snapshot

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def submit(self, action: SubmitAction | str = SubmitAction.CLIPBOARD) -> Submission:
        """Package the compact form for the typing or clipboard collaborator.

        An empty tag name yields an empty submission rather than the
        placeholder text.
        """

        chosen = SubmitAction(action)
        data = b"" if self.parsed().is_empty else self.compact
        telemetry.record_event(
            "session.submit",
            data={"session": self.name, "action": chosen.value, "bytes": len(data)},
        )
        return Submission(action=chosen, data=data)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> SessionMirror:
        return SessionMirror(
            text=self.buffer.data.decode("utf-8", errors="replace"),
            compact=self._output.compact_text,
            display=self._output.display_text,
            mode=self._mode,
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
            attributes=dict(attributes or {}),
        )


__all__ = ["EditingSession"]
