"""Minimal Textual adapter that wires dispatcher results into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from tag_engine.actions import ActionResult, KeyInput
from tag_engine.buffer import SessionMirror
from tag_engine.dispatch import KeyDispatcher
from tag_engine.keymaps import KeyStroke
from tag_engine.session import EditingSession
from tag_engine.submit import Submission


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[SessionMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_submission: Callable[[Submission], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualTagAdapter:
    """Bridges a :class:`KeyDispatcher` to a Textual-friendly surface.

    Satisfies the :class:`~tag_engine.buffer.BufferSync` protocol.
    """

    def __init__(self, dispatcher: KeyDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._refresh_view()
        self.hooks.update_status(self.status_line())

    @property
    def session(self) -> EditingSession:
        return self.dispatcher.session

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ActionResult:
        """Translate a Textual key name (``ctrl+z``, ``tab``, ``a``) and dispatch it."""

        stroke = KeyStroke.parse(key)
        merged = tuple(stroke.modifiers) + tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=stroke.key, text=text, mods=merged)
        result = self.dispatcher.handle_key(
            KeyInput(key=stroke.key, text=text, modifiers=merged)
        )
        self._after_result(result)
        return result

    def handle_paste(self, text: str) -> ActionResult:
        self._log_state("paste ->", length=len(text))
        result = self.dispatcher.handle_paste(text)
        self._after_result(result)
        return result

    def pull_buffer(self) -> SessionMirror:
        return self.session.mirror()

    def push_host_edit(self, text: str) -> None:
        """Apply text the host inserted on its own (IME commit, drop)."""

        delta = self.session.type_text(text)
        self._after_result(
            ActionResult(consumed=True, status=delta.status, message="insert")
        )

    def status_line(self, message: Optional[str] = None) -> str:
        history = self.session.history
        parts = [
            self.session.mode.label,
            f"undo:{history.undo_depth}",
            f"redo:{history.redo_depth}",
        ]
        if message:
            parts.append(message)
        return " | ".join(parts)

    def _after_result(self, result: ActionResult) -> None:
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        self.hooks.update_status(self.status_line(result.message or result.status))
        self._refresh_view()
        if result.submission is not None:
            self.hooks.handle_submission(result.submission)
        if result.quit:
            self.hooks.request_quit()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.pull_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "mode": session.mode.value,
            "bytes": len(session.buffer),
            "buffer_version": session.buffer.version,
        }


__all__ = ["TextualTagAdapter", "TextualUIHooks"]
