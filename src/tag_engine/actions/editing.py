"""Editing verbs bound to keys: history, mode, tab, paste and submit."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tag_engine.submit import SubmitAction

from .base import ActionResult, KeyInput

if TYPE_CHECKING:  # pragma: no cover
    from tag_engine.session import EditingSession


def undo(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    snapshot = session.undo()
    if snapshot is None:
        return ActionResult(consumed=True, status="noop", message="nothing_to_undo")
    return ActionResult(consumed=True, message="undo")


def redo(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    snapshot = session.redo()
    if snapshot is None:
        return ActionResult(consumed=True, status="noop", message="nothing_to_redo")
    return ActionResult(consumed=True, message="redo")


def toggle_mode(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    mode = session.toggle_mode()
    return ActionResult(consumed=True, message=mode.label)


def insert_tab(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    delta = session.insert_tab()
    return ActionResult(consumed=True, status=delta.status, message="tab")


def backspace(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    delta = session.backspace()
    return ActionResult(consumed=True, status=delta.status, message="backspace")


def paste(session: EditingSession, key: KeyInput) -> ActionResult:
    """Paste ``key.text``; hosts fill it with the clipboard content."""

    if not key.text:
        return ActionResult(consumed=True, status="noop", message="clipboard_empty")
    delta = session.paste(key.text)
    if delta.status == "rejected":
        return ActionResult(
            consumed=True, status="rejected", message="paste_needs_value_field"
        )
    return ActionResult(consumed=True, status=delta.status, message="paste")


def submit_clipboard(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    submission = session.submit(SubmitAction.CLIPBOARD)
    return ActionResult(
        consumed=True, status="submit", message="copy", submission=submission, quit=True
    )


def submit_type(session: EditingSession, key: KeyInput) -> ActionResult:
    del key
    submission = session.submit(SubmitAction.TYPE)
    return ActionResult(
        consumed=True, status="submit", message="type", submission=submission, quit=True
    )


def cancel(session: EditingSession, key: KeyInput) -> ActionResult:
    del session, key
    return ActionResult(consumed=True, status="cancel", message="cancel", quit=True)


__all__ = [
    "undo",
    "redo",
    "toggle_mode",
    "insert_tab",
    "backspace",
    "paste",
    "submit_clipboard",
    "submit_type",
    "cancel",
]
