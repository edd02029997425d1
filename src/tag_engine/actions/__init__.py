"""High-level editing verbs reachable from key bindings."""

from .base import ActionResult, KeyInput
from .editing import (
    backspace,
    cancel,
    insert_tab,
    paste,
    redo,
    submit_clipboard,
    submit_type,
    toggle_mode,
    undo,
)

__all__ = [
    "ActionResult",
    "KeyInput",
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
