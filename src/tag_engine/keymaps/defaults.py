"""Built-in keymaps for the editing session."""

from __future__ import annotations

from typing import Iterable, Sequence

from tag_engine.actions import editing

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="history.undo", handler=editing.undo, description="Undo last edit"),
    ActionRef(id="history.redo", handler=editing.redo, description="Redo undone edit"),
    ActionRef(
        id="mode.toggle",
        handler=editing.toggle_mode,
        description="Toggle regular / self-closing tags",
    ),
    ActionRef(id="edit.tab", handler=editing.insert_tab, description="Next field"),
    ActionRef(
        id="edit.backspace", handler=editing.backspace, description="Delete last byte"
    ),
    ActionRef(
        id="edit.paste",
        handler=editing.paste,
        description="Paste clipboard into the current value",
    ),
    ActionRef(
        id="submit.clipboard",
        handler=editing.submit_clipboard,
        description="Copy markup to the clipboard and quit",
    ),
    ActionRef(
        id="submit.type",
        handler=editing.submit_type,
        description="Type markup into the previous window and quit",
    ),
    ActionRef(id="app.cancel", handler=editing.cancel, description="Quit"),
)


def _bind(binding_id: str, chord: str, action_id: str) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke.parse(chord),
        action_id=action_id,
        source="defaults",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("ctrl+z", "ctrl+z", "history.undo"),
    _bind("ctrl+y", "ctrl+y", "history.redo"),
    _bind("ctrl+s", "ctrl+s", "mode.toggle"),
    _bind("ctrl+v", "ctrl+v", "edit.paste"),
    _bind("tab", "tab", "edit.tab"),
    _bind("backspace", "backspace", "edit.backspace"),
    _bind("ctrl+enter", "ctrl+enter", "submit.clipboard"),
    _bind("shift+enter", "shift+enter", "submit.clipboard"),
    _bind("enter", "enter", "submit.type"),
    _bind("escape", "escape", "app.cancel"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> KeymapRegistry:
    """Register every default action and the selected default chords.

    ``include_bindings``/``exclude_bindings`` filter defaults by binding id
    (the chord). ``extra_bindings`` are applied last and always win their
    chord, which is how a user rebinds a default.
    """

    wanted = set(include_bindings) if include_bindings else None
    skipped = frozenset(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    chosen = [
        binding
        for binding in DEFAULT_BINDINGS
        if (wanted is None or binding.id in wanted) and binding.id not in skipped
    ]
    for binding in (*chosen, *(extra_bindings or ())):
        registry.register_binding(binding, replace=replace or binding not in chosen)
    return registry


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
