"""Chords, actions and the bindings that join them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:  # pragma: no cover
    from tag_engine.actions import ActionResult, KeyInput
    from tag_engine.session import EditingSession

ActionHandler = Callable[["EditingSession", "KeyInput"], "ActionResult"]

# Hosts disagree on spelling; the registry only ever sees the canonical names.
_MODIFIER_ALIASES = {"control": "ctrl", "option": "alt", "cmd": "meta", "command": "meta"}
_KEY_ALIASES = {"esc": "escape", "return": "enter", "ret": "enter"}


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key plus its modifiers, e.g. ``ctrl+z`` or ``shift+enter``.

    Modifiers are lower-cased, de-duplicated and sorted, so ``Shift+Ctrl+V``
    and ``ctrl+shift+v`` compare equal and share a ``token``.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        key = self.key.strip().lower()
        if not key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _KEY_ALIASES.get(key, key))
        object.__setattr__(self, "modifiers", _canonical_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        *modifiers, key = [part for part in chord.strip().split("+") if part] or [""]
        return cls(key=key, modifiers=tuple(modifiers))


def _canonical_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    names = {_MODIFIER_ALIASES.get(m, m) for m in (m.strip().lower() for m in modifiers) if m}
    return tuple(sorted(names))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editing verb; called with the session and the triggering key."""

    id: str
    handler: ActionHandler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, session: "EditingSession", key: "KeyInput") -> "ActionResult":
        return self.handler(session, key)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    stroke: KeyStroke
    action_id: str
    source: str = "user"

    def __post_init__(self) -> None:
        if not self.id or not self.action_id:
            raise ValueError("binding needs both an id and an action_id")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = ["ActionHandler", "ActionRef", "Binding", "KeyStroke"]
