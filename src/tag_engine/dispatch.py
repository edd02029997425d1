"""Key dispatcher routing host key events into the editing session."""

from __future__ import annotations

from typing import Optional

from tag_engine.actions import ActionResult, KeyInput
from tag_engine.keymaps import KeymapRegistry, KeyStroke, load_default_keymaps
from tag_engine.runtime import telemetry
from tag_engine.session import EditingSession

_TEXT_BLOCKING_MODIFIERS = frozenset({"ctrl", "alt", "meta", "super"})


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, key.modifiers).token


class KeyDispatcher:
    """Resolves bound chords to actions; unbound printable text is typed."""

    def __init__(
        self,
        session: Optional[EditingSession] = None,
        *,
        registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.session = session or EditingSession()
        self.registry = registry or KeymapRegistry(logger_name="tag_engine.keymaps")
        if load_defaults and registry is None:
            load_default_keymaps(self.registry)

    def handle_key(self, key: KeyInput) -> ActionResult:
        token = key_to_token(key)
        with telemetry.span(
            name="dispatch::key",
            component=True,
            metadata={"key": token},
        ) as handle:
            match = self.registry.resolve(token)
            if match is not None:
                handle.add_metadata("action", match.action.id)
                outcome = match.action(self.session, key)
                if isinstance(outcome, ActionResult):
                    return outcome
                return ActionResult(consumed=True)
            return self._type_text(key)

    def handle_paste(self, text: str) -> ActionResult:
        """Entry point for hosts that deliver paste as its own event."""

        action = self.registry.get_action("edit.paste")
        with telemetry.span(name="dispatch::paste", component=True):
            outcome = action(self.session, KeyInput(key="paste", text=text))
        if isinstance(outcome, ActionResult):
            return outcome
        return ActionResult(consumed=True)

    def _type_text(self, key: KeyInput) -> ActionResult:
        text = key.text
        blocked = _TEXT_BLOCKING_MODIFIERS.intersection(m.lower() for m in key.modifiers)
        if not text or blocked or not text.isprintable():
            return ActionResult(consumed=False, status="miss")
        delta = self.session.type_text(text)
        return ActionResult(consumed=True, status=delta.status, message="insert")


__all__ = ["KeyDispatcher", "key_to_token"]
