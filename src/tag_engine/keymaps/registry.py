"""Action and chord registry consulted by the key dispatcher."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from tag_engine.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding, KeyStroke


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    chords: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


class KeymapConflictError(RuntimeError):
    """A binding asked for a chord another binding already owns."""

    def __init__(self, binding: Binding, owner: Binding) -> None:
        super().__init__(
            f"Chord '{binding.key_signature}' for '{binding.id}' is already bound"
            f" by '{owner.id}'"
        )
        self.binding = binding
        self.conflicts = (owner,)


class KeymapRegistry:
    """Maps chord tokens to bindings, and bindings to registered actions.

    Each chord has at most one binding. ``revision`` increases whenever the
    set of bindings changes so hosts can refresh help text lazily.
    """

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_chord: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def _span(self, operation: str, **metadata: Any) -> AbstractContextManager[SpanHandle]:
        return span(
            f"keymaps::{operation}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=metadata,
        )

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.key_signature``.

        Raises ``KeyError`` for an unknown action and
        :class:`KeymapConflictError` when the chord is taken, unless
        ``replace`` is set, in which case the previous owner is dropped.
        """

        with self._span(
            "register_binding", binding_id=binding.id, chord=binding.key_signature
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            owner = self.detect_conflicts(binding)
            if owner and not replace:
                raise KeymapConflictError(binding, owner[0])
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in (*owner, self._bindings.get(binding.id)):
                if stale is not None:
                    handle.add_metadata("replaced", stale.id)
                    self._drop(stale)
            self._bindings[binding.id] = binding
            self._by_chord[binding.key_signature] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._drop(binding)
            self._revision += 1
        return binding

    def iter_bindings(self) -> Iterator[Binding]:
        return iter(tuple(self._bindings.values()))

    def binding_for(self, chord: str | KeyStroke) -> Optional[Binding]:
        stroke = chord if isinstance(chord, KeyStroke) else KeyStroke.parse(chord)
        return self._by_chord.get(stroke.token)

    def resolve(self, token: str) -> Optional[ResolutionMatch]:
        with self._span("resolve", token=token) as handle:
            binding = self._by_chord.get(token)
            handle.add_metadata("status", "match" if binding else "miss")
            if binding is None:
                return None
            return ResolutionMatch(binding=binding, action=self.get_action(binding.action_id))

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            chords=tuple(sorted(self._by_chord)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        owner = self._by_chord.get(binding.key_signature)
        return [owner] if owner is not None and owner.id != binding.id else []

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        if self._by_chord.get(binding.key_signature) is binding:
            del self._by_chord[binding.key_signature]


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "ResolutionMatch",
]
