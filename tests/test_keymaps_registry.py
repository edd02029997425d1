import pytest

from tag_engine.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    chord: str = "ctrl+k",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, stroke=KeyStroke.parse(chord), action_id=action_id)


def test_keystroke_normalizes_modifiers() -> None:
    assert KeyStroke.parse("Shift+Ctrl+V").token == "ctrl+shift+v"
    assert KeyStroke("z", ("ctrl", "ctrl")).token == "ctrl+z"
    assert KeyStroke.parse("tab").modifiers == ()


def test_keystroke_rejects_empty_chord() -> None:
    with pytest.raises(ValueError):
        KeyStroke.parse("+")


def test_binding_parses_string_stroke() -> None:
    binding = Binding(id="b", stroke="ctrl+u", action_id="core.test")  # type: ignore[arg-type]

    assert binding.key_signature == "ctrl+u"


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="ctrl+k")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    assert registry.binding_for("ctrl+k") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="second"))

    assert [b.id for b in excinfo.value.conflicts] == ["first"]


def test_register_binding_unknown_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="b", action_id="missing"))


def test_register_action_twice_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())

    registry.register_action(make_action(), replace=True)
    assert registry.stats().action_count == 1


def test_register_binding_with_replace_drops_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="first")
    second = make_binding(binding_id="second")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.binding_for("ctrl+k") == second


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.resolve("ctrl+k") is None
    assert registry.revision() == before + 1


def test_resolve_returns_action() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    registry.register_binding(make_binding(binding_id="b"))

    match = registry.resolve("ctrl+k")

    assert match is not None
    assert match.action == action
    assert match.binding.id == "b"


def test_get_binding_unknown_raises() -> None:
    with pytest.raises(KeyError):
        KeymapRegistry().get_binding("nope")


def test_load_default_keymaps() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == 9
    assert "ctrl+z" in stats.chords
    assert registry.get_binding("ctrl+s").action_id == "mode.toggle"
    assert registry.get_binding("enter").action_id == "submit.type"


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, include_bindings=("ctrl+z", "ctrl+y"))

    assert registry.stats().binding_count == 2


def test_load_default_keymaps_exclude_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=("escape",))

    assert registry.binding_for("escape") is None
    assert registry.stats().binding_count == 9


def test_load_default_keymaps_extra_binding_rebinds_chord() -> None:
    registry = KeymapRegistry()
    custom = Binding(id="undo.alt", stroke=KeyStroke.parse("ctrl+y"), action_id="history.undo")

    load_default_keymaps(registry, extra_bindings=(custom,))

    assert registry.resolve("ctrl+y").action.id == "history.undo"  # type: ignore[union-attr]
