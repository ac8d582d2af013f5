import pytest

from find_engine.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
)
from find_engine.keymaps.defaults import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    load_default_keymaps,
)


def make_action(action_id: str = "find.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "find",
    keys: str = "ctrl+g",
    action_id: str = "find.test",
) -> Binding:
    return Binding.of(binding_id, mode, keys, action_id)


def test_keystroke_parse_normalizes_modifiers() -> None:
    stroke = KeyStroke.parse("Shift+CTRL+F")

    assert stroke.key == "F"
    assert stroke.modifiers == ("ctrl", "shift")
    assert stroke.token == "ctrl+shift+F"


def test_keystroke_parse_plain_and_plus_keys() -> None:
    assert KeyStroke.parse("ENTER").token == "ENTER"
    assert KeyStroke.parse("+").key == "+"
    plus = KeyStroke.parse("ctrl++")
    assert plus.key == "+"
    assert plus.token == "ctrl++"


def test_keystroke_rejects_empty_key() -> None:
    with pytest.raises(ValueError):
        KeyStroke("")


def test_action_ref_requires_callable() -> None:
    with pytest.raises(TypeError):
        ActionRef(id="broken", handler="not callable")  # type: ignore[arg-type]


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="find.g")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="find")) == [binding]
    assert registry.lookup("find", "ctrl+g") == binding
    assert registry.lookup("editor", "ctrl+g") is None


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="find.g"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="find.g"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="find.g.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["find.g"]


def test_same_chord_in_other_mode_is_not_a_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="find.g"))

    registry.register_binding(make_binding(binding_id="editor.g", mode="editor"))

    assert registry.stats().modes == ("editor", "find")


def test_register_binding_replace_overrides_chord() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="find.g"))

    registry.register_binding(make_binding(binding_id="find.g2"), replace=True)

    assert registry.lookup("find", "ctrl+g").id == "find.g2"
    with pytest.raises(KeyError):
        registry.get_binding("find.g")


def test_duplicate_action_rejected_unless_replaced() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_unregister_binding_cleans_index() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="find.g"))

    removed = registry.unregister_binding("find.g")

    assert removed is not None
    assert registry.lookup("find", "ctrl+g") is None
    assert registry.stats().modes == ()
    assert registry.unregister_binding("find.g") is None


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert registry.lookup("editor", "ctrl+f").action_id == "find.open"
    assert registry.lookup("find", "ESC").action_id == "find.close"
    assert registry.lookup("find", "shift+ENTER").action_id == "find.previous"


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(
        registry,
        exclude_bindings=["find.replace_all"],
        extra_bindings=[Binding.of("find.all", "find", "ctrl+shift+R", "find.replace_all")],
    )

    assert registry.lookup("find", "alt+a") is None
    assert registry.lookup("find", "ctrl+shift+R").id == "find.all"


def test_resolver_match_and_miss() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    result = resolver.resolve("find", "ENTER")
    assert result.status == "match"
    assert result.match is not None
    assert result.match.action.id == "find.next"

    missing = resolver.resolve("find", "ctrl+q")
    assert missing.status == "miss"
    assert missing.match is None
