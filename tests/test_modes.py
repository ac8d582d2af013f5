from __future__ import annotations

from typing import List, Optional, Tuple

from find_engine.buffer import EMBED_CHAR, RichTextBuffer
from find_engine.modes import (
    EditorMode,
    FindMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
)
from find_engine.modes.mode_manager import ModeManager
from find_engine.runtime.settings import FindSettings
from find_engine.search import FindSession, SessionState


def make_manager(text: str = "cat cat cat") -> ModeManager:
    buffer = RichTextBuffer.from_text(text)
    bus = ModeBus()
    session = FindSession(buffer, settings=FindSettings(), emit=bus.emit)
    context = ModeContext(buffer=buffer, session=session, bus=bus, extras={})
    manager = ModeManager(context)
    manager.register_mode(EditorMode)
    manager.register_mode(FindMode)
    return manager


def press(manager: ModeManager, key: str, *modifiers: str) -> ModeResult:
    return manager.handle_key(KeyInput(key=key, modifiers=modifiers))


def type_text(manager: ModeManager, text: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for char in text:
        result = manager.handle_key(KeyInput(key=char, text=char))
    return result


def active_name(manager: ModeManager) -> Optional[str]:
    mode = manager.active_mode
    return mode.name if mode else None


def test_editor_is_initial_mode() -> None:
    manager = make_manager()

    assert active_name(manager) == "editor"
    assert manager.context.session.state is SessionState.CLOSED


def test_ctrl_f_opens_find_mode() -> None:
    manager = make_manager()

    result = press(manager, "f", "ctrl")

    assert result.switch_to == "find"
    assert active_name(manager) == "find"
    assert manager.context.session.is_open


def test_typing_in_find_mode_updates_query() -> None:
    manager = make_manager()
    press(manager, "f", "ctrl")

    result = type_text(manager, "cat")

    session = manager.context.session
    assert session.query.find_text == "cat"
    assert session.total == 3
    assert result.message == "1 of 3 matches"
    assert manager.context.buffer.get_plain_text() == "cat cat cat"


def test_backspace_edits_focused_field() -> None:
    manager = make_manager()
    press(manager, "f", "ctrl")
    type_text(manager, "cats")

    press(manager, "BACKSPACE")

    assert manager.context.session.query.find_text == "cat"
    assert manager.context.session.total == 3


def test_enter_and_shift_enter_navigate() -> None:
    manager = make_manager()
    press(manager, "f", "ctrl")
    type_text(manager, "cat")

    assert press(manager, "ENTER").message == "2 of 3 matches"
    assert press(manager, "ENTER", "shift").message == "1 of 3 matches"
    assert press(manager, "ENTER", "shift").message == "3 of 3 matches"


def test_tab_switches_field_and_replace_rescans_after_flush() -> None:
    manager = make_manager()
    bars: List[object] = []
    manager.context.bus.subscribe("find.bar", bars.append)
    press(manager, "f", "ctrl")
    type_text(manager, "cat")

    press(manager, "TAB")
    type_text(manager, "dog")
    result = press(manager, "r", "ctrl")

    session = manager.context.session
    assert session.query.replace_text == "dog"
    assert result.status == "replaced"
    assert manager.context.buffer.get_plain_text() == "dog cat cat"
    assert session.status_text == "Searching..."

    assert manager.process_pending() == 1
    assert [m.index for m in session.matches] == [4, 8]
    last_bar = bars[-1]
    assert isinstance(last_bar, dict)
    assert last_bar["field"] == "replace"


def test_replace_all_reports_count() -> None:
    manager = make_manager("a-a-a")
    press(manager, "f", "ctrl")
    type_text(manager, "a")
    press(manager, "TAB")
    type_text(manager, "bb")

    result = press(manager, "a", "alt")

    assert result.status == "replaced_all"
    assert result.message == "Replaced 3"
    assert manager.context.buffer.get_plain_text() == "bb-bb-bb"
    assert manager.context.session.query.find_text == ""


def test_alt_c_toggles_case_sensitivity() -> None:
    manager = make_manager("Cat cat")
    press(manager, "f", "ctrl")
    type_text(manager, "cat")
    assert manager.context.session.total == 2

    result = press(manager, "c", "alt")

    assert result.status == "case_sensitive"
    assert manager.context.session.total == 1


def test_escape_closes_session_and_returns_to_editor() -> None:
    manager = make_manager()
    events: List[Tuple[str, object]] = []
    manager.context.bus.subscribe("find.close", lambda p: events.append(("close", p)))
    press(manager, "f", "ctrl")
    type_text(manager, "cat")

    result = press(manager, "ESC")

    session = manager.context.session
    assert result.switch_to == "editor"
    assert active_name(manager) == "editor"
    assert session.state is SessionState.CLOSED
    assert session.query.find_text == ""
    assert events == [("close", None)]
    assert all("background" not in run.attributes for run in manager.context.buffer.document.runs())


def test_reopening_starts_with_empty_query_and_find_field() -> None:
    manager = make_manager()
    press(manager, "f", "ctrl")
    press(manager, "TAB")
    press(manager, "ESC")

    press(manager, "f", "ctrl")
    type_text(manager, "cat")

    assert manager.context.session.query.find_text == "cat"
    assert manager.context.session.query.replace_text == ""


def test_editor_typing_inserts_at_caret() -> None:
    manager = make_manager("")
    changes: List[object] = []
    manager.context.bus.subscribe("buffer.changed", changes.append)

    type_text(manager, "hi")
    press(manager, "ENTER")
    press(manager, "LEFT")
    press(manager, "BACKSPACE")

    assert manager.context.buffer.get_plain_text() == "h\n"
    assert manager.context.buffer.state.caret == 1
    assert len(changes) == 4


def test_editor_undo_and_redo() -> None:
    manager = make_manager("")
    type_text(manager, "ab")

    assert press(manager, "z", "ctrl").status == "undo"
    assert manager.context.buffer.get_plain_text() == "a"
    assert press(manager, "y", "ctrl").status == "redo"
    assert manager.context.buffer.get_plain_text() == "ab"


def test_editor_inserts_page_break_embed() -> None:
    manager = make_manager("ab")
    press(manager, "RIGHT")

    result = press(manager, "p", "alt")

    assert result.message == "page_break"
    assert manager.context.buffer.get_plain_text() == f"a{EMBED_CHAR}b"


def test_search_offsets_stay_aligned_after_embed() -> None:
    manager = make_manager("cat")
    press(manager, "s", "alt")
    press(manager, "f", "ctrl")

    type_text(manager, "cat")

    assert [m.index for m in manager.context.session.matches] == [1]


def test_unbound_key_is_not_consumed() -> None:
    manager = make_manager()

    result = press(manager, "F5")

    assert result.consumed is False
    assert result.status == "miss"


def test_undo_after_closing_find_leaves_no_marking() -> None:
    manager = make_manager()
    press(manager, "f", "ctrl")
    type_text(manager, "cat")
    press(manager, "TAB")
    type_text(manager, "dog")
    press(manager, "r", "ctrl")
    manager.process_pending()
    press(manager, "ESC")

    result = press(manager, "z", "ctrl")

    buffer = manager.context.buffer
    assert result.status == "undo"
    assert buffer.get_plain_text() == "cat cat cat"
    assert all("background" not in run.attributes for run in buffer.document.runs())
