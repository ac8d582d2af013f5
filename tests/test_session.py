from __future__ import annotations

from typing import List, Optional, Tuple

from find_engine.buffer import BufferDocument, RichTextBuffer
from find_engine.runtime.settings import FindSettings
from find_engine.search import HIGHLIGHT_ATTRIBUTE, FindSession, SessionState

SETTINGS = FindSettings(match_color="yellow", active_color="orange", scroll_context=3)


class RecordingBuffer(RichTextBuffer):
    """RichTextBuffer that remembers formatting and scroll requests."""

    def __init__(self, text: str = "") -> None:
        super().__init__(name="recording", document=BufferDocument.from_text(text))
        self.format_calls: List[Tuple[int, int, str, object]] = []
        self.scroll_calls: List[int] = []

    def format_range(self, start: int, length: int, attribute: str, value: object) -> None:
        self.format_calls.append((start, length, attribute, value))
        super().format_range(start, length, attribute, value)

    def scroll_to(self, top: int) -> None:
        self.scroll_calls.append(top)
        super().scroll_to(top)


def make_session(
    text: str = "cat cat cat",
) -> Tuple[FindSession, RecordingBuffer, List[Tuple[str, Optional[object]]]]:
    buffer = RecordingBuffer(text)
    events: List[Tuple[str, Optional[object]]] = []
    session = FindSession(
        buffer,
        settings=SETTINGS,
        emit=lambda name, payload: events.append((name, payload)),
    )
    session.open()
    return session, buffer, events


def highlighted(buffer: RichTextBuffer) -> List[Tuple[int, str]]:
    return [
        (run.start, run.attributes[HIGHLIGHT_ATTRIBUTE])
        for run in buffer.document.runs()
        if HIGHLIGHT_ATTRIBUTE in run.attributes
    ]


def test_query_marks_matches_and_activates_first() -> None:
    session, buffer, events = make_session()

    session.set_find_text("cat")

    assert [m.index for m in session.matches] == [0, 4, 8]
    assert session.current == 1
    assert session.state is SessionState.HAS_MATCHES
    assert highlighted(buffer) == [(0, "orange"), (4, "yellow"), (8, "yellow")]
    assert events[-1] == ("find.matches", {"query": "cat", "current": 1, "total": 3})


def test_case_sensitivity_toggle_rescans() -> None:
    session, _, _ = make_session("Hello hello")
    session.set_find_text("hello")
    assert [m.index for m in session.matches] == [0, 6]

    session.set_case_sensitive(True)
    assert [m.index for m in session.matches] == [6]
    assert session.current == 1

    session.toggle_case_sensitive()
    assert session.total == 2


def test_empty_query_issues_no_formatting() -> None:
    session, buffer, _ = make_session()

    session.set_find_text("")

    assert session.matches == ()
    assert session.current == 0
    assert session.state is SessionState.IDLE
    assert buffer.format_calls == []


def test_no_match_query_issues_no_formatting_or_scroll() -> None:
    session, buffer, _ = make_session()

    session.set_find_text("zebra")

    assert session.total == 0
    assert session.state is SessionState.NO_MATCHES
    assert buffer.format_calls == []
    assert buffer.scroll_calls == []


def test_narrowing_to_no_matches_clears_previous_marking() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("cat")

    session.set_find_text("catz")

    assert highlighted(buffer) == []
    assert session.state is SessionState.NO_MATCHES


def test_navigation_wraps_around() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("cat")

    session.next()
    session.next()
    assert session.current == 3
    assert session.next() is True
    assert session.current == 1
    assert session.previous() is True
    assert session.current == 3
    assert highlighted(buffer)[-1] == (8, "orange")


def test_navigation_without_matches_is_a_noop() -> None:
    session, _, _ = make_session()
    session.set_find_text("zebra")

    assert session.next() is False
    assert session.previous() is False
    assert session.current == 0


def test_scrolls_active_match_into_view_with_context() -> None:
    text = "\n" * 10 + "needle"
    session, buffer, _ = make_session(text)

    session.set_find_text("needle")

    assert buffer.scroll_calls[-1] == 7
    assert buffer.state.scroll_top == 7


def test_single_replace_defers_rescan_until_settled() -> None:
    session, buffer, events = make_session()
    session.set_find_text("cat")
    session.next()
    session.set_replace_text("dog")

    assert session.replace() == 1

    assert buffer.get_plain_text() == "cat dog cat"
    assert session.state is SessionState.SCANNING
    assert session.pending_rescan
    assert session.status_text == "Searching..."
    assert ("find.replace", {"index": 4, "length": 3, "text": "dog"}) in events

    assert buffer.flush() == 1

    assert [m.index for m in session.matches] == [0, 8]
    assert session.current == 1
    assert session.state is SessionState.HAS_MATCHES
    assert not session.pending_rescan


def test_single_replace_is_one_undo_step() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("cat")
    session.set_replace_text("dog")
    session.replace()

    assert len(buffer.undo_timeline) == 1
    buffer.undo()
    assert buffer.get_plain_text() == "cat cat cat"


def test_replace_with_empty_text_deletes_match() -> None:
    session, buffer, _ = make_session("cat cat")
    session.set_find_text("cat")

    session.replace()
    buffer.flush()

    assert buffer.get_plain_text() == " cat"
    assert [m.index for m in session.matches] == [1]


def test_query_change_cancels_pending_rescan() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("cat")
    session.set_replace_text("dog")
    session.replace()

    session.set_find_text("dog")
    assert not session.pending_rescan
    buffer.flush()

    assert session.query.find_text == "dog"
    assert [m.index for m in session.matches] == [0]


def test_close_before_settle_drops_rescan() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("cat")
    session.set_replace_text("dog")
    session.replace()

    session.close()
    buffer.flush()

    assert session.state is SessionState.CLOSED
    assert session.matches == ()


def test_replace_all_processes_rightmost_first() -> None:
    session, buffer, events = make_session("a-a-a")
    session.set_find_text("a")
    session.set_replace_text("bb")

    assert session.replace_all() == 3

    assert buffer.get_plain_text() == "bb-bb-bb"
    assert session.query.find_text == ""
    assert session.matches == ()
    assert session.state is SessionState.IDLE
    assert highlighted(buffer) == []
    assert events[-1] == ("find.replace_all", {"replaced": 3})


def test_left_to_right_replacement_with_stale_offsets_corrupts_text() -> None:
    text = "a-a-a"
    session, _, _ = make_session(text)
    session.set_find_text("a")

    naive = text
    for match in session.matches:
        naive = naive[: match.index] + "bb" + naive[match.end :]

    assert naive != "bb-bb-bb"


def test_replace_all_is_one_undo_step() -> None:
    session, buffer, _ = make_session("a-a-a")
    session.set_find_text("a")
    session.set_replace_text("bb")
    session.replace_all()

    assert buffer.undo() is True
    assert buffer.get_plain_text() == "a-a-a"


def test_replace_all_skips_overlapping_matches() -> None:
    session, buffer, _ = make_session("aaa")
    session.set_find_text("aa")
    session.set_replace_text("b")
    assert session.total == 2

    assert session.replace_all() == 1
    assert buffer.get_plain_text() == "ab"


def test_replace_without_matches_does_nothing() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("zebra")

    assert session.replace() == 0
    assert session.replace_all() == 0
    assert buffer.get_plain_text() == "cat cat cat"


def test_external_edit_makes_match_stale_and_triggers_rescan() -> None:
    session, buffer, events = make_session()
    session.set_find_text("cat")
    session.previous()
    assert session.current == 3

    buffer.delete_range(0, 8)
    session.set_replace_text("dog")

    assert session.replace() == 0
    assert buffer.get_plain_text() == "cat"
    assert any(name == "find.stale" for name, _ in events)
    assert [m.index for m in session.matches] == [0]


def test_close_is_idempotent_and_resets_query() -> None:
    session, buffer, events = make_session()
    session.set_find_text("cat")
    session.set_replace_text("dog")

    session.close()
    session.close()

    assert session.query.find_text == ""
    assert session.query.replace_text == ""
    assert highlighted(buffer) == []
    assert [name for name, _ in events].count("find.close") == 1


def test_close_without_surface_never_raises() -> None:
    session = FindSession(settings=SETTINGS)
    session.close()
    session.open()
    session.set_find_text("x")
    session.close()
    session.close()

    assert session.query.find_text == ""
    assert session.state is SessionState.CLOSED


def test_unready_buffer_turns_operations_into_noops() -> None:
    session, buffer, _ = make_session()
    buffer.close()

    session.set_find_text("cat")

    assert session.state is SessionState.IDLE
    assert session.next() is False
    assert session.replace() == 0
    assert session.replace_all() == 0
    session.close()


def test_attach_rescans_existing_query() -> None:
    session = FindSession(settings=SETTINGS)
    session.open()
    session.set_find_text("cat")
    assert session.total == 0

    session.attach(RichTextBuffer.from_text("a cat"))

    assert [m.index for m in session.matches] == [2]


def test_detach_clears_marking() -> None:
    session, buffer, _ = make_session()
    session.set_find_text("cat")

    session.detach()

    assert highlighted(buffer) == []
    assert not session.is_attached()
    assert session.state is SessionState.IDLE


def test_closed_session_ignores_query_changes() -> None:
    session, buffer, _ = make_session()
    session.close()

    session.set_find_text("cat")

    assert session.query.find_text == ""
    assert buffer.format_calls == []


def test_status_text() -> None:
    session, _, _ = make_session()
    assert session.status_text == ""

    session.set_find_text("cat")
    session.next()
    assert session.status_text == "2 of 3 matches"

    session.set_find_text("zebra")
    assert session.status_text == "No matches found"

    session.close()
    assert session.status_text == ""


def test_replace_after_length_changing_character_hits_the_match() -> None:
    session, buffer, _ = make_session("İ cat cat")
    session.set_find_text("cat")
    assert [m.index for m in session.matches] == [2, 6]
    session.set_replace_text("dog")

    session.replace()
    buffer.flush()

    assert buffer.get_plain_text() == "İ dog cat"
    assert [m.index for m in session.matches] == [6]


def test_replacement_inherits_inline_formatting() -> None:
    session, buffer, _ = make_session("a cat")
    buffer.format_range(2, 3, "bold", True)
    session.set_find_text("cat")
    session.set_replace_text("lion")

    session.replace()
    buffer.flush()

    assert buffer.get_plain_text() == "a lion"
    for offset in range(2, 6):
        assert dict(buffer.document.attributes_at(offset)) == {"bold": "True"}


def test_replace_all_inherits_formatting_without_marking() -> None:
    session, buffer, _ = make_session("cat cat")
    buffer.format_range(0, 3, "italic", True)
    session.set_find_text("cat")
    session.set_replace_text("dog")

    session.replace_all()

    assert buffer.get_plain_text() == "dog dog"
    assert dict(buffer.document.attributes_at(0)) == {"italic": "True"}
    assert dict(buffer.document.attributes_at(4)) == {}
