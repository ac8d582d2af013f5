"""Find/replace session lifecycle over an attached document surface."""

from __future__ import annotations

from typing import Callable, Optional

from find_engine.buffer import BufferValidationError, DocumentSurface
from find_engine.runtime import telemetry
from find_engine.runtime.settings import FindSettings, load_settings

from .cursor import NavigationCursor
from .highlight import HighlightApplier
from .locator import locate_matches
from .models import MatchSet, QueryState, SessionState
from .replace import ReplaceEngine

EventSink = Callable[[str, Optional[object]], None]


def _noop(_name: str, _payload: Optional[object] = None) -> None:
    return None


class FindSession:
    """One search session: query, match set, cursor, and their marking.

    The surface is passed in explicitly and may come and go; every public
    entry point checks ``is_attached()`` once and quietly does nothing when
    the surface is missing or not ready. ``close()`` is always safe.
    """

    def __init__(
        self,
        surface: Optional[DocumentSurface] = None,
        *,
        settings: Optional[FindSettings] = None,
        emit: Optional[EventSink] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.query = QueryState(case_sensitive=self.settings.case_sensitive)
        self.cursor = NavigationCursor()
        self.highlighter = HighlightApplier(self.settings)
        self.replacer = ReplaceEngine(self.highlighter)
        self.state = SessionState.CLOSED
        self.logger = telemetry.get_logger(telemetry.SEARCH_LOGGER_NAME)
        self._surface = surface
        self._emit = emit or _noop
        self._generation = 0
        self._pending: Optional[int] = None

    # -- surface -----------------------------------------------------------

    @property
    def surface(self) -> Optional[DocumentSurface]:
        return self._surface

    def attach(self, surface: DocumentSurface) -> None:
        self._surface = surface
        if self.state.is_open and self.query.find_text:
            self._rescan()

    def detach(self) -> None:
        if self.is_attached():
            self.highlighter.clear(self._surface)
        self._cancel_pending()
        self.cursor.clear()
        self._surface = None
        if self.state.is_open:
            self.state = SessionState.IDLE

    def is_attached(self) -> bool:
        return self._surface is not None and bool(self._surface.ready)

    # -- read-only views ---------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def matches(self) -> MatchSet:
        return self.cursor.matches

    @property
    def current(self) -> int:
        return self.cursor.current

    @property
    def total(self) -> int:
        return self.cursor.total

    @property
    def pending_rescan(self) -> bool:
        return self._pending is not None

    @property
    def status_text(self) -> str:
        if not self.state.is_open or not self.query.find_text:
            return ""
        if self.cursor.total:
            return f"{self.cursor.current} of {self.cursor.total} matches"
        if self.state is SessionState.SCANNING:
            return "Searching..."
        return "No matches found"

    # -- lifecycle ---------------------------------------------------------

    def open(self) -> None:
        if self.state.is_open:
            return
        self.query = QueryState(case_sensitive=self.settings.case_sensitive)
        self.cursor.clear()
        self.state = SessionState.IDLE
        self._emit("find.open", None)
        telemetry.record_event("find.open", level="debug")

    def close(self) -> None:
        was_open = self.state.is_open
        self._cancel_pending()
        if self.is_attached():
            self.highlighter.clear(self._surface)
        self.query = QueryState(case_sensitive=self.settings.case_sensitive)
        self.cursor.clear()
        self.state = SessionState.CLOSED
        if was_open:
            self._emit("find.close", None)
            telemetry.record_event("find.close", level="debug")

    # -- query -------------------------------------------------------------

    def set_find_text(self, text: str) -> None:
        if not self.state.is_open:
            return
        self.query.find_text = text
        self._rescan()

    def set_replace_text(self, text: str) -> None:
        if not self.state.is_open:
            return
        self.query.replace_text = text

    def set_case_sensitive(self, case_sensitive: bool) -> None:
        if not self.state.is_open:
            return
        self.query.case_sensitive = case_sensitive
        self._rescan()

    def toggle_case_sensitive(self) -> None:
        self.set_case_sensitive(not self.query.case_sensitive)

    # -- navigation --------------------------------------------------------

    def next(self) -> bool:
        if not self.is_attached() or not self.cursor.next():
            return False
        self._highlight()
        return True

    def previous(self) -> bool:
        if not self.is_attached() or not self.cursor.previous():
            return False
        self._highlight()
        return True

    # -- replacement -------------------------------------------------------

    def replace(self) -> int:
        """Replace the active match, then rescan once the buffer settles."""

        if not self.is_attached():
            return 0
        match = self.cursor.active_match
        if match is None:
            return 0
        surface = self._surface
        assert surface is not None

        try:
            self.replacer.replace_one(surface, match, self.query.replace_text)
        except BufferValidationError as exc:
            self._stale(exc)
            return 0

        # Offsets after the edit are unknown until the surface settles.
        self.cursor.clear()
        self.state = SessionState.SCANNING
        self._generation += 1
        generation = self._generation
        self._pending = generation
        surface.when_settled(lambda: self._on_settled(generation))
        self._emit(
            "find.replace",
            {"index": match.index, "length": match.length, "text": self.query.replace_text},
        )
        return 1

    def replace_all(self) -> int:
        """Replace every match and end the query without rescanning."""

        if not self.is_attached() or not self.cursor.matches:
            return 0
        surface = self._surface
        assert surface is not None

        try:
            replaced = self.replacer.replace_all(
                surface, self.cursor.matches, self.query.replace_text
            )
        except BufferValidationError as exc:
            self._stale(exc)
            return 0

        self._cancel_pending()
        self.highlighter.clear(surface)
        self.cursor.clear()
        self.query.find_text = ""
        self.state = SessionState.IDLE
        self._emit("find.replace_all", {"replaced": replaced})
        telemetry.record_event(
            "find.replace_all", level="debug", data={"replaced": replaced}
        )
        return replaced

    # -- internals ---------------------------------------------------------

    def _rescan(self) -> None:
        self._cancel_pending()
        if not self.is_attached():
            self.cursor.clear()
            self.state = SessionState.IDLE
            return
        surface = self._surface
        assert surface is not None

        if not self.query.find_text:
            self.highlighter.clear(surface)
            self.cursor.clear()
            self.state = SessionState.IDLE
            self._emit_matches()
            return

        self.state = SessionState.SCANNING
        with telemetry.search_span(
            "scan",
            query=self.query.find_text,
            case_sensitive=self.query.case_sensitive,
        ) as handle:
            matches = locate_matches(
                surface.get_plain_text(),
                self.query.find_text,
                case_sensitive=self.query.case_sensitive,
            )
            handle.add_metadata("matches", len(matches))
        self.cursor.load(matches)

        if matches:
            self.highlighter.apply(surface, matches, self.cursor.active_index)
            self.state = SessionState.HAS_MATCHES
        else:
            self.highlighter.clear(surface)
            self.state = SessionState.NO_MATCHES
        self._emit_matches()

    def _highlight(self) -> None:
        assert self._surface is not None
        self.highlighter.apply(self._surface, self.cursor.matches, self.cursor.active_index)
        self._emit_matches()

    def _emit_matches(self) -> None:
        self._emit(
            "find.matches",
            {
                "query": self.query.find_text,
                "current": self.cursor.current,
                "total": self.cursor.total,
            },
        )

    def _on_settled(self, generation: int) -> None:
        if generation != self._pending or not self.state.is_open:
            return
        self._pending = None
        self._rescan()

    def _cancel_pending(self) -> None:
        self._generation += 1
        self._pending = None

    def _stale(self, exc: BufferValidationError) -> None:
        payload = {"offset": exc.offset, "length": exc.length, "reason": str(exc)}
        telemetry.record_event("find.stale", level="warning", data=payload)
        self._emit("find.stale", payload)
        self._rescan()


__all__ = ["EventSink", "FindSession"]
