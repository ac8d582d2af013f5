"""Adapter that wires ModeManager and session events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from find_engine.buffer import BufferMirror, RichTextBuffer
from find_engine.modes import (
    EditorMode,
    FindMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
)
from find_engine.modes.mode_manager import ModeManager
from find_engine.runtime.settings import FindSettings, load_settings
from find_engine.search import HIGHLIGHT_ATTRIBUTE, FindSession

EMBED_LABELS = {"page_break": "Page Break", "section_break": "Section Break"}

Segment = Tuple[str, str]  # (text, style)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def create_default_manager(
    buffer: Optional[RichTextBuffer] = None,
    *,
    settings: Optional[FindSettings] = None,
) -> ModeManager:
    """Build a ModeManager with editor + find modes and default keymaps."""

    buffer = buffer or RichTextBuffer()
    bus = ModeBus()
    session = FindSession(buffer, settings=settings or load_settings(), emit=bus.emit)
    context = ModeContext(buffer=buffer, session=session, bus=bus, extras={})
    manager = ModeManager(context)
    manager.register_mode(EditorMode)
    manager.register_mode(FindMode)
    return manager


def render_runs(mirror: BufferMirror) -> List[Segment]:
    """Flatten buffer runs into ``(text, rich style)`` segments."""

    segments: List[Segment] = []
    for run in mirror.runs:
        if run.is_embed:
            label = EMBED_LABELS.get(run.attributes["embed"], run.attributes["embed"])
            segments.append((f"\n── {label} ──\n" * len(run.text), "dim italic"))
            continue
        styles = []
        if "bold" in run.attributes:
            styles.append("bold")
        if "italic" in run.attributes:
            styles.append("italic")
        background = run.attributes.get(HIGHLIGHT_ATTRIBUTE)
        if background:
            styles.append(f"black on {background}")
        segments.append((run.text, " ".join(styles)))
    return segments


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_find_bar: Callable[[Optional[Dict[str, object]]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualFindAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Tuple[str, ...] = (),
    ) -> ModeResult:
        """Translate a host key event into a KeyInput and dispatch it."""

        self._log_state("key ->", key=key, text=text, mods=modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        )
        status = result.message or result.status
        if status and result.status != "edited":
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._log_state("result <-", status=result.status, switch_to=result.switch_to)
        return result

    def process_pending(self) -> int:
        """Flush the buffer's settle queue; refresh the view if anything ran."""

        ran = self.manager.process_pending()
        if ran:
            self._refresh_buffer()
            session = self.manager.context.session
            if session.status_text:
                self.hooks.update_status(session.status_text)
        return ran

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "find.open",
            "find.close",
            "find.matches",
            "find.replace",
            "find.replace_all",
            "find.stale",
            "find.field",
            "find.bar",
            "buffer.changed",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "find.bar":
            self.hooks.show_find_bar(payload if isinstance(payload, dict) else None)
        elif name == "buffer.changed":
            self._refresh_stats()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.manager.context.buffer.mirror())

    def _refresh_stats(self) -> None:
        stats = self.manager.context.buffer.stats()
        self.hooks.update_status(
            f"{stats.words} words · {stats.characters} chars · "
            f"{stats.reading_minutes} min read"
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        for key, value in {**self._state_metadata(), **fields}.items():
            if value is not None:
                parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        context = self.manager.context
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "caret": context.buffer.state.caret,
            "session": context.session.state.value,
            "matches": context.session.total,
            "buffer_version": context.buffer.document.version,
        }


__all__ = [
    "TextualFindAdapter",
    "TextualUIHooks",
    "create_default_manager",
    "render_runs",
]
