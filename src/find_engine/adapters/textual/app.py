"""Executable Textual app hosting a document with find and replace."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use find_engine.adapters.textual.app"
    ) from exc

from find_engine.buffer import BufferMirror, RichTextBuffer
from find_engine.modes.mode_manager import ModeManager
from find_engine.runtime import telemetry
from find_engine.runtime.settings import FindSettings, load_settings

from .controller import (
    TextualFindAdapter,
    TextualUIHooks,
    create_default_manager,
    render_runs,
)

NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
}


@dataclass
class UIState:
    status_text: str = ""
    find_bar: str = ""


class FindEngineApp(App[None]):
    """Minimal Textual UI around a RichTextBuffer and its find session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#find-bar {
		height: auto;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(
        self,
        buffer: Optional[RichTextBuffer] = None,
        *,
        settings: Optional[FindSettings] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._buffer = buffer or RichTextBuffer()
        self._settings = settings or load_settings()
        self.manager: ModeManager | None = None
        self.adapter: TextualFindAdapter | None = None
        self._buffer_widget: Static | None = None
        self._find_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._find_widget = Static("", id="find-bar")
        self._status_widget = Static("", id="status-line")
        yield self._find_widget
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.manager = create_default_manager(self._buffer, settings=self._settings)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_find_bar=self._show_find_bar,
            log=self._log_line,
        )
        self.adapter = TextualFindAdapter(self.manager, hooks)
        # Deferred rescans wait for this tick so the buffer has settled.
        self.set_interval(self._settings.flush_interval_ms / 1000.0, self._flush)

    async def on_unmount(self) -> None:
        if self.manager:
            self.manager.context.session.close()
        self._buffer.close()

    def _flush(self) -> None:
        if self.adapter:
            self.adapter.process_pending()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if not self._buffer_widget:
            return
        rendered = Text()
        for chunk, style in render_runs(mirror):
            rendered.append(chunk, style=style or None)
        self._buffer_widget.update(rendered)
        self._buffer_widget.scroll_to(y=mirror.scroll_top, animate=False)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_find_bar(self, bar: Optional[Dict[str, object]]) -> None:
        if bar is None:
            self._state.find_bar = ""
        else:
            marker = {"find": "", "replace": ""}
            marker[str(bar["field"])] = "▸"
            case = "Aa" if bar["case_sensitive"] else "aa"
            self._state.find_bar = (
                f"{marker['find']}Find: {bar['find']}   "
                f"{marker['replace']}Replace: {bar['replace']}   [{case}]   {bar['status']}"
            )
        if self._find_widget:
            self._find_widget.update(self._state.find_bar)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("ui.trace", level="debug", data={"line": line})

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        *modifiers, base = event.key.split("+") if event.key != "+" else ["+"]
        if event.key == "ctrl+q":
            return None
        key = NAMED_KEYS.get(base)
        if key is not None:
            return (key, None, tuple(modifiers))
        if event.character and event.is_printable:
            return (event.character, event.character, tuple(modifiers))
        return (base, None, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Open a text file with find and replace (Ctrl+F)."
    )
    parser.add_argument("path", nargs="?", help="File to load into the buffer")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        help="telelog preset to use instead of FIND_ENGINE_* variables",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else ""
    app = FindEngineApp(RichTextBuffer.from_text(text, name=args.path or "scratch"))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
