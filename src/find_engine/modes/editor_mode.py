"""Editor mode: typing goes into the document, ``ctrl+f`` opens find."""

from __future__ import annotations

from find_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    execute_match,
    is_printable,
    key_to_token,
    require_keymap_resolver,
)


class EditorMode(Mode):
    name = "editor"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("find_engine.modes.editor")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, key_to_token(key))
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)

        if key.key in {"ENTER", "RETURN"}:
            return self._insert("\n")
        if is_printable(key):
            assert key.text is not None
            return self._insert(key.text)
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _insert(self, text: str) -> ModeResult:
        buffer = self.context.buffer
        buffer.insert_text(buffer.state.caret, text)
        self.context.bus.emit("buffer.changed", buffer.document.version)
        return ModeResult(consumed=True, status="edited")
