"""Find mode: keystrokes edit the find/replace fields and drive the session."""

from __future__ import annotations

from find_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, find_state
from .keymap_helpers import (
    execute_match,
    is_printable,
    key_to_token,
    require_keymap_resolver,
)


class FindMode(Mode):
    name = "find"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("find_engine.modes.find")
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.session.open()
        self.context.bus.emit("find.bar", self._bar_state())

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        # Leaving the mode by any route ends the session.
        self.context.session.close()
        find_state(self.context)["field"] = "find"
        self.context.bus.emit("find.bar", None)

    @property
    def field(self) -> str:
        return str(find_state(self.context)["field"])

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, key_to_token(key))
        if result.status == "match" and result.match:
            outcome = execute_match(self.context, result.match)
            if outcome.switch_to is None:
                self.context.bus.emit("find.bar", self._bar_state())
            return outcome

        session = self.context.session
        if key.key == "BACKSPACE":
            self._set_field(self._field_text()[:-1])
        elif is_printable(key):
            assert key.text is not None
            self._set_field(self._field_text() + key.text)
        else:
            return ModeResult(consumed=False, status="miss", message="unhandled")

        self.context.bus.emit("find.bar", self._bar_state())
        return ModeResult(
            consumed=True, status="editing", message=session.status_text or None
        )

    def _field_text(self) -> str:
        query = self.context.session.query
        return query.find_text if self.field == "find" else query.replace_text

    def _set_field(self, text: str) -> None:
        session = self.context.session
        if self.field == "find":
            session.set_find_text(text)
        else:
            session.set_replace_text(text)

    def _bar_state(self) -> dict[str, object]:
        session = self.context.session
        return {
            "find": session.query.find_text,
            "replace": session.query.replace_text,
            "case_sensitive": session.query.case_sensitive,
            "field": self.field,
            "status": session.status_text,
        }
