"""Actions that move between the editor and the find bar."""

from __future__ import annotations

from find_engine.keymaps.resolver import ResolutionMatch
from find_engine.modes.base_mode import ModeContext, ModeResult, find_state


def open_find(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.open()
    find_state(context)["field"] = "find"
    return ModeResult(consumed=True, switch_to="find", message="find_open")


def close_find(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.close()
    return ModeResult(consumed=True, switch_to="editor", message="find_close")


__all__ = ["open_find", "close_find"]
