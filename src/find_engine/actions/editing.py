"""Plain editing verbs available while the find bar is closed."""

from __future__ import annotations

from find_engine.keymaps.resolver import ResolutionMatch
from find_engine.modes.base_mode import ModeContext, ModeResult


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.buffer.state
    state.set_caret(state.caret - 1)
    return ModeResult(consumed=True, status="caret")


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.buffer.state
    state.set_caret(min(state.caret + 1, context.buffer.get_length()))
    return ModeResult(consumed=True, status="caret")


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    caret = context.buffer.state.caret
    if caret == 0:
        return ModeResult(consumed=True, status="noop")
    context.buffer.delete_range(caret - 1, 1)
    context.bus.emit("buffer.changed", context.buffer.document.version)
    return ModeResult(consumed=True, status="edited")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.buffer.undo():
        return ModeResult(consumed=True, status="noop", message="nothing_to_undo")
    context.bus.emit("buffer.changed", context.buffer.document.version)
    return ModeResult(consumed=True, status="undo", message="undo")


def redo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    if not context.buffer.redo():
        return ModeResult(consumed=True, status="noop", message="nothing_to_redo")
    context.bus.emit("buffer.changed", context.buffer.document.version)
    return ModeResult(consumed=True, status="redo", message="redo")


def _insert_break(context: ModeContext, kind: str) -> ModeResult:
    context.buffer.insert_embed(context.buffer.state.caret, kind)
    context.bus.emit("buffer.changed", context.buffer.document.version)
    return ModeResult(consumed=True, status="edited", message=kind)


def insert_page_break(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _insert_break(context, "page_break")


def insert_section_break(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _insert_break(context, "section_break")


__all__ = [
    "delete_backward",
    "insert_page_break",
    "insert_section_break",
    "move_left",
    "move_right",
    "redo",
    "undo",
]
