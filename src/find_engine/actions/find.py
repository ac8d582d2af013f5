"""Actions bound inside the find bar."""

from __future__ import annotations

from find_engine.keymaps.resolver import ResolutionMatch
from find_engine.modes.base_mode import ModeContext, ModeResult, find_state


def _status(context: ModeContext, status: str) -> ModeResult:
    return ModeResult(
        consumed=True, status=status, message=context.session.status_text or status
    )


def find_next(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    moved = context.session.next()
    return _status(context, "find_next" if moved else "no_matches")


def find_previous(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    moved = context.session.previous()
    return _status(context, "find_previous" if moved else "no_matches")


def replace_current(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    replaced = context.session.replace()
    return _status(context, "replaced" if replaced else "nothing_to_replace")


def replace_all(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    replaced = context.session.replace_all()
    if not replaced:
        return _status(context, "nothing_to_replace")
    return ModeResult(
        consumed=True, status="replaced_all", message=f"Replaced {replaced}"
    )


def toggle_case(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.toggle_case_sensitive()
    label = "case_sensitive" if context.session.query.case_sensitive else "ignore_case"
    return ModeResult(consumed=True, status=label, message=label)


def toggle_field(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = find_state(context)
    state["field"] = "replace" if state["field"] == "find" else "find"
    context.bus.emit("find.field", state["field"])
    return ModeResult(consumed=True, status="field", message=str(state["field"]))


__all__ = [
    "find_next",
    "find_previous",
    "replace_all",
    "replace_current",
    "toggle_case",
    "toggle_field",
]
