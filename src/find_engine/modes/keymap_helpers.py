"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from find_engine.keymaps.models import KeyStroke
from find_engine.keymaps.resolver import KeymapResolver, ResolutionMatch
from find_engine.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, key.modifiers).token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


def is_printable(key: KeyInput) -> bool:
    if not key.text or len(key.text) != 1:
        return False
    if any(mod in {"ctrl", "alt", "meta"} for mod in (m.lower() for m in key.modifiers)):
        return False
    return key.text.isprintable()


__all__ = [
    "execute_match",
    "is_printable",
    "key_to_token",
    "require_keymap_resolver",
]
