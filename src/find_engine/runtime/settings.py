"""Environment-driven settings for the search engine and its hosts."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import env, env_flag

DEFAULT_MATCH_COLOR = "#ffeb3b"
DEFAULT_ACTIVE_COLOR = "#ff9632"
DEFAULT_SCROLL_CONTEXT = 3
DEFAULT_FLUSH_INTERVAL_MS = 100


@dataclass(frozen=True, slots=True)
class FindSettings:
    match_color: str = DEFAULT_MATCH_COLOR
    active_color: str = DEFAULT_ACTIVE_COLOR
    # rows left visible above the active match after scrolling
    scroll_context: int = DEFAULT_SCROLL_CONTEXT
    case_sensitive: bool = False
    flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS


def _env_int(name: str, fallback: int, *, minimum: int = 0) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed >= minimum else fallback


def load_settings() -> FindSettings:
    """Read ``FIND_ENGINE_*`` variables, falling back to defaults."""

    return FindSettings(
        match_color=env("MATCH_COLOR") or DEFAULT_MATCH_COLOR,
        active_color=env("ACTIVE_COLOR") or DEFAULT_ACTIVE_COLOR,
        scroll_context=_env_int("SCROLL_CONTEXT", DEFAULT_SCROLL_CONTEXT),
        case_sensitive=env_flag("CASE_SENSITIVE", False),
        flush_interval_ms=_env_int(
            "FLUSH_INTERVAL_MS", DEFAULT_FLUSH_INTERVAL_MS, minimum=1
        ),
    )


__all__ = ["FindSettings", "load_settings"]
