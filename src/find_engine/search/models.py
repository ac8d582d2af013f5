"""Value types shared by the locator, cursor, highlighter, and session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Match:
    """One occurrence of the query in the plain-text projection."""

    index: int
    length: int

    @property
    def end(self) -> int:
        return self.index + self.length


MatchSet = Tuple[Match, ...]

EMPTY_MATCHES: MatchSet = ()


@dataclass(slots=True)
class QueryState:
    find_text: str = ""
    replace_text: str = ""
    case_sensitive: bool = False


@dataclass(slots=True)
class CursorState:
    """1-based position of the active match; ``0`` means no active match."""

    current: int = 0

    def reset(self, total: int) -> None:
        self.current = 1 if total > 0 else 0


class SessionState(str, Enum):
    CLOSED = "closed"
    IDLE = "idle"
    SCANNING = "scanning"
    HAS_MATCHES = "has_matches"
    NO_MATCHES = "no_matches"

    @property
    def is_open(self) -> bool:
        return self is not SessionState.CLOSED


__all__ = [
    "CursorState",
    "EMPTY_MATCHES",
    "Match",
    "MatchSet",
    "QueryState",
    "SessionState",
]
