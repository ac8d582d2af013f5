"""Wrap-around stepping through a match set."""

from __future__ import annotations

from typing import Optional

from .models import EMPTY_MATCHES, CursorState, Match, MatchSet


class NavigationCursor:
    def __init__(self) -> None:
        self.matches: MatchSet = EMPTY_MATCHES
        self.state = CursorState()

    def load(self, matches: MatchSet) -> None:
        """Adopt a fresh scan; the first match becomes active."""

        self.matches = matches
        self.state.reset(len(matches))

    def clear(self) -> None:
        self.load(EMPTY_MATCHES)

    @property
    def current(self) -> int:
        return self.state.current

    @property
    def total(self) -> int:
        return len(self.matches)

    @property
    def active_index(self) -> int:
        return self.state.current - 1

    @property
    def active_match(self) -> Optional[Match]:
        if self.state.current == 0:
            return None
        return self.matches[self.state.current - 1]

    def next(self) -> bool:
        if not self.matches:
            return False
        total = len(self.matches)
        self.state.current = 1 if self.state.current >= total else self.state.current + 1
        return True

    def previous(self) -> bool:
        if not self.matches:
            return False
        total = len(self.matches)
        self.state.current = total if self.state.current <= 1 else self.state.current - 1
        return True


__all__ = ["NavigationCursor"]
