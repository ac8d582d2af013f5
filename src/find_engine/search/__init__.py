"""Find and replace over a live rich-text document."""

from .cursor import NavigationCursor
from .highlight import HIGHLIGHT_ATTRIBUTE, HighlightApplier
from .locator import locate_matches
from .models import (
    EMPTY_MATCHES,
    CursorState,
    Match,
    MatchSet,
    QueryState,
    SessionState,
)
from .replace import ReplaceEngine
from .session import EventSink, FindSession

__all__ = [
    "CursorState",
    "EMPTY_MATCHES",
    "EventSink",
    "FindSession",
    "HIGHLIGHT_ATTRIBUTE",
    "HighlightApplier",
    "Match",
    "MatchSet",
    "NavigationCursor",
    "QueryState",
    "ReplaceEngine",
    "SessionState",
    "locate_matches",
]
