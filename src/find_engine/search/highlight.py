"""Background-colour marking of matches inside a document surface."""

from __future__ import annotations

from typing import Optional

from find_engine.buffer import HIGHLIGHT_ATTRIBUTE, DocumentSurface
from find_engine.runtime.settings import FindSettings

from .models import Match, MatchSet


class HighlightApplier:
    """Marks matches with the ``background`` attribute only.

    Other attributes (bold, embeds, ...) are never touched, so clearing the
    marking cannot disturb unrelated formatting.
    """

    def __init__(self, settings: Optional[FindSettings] = None) -> None:
        self.settings = settings or FindSettings()
        self.marked = False

    def apply(
        self, surface: DocumentSurface, matches: MatchSet, active_index: int
    ) -> bool:
        """Mark ``matches`` and scroll to the active one.

        Returns ``False`` without touching the surface when there is nothing
        to mark or ``active_index`` is out of range.
        """

        if not matches or not 0 <= active_index < len(matches):
            return False

        self.clear(surface)
        length = surface.get_length()
        for position, match in enumerate(matches):
            if match.end > length:
                continue
            color = (
                self.settings.active_color
                if position == active_index
                else self.settings.match_color
            )
            surface.format_range(match.index, match.length, HIGHLIGHT_ATTRIBUTE, color)
            self.marked = True

        self._scroll_into_view(surface, matches[active_index], length)
        return True

    def clear(self, surface: Optional[DocumentSurface]) -> None:
        """Drop every match marking; a no-op when nothing is marked."""

        if not self.marked or surface is None or not surface.ready:
            return
        length = surface.get_length()
        if length:
            surface.format_range(0, length, HIGHLIGHT_ATTRIBUTE, False)
        self.marked = False

    def unmark(self, surface: DocumentSurface, match: Match) -> None:
        surface.format_range(match.index, match.length, HIGHLIGHT_ATTRIBUTE, False)

    def _scroll_into_view(
        self, surface: DocumentSurface, match: Match, length: int
    ) -> None:
        if match.index > length:
            return
        bounds = surface.get_viewport_bounds(match.index)
        surface.scroll_to(max(0, bounds.top - self.settings.scroll_context))


__all__ = ["HIGHLIGHT_ATTRIBUTE", "HighlightApplier"]
