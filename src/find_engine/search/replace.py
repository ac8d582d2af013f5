"""Range replacement of matches inside a document surface."""

from __future__ import annotations

from typing import Dict

from find_engine.buffer import (
    EMBED_ATTRIBUTE,
    HIGHLIGHT_ATTRIBUTE,
    DocumentSurface,
)
from find_engine.runtime import telemetry

from .highlight import HighlightApplier
from .models import Match, MatchSet


def carried_attributes(surface: DocumentSurface, match: Match) -> Dict[str, str]:
    """Inline formatting of the first matched character, minus marking."""

    return {
        key: value
        for key, value in surface.attributes_at(match.index).items()
        if key not in (HIGHLIGHT_ATTRIBUTE, EMBED_ATTRIBUTE)
    }


class ReplaceEngine:
    def __init__(self, highlighter: HighlightApplier) -> None:
        self.highlighter = highlighter

    def replace_one(
        self, surface: DocumentSurface, match: Match, replacement: str
    ) -> int:
        """Swap the text of ``match`` for ``replacement`` as one change.

        The replacement takes the inline formatting of the first replaced
        character. Offsets of every other match are stale afterwards; callers
        must rescan rather than patch them.
        """

        with telemetry.search_span(
            "replace_one", metadata={"index": match.index, "length": match.length}
        ):
            with surface.batch("replace"):
                self.highlighter.unmark(surface, match)
                attributes = carried_attributes(surface, match)
                surface.delete_range(match.index, match.length)
                if replacement:
                    surface.insert_text(match.index, replacement, attributes)
        return 1

    def replace_all(
        self, surface: DocumentSurface, matches: MatchSet, replacement: str
    ) -> int:
        """Replace every match, rightmost first.

        Walking right to left leaves each pending match entirely before the
        edit point, so its recorded offset stays valid whatever the length
        difference. A match overlapping one already replaced is skipped.
        """

        replaced = 0
        boundary = surface.get_length()
        with telemetry.search_span(
            "replace_all", metadata={"matches": len(matches)}
        ) as handle:
            with surface.batch("replace_all"):
                for match in reversed(matches):
                    if match.end > boundary:
                        continue
                    attributes = carried_attributes(surface, match)
                    surface.delete_range(match.index, match.length)
                    if replacement:
                        surface.insert_text(match.index, replacement, attributes)
                    boundary = match.index
                    replaced += 1
            handle.add_metadata("replaced", replaced)
        return replaced


__all__ = ["ReplaceEngine", "carried_attributes"]
