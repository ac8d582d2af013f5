"""Substring scan over a plain-text projection."""

from __future__ import annotations

import re

from .models import EMPTY_MATCHES, Match, MatchSet


def locate_matches(text: str, query: str, *, case_sensitive: bool = False) -> MatchSet:
    """Return every start offset of ``query`` in ``text``, overlaps included.

    The scan is a zero-width lookahead, so ``"aa"`` in ``"aaa"`` yields
    offsets 0 and 1. Case-insensitive matching compares character by
    character (``re.IGNORECASE``) and never rewrites the text, so offsets
    always index the projection itself.
    """

    if not query:
        return EMPTY_MATCHES

    flags = 0 if case_sensitive else re.IGNORECASE
    pattern = re.compile(f"(?={re.escape(query)})", flags)
    length = len(query)
    return tuple(Match(index=found.start(), length=length) for found in pattern.finditer(text))


__all__ = ["locate_matches"]
