"""Word, character, and reading-time statistics for a document projection."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .document import EMBED_CHAR

WORDS_PER_MINUTE = 200


@dataclass(frozen=True, slots=True)
class DocumentStats:
    words: int
    characters: int
    reading_minutes: int


def compute_stats(text: str, *, words_per_minute: int = WORDS_PER_MINUTE) -> DocumentStats:
    plain = text.replace(EMBED_CHAR, "").strip()
    words = len(plain.split())
    return DocumentStats(
        words=words,
        characters=len(plain),
        reading_minutes=math.ceil(words / words_per_minute),
    )


__all__ = ["DocumentStats", "WORDS_PER_MINUTE", "compute_stats"]
