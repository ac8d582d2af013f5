"""Rich-text buffer abstractions and the surface the search engine drives."""

from .buffer import RichTextBuffer, Transaction
from .document import (
    EMBED_ATTRIBUTE,
    EMBED_CHAR,
    EMBED_KINDS,
    HIGHLIGHT_ATTRIBUTE,
    BufferDocument,
    TextRun,
)
from .state import BufferState
from .stats import DocumentStats, compute_stats
from .sync import (
    BufferMirror,
    BufferValidationError,
    DocumentSurface,
    FindEngineError,
    ViewportBounds,
)
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range

__all__ = [
    "BufferDocument",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "DocumentStats",
    "DocumentSurface",
    "EMBED_ATTRIBUTE",
    "EMBED_CHAR",
    "EMBED_KINDS",
    "FindEngineError",
    "HIGHLIGHT_ATTRIBUTE",
    "RichTextBuffer",
    "TextRun",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ViewportBounds",
    "compute_stats",
    "ensure_offset",
    "ensure_range",
]
