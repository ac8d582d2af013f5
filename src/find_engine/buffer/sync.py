"""Boundary types between the search engine and whatever owns the document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ContextManager, Mapping, Optional, Protocol, Sequence

from .document import TextRun
from .state import Selection


@dataclass(frozen=True, slots=True)
class ViewportBounds:
    """Position of an offset in view rows/columns."""

    top: int
    left: int
    height: int = 1


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    runs: Sequence[TextRun]
    caret: int
    selection: Optional[Selection]
    scroll_top: int = 0
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


class DocumentSurface(Protocol):
    """Range-based command surface a find session drives.

    Offsets index the plain-text projection returned by ``get_plain_text``.
    """

    @property
    def ready(self) -> bool:
        """False while the owner is still initializing or already torn down."""
        ...

    def get_length(self) -> int: ...

    def get_plain_text(self) -> str: ...

    def attributes_at(self, offset: int) -> Mapping[str, str]:
        """Inline attributes of the character at ``offset``."""
        ...

    def format_range(
        self, start: int, length: int, attribute: str, value: object
    ) -> None:
        """Set ``attribute`` over a range; ``False`` or ``None`` clears it."""
        ...

    def delete_range(self, start: int, length: int) -> None: ...

    def insert_text(
        self, start: int, text: str, attributes: Optional[Mapping[str, object]] = None
    ) -> None: ...

    def get_viewport_bounds(self, offset: int) -> ViewportBounds: ...

    def scroll_to(self, top: int) -> None: ...

    def when_settled(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once pending mutations have been applied."""
        ...

    def batch(self, label: str = ...) -> ContextManager[object]:
        """Group mutations into one atomic, undoable change."""
        ...


class FindEngineError(RuntimeError):
    """Base class for errors raised by find_engine."""


class BufferValidationError(FindEngineError):
    """Raised when a caller addresses offsets outside the document."""

    def __init__(
        self, message: str, *, offset: int | None = None, length: int | None = None
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.length = length
