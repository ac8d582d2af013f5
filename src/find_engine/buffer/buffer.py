"""Rich-text buffer facade combining document, state, undo, and settle hooks."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, List, Mapping, Optional, Tuple

from find_engine.runtime import telemetry

from .document import (
    EMBED_ATTRIBUTE,
    EMBED_CHAR,
    EMBED_KINDS,
    HIGHLIGHT_ATTRIBUTE,
    BufferDocument,
)
from .state import BufferState
from .stats import DocumentStats, compute_stats
from .sync import BufferMirror, ViewportBounds
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range


class RichTextBuffer:
    """In-process ``DocumentSurface`` implementation.

    Mutations are grouped into transactions. A transaction swaps in a new
    document only when it completes; if the body raises, the previous
    document is restored. Undo history keeps documents with
    ``transient_attributes`` (search marking) stripped, so undo and redo never
    bring marking back. ``when_settled`` callbacks queue up until the host
    calls ``flush`` outside of any open transaction.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
        line_height: int = 1,
        transient_attributes: Tuple[str, ...] = (HIGHLIGHT_ATTRIBUTE,),
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo_timeline = undo or UndoTimeline()
        self.line_height = line_height
        self.transient_attributes = transient_attributes
        self._ready = True
        self._open: Optional[Transaction] = None
        self._settle_queue: List[Callable[[], None]] = []

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "RichTextBuffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    # -- readiness ---------------------------------------------------------

    @property
    def ready(self) -> bool:
        return self._ready

    def close(self) -> None:
        """Tear the buffer down; later surface calls are the caller's problem."""

        self._ready = False
        self._settle_queue.clear()

    # -- reads -------------------------------------------------------------

    def get_length(self) -> int:
        return self.document.length

    def get_plain_text(self) -> str:
        return self.document.snapshot()

    def attributes_at(self, offset: int) -> Mapping[str, str]:
        ensure_range(self.document, offset, 1)
        return self.document.attributes_at(offset)

    def get_viewport_bounds(self, offset: int) -> ViewportBounds:
        ensure_offset(self.document, offset)
        row, col = self.document.line_of(offset)
        return ViewportBounds(
            top=row * self.line_height, left=col, height=self.line_height
        )

    def stats(self) -> DocumentStats:
        return compute_stats(self.document.snapshot())

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.snapshot(),
            runs=self.document.runs(),
            caret=self.state.caret,
            selection=self.state.selection,
            scroll_top=self.state.scroll_top,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    # -- mutations ---------------------------------------------------------

    def batch(self, label: str = "batch") -> ContextManager["Transaction"]:
        return Transaction(self, label)

    def format_range(
        self, start: int, length: int, attribute: str, value: object
    ) -> None:
        begin, end = ensure_range(self.document, start, length)
        if begin == end:
            return
        with self.batch("format_range") as tx:
            tx.apply(self.document.formatted(begin, end, attribute, value))

    def delete_range(self, start: int, length: int) -> None:
        begin, end = ensure_range(self.document, start, length)
        if begin == end:
            return
        with self.batch("delete_range") as tx:
            tx.apply(self.document.splice(begin, end, ""))
            self._shift_caret(begin, end - begin, 0)

    def insert_text(
        self,
        start: int,
        text: str,
        attributes: Optional[Mapping[str, object]] = None,
    ) -> None:
        ensure_offset(self.document, start)
        if not text:
            return
        with self.batch("insert_text") as tx:
            tx.apply(self.document.splice(start, start, text, attributes))
            self._shift_caret(start, 0, len(text))

    def insert_embed(self, offset: int, kind: str) -> None:
        """Insert a page or section break occupying a single offset."""

        if kind not in EMBED_KINDS:
            raise ValueError(f"Unknown embed '{kind}'")
        ensure_offset(self.document, offset)
        with self.batch("insert_embed") as tx:
            tx.apply(
                self.document.splice(
                    offset, offset, EMBED_CHAR, {EMBED_ATTRIBUTE: kind}
                )
            )
            self._shift_caret(offset, 0, 1)

    def scroll_to(self, top: int) -> None:
        self.state.scroll_top = max(0, top)

    def _shift_caret(self, start: int, removed: int, inserted: int) -> None:
        caret = self.state.caret
        if caret >= start + removed:
            caret += inserted - removed
        elif caret > start:
            caret = start + inserted
        self.state.set_caret(min(caret, self.document.length))

    # -- history -----------------------------------------------------------

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before, entry.caret_before, label="undo")
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after, entry.caret_after, label="redo")
        return True

    def _restore(self, document: BufferDocument, caret: int, *, label: str) -> None:
        self.document = document.with_version(self.document.version + 1)
        self.state.set_caret(min(caret, self.document.length))
        self.state.last_change_tick = self.document.version
        telemetry.record_event(
            f"buffer.{label}",
            level="debug",
            data={"buffer": self.name, "version": self.document.version},
        )

    # -- settle notifications ---------------------------------------------

    def when_settled(self, callback: Callable[[], None]) -> None:
        if not self._ready:
            return
        self._settle_queue.append(callback)

    @property
    def has_pending(self) -> bool:
        return bool(self._settle_queue)

    def flush(self) -> int:
        """Run settle callbacks queued before this call; return how many ran."""

        if not self._ready or self._open is not None:
            return 0
        pending, self._settle_queue = self._settle_queue, []
        for callback in pending:
            callback()
        return len(pending)


class Transaction(AbstractContextManager["Transaction"]):
    """Atomic group of document swaps; nested transactions join the outer one."""

    def __init__(self, buffer: RichTextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._outer: Optional[Transaction] = None
        self._span_cm: Optional[ContextManager[object]] = None
        self._before: Optional[BufferDocument] = None
        self._caret_before = 0

    def __enter__(self) -> "Transaction":
        self._outer = self.buffer._open
        if self._outer is not None:
            return self
        self.buffer._open = self
        self._before = self.buffer.document
        self._caret_before = self.buffer.state.caret
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def apply(self, document: BufferDocument) -> None:
        self.buffer.document = document

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._outer is not None:
            return False
        self.buffer._open = None
        before = self._before
        assert before is not None
        if exc_type is not None:
            self.buffer.document = before
            self.buffer.state.set_caret(self._caret_before)
        elif self.buffer.document is not before:
            self._commit(before)
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _commit(self, before: BufferDocument) -> None:
        after = self.buffer.document
        self.buffer.state.last_change_tick = after.version
        if before.snapshot() != after.snapshot():
            self.buffer.undo_timeline.push(
                UndoEntry(
                    label=self.label,
                    before=self._durable(before),
                    after=self._durable(after),
                    caret_before=self._caret_before,
                    caret_after=self.buffer.state.caret,
                )
            )

    def _durable(self, document: BufferDocument) -> BufferDocument:
        for attribute in self.buffer.transient_attributes:
            document = document.without_attribute(attribute)
        return document


__all__ = ["RichTextBuffer", "Transaction"]
