"""Immutable rich-text document storage for find_engine buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence, Tuple

Attributes = Mapping[str, str]

EMBED_CHAR = "\ufffc"
EMBED_ATTRIBUTE = "embed"
EMBED_KINDS = ("page_break", "section_break")
# Search marking; transient, never kept in undo history.
HIGHLIGHT_ATTRIBUTE = "background"

_EMPTY: Attributes = MappingProxyType({})


def freeze_attributes(attributes: Optional[Mapping[str, object]]) -> Attributes:
    if not attributes:
        return _EMPTY
    cleaned = {
        str(key): str(value)
        for key, value in attributes.items()
        if value is not None and value is not False
    }
    return MappingProxyType(cleaned) if cleaned else _EMPTY


@dataclass(frozen=True, slots=True)
class TextRun:
    """Maximal stretch of characters sharing one attribute set."""

    start: int
    text: str
    attributes: Attributes

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def is_embed(self) -> bool:
        return EMBED_ATTRIBUTE in self.attributes


@dataclass(slots=True)
class BufferDocument:
    """Text plus one attribute mapping per character.

    Documents are never edited in place: every mutation helper returns a new
    document with a bumped ``version`` so a buffer can swap the whole thing
    in one assignment.
    """

    _text: str = ""
    _marks: Tuple[Attributes, ...] = field(default_factory=tuple)
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._marks and self._text:
            self._marks = (_EMPTY,) * len(self._text)
        if len(self._marks) != len(self._text):
            raise ValueError("attribute marks must cover every character")

    @classmethod
    def from_text(
        cls, text: str, *, attributes: Optional[Mapping[str, object]] = None
    ) -> "BufferDocument":
        frozen = freeze_attributes(attributes)
        return cls(_text=text, _marks=(frozen,) * len(text))

    @property
    def length(self) -> int:
        return len(self._text)

    def snapshot(self) -> str:
        """Plain-text projection; embeds show up as ``EMBED_CHAR``."""

        return self._text

    def attributes_at(self, offset: int) -> Attributes:
        return self._marks[offset]

    def runs(self) -> Sequence[TextRun]:
        return tuple(self._iter_runs())

    def _iter_runs(self) -> Iterator[TextRun]:
        start = 0
        for index in range(1, len(self._text) + 1):
            if index == len(self._text) or self._marks[index] != self._marks[start]:
                yield TextRun(
                    start=start,
                    text=self._text[start:index],
                    attributes=self._marks[start],
                )
                start = index

    def splice(
        self,
        start: int,
        end: int,
        text: str,
        attributes: Optional[Mapping[str, object]] = None,
    ) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``text``."""

        frozen = freeze_attributes(attributes)
        return BufferDocument(
            _text=self._text[:start] + text + self._text[end:],
            _marks=self._marks[:start] + (frozen,) * len(text) + self._marks[end:],
            version=self.version + 1,
            dirty=True,
        )

    def formatted(
        self, start: int, end: int, attribute: str, value: object
    ) -> "BufferDocument":
        """Return a document with ``attribute`` set (or cleared) on a range."""

        marks = list(self._marks)
        for index in range(start, end):
            current = dict(marks[index])
            if value is None or value is False:
                if attribute not in current:
                    continue
                current.pop(attribute)
            else:
                current[attribute] = str(value)
            marks[index] = freeze_attributes(current)
        return BufferDocument(
            _text=self._text,
            _marks=tuple(marks),
            version=self.version + 1,
            dirty=self.dirty,
        )

    def without_attribute(self, attribute: str) -> "BufferDocument":
        """Return this document with ``attribute`` dropped everywhere.

        Returns ``self`` when no character carries the attribute.
        """

        if not any(attribute in marks for marks in self._marks):
            return self
        return self.formatted(0, self.length, attribute, False).with_version(
            self.version
        )

    def with_version(self, version: int) -> "BufferDocument":
        return BufferDocument(
            _text=self._text, _marks=self._marks, version=version, dirty=True
        )

    def line_of(self, offset: int) -> Tuple[int, int]:
        """Return ``(row, column)`` for ``offset`` in the projection."""

        row = self._text.count("\n", 0, offset)
        line_start = self._text.rfind("\n", 0, offset) + 1
        return row, offset - line_start
