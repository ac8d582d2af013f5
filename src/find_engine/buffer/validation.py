"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .sync import BufferValidationError


def ensure_offset(document: BufferDocument, offset: int) -> int:
    if offset < 0 or offset > document.length:
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_range(document: BufferDocument, start: int, length: int) -> tuple[int, int]:
    """Return ``(start, end)`` or raise if the range leaves the document."""

    if length < 0:
        raise BufferValidationError("Negative length", offset=start, length=length)
    if start < 0 or start + length > document.length:
        raise BufferValidationError("Range out of bounds", offset=start, length=length)
    return start, start + length
