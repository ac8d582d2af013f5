"""Caret, selection, and viewport state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Selection = Tuple[int, int]  # (start offset, end offset)


@dataclass(slots=True)
class BufferState:
    """Mutable caret + viewport info tied to a BufferDocument version."""

    caret: int = 0
    selection: Optional[Selection] = None
    scroll_top: int = 0
    last_change_tick: int = 0

    def set_caret(self, offset: int) -> None:
        self.caret = max(0, offset)
