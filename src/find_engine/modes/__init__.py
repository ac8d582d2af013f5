"""Input modes and their dispatch helpers.

``ModeManager`` lives in ``find_engine.modes.mode_manager`` and is imported
from there.
"""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult, find_state
from .editor_mode import EditorMode
from .find_mode import FindMode

__all__ = [
    "EditorMode",
    "FindMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "find_state",
]
