"""Textual host adapter; the demo app in ``.app`` needs the textual extra."""

from .controller import (
    TextualFindAdapter,
    TextualUIHooks,
    create_default_manager,
    render_runs,
)

__all__ = [
    "TextualFindAdapter",
    "TextualUIHooks",
    "create_default_manager",
    "render_runs",
]
