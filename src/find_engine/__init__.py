"""UI-agnostic find and replace engine for rich-text document buffers."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "modes",
    "runtime",
    "search",
]

__version__ = "0.1.0"
