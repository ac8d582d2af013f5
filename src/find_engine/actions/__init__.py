"""Verbs bound to keys in the editor and find modes."""

from .core import close_find, open_find
from .editing import (
    delete_backward,
    insert_page_break,
    insert_section_break,
    move_left,
    move_right,
    redo,
    undo,
)
from .find import (
    find_next,
    find_previous,
    replace_all,
    replace_current,
    toggle_case,
    toggle_field,
)

__all__ = [
    "close_find",
    "delete_backward",
    "find_next",
    "find_previous",
    "insert_page_break",
    "insert_section_break",
    "move_left",
    "move_right",
    "open_find",
    "redo",
    "replace_all",
    "replace_current",
    "toggle_case",
    "toggle_field",
    "undo",
]
