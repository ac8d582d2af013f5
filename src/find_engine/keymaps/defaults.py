"""Built-in keymaps for the editor and find modes."""

from __future__ import annotations

from typing import Iterable, Sequence

from find_engine.actions import core as core_actions
from find_engine.actions import editing as editing_actions
from find_engine.actions import find as find_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("find.open", core_actions.open_find, "Open find and replace"),
    ActionRef("find.close", core_actions.close_find, "Close find and replace"),
    ActionRef("find.next", find_actions.find_next, "Go to the next match"),
    ActionRef("find.previous", find_actions.find_previous, "Go to the previous match"),
    ActionRef("find.replace", find_actions.replace_current, "Replace the active match"),
    ActionRef("find.replace_all", find_actions.replace_all, "Replace every match"),
    ActionRef("find.toggle_case", find_actions.toggle_case, "Toggle case sensitivity"),
    ActionRef("find.toggle_field", find_actions.toggle_field, "Switch find/replace field"),
    ActionRef("edit.move_left", editing_actions.move_left, "Move caret left"),
    ActionRef("edit.move_right", editing_actions.move_right, "Move caret right"),
    ActionRef("edit.delete_backward", editing_actions.delete_backward, "Delete before caret"),
    ActionRef("edit.undo", editing_actions.undo, "Undo"),
    ActionRef("edit.redo", editing_actions.redo, "Redo"),
    ActionRef("edit.page_break", editing_actions.insert_page_break, "Insert page break"),
    ActionRef(
        "edit.section_break", editing_actions.insert_section_break, "Insert section break"
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding.of("editor.find", "editor", "ctrl+f", "find.open", "Find and Replace (Ctrl+F)"),
    Binding.of("editor.left", "editor", "LEFT", "edit.move_left"),
    Binding.of("editor.right", "editor", "RIGHT", "edit.move_right"),
    Binding.of("editor.backspace", "editor", "BACKSPACE", "edit.delete_backward"),
    Binding.of("editor.undo", "editor", "ctrl+z", "edit.undo"),
    Binding.of("editor.redo", "editor", "ctrl+y", "edit.redo"),
    Binding.of("editor.page_break", "editor", "alt+p", "edit.page_break"),
    Binding.of("editor.section_break", "editor", "alt+s", "edit.section_break"),
    Binding.of("find.escape", "find", "ESC", "find.close", "Close the find bar"),
    Binding.of("find.next", "find", "ENTER", "find.next"),
    Binding.of("find.previous", "find", "shift+ENTER", "find.previous"),
    Binding.of("find.field", "find", "TAB", "find.toggle_field"),
    Binding.of("find.replace", "find", "ctrl+r", "find.replace"),
    Binding.of("find.replace_all", "find", "alt+a", "find.replace_all"),
    Binding.of("find.case", "find", "alt+c", "find.toggle_case"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings, then any extras."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
