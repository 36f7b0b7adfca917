"""Built-in keymaps that seed each mode with the editor's key set."""

from __future__ import annotations

from typing import Iterable, Tuple

from tuxpad.actions import command as command_actions
from tuxpad.actions import core as core_actions
from tuxpad.actions import prompt as prompt_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef("core.append", core_actions.append_after_cursor, "Insert after cursor"),
    ActionRef("core.open_below", core_actions.open_line_below, "Insert new line below"),
    ActionRef("core.enter_command", core_actions.enter_command_mode, "Command mode"),
    ActionRef("core.enter_search", core_actions.enter_search_mode, "Search in window"),
    ActionRef("core.enter_replace", core_actions.enter_replace_mode, "Replace in window"),
    ActionRef("core.exit_insert", core_actions.exit_insert_mode, "Return to normal mode"),
    ActionRef("core.escape", core_actions.escape_normal, "Clear transient state"),
    ActionRef("core.move_up", core_actions.move_up, "Cursor up"),
    ActionRef("core.move_down", core_actions.move_down, "Cursor down"),
    ActionRef("core.move_left", core_actions.move_left, "Cursor left"),
    ActionRef("core.move_right", core_actions.move_right, "Cursor right"),
    ActionRef("core.page_up", core_actions.page_up, "Page up"),
    ActionRef("core.page_down", core_actions.page_down, "Page down"),
    ActionRef("core.line_start", core_actions.line_start, "Start of line"),
    ActionRef("core.line_end", core_actions.line_end, "End of line"),
    ActionRef("core.newline", core_actions.insert_newline, "Split line"),
    ActionRef("core.backspace", core_actions.backspace, "Delete before cursor"),
    ActionRef("core.tab", core_actions.insert_tab, "Insert spaces"),
    ActionRef("core.copy_line", core_actions.copy_line, "Copy current line"),
    ActionRef("core.cut_line", core_actions.cut_line, "Cut current line"),
    ActionRef("core.paste_line", core_actions.paste_line, "Paste line below"),
    ActionRef("core.undo", core_actions.undo_last, "Undo last line edit"),
    ActionRef("core.save", core_actions.save_document, "Save file"),
    ActionRef("core.quit", core_actions.request_quit, "Quit (twice if modified)"),
    ActionRef("core.toggle_help", core_actions.toggle_help, "Toggle help"),
    ActionRef("core.toggle_numbers", core_actions.toggle_line_numbers, "Toggle line numbers"),
    ActionRef("prompt.cancel", prompt_actions.cancel_prompt, "Discard and leave"),
    ActionRef("prompt.backspace", prompt_actions.prompt_backspace, "Delete typed character"),
    ActionRef("command.submit", command_actions.submit_command_line, "Run command"),
    ActionRef("search.submit", prompt_actions.submit_search, "Jump to first match"),
    ActionRef("replace.next_field", prompt_actions.replace_next_field, "Enter replacement"),
    ActionRef("replace.submit", prompt_actions.submit_replace, "Replace in window"),
)

_MOTIONS: tuple[Tuple[str, str], ...] = (
    ("UP", "core.move_up"),
    ("DOWN", "core.move_down"),
    ("LEFT", "core.move_left"),
    ("RIGHT", "core.move_right"),
)

_NORMAL: tuple[Tuple[str, str], ...] = _MOTIONS + (
    ("i", "core.enter_insert"),
    ("a", "core.append"),
    ("o", "core.open_below"),
    ("u", "core.undo"),
    (":", "core.enter_command"),
    ("/", "core.enter_search"),
    ("ctrl+r", "core.enter_replace"),
    ("ctrl+c", "core.copy_line"),
    ("ctrl+x", "core.cut_line"),
    ("ctrl+v", "core.paste_line"),
    ("ctrl+s", "core.save"),
    ("ctrl+q", "core.quit"),
    ("F1", "core.toggle_help"),
    ("F2", "core.toggle_numbers"),
    ("HOME", "core.line_start"),
    ("END", "core.line_end"),
    ("PAGEUP", "core.page_up"),
    ("PAGEDOWN", "core.page_down"),
    ("ESC", "core.escape"),
)

_INSERT: tuple[Tuple[str, str], ...] = _MOTIONS + (
    ("ESC", "core.exit_insert"),
    ("ENTER", "core.newline"),
    ("BACKSPACE", "core.backspace"),
    ("TAB", "core.tab"),
    ("ctrl+s", "core.save"),
)

_PROMPT: tuple[Tuple[str, str], ...] = (
    ("ESC", "prompt.cancel"),
    ("BACKSPACE", "prompt.backspace"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=f"{mode}.{key}",
        mode=mode,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
    )
    for mode, table in (
        ("normal", _NORMAL),
        ("insert", _INSERT),
        ("command", _PROMPT + (("ENTER", "command.submit"),)),
        ("search", _PROMPT + (("ENTER", "search.submit"),)),
        (
            "replace",
            _PROMPT + (("ENTER", "replace.submit"), ("TAB", "replace.next_field")),
        ),
    )
    for key, action_id in table
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    actions: Iterable[ActionRef] = DEFAULT_ACTIONS,
    bindings: Iterable[Binding] = DEFAULT_BINDINGS,
) -> None:
    for action in actions:
        registry.register_action(action, replace=True)
    for binding in bindings:
        registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
