"""Verbs that key bindings trigger, grouped by the modes that use them."""

from .command import submit_command_line
from .core import (
    append_after_cursor,
    enter_command_mode,
    enter_insert_mode,
    enter_replace_mode,
    enter_search_mode,
    exit_editor,
    exit_insert_mode,
    open_line_below,
)
from .prompt import cancel_prompt, submit_replace, submit_search

__all__ = [
    "append_after_cursor",
    "cancel_prompt",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_replace_mode",
    "enter_search_mode",
    "exit_editor",
    "exit_insert_mode",
    "open_line_below",
    "submit_command_line",
    "submit_replace",
    "submit_search",
]
