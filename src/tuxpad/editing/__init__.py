"""Cursor coordination and the edit operations applied to the window."""

from .cursor import (
    clamp_column,
    column_bound,
    ensure_resident,
    move,
    move_to_line_end,
    move_to_line_start,
    update_scroll,
)
from .operations import (
    EditTransaction,
    copy_line,
    cut_line,
    delete_char,
    insert_char,
    insert_newline,
    paste_line,
    replace_in_window,
    search,
    undo,
)

__all__ = [
    "EditTransaction",
    "clamp_column",
    "column_bound",
    "copy_line",
    "cut_line",
    "delete_char",
    "ensure_resident",
    "insert_char",
    "insert_newline",
    "move",
    "move_to_line_end",
    "move_to_line_start",
    "paste_line",
    "replace_in_window",
    "search",
    "undo",
    "update_scroll",
]
