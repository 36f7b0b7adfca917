"""Cursor motion, column clamping, residency recovery and scrolling."""

from __future__ import annotations

from typing import Optional

from tuxpad.buffer import INSERT, ModeName
from tuxpad.session import EditorSession


def column_bound(line_length: int, mode: ModeName) -> int:
    """Largest legal column: Insert may sit past the last character."""

    if mode == INSERT:
        return line_length
    return max(line_length - 1, 0)


def clamp_column(session: EditorSession, *, mode: Optional[ModeName] = None) -> None:
    line = session.current_line
    if line is None:
        session.cursor.column = 0
        return
    bound = column_bound(len(line), mode or session.mode)
    session.cursor.column = min(max(session.cursor.column, 0), bound)


def ensure_resident(session: EditorSession) -> bool:
    """Make the cursor line resident, sliding or reloading the window.

    Returns ``True`` when the window moved. If nothing can bring the line in
    the cursor is pulled into the window, never below its first line.
    """

    window = session.window
    cursor = session.cursor
    cursor.line = min(max(cursor.line, 0), window.total_line_count - 1)
    if window.is_resident(cursor.line):
        return False

    moved = session.recenter()
    cursor.line = min(cursor.line, window.total_line_count - 1)
    if not window.is_resident(cursor.line) and len(window):
        cursor.line = min(max(cursor.line, window.start_line), window.end_line - 1)
    cursor.line = max(cursor.line, 0)
    clamp_column(session)
    return moved


def move(
    session: EditorSession,
    delta_x: int,
    delta_y: int,
    *,
    mode: Optional[ModeName] = None,
) -> None:
    """Vertical motion first (reloading on a miss), then horizontal."""

    effective_mode = mode or session.mode
    window = session.window
    cursor = session.cursor

    if delta_y:
        cursor.line = min(max(cursor.line + delta_y, 0), window.total_line_count - 1)
        if not window.is_resident(cursor.line):
            ensure_resident(session)

    line = window.get(cursor.line)
    if line is None:
        cursor.column = 0
        return

    bound = column_bound(len(line), effective_mode)
    if delta_x:
        cursor.column = min(max(cursor.column + delta_x, 0), bound)
    elif delta_y:
        cursor.column = min(cursor.column, bound)


def move_to_line_start(session: EditorSession) -> None:
    session.cursor.column = 0


def move_to_line_end(session: EditorSession, *, mode: Optional[ModeName] = None) -> None:
    line = session.current_line
    if line is None:
        return
    session.cursor.column = column_bound(len(line), mode or session.mode)


def update_scroll(session: EditorSession, visible_height: int) -> int:
    """Keep the cursor line inside ``visible_height`` rows; returns the offset."""

    height = max(visible_height, 1)
    line = session.cursor.line
    if line < session.scroll_offset:
        session.scroll_offset = line
    elif line >= session.scroll_offset + height:
        session.scroll_offset = line - height + 1
    return session.scroll_offset


__all__ = [
    "clamp_column",
    "column_bound",
    "ensure_resident",
    "move",
    "move_to_line_end",
    "move_to_line_start",
    "update_scroll",
]
