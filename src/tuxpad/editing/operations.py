"""Line and character edits applied to the resident window.

Each mutating operation runs inside an ``EditTransaction``: the transaction
profiles the edit and records an undo snapshot of the cursor line just before
the window changes. Operations report refusals through the session status
message and return ``False`` instead of raising.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, List, Optional, Tuple

from tuxpad.buffer import UndoEntry
from tuxpad.runtime import telemetry
from tuxpad.session import EditorSession

from .cursor import clamp_column

Match = Tuple[int, int]


class EditTransaction(AbstractContextManager["EditTransaction"]):
    def __init__(self, session: EditorSession, label: str) -> None:
        self.session = session
        self.label = label
        self.snapshots = 0
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "EditTransaction":
        cursor = self.session.cursor
        self._span_cm = telemetry.span(
            name=f"edit::{self.label}",
            component="edit",
            metadata={"line": cursor.line, "column": cursor.column},
        )
        self._span_cm.__enter__()
        return self

    def snapshot(
        self, *, label: Optional[str] = None, split_column: Optional[int] = None
    ) -> None:
        """Push the current cursor line onto the undo log if it is resident."""

        text = self.session.current_line
        if text is None:
            return
        entry = UndoEntry.capture(
            label or self.label,
            text,
            self.session.cursor,
            line_count=self.session.total_line_count,
            split_column=split_column,
        )
        self.session.undo.push(entry)
        self.snapshots += 1

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def insert_char(session: EditorSession, char: str) -> bool:
    window = session.window
    cursor = session.cursor
    with EditTransaction(session, "insert_char") as tx:
        line = window.get(cursor.line)
        if line is None:
            session.recenter()
            line = window.get(cursor.line)
            if line is None:
                session.status_message = "Line is not loaded"
                return False
        if len(line) >= session.settings.max_line_length:
            session.status_message = "Line too long"
            return False

        tx.snapshot()
        position = min(cursor.column, len(line))
        window.set(cursor.line, line[:position] + char + line[position:])
        cursor.column = position + 1
        session.modified = True
    return True


def delete_char(session: EditorSession) -> bool:
    """Backspace: remove the character before the cursor or join upwards."""

    window = session.window
    cursor = session.cursor
    with EditTransaction(session, "delete_char") as tx:
        if cursor.column > 0:
            line = window.get(cursor.line)
            if line is None or not line or cursor.column > len(line):
                return False
            tx.snapshot()
            window.set(cursor.line, line[: cursor.column - 1] + line[cursor.column :])
            cursor.column -= 1
            session.modified = True
            return True

        if cursor.line == 0:
            return False
        current = window.get(cursor.line)
        previous = window.get(cursor.line - 1)
        if current is None or previous is None:
            return False
        if len(previous) + len(current) >= session.settings.max_line_length:
            session.status_message = "Cannot join: resulting line would be too long"
            return False

        tx.snapshot(label="join_line", split_column=len(previous))
        window.set(cursor.line - 1, previous + current)
        window.remove_line(cursor.line)
        cursor.line -= 1
        cursor.column = len(previous)
        session.modified = True
    return True


def insert_newline(session: EditorSession) -> bool:
    window = session.window
    cursor = session.cursor
    with EditTransaction(session, "insert_newline") as tx:
        line = window.get(cursor.line)
        if line is None:
            return False
        tx.snapshot()
        split = min(cursor.column, len(line))
        window.set(cursor.line, line[:split])
        window.insert_line(cursor.line + 1, line[split:])
        cursor.line += 1
        cursor.column = 0
        session.modified = True
    return True


def copy_line(session: EditorSession) -> bool:
    line = session.current_line
    if line is None:
        return False
    session.clipboard.store(line)
    session.status_message = "Line copied"
    return True


def cut_line(session: EditorSession) -> bool:
    window = session.window
    cursor = session.cursor
    with EditTransaction(session, "cut_line") as tx:
        line = window.get(cursor.line)
        if line is None:
            return False
        tx.snapshot()
        session.clipboard.store(line)
        window.remove_line(cursor.line)
        if cursor.line >= window.total_line_count:
            cursor.line = window.total_line_count - 1
        cursor.column = 0
        session.modified = True
        session.status_message = "Line cut"
    return True


def paste_line(session: EditorSession) -> bool:
    if session.clipboard.is_empty():
        return False
    window = session.window
    cursor = session.cursor
    with EditTransaction(session, "paste_line") as tx:
        if session.current_line is None:
            return False
        tx.snapshot()
        window.insert_line(cursor.line + 1, session.clipboard.text)
        cursor.line += 1
        cursor.column = 0
        session.modified = True
        session.status_message = "Line pasted"
    return True


def search(session: EditorSession, query: str) -> List[Match]:
    """Find ``query`` in resident lines only, in document order.

    Occurrences may overlap. At most ``settings.search_limit`` matches are
    returned.
    """

    if not query:
        return []
    window = session.window
    limit = session.settings.search_limit
    matches: List[Match] = []
    with telemetry.span("edit::search", metadata={"query_length": len(query)}):
        for offset, line in enumerate(window.lines):
            start = 0
            while True:
                position = line.find(query, start)
                if position < 0:
                    break
                matches.append((window.start_line + offset, position))
                if len(matches) >= limit:
                    return matches
                start = position + 1
    return matches


def replace_in_window(session: EditorSession, needle: str, replacement: str) -> int:
    """Substitute every resident occurrence of ``needle``; returns the count.

    A line that would outgrow the maximum length is cut to it and counts as a
    single replacement.
    """

    if not needle:
        return 0
    window = session.window
    max_length = session.settings.max_line_length
    changes: List[Tuple[int, str, int]] = []
    for offset, line in enumerate(window.lines):
        if needle not in line:
            continue
        updated = line.replace(needle, replacement)
        if updated == line:
            continue
        if len(updated) <= max_length:
            changes.append((offset, updated, line.count(needle)))
        else:
            changes.append((offset, updated[:max_length], 1))

    if not changes:
        return 0

    count = 0
    with EditTransaction(session, "replace_in_window") as tx:
        tx.snapshot()
        for offset, updated, occurrences in changes:
            window.set(window.start_line + offset, updated)
            count += occurrences
        session.modified = True
    return count


def undo(session: EditorSession) -> bool:
    """Restore the line captured by the newest undo entry."""

    entry = session.undo.pop()
    if entry is None:
        session.status_message = "Nothing to undo"
        return False

    window = session.window
    line = entry.line
    with telemetry.span("edit::undo", component="edit", metadata={"label": entry.label}):
        if entry.label == "cut_line" and entry.line_count == 1:
            # Cutting the only line left one empty line in its place.
            window.set(0, entry.text)
        elif entry.label == "cut_line":
            if not window.start_line <= line <= window.end_line:
                return _undo_miss(session)
            window.insert_line(line, entry.text)
        elif entry.label == "join_line":
            previous = window.get(line - 1)
            if previous is None or entry.split_column is None:
                return _undo_miss(session)
            window.set(line - 1, previous[: entry.split_column])
            window.insert_line(line, entry.text)
        else:
            if not window.is_resident(line):
                return _undo_miss(session)
            window.set(line, entry.text)
            if entry.label in {"insert_newline", "paste_line"}:
                window.remove_line(line + 1)

    session.cursor.line = min(entry.cursor[0], window.total_line_count - 1)
    session.cursor.column = entry.cursor[1]
    clamp_column(session)
    session.modified = True
    session.status_message = f"Undo: restored line {line + 1}"
    return True


def _undo_miss(session: EditorSession) -> bool:
    session.status_message = "Undo target is outside the current window"
    return False


__all__ = [
    "EditTransaction",
    "copy_line",
    "cut_line",
    "delete_char",
    "insert_char",
    "insert_newline",
    "paste_line",
    "replace_in_window",
    "search",
    "undo",
]
