from pathlib import Path
from typing import Sequence

from tuxpad.buffer import Cursor, UndoEntry, UndoLog
from tuxpad.config import EditorSettings
from tuxpad.editing import (
    cut_line,
    delete_char,
    ensure_resident,
    insert_char,
    insert_newline,
    paste_line,
    replace_in_window,
    undo,
)
from tuxpad.session import EditorSession


def make_session(lines: Sequence[str], **overrides: int) -> EditorSession:
    overrides.setdefault("min_key_interval_ms", 0)
    session = EditorSession(settings=EditorSettings(**overrides))
    session.window.set(0, lines[0])
    for index, line in enumerate(lines[1:], start=1):
        session.window.insert_line(index, line)
    return session


def make_entry(line: int) -> UndoEntry:
    return UndoEntry.capture("insert_char", f"text {line}", Cursor(line, 0))


def test_undo_log_evicts_oldest_entry() -> None:
    log = UndoLog(depth=3)

    for line in range(5):
        log.push(make_entry(line))

    assert len(log) == 3
    assert [entry.line for entry in log] == [2, 3, 4]
    assert log.peek() is not None and log.peek().line == 4


def test_undo_log_pop_order_and_empty() -> None:
    log = UndoLog(depth=3)
    log.push(make_entry(1))
    log.push(make_entry(2))

    assert log.pop().line == 2  # type: ignore[union-attr]
    assert log.pop().line == 1  # type: ignore[union-attr]
    assert log.pop() is None


def test_edit_snapshots_line_before_mutation() -> None:
    session = make_session(["abc"])

    insert_char(session, "x")

    entry = session.undo.peek()
    assert entry is not None
    assert entry.label == "insert_char"
    assert entry.text == "abc"
    assert entry.cursor == (0, 0)


def test_undo_depth_follows_settings() -> None:
    session = make_session(["a"], undo_depth=2)

    for _ in range(4):
        insert_char(session, "z")

    assert len(session.undo) == 2


def test_undo_restores_inserted_character() -> None:
    session = make_session(["hello"])
    session.cursor.column = 2
    insert_char(session, "X")

    assert undo(session) is True

    assert session.current_line == "hello"
    assert session.cursor.as_tuple() == (0, 2)
    assert session.status_message == "Undo: restored line 1"


def test_undo_removes_split_line() -> None:
    session = make_session(["hello", "world"])
    session.cursor.column = 3
    insert_newline(session)

    undo(session)

    assert list(session.window.lines) == ["hello", "world"]
    assert session.total_line_count == 2
    assert session.cursor.as_tuple() == (0, 3)


def test_undo_resplits_joined_line() -> None:
    session = make_session(["ab", "cd"])
    session.cursor.line = 1
    delete_char(session)

    undo(session)

    assert list(session.window.lines) == ["ab", "cd"]
    assert session.cursor.as_tuple() == (1, 0)


def test_undo_reinserts_cut_line() -> None:
    session = make_session(["a", "b", "c"])
    session.cursor.line = 1
    cut_line(session)

    undo(session)

    assert list(session.window.lines) == ["a", "b", "c"]
    assert session.cursor.line == 1


def test_undo_cut_of_last_remaining_line() -> None:
    session = make_session(["only"])
    cut_line(session)

    undo(session)

    assert list(session.window.lines) == ["only"]
    assert session.total_line_count == 1


def test_undo_removes_pasted_line() -> None:
    session = make_session(["a", "b"])
    session.clipboard.store("pasted")
    paste_line(session)

    undo(session)

    assert list(session.window.lines) == ["a", "b"]
    assert session.cursor.line == 0


def test_undo_of_replace_restores_cursor_line_only() -> None:
    session = make_session(["cat", "cat"])

    replace_in_window(session, "cat", "dog")
    undo(session)

    assert list(session.window.lines) == ["cat", "dog"]


def test_nothing_to_undo() -> None:
    session = make_session(["a"])

    assert undo(session) is False
    assert session.status_message == "Nothing to undo"


def test_undo_target_outside_window_is_dropped(tmp_path: Path) -> None:
    path = tmp_path / "big.txt"
    path.write_text("\n".join(f"line {i}" for i in range(50)), encoding="utf-8")
    settings = EditorSettings(window_capacity=10, min_key_interval_ms=0)
    session = EditorSession.from_path(path, settings=settings)
    insert_char(session, "x")
    session.cursor.line = 40
    ensure_resident(session)

    assert undo(session) is False

    assert session.status_message == "Undo target is outside the current window"
    assert len(session.undo) == 0
