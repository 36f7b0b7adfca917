from pathlib import Path
from typing import Sequence

import pytest

from tuxpad.config import EditorSettings
from tuxpad.editing import (
    column_bound,
    ensure_resident,
    move,
    move_to_line_end,
    move_to_line_start,
    update_scroll,
)
from tuxpad.session import EditorSession


def make_session(lines: Sequence[str], **overrides: int) -> EditorSession:
    overrides.setdefault("min_key_interval_ms", 0)
    session = EditorSession(settings=EditorSettings(**overrides))
    session.window.set(0, lines[0])
    for index, line in enumerate(lines[1:], start=1):
        session.window.insert_line(index, line)
    return session


def make_paged_session(tmp_path: Path, count: int, capacity: int) -> EditorSession:
    path = tmp_path / "big.txt"
    path.write_text("\n".join(f"line {i}" for i in range(count)), encoding="utf-8")
    settings = EditorSettings(window_capacity=capacity, min_key_interval_ms=0)
    return EditorSession.from_path(path, settings=settings)


@pytest.mark.parametrize(
    ("length", "mode", "expected"),
    [(0, "normal", 0), (0, "insert", 0), (5, "normal", 4), (5, "insert", 5)],
)
def test_column_bound_depends_on_mode(length: int, mode: str, expected: int) -> None:
    assert column_bound(length, mode) == expected  # type: ignore[arg-type]


def test_vertical_move_clamps_to_document() -> None:
    session = make_session(["a", "b", "c"])

    move(session, 0, -5)
    assert session.cursor.line == 0

    move(session, 0, 10)
    assert session.cursor.line == 2


def test_horizontal_move_respects_mode_bound() -> None:
    session = make_session(["abc"])

    move(session, 10, 0)
    assert session.cursor.column == 2

    move(session, 10, 0, mode="insert")
    assert session.cursor.column == 3

    move(session, -10, 0)
    assert session.cursor.column == 0


def test_vertical_move_reclamps_column() -> None:
    session = make_session(["a long line", "ab", ""])
    session.cursor.column = 8

    move(session, 0, 1)
    assert session.cursor.column == 1

    move(session, 0, 1)
    assert session.cursor.column == 0


def test_move_outside_window_reloads_around_new_line(tmp_path: Path) -> None:
    session = make_paged_session(tmp_path, 100, capacity=10)

    move(session, 0, 30)

    assert session.cursor.line == 30
    assert session.window.start_line == 25
    assert session.current_line == "line 30"
    assert session.window.load_count == 2


def test_any_move_sequence_keeps_cursor_resident(tmp_path: Path) -> None:
    session = make_paged_session(tmp_path, 100, capacity=10)

    for delta in (3, 7, 40, -12, 200, -1, -95, 60, -3, 0, 15):
        move(session, 1, delta)
        assert 0 <= session.cursor.line <= session.total_line_count - 1
        assert session.window.is_resident(session.cursor.line)


def test_line_start_and_end() -> None:
    session = make_session(["hello"])

    move_to_line_end(session)
    assert session.cursor.column == 4

    move_to_line_end(session, mode="insert")
    assert session.cursor.column == 5

    move_to_line_start(session)
    assert session.cursor.column == 0


def test_ensure_resident_without_store_slides_over_held_lines() -> None:
    session = make_session(["", "a", "b", "c", "d"], window_capacity=3)
    assert session.window.start_line == 2

    session.cursor.line = 0
    assert ensure_resident(session) is True
    assert session.cursor.line == 0
    assert session.window.lines == ("", "a", "b")

    session.cursor.line = 4
    assert ensure_resident(session) is True
    assert session.current_line == "d"
    assert session.window.load_count == 0


def test_update_scroll_follows_cursor() -> None:
    session = make_session([str(i) for i in range(50)])

    session.cursor.line = 30
    assert update_scroll(session, 10) == 21

    session.cursor.line = 25
    assert update_scroll(session, 10) == 21

    session.cursor.line = 5
    assert update_scroll(session, 10) == 5


def test_update_scroll_is_idempotent() -> None:
    session = make_session([str(i) for i in range(50)])
    session.cursor.line = 42

    first = update_scroll(session, 8)
    second = update_scroll(session, 8)

    assert first == second == 35
