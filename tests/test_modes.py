from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from tuxpad.buffer import ReplacePhase
from tuxpad.config import EditorSettings
from tuxpad.modes import InsertMode, KeyInput, ModeContext, NormalMode
from tuxpad.modes.mode_manager import ModeManager
from tuxpad.session import EditorSession

NAMED_KEYS = {
    "ESC",
    "ENTER",
    "BACKSPACE",
    "TAB",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "HOME",
    "END",
    "PAGEUP",
    "PAGEDOWN",
    "F1",
    "F2",
}


def make_key(spec: str) -> KeyInput:
    if spec in NAMED_KEYS:
        return KeyInput(key=spec)
    if spec.startswith("ctrl+"):
        return KeyInput(key=spec[len("ctrl+") :], modifiers=("CTRL",))
    return KeyInput(key=spec, text=spec)


def make_manager(
    lines: Optional[Sequence[str]] = None,
    *,
    path: Optional[Path] = None,
    **overrides: int,
) -> ModeManager:
    overrides.setdefault("min_key_interval_ms", 0)
    settings = EditorSettings(**overrides)
    if path is not None:
        session = EditorSession.from_path(path, settings=settings)
    else:
        session = EditorSession(settings=settings)
    if lines:
        session.window.set(0, lines[0])
        for index, line in enumerate(lines[1:], start=1):
            session.window.insert_line(index, line)
    return ModeManager.with_default_modes(ModeContext(session=session))


def press(manager: ModeManager, *keys: str) -> None:
    for key in keys:
        manager.handle_key(make_key(key))


def type_text(manager: ModeManager, text: str) -> None:
    press(manager, *text)


def test_initial_mode_is_normal() -> None:
    manager = make_manager()

    assert manager.active_mode is not None
    assert manager.active_mode.name == "normal"
    assert manager.context.session.mode == "normal"


def test_insert_typing_and_escape() -> None:
    manager = make_manager()
    session = manager.context.session

    press(manager, "i")
    assert session.mode == "insert"
    assert session.status_message == "-- INSERT --"

    type_text(manager, "hi there")
    assert session.current_line == "hi there"

    press(manager, "ESC")
    assert session.mode == "normal"
    assert session.cursor.column == 7
    assert session.status_message == "Normal mode"


def test_append_moves_past_cursor() -> None:
    manager = make_manager(["abc"])

    press(manager, "a")
    type_text(manager, "X")

    assert manager.context.session.current_line == "aXbc"


def test_open_line_below() -> None:
    manager = make_manager(["first", "second"])
    session = manager.context.session

    press(manager, "o")
    type_text(manager, "middle")

    assert list(session.window.lines) == ["first", "middle", "second"]
    assert session.mode == "insert"


def test_insert_mode_editing_keys() -> None:
    manager = make_manager(["ab"])
    session = manager.context.session

    press(manager, "i", "RIGHT", "ENTER", "TAB", "BACKSPACE")

    assert list(session.window.lines) == ["a", "   b"]
    assert session.cursor.as_tuple() == (1, 3)


def test_insert_mode_ignores_control_chords() -> None:
    manager = make_manager(["ab"])

    press(manager, "i")
    result = manager.handle_key(KeyInput(key="z", modifiers=("CTRL",), text="\x1a"))

    assert result.consumed is False
    assert manager.context.session.current_line == "ab"


def test_escape_from_insert_clamps_column_to_normal_bound() -> None:
    manager = make_manager(["abc"])
    session = manager.context.session

    press(manager, "i")
    session.cursor.column = 3
    press(manager, "ESC")

    assert session.cursor.column == 2


def test_normal_motion_keys(tmp_path: Path) -> None:
    path = tmp_path / "big.txt"
    path.write_text("\n".join(f"line {i}" for i in range(100)), encoding="utf-8")
    manager = make_manager(path=path, window_capacity=10)
    session = manager.context.session

    press(manager, "PAGEDOWN")
    assert session.cursor.line == 20
    assert session.window.is_resident(20)

    press(manager, "DOWN", "END")
    assert session.cursor.as_tuple() == (21, 6)

    press(manager, "HOME", "PAGEUP", "UP")
    assert session.cursor.as_tuple() == (0, 0)
    assert session.window.is_resident(0)


def test_clipboard_and_undo_keys() -> None:
    manager = make_manager(["one", "two"])
    session = manager.context.session

    press(manager, "ctrl+c", "ctrl+v")
    assert list(session.window.lines) == ["one", "one", "two"]

    press(manager, "u")
    assert list(session.window.lines) == ["one", "two"]

    press(manager, "ctrl+x")
    assert list(session.window.lines) == ["two"]
    assert session.clipboard.text == "one"


def test_toggle_keys() -> None:
    manager = make_manager()
    session = manager.context.session

    press(manager, "F1")
    assert session.show_help is True

    press(manager, "ESC")
    assert session.show_help is False

    press(manager, "F2")
    assert session.show_line_numbers is False


def test_quit_combo_requires_two_presses_when_modified() -> None:
    manager = make_manager()
    session = manager.context.session
    session.modified = True

    press(manager, "ctrl+q")
    assert session.quit_requested is True
    assert session.exit_requested is False
    assert session.status_message.startswith("File modified!")

    press(manager, "ctrl+q")
    assert session.exit_requested is True


def test_other_key_disarms_quit_request() -> None:
    manager = make_manager(["abc"])
    session = manager.context.session
    session.modified = True

    press(manager, "ctrl+q", "RIGHT", "ctrl+q")

    assert session.exit_requested is False
    assert session.quit_requested is True


def test_quit_combo_exits_immediately_when_clean() -> None:
    manager = make_manager()

    press(manager, "ctrl+q")

    assert manager.context.session.exit_requested is True


def test_search_jumps_to_first_match() -> None:
    manager = make_manager(["alpha", "beta foo", "foo"])
    session = manager.context.session

    press(manager, "/")
    assert session.mode == "search"
    type_text(manager, "foo")
    press(manager, "ENTER")

    assert session.mode == "normal"
    assert session.cursor.as_tuple() == (1, 5)
    assert session.status_message == "Found 2 matches in current window"
    assert session.prompt is None


def test_search_miss_keeps_cursor() -> None:
    manager = make_manager(["alpha"])
    session = manager.context.session

    press(manager, "/")
    type_text(manager, "zzz")
    press(manager, "ENTER")

    assert session.cursor.as_tuple() == (0, 0)
    assert session.status_message == "No matches found in current window"


def test_replace_two_phase_entry() -> None:
    manager = make_manager(["cat cat", "cat"])
    session = manager.context.session

    press(manager, "ctrl+r")
    type_text(manager, "cat")
    press(manager, "ENTER")
    assert session.prompt is not None
    assert session.prompt.phase is ReplacePhase.AWAITING_REPLACEMENT
    assert session.status_message == "Replace 'cat' with:"

    type_text(manager, "dog")
    press(manager, "ENTER")

    assert list(session.window.lines) == ["dog dog", "dog"]
    assert session.status_message == "Replaced 3 occurrences in current window"
    assert session.mode == "normal"


def test_replace_tab_requires_query() -> None:
    manager = make_manager(["cat"])
    session = manager.context.session

    press(manager, "ctrl+r", "TAB")

    assert session.mode == "replace"
    assert session.status_message == "Enter search term first"


def test_replace_enter_with_empty_query_returns_to_normal() -> None:
    manager = make_manager(["cat"])
    session = manager.context.session

    press(manager, "ctrl+r", "ENTER")

    assert session.mode == "normal"
    assert session.current_line == "cat"


def test_replace_backspace_steps_back_to_query() -> None:
    manager = make_manager(["cat"])
    session = manager.context.session

    press(manager, "ctrl+r")
    type_text(manager, "ca")
    press(manager, "TAB", "BACKSPACE")

    assert session.prompt is not None
    assert session.prompt.phase is ReplacePhase.AWAITING_QUERY
    press(manager, "BACKSPACE")
    assert session.prompt.text == "c"


def test_replace_with_empty_replacement_deletes_matches() -> None:
    manager = make_manager(["a-b-c"])

    press(manager, "ctrl+r", "-", "TAB", "ENTER")

    assert manager.context.session.current_line == "abc"


def test_escape_discards_prompt() -> None:
    manager = make_manager(["abc"])
    session = manager.context.session

    press(manager, ":")
    type_text(manager, "wq")
    press(manager, "ESC")

    assert session.mode == "normal"
    assert session.prompt is None
    assert session.exit_requested is False


def test_prompt_input_is_limited() -> None:
    manager = make_manager(prompt_limit=3)
    session = manager.context.session

    press(manager, "/")
    type_text(manager, "abcdef")

    assert session.prompt is not None
    assert session.prompt.text == "abc"


def test_rate_limiter_drops_fast_events() -> None:
    now: List[float] = [0.0]
    session = EditorSession(settings=EditorSettings())
    manager = ModeManager.with_default_modes(
        ModeContext(session=session), clock=lambda: now[0]
    )

    manager.handle_key(make_key("i"))
    now[0] = 0.005
    dropped = manager.handle_key(make_key("ESC"))
    assert dropped.status == "throttled"
    assert session.mode == "insert"

    now[0] = 0.02
    manager.handle_key(make_key("ESC"))
    assert session.mode == "normal"


def test_register_mode_rejects_duplicates() -> None:
    manager = make_manager()

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_register_mode_rejects_unknown_names() -> None:
    class ScratchMode(InsertMode):
        name = "scratch"  # type: ignore[assignment]

    manager = make_manager()

    with pytest.raises(ValueError):
        manager.register_mode(ScratchMode)


def test_switch_to_unregistered_mode_fails() -> None:
    session = EditorSession(settings=EditorSettings(min_key_interval_ms=0))
    manager = ModeManager(ModeContext(session=session))
    manager.register_mode(NormalMode)

    with pytest.raises(KeyError):
        manager.switch_mode("insert")


def test_unbound_normal_key_is_not_consumed() -> None:
    manager = make_manager()

    result = manager.handle_key(make_key("z"))

    assert result.consumed is False
    assert result.status == "miss"


def make_letters_store(tmp_path: Path) -> Path:
    path = tmp_path / "letters.txt"
    path.write_text("a\nb\nc\nd\ne", encoding="utf-8")
    return path


def test_enter_on_last_line_of_full_window_keeps_new_line(tmp_path: Path) -> None:
    path = make_letters_store(tmp_path)
    manager = make_manager(path=path, window_capacity=3)
    session = manager.context.session

    press(manager, "DOWN", "DOWN", "i", "RIGHT", "ENTER")

    assert session.cursor.as_tuple() == (3, 0)
    assert session.window.is_resident(3)
    assert session.current_line == ""
    assert session.window.load_count == 1

    type_text(manager, "X")
    assert session.window.lines == ("b", "c", "X")

    press(manager, "ctrl+s")
    assert path.read_text(encoding="utf-8") == "a\nb\nc\nX\nd\ne"


def test_paste_on_last_line_of_full_window_keeps_pasted_line(tmp_path: Path) -> None:
    path = make_letters_store(tmp_path)
    manager = make_manager(path=path, window_capacity=3)
    session = manager.context.session

    press(manager, "DOWN", "DOWN", "ctrl+c", "ctrl+v")

    assert session.cursor.line == 3
    assert session.current_line == "c"
    assert session.window.load_count == 1

    press(manager, "ctrl+s")
    assert path.read_text(encoding="utf-8") == "a\nb\nc\nc\nd\ne"


def test_cutting_lines_of_new_document_reaches_held_lines() -> None:
    manager = make_manager(window_capacity=2)
    session = manager.context.session

    press(manager, "i")
    type_text(manager, "a")
    press(manager, "ENTER")
    type_text(manager, "b")
    press(manager, "ENTER")
    type_text(manager, "c")
    press(manager, "ESC", "UP", "UP", "UP")

    assert session.cursor.line == 0
    assert session.current_line == "a"

    press(manager, "ctrl+x", "ctrl+x")

    assert session.cursor.as_tuple() == (0, 0)
    assert session.window.lines == ("c",)
    assert session.total_line_count == 1
    assert session.clipboard.text == "b"

    press(manager, "i")
    type_text(manager, "X")
    assert session.current_line == "Xc"
