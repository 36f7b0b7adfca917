"""Key-bound verbs for Normal and Insert mode."""

from __future__ import annotations

from functools import partial

from tuxpad import editing
from tuxpad.buffer import COMMAND, INSERT, NORMAL, REPLACE, SEARCH
from tuxpad.modes.base_mode import KeyInput, ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del context, key
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def append_after_cursor(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    editing.move(context.session, 1, 0, mode=INSERT)
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def open_line_below(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    editing.move_to_line_end(session, mode=INSERT)
    editing.insert_newline(session)
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def enter_command_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del context, key
    return ModeResult(consumed=True, switch_to=COMMAND, message="enter_command")


def enter_search_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del context, key
    return ModeResult(consumed=True, switch_to=SEARCH, message="enter_search")


def enter_replace_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del context, key
    return ModeResult(consumed=True, switch_to=REPLACE, message="enter_replace")


def exit_insert_mode(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    editing.move(session, -1, 0, mode=NORMAL)
    session.status_message = "Normal mode"
    return ModeResult(consumed=True, switch_to=NORMAL, message="exit_insert")


def escape_normal(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    session.show_help = False
    session.status_message = "Normal mode"
    return ModeResult(consumed=True, status="noop")


def move_cursor(
    context: ModeContext, key: KeyInput, *, delta_x: int = 0, delta_y: int = 0
) -> ModeResult:
    del key
    editing.move(context.session, delta_x, delta_y)
    return ModeResult(consumed=True, status="motion")


def page_cursor(context: ModeContext, key: KeyInput, *, direction: int) -> ModeResult:
    del key
    session = context.session
    editing.move(session, 0, direction * session.settings.page_step)
    return ModeResult(consumed=True, status="motion", reload=True)


def line_start(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    editing.move_to_line_start(context.session)
    return ModeResult(consumed=True, status="motion")


def line_end(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    editing.move_to_line_end(context.session)
    return ModeResult(consumed=True, status="motion")


def insert_newline(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    applied = editing.insert_newline(context.session)
    return ModeResult(consumed=True, status="edit" if applied else "refused")


def backspace(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    applied = editing.delete_char(context.session)
    return ModeResult(consumed=True, status="edit" if applied else "refused")


def insert_tab(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    for _ in range(session.settings.tab_width):
        if not editing.insert_char(session, " "):
            return ModeResult(consumed=True, status="refused")
    return ModeResult(consumed=True, status="edit")


def copy_line(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    editing.copy_line(context.session)
    return ModeResult(consumed=True, status="copy")


def cut_line(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    applied = editing.cut_line(context.session)
    return ModeResult(consumed=True, status="cut" if applied else "refused", reload=True)


def paste_line(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    applied = editing.paste_line(context.session)
    return ModeResult(consumed=True, status="paste" if applied else "noop", reload=True)


def undo_last(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    applied = editing.undo(context.session)
    return ModeResult(consumed=True, status="undo" if applied else "noop", reload=True)


def save_document(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    saved = context.session.save()
    if saved:
        context.bus.emit("document.saved", context.session.store)
    return ModeResult(consumed=True, status="saved" if saved else "save_failed")


def request_quit(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    if session.modified and not session.quit_requested:
        session.quit_requested = True
        session.status_message = (
            "File modified! Press Ctrl+Q again to quit without saving"
        )
        return ModeResult(consumed=True, status="quit_armed")
    return exit_editor(context, force=session.modified)


def exit_editor(
    context: ModeContext, *, force: bool, switch_to: str | None = None
) -> ModeResult:
    context.session.request_exit()
    context.bus.emit("editor.quit", {"force": force})
    return ModeResult(
        consumed=True,
        switch_to=switch_to,  # type: ignore[arg-type]
        status="quit_force" if force else "quit",
        message="quit",
    )


def toggle_help(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    session.show_help = not session.show_help
    session.status_message = "Help shown" if session.show_help else "Help hidden"
    return ModeResult(consumed=True, status="toggle")


def toggle_line_numbers(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    session.show_line_numbers = not session.show_line_numbers
    session.status_message = (
        "Line numbers shown" if session.show_line_numbers else "Line numbers hidden"
    )
    return ModeResult(consumed=True, status="toggle")


move_up = partial(move_cursor, delta_y=-1)
move_down = partial(move_cursor, delta_y=1)
move_left = partial(move_cursor, delta_x=-1)
move_right = partial(move_cursor, delta_x=1)
page_up = partial(page_cursor, direction=-1)
page_down = partial(page_cursor, direction=1)


__all__ = [
    "append_after_cursor",
    "backspace",
    "copy_line",
    "cut_line",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_replace_mode",
    "enter_search_mode",
    "escape_normal",
    "exit_editor",
    "exit_insert_mode",
    "insert_newline",
    "insert_tab",
    "line_end",
    "line_start",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "open_line_below",
    "page_down",
    "page_up",
    "paste_line",
    "request_quit",
    "save_document",
    "toggle_help",
    "toggle_line_numbers",
    "undo_last",
]
