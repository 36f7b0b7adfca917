"""Evaluation of the command line typed after ``:``."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from tuxpad.buffer import NORMAL
from tuxpad.modes.base_mode import KeyInput, ModeContext, ModeResult
from tuxpad.runtime import telemetry

from .core import exit_editor

CommandHandler = Callable[[ModeContext, str], ModeResult]


def submit_command_line(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    prompt = context.session.prompt
    text = prompt.text.strip() if prompt is not None else ""
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to=NORMAL, status="command_empty")

    name, _, argument = text.partition(" ")
    handler = _COMMAND_HANDLERS.get(name)
    if handler is None or (argument and name != "w"):
        return _unknown_command(context, text)
    return handler(context, argument.strip())


def _unknown_command(context: ModeContext, text: str) -> ModeResult:
    context.session.status_message = f"Unknown command: {text}"
    context.bus.emit("command.error", text)
    telemetry.record_event("command.unknown", level="debug", data={"text": text})
    return ModeResult(
        consumed=True, switch_to=NORMAL, status="command_error", message=text
    )


def _handle_quit(context: ModeContext, argument: str, *, force: bool = False) -> ModeResult:
    del argument
    session = context.session
    if session.modified and not force:
        session.status_message = "File modified! Use 'q!' to quit without saving"
        return ModeResult(consumed=True, switch_to=NORMAL, status="command_quit_refused")
    return exit_editor(context, force=force, switch_to=NORMAL)


def _handle_write(context: ModeContext, argument: str) -> ModeResult:
    session = context.session
    saved = session.save(argument or None)
    if saved:
        context.bus.emit("document.saved", session.store)
    status = "command_write" if saved else "command_write_failed"
    return ModeResult(consumed=True, switch_to=NORMAL, status=status, message="write")


def _handle_write_quit(context: ModeContext, argument: str) -> ModeResult:
    result = _handle_write(context, argument)
    if result.status != "command_write":
        return result
    return exit_editor(context, force=False, switch_to=NORMAL)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "w": _handle_write,
    "wq": _handle_write_quit,
}


__all__ = ["submit_command_line"]
