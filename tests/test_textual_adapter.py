from __future__ import annotations

from typing import Any, Dict, List

from tuxpad.adapters.textual import TextualEditorAdapter, TextualUIHooks, prompt_line
from tuxpad.buffer import PromptBuffer, ReplacePhase
from tuxpad.config import EditorSettings
from tuxpad.modes import ModeContext
from tuxpad.modes.mode_manager import ModeManager
from tuxpad.session import EditorSession


def make_manager() -> ModeManager:
    session = EditorSession(settings=EditorSettings(min_key_interval_ms=0))
    return ModeManager.with_default_modes(ModeContext(session=session))


def test_adapter_updates_view_and_status() -> None:
    manager = make_manager()
    views: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_view=lambda session: views.append(session.current_line or ""),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("i")
    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("ESC")

    assert views[-1] == "h"
    assert "-- INSERT --" in statuses
    assert statuses[-1] == "Normal mode"


def test_adapter_relays_command_events() -> None:
    manager = make_manager()
    prompts: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_view=lambda session: None,
        show_prompt=lambda text: prompts.append(text),
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key(":", text=":")
    adapter.handle_textual_key("w", text="w")
    adapter.handle_textual_key("q", text="q")
    adapter.handle_textual_key("ENTER")

    assert ":wq" in prompts
    assert prompts[-1] == ""
    assert ("command.submit", "wq") in events
    assert ("command.end", "wq") in events
    assert adapter.exit_requested is False


def test_adapter_reports_quit() -> None:
    manager = make_manager()
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_view=lambda session: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert adapter.exit_requested is True
    assert {"name": "editor.quit", "payload": {"force": False}} in events


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_view=lambda session: None,
        log=lambda line: logs.append(line),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_key("i")

    assert any(line.startswith("key ->") for line in logs)
    assert any("mode='insert'" in line for line in logs)


def test_prompt_line_per_mode() -> None:
    session = EditorSession()
    assert prompt_line(session) == ""

    session.prompt = PromptBuffer(text="abc")
    session.mode = "command"
    assert prompt_line(session) == ":abc"

    session.mode = "search"
    assert prompt_line(session) == "/abc"

    session.mode = "replace"
    assert prompt_line(session) == "Search: abc"

    session.prompt.phase = ReplacePhase.AWAITING_REPLACEMENT
    session.prompt.replacement = "x"
    assert prompt_line(session) == "Replace 'abc' with: x"
