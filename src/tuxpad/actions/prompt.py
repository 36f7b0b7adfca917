"""Keys shared by the prompt modes, plus search and replace submission."""

from __future__ import annotations

from tuxpad import editing
from tuxpad.buffer import NORMAL, PromptBuffer, ReplacePhase
from tuxpad.modes.base_mode import KeyInput, ModeContext, ModeResult


def _prompt(context: ModeContext) -> PromptBuffer:
    session = context.session
    if session.prompt is None:
        session.prompt = PromptBuffer(limit=session.settings.prompt_limit)
    return session.prompt


def cancel_prompt(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    context.session.status_message = "Normal mode"
    return ModeResult(consumed=True, switch_to=NORMAL, message="prompt_cancel")


def prompt_backspace(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    prompt = _prompt(context)
    if not prompt.backspace() and prompt.phase is ReplacePhase.AWAITING_REPLACEMENT:
        prompt.phase = ReplacePhase.AWAITING_QUERY
        context.session.status_message = "Replace: enter search term"
    return ModeResult(consumed=True, status="editing")


def submit_search(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    query = _prompt(context).text
    context.bus.emit("search.submit", query)
    matches = editing.search(session, query)
    if not matches:
        session.status_message = "No matches found in current window"
        return ModeResult(consumed=True, switch_to=NORMAL, status="search_miss")

    session.cursor.line, session.cursor.column = matches[0]
    session.status_message = f"Found {len(matches)} matches in current window"
    return ModeResult(
        consumed=True, switch_to=NORMAL, status="search_hit", reload=True
    )


def replace_next_field(context: ModeContext, key: KeyInput) -> ModeResult:
    del key
    session = context.session
    prompt = _prompt(context)
    if not prompt.text:
        session.status_message = "Enter search term first"
        return ModeResult(consumed=True, status="editing")
    prompt.phase = ReplacePhase.AWAITING_REPLACEMENT
    session.status_message = f"Replace '{prompt.text}' with:"
    return ModeResult(consumed=True, status="editing")


def submit_replace(context: ModeContext, key: KeyInput) -> ModeResult:
    session = context.session
    prompt = _prompt(context)
    if prompt.phase is ReplacePhase.AWAITING_QUERY:
        if not prompt.text:
            session.status_message = "Normal mode"
            return ModeResult(consumed=True, switch_to=NORMAL, status="replace_empty")
        return replace_next_field(context, key)

    count = editing.replace_in_window(session, prompt.text, prompt.replacement)
    context.bus.emit(
        "replace.submit",
        {"search": prompt.text, "replacement": prompt.replacement, "count": count},
    )
    session.status_message = f"Replaced {count} occurrences in current window"
    return ModeResult(consumed=True, switch_to=NORMAL, status="replace_done")


__all__ = [
    "cancel_prompt",
    "prompt_backspace",
    "replace_next_field",
    "submit_replace",
    "submit_search",
]
