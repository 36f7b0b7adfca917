"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from tuxpad.buffer import COMMAND, REPLACE, SEARCH, ReplacePhase
from tuxpad.modes import KeyInput, ModeResult
from tuxpad.modes.mode_manager import ModeManager
from tuxpad.session import EditorSession

BUS_EVENTS = (
    "command.start",
    "command.end",
    "command.submit",
    "command.error",
    "search.start",
    "search.end",
    "search.submit",
    "replace.start",
    "replace.end",
    "replace.submit",
    "document.saved",
    "editor.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorSession], None]
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def prompt_line(session: EditorSession) -> str:
    """Text of the bottom prompt for the active prompt mode, else empty."""

    prompt = session.prompt
    if prompt is None:
        return ""
    if session.mode == COMMAND:
        return f":{prompt.text}"
    if session.mode == SEARCH:
        return f"/{prompt.text}"
    if session.mode == REPLACE:
        if prompt.phase is ReplacePhase.AWAITING_REPLACEMENT:
            return f"Replace '{prompt.text}' with: {prompt.replacement}"
        return f"Search: {prompt.text}"
    return ""


class TextualEditorAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_view()
        self._refresh_prompt()

    @property
    def session(self) -> EditorSession:
        return self.manager.context.session

    @property
    def exit_requested(self) -> bool:
        return self.session.exit_requested

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state(
            "key ->",
            key=key,
            text=text,
            mods=normalized_modifiers,
        )
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def refresh(self) -> None:
        """Repaint everything, e.g. after the host resized the view."""

        self.hooks.update_status(self.session.status_message)
        self._refresh_view()
        self._refresh_prompt()

    def _after_mode_result(self, result: ModeResult) -> None:
        if result.status == "throttled":
            return
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        # Surface the event to the host UI and also emit a realtime log line.
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name.endswith((".start", ".end")):
            self._refresh_prompt()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.session)

    def _refresh_prompt(self) -> None:
        self.hooks.show_prompt(prompt_line(self.session))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        active_mode = self.manager.active_mode
        window = session.window
        return {
            "mode": active_mode.name if active_mode else "?",
            "cursor": session.cursor.as_tuple(),
            "window": (window.start_line, window.end_line),
            "lines": session.total_line_count,
            "modified": session.modified,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "prompt_line", "BUS_EVENTS"]
