"""Modes that collect a line of text before acting on it."""

from __future__ import annotations

from tuxpad.buffer import COMMAND, REPLACE, SEARCH, PromptBuffer

from .base_mode import KeyInput, Mode, ModeResult


class PromptMode(Mode):
    """Owns a fresh ``PromptBuffer`` for as long as the mode is active."""

    entry_message = ""

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.session.prompt = PromptBuffer(limit=self.session.settings.prompt_limit)
        if self.entry_message:
            self.session.status_message = self.entry_message
        self.context.bus.emit(f"{self.name}.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        text = self.prompt.text
        self.session.prompt = None
        self.context.bus.emit(f"{self.name}.end", text)

    @property
    def prompt(self) -> PromptBuffer:
        if self.session.prompt is None:
            self.session.prompt = PromptBuffer(
                limit=self.session.settings.prompt_limit
            )
        return self.session.prompt

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.prompt.type(text)
        return ModeResult(consumed=True, status="editing")


class CommandMode(PromptMode):
    name = COMMAND
    entry_message = "Command mode"


class SearchMode(PromptMode):
    name = SEARCH
    entry_message = "Search mode"


class ReplaceMode(PromptMode):
    name = REPLACE
    entry_message = "Replace: enter search term"


__all__ = ["PromptMode", "CommandMode", "SearchMode", "ReplaceMode"]
