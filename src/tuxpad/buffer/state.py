"""Cursor, mode tags, and the transient text fields of the prompt modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

ModeName = Literal["normal", "insert", "command", "search", "replace"]

NORMAL: ModeName = "normal"
INSERT: ModeName = "insert"
COMMAND: ModeName = "command"
SEARCH: ModeName = "search"
REPLACE: ModeName = "replace"

MODE_NAMES: tuple[ModeName, ...] = (NORMAL, INSERT, COMMAND, SEARCH, REPLACE)


@dataclass(slots=True)
class Cursor:
    """Logical cursor in document coordinates (0-based line and column)."""

    line: int = 0
    column: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.column)


class ReplacePhase(str, Enum):
    AWAITING_QUERY = "awaiting_query"
    AWAITING_REPLACEMENT = "awaiting_replacement"


@dataclass(slots=True)
class PromptBuffer:
    """Text typed into Command, Search or Replace mode.

    Replace mode uses both fields; ``phase`` says which one receives input.
    """

    text: str = ""
    replacement: str = ""
    phase: ReplacePhase = ReplacePhase.AWAITING_QUERY
    limit: int = 100

    @property
    def active_text(self) -> str:
        if self.phase is ReplacePhase.AWAITING_REPLACEMENT:
            return self.replacement
        return self.text

    def type(self, chars: str) -> None:
        for char in chars:
            if len(self.active_text) >= self.limit:
                return
            if self.phase is ReplacePhase.AWAITING_REPLACEMENT:
                self.replacement += char
            else:
                self.text += char

    def backspace(self) -> bool:
        """Drop the last typed character; ``False`` when the field was empty."""

        if self.phase is ReplacePhase.AWAITING_REPLACEMENT:
            if not self.replacement:
                return False
            self.replacement = self.replacement[:-1]
            return True
        if not self.text:
            return False
        self.text = self.text[:-1]
        return True


__all__ = [
    "Cursor",
    "ModeName",
    "MODE_NAMES",
    "NORMAL",
    "INSERT",
    "COMMAND",
    "SEARCH",
    "REPLACE",
    "PromptBuffer",
    "ReplacePhase",
]
