"""Single-slot register holding the last copied or cut line."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Clipboard:
    text: str = ""

    def store(self, text: str) -> None:
        self.text = text

    def is_empty(self) -> bool:
        return not self.text
