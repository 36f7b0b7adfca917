"""Insert mode: printable keys edit the resident line under the cursor."""

from __future__ import annotations

from tuxpad.buffer import INSERT
from tuxpad.editing import insert_char

from .base_mode import KeyInput, Mode, ModeResult


class InsertMode(Mode):
    name = INSERT

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.session.status_message = "-- INSERT --"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        for char in text:
            if not insert_char(self.session, char):
                return ModeResult(consumed=True, status="refused")
        return ModeResult(consumed=True, status="insert_text")
