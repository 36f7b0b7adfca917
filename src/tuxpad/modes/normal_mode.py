"""Normal mode: motions, clipboard verbs, and entry points to other modes."""

from __future__ import annotations

from tuxpad.buffer import NORMAL
from tuxpad.editing import clamp_column

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import key_to_token

QUIT_TOKEN = "ctrl+q"


class NormalMode(Mode):
    name = NORMAL

    def on_enter(self, previous: str | None) -> None:
        if previous is not None:
            clamp_column(self.session, mode=NORMAL)

    def handle_key(self, key: KeyInput) -> ModeResult:
        # Only a second consecutive quit chord may confirm a pending quit.
        if key_to_token(key) != QUIT_TOKEN:
            self.session.quit_requested = False
        return super().handle_key(key)
