"""Base classes and shared plumbing for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from tuxpad.buffer import ModeName
from tuxpad.runtime import telemetry
from tuxpad.session import EditorSession

from .keymap_helpers import key_to_token, require_keymap_registry


@dataclass(slots=True)
class KeyInput:
    """Logical key event handed over by the terminal collaborator."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def printable(self) -> Optional[str]:
        """Text to insert, or ``None`` for control keys and chords."""

        if not self.text or any(m.lower() in {"ctrl", "alt"} for m in self.modifiers):
            return None
        return self.text if self.text.isprintable() else None


@dataclass(slots=True)
class ModeResult:
    """Outcome of one key event.

    ``reload`` asks the manager to re-clamp the cursor into the document. The
    manager checks residency after every handled key either way.
    """

    consumed: bool
    switch_to: Optional[ModeName] = None
    status: str = "ok"
    message: Optional[str] = None
    reload: bool = False


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """What every mode and action can reach."""

    session: EditorSession
    bus: ModeBus = field(default_factory=ModeBus)
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Looks keys up in the mode's bindings; unbound keys go to ``handle_unbound``."""

    name: ModeName = "normal"

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger(f"tuxpad.modes.{self.name}")

    @property
    def session(self) -> EditorSession:
        return self.context.session

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        registry = require_keymap_registry(self.context)
        match = registry.lookup(self.name, key_to_token(key))
        if match is None:
            return self.handle_unbound(key)

        binding, action = match
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": binding.id, "action": action.id},
        ):
            outcome = action(self.context, key)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")
