"""Mode manager: owns the active mode and drives one key event at a time."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Type

from tuxpad.buffer import MODE_NAMES, ModeName
from tuxpad.editing import ensure_resident
from tuxpad.keymaps import KeymapRegistry, load_default_keymaps
from tuxpad.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .prompt_mode import CommandMode, ReplaceMode, SearchMode

DEFAULT_MODES: tuple[Type[Mode], ...] = (
    NormalMode,
    InsertMode,
    CommandMode,
    SearchMode,
    ReplaceMode,
)


class ModeManager:
    """Dispatches keys to the active mode, applies transitions and reloads.

    Events arriving less than ``min_interval_ms`` after the previous processed
    event are dropped without effect.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
        min_interval_ms: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("tuxpad.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="tuxpad.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("mode_manager", self)
        if min_interval_ms is None:
            min_interval_ms = context.session.settings.min_key_interval_ms
        self.min_interval_ms = min_interval_ms
        self._clock = clock
        self._last_event: Optional[float] = None

    @classmethod
    def with_default_modes(cls, context: ModeContext, **kwargs: object) -> "ModeManager":
        manager = cls(context, **kwargs)  # type: ignore[arg-type]
        for mode_cls in DEFAULT_MODES:
            manager.register_mode(mode_cls)
        return manager

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name not in MODE_NAMES:
            raise ValueError(f"Mode '{mode.name}' is not an editor mode")
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self.context.session.mode = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: ModeName) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self.context.session.mode = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        if self._throttled():
            telemetry.record_event(
                "input.throttled", level="debug", data={"key": key.key}
            )
            return ModeResult(consumed=False, status="throttled")

        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        session = self.context.session
        if result.reload or not session.window.is_resident(session.cursor.line):
            ensure_resident(session)
        return result

    def _throttled(self) -> bool:
        now = self._clock()
        last = self._last_event
        if last is not None and (now - last) * 1000.0 < self.min_interval_ms:
            return True
        self._last_event = now
        return False


__all__ = ["ModeManager", "DEFAULT_MODES"]
