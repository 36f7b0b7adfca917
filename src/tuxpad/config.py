"""Tunable limits for the editor core, overridable through the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

ENV_PREFIX = "TUXPAD_"
# Settings not listed here must be positive.
MINIMUMS = {"min_key_interval_ms": 0}


def _env_int(name: str, fallback: int, minimum: int = 1) -> int:
    """Integer from the environment; unparsable or out-of-range values fall back."""

    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        number = int(value)
    except ValueError:
        return fallback
    if number < minimum:
        return fallback
    return number


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Limits shared by the window, the edit set and the mode machine."""

    max_line_length: int = 10000
    window_capacity: int = 1000
    undo_depth: int = 50
    search_limit: int = 100
    prompt_limit: int = 100
    page_step: int = 20
    tab_width: int = 4
    min_key_interval_ms: int = 10

    def __post_init__(self) -> None:
        if self.max_line_length <= 0:
            raise ValueError("max_line_length must be positive")
        if self.window_capacity <= 0:
            raise ValueError("window_capacity must be positive")
        if self.min_key_interval_ms < 0:
            raise ValueError("min_key_interval_ms cannot be negative")

    @classmethod
    def from_env(cls) -> "EditorSettings":
        defaults = cls()
        values = {
            field.name: _env_int(
                field.name.upper(),
                getattr(defaults, field.name),
                MINIMUMS.get(field.name, 1),
            )
            for field in fields(cls)
        }
        return cls(**values)


__all__ = ["EditorSettings", "ENV_PREFIX"]
