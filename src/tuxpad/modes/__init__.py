"""Modal input state machine: one handler class per editor mode."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .prompt_mode import CommandMode, PromptMode, ReplaceMode, SearchMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "PromptMode",
    "CommandMode",
    "SearchMode",
    "ReplaceMode",
]
