"""Windowed line storage, undo history, and the clipboard register."""

from .clipboard import Clipboard
from .state import (
    COMMAND,
    INSERT,
    MODE_NAMES,
    NORMAL,
    REPLACE,
    SEARCH,
    Cursor,
    ModeName,
    PromptBuffer,
    ReplacePhase,
)
from .store import StoreContent, StoreError, read_store, split_lines, write_store
from .undo import UndoEntry, UndoLog
from .window import LineWindow

__all__ = [
    "Clipboard",
    "Cursor",
    "LineWindow",
    "ModeName",
    "MODE_NAMES",
    "NORMAL",
    "INSERT",
    "COMMAND",
    "SEARCH",
    "REPLACE",
    "PromptBuffer",
    "ReplacePhase",
    "StoreContent",
    "StoreError",
    "read_store",
    "split_lines",
    "write_store",
    "UndoEntry",
    "UndoLog",
]
