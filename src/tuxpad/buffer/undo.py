"""Bounded single-line undo history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional

from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Content of one line captured right before an edit touched it."""

    label: str
    line: int
    text: str
    cursor: tuple[int, int]
    line_count: int = 1
    split_column: Optional[int] = None

    @classmethod
    def capture(
        cls,
        label: str,
        text: str,
        cursor: Cursor,
        *,
        line_count: int = 1,
        split_column: Optional[int] = None,
    ) -> "UndoEntry":
        return cls(
            label=label,
            line=cursor.line,
            text=text,
            cursor=cursor.as_tuple(),
            line_count=line_count,
            split_column=split_column,
        )


class UndoLog:
    """FIFO-evicted stack; the oldest entry goes once ``depth`` is reached."""

    def __init__(self, depth: int = 50) -> None:
        if depth <= 0:
            raise ValueError("depth must be positive")
        self.depth = depth
        self._entries: Deque[UndoEntry] = deque(maxlen=depth)

    def push(self, entry: UndoEntry) -> None:
        self._entries.append(entry)

    def pop(self) -> Optional[UndoEntry]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[UndoEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[UndoEntry]:
        return iter(self._entries)
