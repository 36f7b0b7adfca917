"""The resident slice of a document that may be far larger than memory.

Only ``capacity`` lines starting at ``start_line`` are materialized. Every
reload rereads the whole backing store and keeps the requested slice, so a
miss is cheap to recover from but never incremental.

Lines that an insert pushes out of the resident slice are held aside, in
document order, until the next save or reload. They stay reachable: the
window can slide back over them without touching the store.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from tuxpad.runtime import telemetry

from .store import read_store


class LineWindow:
    """Capacity-bounded list of lines mapped onto document coordinates."""

    def __init__(self, *, capacity: int = 1000, max_line_length: int = 10000) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.max_line_length = max_line_length
        self.start_line = 0
        self.total_line_count = 1
        self.newline = "\n"
        self.load_count = 0
        self._lines: List[str] = [""]
        # Held lines directly before and after the resident slice.
        self._before: List[str] = []
        self._after: List[str] = []
        self._source: Optional[Path] = None
        self._source_start = 0
        self._source_span = 1
        self._source_total = 1

    def reset(self) -> None:
        """Become a fresh single-empty-line document with no backing store."""

        self.start_line = 0
        self.total_line_count = 1
        self.newline = "\n"
        self._lines = [""]
        self._before = []
        self._after = []
        self._source = None
        self._source_start = 0
        self._source_span = 1
        self._source_total = 1

    def load(self, path: Path, desired_start: int = 0) -> int:
        """Replace the window with lines read from ``path``.

        ``desired_start`` is clamped into the document. Returns the total line
        count. Raises ``StoreError`` on any read failure except a missing file,
        which loads as a single empty line.
        """

        with telemetry.span(
            "window::load",
            component="window",
            metadata={"path": str(path), "desired_start": desired_start},
        ) as handle:
            content = read_store(path)
            lines = content.lines
            total = max(len(lines), 1)
            start = min(max(desired_start, 0), total - 1)
            end = min(start + self.capacity, total)

            self._lines = [self.truncate(line) for line in lines[start:end]] or [""]
            self.start_line = start
            self.total_line_count = total
            self.newline = content.newline
            self._before = []
            self._after = []
            self._source = path if content.exists else None
            self._source_start = start
            self._source_span = end - start
            self._source_total = total
            self.load_count += 1
            handle.add_metadata("start", start)
            handle.add_metadata("total", total)
        return total

    def truncate(self, content: str) -> str:
        if len(content) > self.max_line_length:
            return content[: self.max_line_length]
        return content

    @property
    def lines(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def end_line(self) -> int:
        """One past the last resident document line."""

        return self.start_line + len(self._lines)

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def __len__(self) -> int:
        return len(self._lines)

    def is_resident(self, index: int) -> bool:
        return self.start_line <= index < self.end_line

    def is_held(self, index: int) -> bool:
        """True when ``index`` is resident or held aside after an insert."""

        held_start = self.start_line - len(self._before)
        return held_start <= index < self.end_line + len(self._after)

    def get(self, index: int) -> Optional[str]:
        """Return line ``index`` if resident, otherwise ``None``."""

        if not self.is_resident(index):
            return None
        return self._lines[index - self.start_line]

    def set(self, index: int, content: str) -> bool:
        """Overwrite a resident line; ``False`` when ``index`` is not resident."""

        if not self.is_resident(index):
            return False
        self._lines[index - self.start_line] = self.truncate(content)
        return True

    def insert_line(self, index: int, content: str) -> bool:
        """Insert within the window or directly after its last line.

        When the window grows past capacity its last line leaves memory and is
        held aside so a save still writes it. If that last line is the one just
        inserted, the window slides forward instead: the head line is held
        aside and ``start_line`` advances, keeping the new line resident.
        """

        if not self.start_line <= index <= self.end_line:
            return False
        offset = index - self.start_line
        self._lines.insert(offset, self.truncate(content))
        self.total_line_count += 1
        if len(self._lines) > self.capacity:
            if offset == len(self._lines) - 1:
                self._before.append(self._lines.pop(0))
                self.start_line += 1
            else:
                self._after.insert(0, self._lines.pop())
        return True

    def remove_line(self, index: int) -> Optional[str]:
        """Drop a resident line, refilling the window from held lines.

        A document that loses its only line becomes a single empty line. A
        paged window can still run dry when nothing is held; the next
        residency check reloads it.
        """

        if not self.is_resident(index):
            return None
        was_single = self.total_line_count == 1
        removed = self._lines.pop(index - self.start_line)
        self.total_line_count = max(self.total_line_count - 1, 1)
        if self._after:
            self._lines.append(self._after.pop(0))
        elif not self._lines and self._before:
            self._lines.append(self._before.pop())
            self.start_line -= 1
        if not self._lines and was_single:
            self._lines.append("")
            self.start_line = 0
        return removed

    def shift_to(self, index: int) -> bool:
        """Re-centre the resident slice on a held line without reading the store.

        Returns ``False`` when ``index`` is neither resident nor held.
        """

        if not self.is_held(index):
            return False
        held_start = self.start_line - len(self._before)
        held = self._before + self._lines + self._after
        offset = max(index - held_start - self.capacity // 2, 0)
        offset = min(offset, max(len(held) - self.capacity, 0))
        self._before = held[:offset]
        self._lines = held[offset : offset + self.capacity]
        self._after = held[offset + self.capacity :]
        self.start_line = held_start + offset
        return True

    @property
    def fully_resident(self) -> bool:
        """True when saving the window alone reproduces the whole document."""

        return (
            self.start_line == 0
            and not self._before
            and not self._after
            and (self._source is None or self._source_span == self._source_total)
        )

    def compose(self, store_lines: Sequence[str]) -> List[str]:
        """Splice the held and resident lines over the store span they came from."""

        segment = self._before + self._lines + self._after
        if self._source is None:
            return segment
        before = list(store_lines[: self._source_start])
        after = list(store_lines[self._source_start + self._source_span :])
        return before + segment + after

    def mark_saved(self, path: Path, written: int) -> None:
        # Held lines now live in the store around the resident slice.
        self._source = path
        self._source_start = self.start_line
        self._source_span = len(self._lines)
        self._source_total = written
        self._before = []
        self._after = []


__all__ = ["LineWindow"]
