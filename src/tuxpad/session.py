"""The single editor aggregate every handler receives by reference."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from tuxpad.buffer import (
    NORMAL,
    Clipboard,
    Cursor,
    LineWindow,
    ModeName,
    PromptBuffer,
    StoreError,
    UndoLog,
    read_store,
    write_store,
)
from tuxpad.config import EditorSettings
from tuxpad.runtime import telemetry

WELCOME_MESSAGE = "TuxPad - Press F1 for help | ESC for normal mode"


class EditorSession:
    """Document window, cursor, viewport, mode tag, undo log and clipboard."""

    def __init__(
        self,
        *,
        settings: Optional[EditorSettings] = None,
        window: Optional[LineWindow] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.window = window or LineWindow(
            capacity=self.settings.window_capacity,
            max_line_length=self.settings.max_line_length,
        )
        self.cursor = Cursor()
        self.scroll_offset = 0
        self.mode: ModeName = NORMAL
        self.prompt: Optional[PromptBuffer] = None
        self.store: Optional[Path] = None
        self.modified = False
        self.undo = UndoLog(self.settings.undo_depth)
        self.clipboard = Clipboard()
        self.status_message = WELCOME_MESSAGE
        self.quit_requested = False
        self.exit_requested = False
        self.show_help = False
        self.show_line_numbers = True
        self.logger = telemetry.get_logger("tuxpad.session")

    @classmethod
    def from_path(
        cls, path: Path | str, *, settings: Optional[EditorSettings] = None
    ) -> "EditorSession":
        session = cls(settings=settings)
        session.open(path)
        return session

    @property
    def total_line_count(self) -> int:
        return self.window.total_line_count

    @property
    def current_line(self) -> Optional[str]:
        return self.window.get(self.cursor.line)

    def open(self, path: Path | str) -> bool:
        """Load ``path`` from its first line; errors leave an empty document."""

        target = Path(path)
        self.cursor = Cursor()
        self.scroll_offset = 0
        self.modified = False
        self.undo.clear()
        try:
            total = self.window.load(target, 0)
        except StoreError as exc:
            self.window.reset()
            self.status_message = f"Error loading file: {exc}"
            telemetry.record_event(
                "document.load_failed",
                level="warning",
                data={"path": str(target), "error": str(exc)},
            )
            return False
        self.store = target
        self.status_message = f"Loaded: {target} ({total} lines)"
        return True

    def reload_window(self) -> bool:
        """Reread the store into a window centred on the cursor line.

        Nothing happens while the window has no backing file to reread (a new
        document, or one whose file did not exist yet).
        """

        source = self.window.source
        if source is None:
            return False
        if self.modified and not self.window.fully_resident:
            self.logger.warning(
                f"reloading paged window over unsaved edits in {source}"
            )
        start = max(self.cursor.line - self.window.capacity // 2, 0)
        try:
            self.window.load(source, start)
        except StoreError as exc:
            self.status_message = f"Error loading file: {exc}"
            return False
        telemetry.record_event(
            "window.reload",
            level="debug",
            data={"cursor": self.cursor.line, "start": self.window.start_line},
        )
        return True

    def recenter(self) -> bool:
        """Bring the cursor line into the window.

        Held lines are reached by sliding the window in memory; anything else
        needs a reload from the backing file.
        """

        if self.window.is_resident(self.cursor.line):
            return False
        if self.window.shift_to(self.cursor.line):
            return True
        return self.reload_window()

    def save(self, destination: Path | str | None = None) -> bool:
        """Write the document to ``destination`` (or the current reference)."""

        if destination is not None:
            self.store = Path(destination)
        path = self.store
        if path is None:
            self.status_message = "No filename specified. Use :w filename to save"
            return False

        with telemetry.span(
            "store::save", component="store", metadata={"path": str(path)}
        ) as handle:
            try:
                lines = self._lines_for_save()
                write_store(path, lines, newline=self.window.newline)
            except StoreError as exc:
                handle.warn(str(exc))
                telemetry.record_event(
                    "document.save_failed",
                    level="warning",
                    data={"path": str(path), "error": str(exc)},
                )
                self.status_message = f"Error saving: {exc}"
                return False
            handle.add_metadata("lines", len(lines))

        self.window.mark_saved(path, len(lines))
        self.modified = False
        self.status_message = f"Saved: {path} ({self.total_line_count} lines)"
        telemetry.record_event(
            "document.saved", data={"path": str(path), "lines": len(lines)}
        )
        return True

    def _lines_for_save(self) -> list[str]:
        window = self.window
        if window.fully_resident:
            return list(window.lines)
        source = window.source
        store_lines = read_store(source).lines if source is not None else []
        return window.compose(store_lines)

    def request_exit(self) -> None:
        self.exit_requested = True


__all__ = ["EditorSession", "WELCOME_MESSAGE"]
