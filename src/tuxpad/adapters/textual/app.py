"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the editor is run
    from rich.syntax import Syntax
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tuxpad.adapters.textual.app"
    ) from exc

from tuxpad import __version__
from tuxpad.config import EditorSettings
from tuxpad.editing import update_scroll
from tuxpad.keymaps import KeymapRegistry
from tuxpad.modes import ModeContext
from tuxpad.modes.mode_manager import ModeManager
from tuxpad.runtime import telemetry
from tuxpad.session import EditorSession

from .controller import TextualEditorAdapter, TextualUIHooks

NUMBER_WIDTH = 6
SYNTAX_THEME = "monokai"
PLAIN_LEXERS = frozenset({"default", "text"})
COMMAND_HELP = (
    ("  :w [name]", "Save (optionally under a new name)"),
    ("  :q / :q!", "Quit / quit without saving"),
    ("  :wq", "Save and quit"),
)


def create_session_manager(
    path: Path | str | None = None, *, settings: Optional[EditorSettings] = None
) -> ModeManager:
    """Build a ModeManager with the standard mode set + default keymaps."""

    session = EditorSession(settings=settings or EditorSettings.from_env())
    if path is not None:
        session.open(path)
    return ModeManager.with_default_modes(ModeContext(session=session))


def help_text(registry: KeymapRegistry) -> str:
    lines = ["TuxPad", "", "Normal mode:"]
    for binding in registry.iter_bindings("normal"):
        action = registry.get_action(binding.action_id)
        lines.append(f"  {binding.key_signature:<12}- {action.description}")
    lines.extend(["", "Commands:"])
    lines.extend(f"{usage:<14}- {meaning}" for usage, meaning in COMMAND_HELP)
    lines.extend(["", "Press F1 or ESC to close help"])
    return "\n".join(lines)


def row_highlighter(path: Optional[Path]) -> Optional[Syntax]:
    """Syntax highlighter guessed from the file extension, if there is one."""

    if path is None:
        return None
    lexer = Syntax.guess_lexer(str(path))
    if lexer in PLAIN_LEXERS:
        return None
    # Rows keep raw tabs; tab_size=0 stops the lexer expanding them.
    return Syntax("", lexer, theme=SYNTAX_THEME, background_color="default", tab_size=0)


def highlight_row(syntax: Optional[Syntax], content: str) -> Text:
    if syntax is None:
        return Text(content)
    row = syntax.highlight(content)
    if row.plain.endswith("\n"):
        row.right_crop(1)
    if row.plain != content:
        return Text(content)
    return row


def render_lines(session: EditorSession, height: int) -> Text:
    """Visible document rows starting at the scroll offset."""

    window = session.window
    cursor = session.cursor
    syntax = row_highlighter(session.store)
    body = Text(no_wrap=True, overflow="ellipsis")
    first = session.scroll_offset
    for index in range(first, first + max(height, 1)):
        content = window.get(index)
        if content is None:
            break
        if index > first:
            body.append("\n")
        if session.show_line_numbers:
            body.append(f"{index + 1:>{NUMBER_WIDTH - 1}} ", style="dim")
        row = highlight_row(syntax, content)
        if index == cursor.line:
            if cursor.column < len(content):
                row.stylize("reverse", cursor.column, cursor.column + 1)
            else:
                row.append(" ", style="reverse")
        body.append_text(row)
    return body


def title_text(session: EditorSession) -> str:
    name = str(session.store) if session.store is not None else "[New File]"
    marker = " *" if session.modified else ""
    return (
        f" TuxPad | {name}{marker} | "
        f"{session.cursor.line + 1}/{session.total_line_count} lines"
    )


def mode_text(session: EditorSession) -> str:
    window = session.window
    return (
        f" {session.mode.upper()} | Ln {session.cursor.line + 1}, "
        f"Col {session.cursor.column + 1} | "
        f"Window {window.start_line + 1}-{window.end_line} "
    )


class TuxpadApp(App[None]):
    """Textual UI embedding the editor core."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#title-bar {
		height: 1;
		background: $primary;
		color: $text;
	}

	#editor-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
	}

	#help-view {
		display: none;
		height: 1fr;
		border: round $accent;
		padding: 1 2;
	}

	#mode-bar {
		height: 1;
		background: $surface-darken-1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    # Every key, ctrl chords included, belongs to the editor.
    BINDINGS = []
    inherit_bindings = False
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        path: Path | str | None = None,
        *,
        settings: Optional[EditorSettings] = None,
    ) -> None:
        super().__init__()
        self._path = path
        self._settings = settings
        self.manager: ModeManager | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._title_widget = Static("", id="title-bar")
        self._editor_widget = Static("", id="editor-view")
        self._help_widget = Static("", id="help-view")
        self._mode_widget = Static("", id="mode-bar")
        self._status_widget = Static("", id="status-line")
        self._prompt_text = ""
        self._logger = telemetry.get_logger("tuxpad.app")

    def compose(self) -> ComposeResult:
        yield self._title_widget
        yield self._editor_widget
        yield self._help_widget
        yield self._mode_widget
        yield self._status_widget

    def on_mount(self) -> None:
        self.manager = create_session_manager(self._path, settings=self._settings)
        self._help_widget.update(help_text(self.manager.keymap_registry))
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_prompt=self._show_prompt,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        self.adapter.refresh()

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter:
            self.call_after_refresh(self.adapter.refresh)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        event.stop()
        event.prevent_default()
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if self.adapter.exit_requested:
            self.exit()

    def _visible_height(self) -> int:
        return max(self._editor_widget.size.height, 1)

    def _update_view(self, session: EditorSession) -> None:
        height = self._visible_height()
        update_scroll(session, height)
        self._title_widget.update(title_text(session))
        self._editor_widget.update(render_lines(session, height))
        self._mode_widget.update(mode_text(session))
        self._help_widget.display = session.show_help
        self._editor_widget.display = not session.show_help

    def _update_status(self, status: str) -> None:
        if not self._prompt_text:
            self._status_widget.update(status)

    def _show_prompt(self, prompt: str) -> None:
        self._prompt_text = prompt
        if prompt:
            self._status_widget.update(prompt)
        elif self.adapter:
            self._status_widget.update(self.adapter.session.status_message)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        named = {
            "escape": "ESC",
            "enter": "ENTER",
            "return": "ENTER",
            "tab": "TAB",
            "backspace": "BACKSPACE",
        }
        if key in named:
            return (named[key], None, ())
        if "+" in key and key != "+":
            *modifiers, base = key.split("+")
            return (base, None, tuple(mod.upper() for mod in modifiers))
        if event.is_printable and event.character:
            return (event.character, event.character, ())
        if not key:
            return None
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tuxpad",
        description="Modal text editor that keeps only a window of a large file in memory.",
    )
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = TuxpadApp(args.file, settings=EditorSettings.from_env())
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()


__all__ = [
    "TuxpadApp",
    "create_session_manager",
    "help_text",
    "highlight_row",
    "main",
    "mode_text",
    "render_lines",
    "row_highlighter",
    "title_text",
]
