"""Textual host for the editor core."""

from .controller import TextualEditorAdapter, TextualUIHooks, prompt_line

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "prompt_line"]
