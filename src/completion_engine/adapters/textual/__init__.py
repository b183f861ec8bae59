"""Textual host integration for the completion engine."""

from .controller import TextualCompletionAdapter, TextualUIHooks

__all__ = ["TextualCompletionAdapter", "TextualUIHooks"]
