"""Textual host for the tag engine."""

from .controller import TextualTagAdapter, TextualUIHooks

__all__ = ["TextualTagAdapter", "TextualUIHooks"]
