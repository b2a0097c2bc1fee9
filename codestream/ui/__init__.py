"""Terminal rendering of classified messages and live code blocks."""

from .theme import DEFAULT_PALETTE, ColorPalette
from .code_block import render_code_container, resolve_lexer
from .markdown import render_markdown_line
from .message import render_message, LiveCodeView

__all__ = [
    "DEFAULT_PALETTE",
    "ColorPalette",
    "render_code_container",
    "resolve_lexer",
    "render_markdown_line",
    "render_message",
    "LiveCodeView",
]
