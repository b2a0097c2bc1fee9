"""Bordered code block container with syntax highlighting.

The label shows the block's language tag; highlighting goes through a
Pygments lexer resolved from that tag, or guessed from the code when the
block was untagged.
"""

from typing import Optional

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound
from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from ..blocks import DEFAULT_LANGUAGE
from ..heuristics import guess_language
from .theme import DEFAULT_PALETTE

_TOP_LEFT = "╭"
_TOP_RIGHT = "╮"
_BOT_LEFT = "╰"
_BOT_RIGHT = "╯"
_VERT = "│"
_HORIZ = "─"
_ELLIPSIS = "…"


def resolve_lexer(language: str, code: str = "") -> str:
    """Pygments lexer alias for a language tag, ``"text"`` if unknown."""
    name = language or DEFAULT_LANGUAGE
    if name == DEFAULT_LANGUAGE and code:
        name = guess_language(code)
    try:
        lexer = get_lexer_by_name(name)
    except ClassNotFound:
        return DEFAULT_LANGUAGE
    return lexer.aliases[0] if lexer.aliases else name


def build_code_lines(
    code: str,
    language: str = "",
    width: int = 80,
    theme: str = "monokai",
    line_numbers: bool = True,
    complete: bool = True,
) -> list[Text]:
    """Build the bordered rows of a code container without printing them."""
    palette = DEFAULT_PALETTE
    inner_width = max(width - 4, 8)  # 4 = border + padding
    label = language or DEFAULT_LANGUAGE

    rows: list[Text] = []

    top = Text()
    top.append(_TOP_LEFT, style=f"dim {palette.border}")
    top.append(f" {label} ", style=f"dim {palette.text_dim}")
    top.append(_HORIZ * max(inner_width - len(label) - 1, 1), style=f"dim {palette.border}")
    top.append(_TOP_RIGHT, style=f"dim {palette.border}")
    rows.append(top)

    body = code.rstrip("\n")
    syntax = Syntax(body, resolve_lexer(language, body), theme=theme, word_wrap=False)
    highlighted = syntax.highlight(body).split("\n")
    for i, line in enumerate(highlighted):
        row = Text()
        row.append(f"{_VERT} ", style=f"dim {palette.border}")
        if line_numbers:
            row.append(f"{i + 1:>3} ", style=palette.text_muted)
        row.append_text(line)
        rows.append(row)

    bot = Text()
    bot.append(_BOT_LEFT, style=f"dim {palette.border}")
    if complete:
        bot.append(_HORIZ * (inner_width + 1), style=f"dim {palette.border}")
    else:
        bot.append(f" {_ELLIPSIS} ", style=palette.pending)
        bot.append(_HORIZ * max(inner_width - 2, 1), style=f"dim {palette.border}")
    bot.append(_BOT_RIGHT, style=f"dim {palette.border}")
    rows.append(bot)
    return rows


def render_code_container(
    code: str,
    language: str = "",
    console: Optional[Console] = None,
    theme: str = "monokai",
    line_numbers: bool = True,
) -> None:
    """Render a bordered code block with syntax highlighting.

    Args:
        code: The code string (without fences).
        language: Language tag from the fence; empty means ``text``.
        console: Rich Console to print to.
        theme: Pygments style name.
        line_numbers: Show a line number column.
    """
    from .theme import console as default_console

    con = console or default_console
    for row in build_code_lines(
        code,
        language,
        width=con.width or 80,
        theme=theme,
        line_numbers=line_numbers,
    ):
        con.print(row, overflow="ellipsis", no_wrap=True)
