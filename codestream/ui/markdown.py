"""Inline markdown styling for prose lines.

Fenced code never reaches this module; ``render_message`` routes it to the
code container using the block offsets from classification.
"""

import re
from typing import Optional

from rich.text import Text

from .theme import DEFAULT_PALETTE, ColorPalette

_HEADER = re.compile(r"^(#{1,6})\s+(.*)")
_BULLET = re.compile(r"^(\s*)([-*+])\s+(.*)")
_NUMBERED = re.compile(r"^(\s*\d+\.)\s+(.*)")
_QUOTE = re.compile(r"^>\s?(.*)")
_RULE = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")

# Alternatives are tried left to right, so inline code wins over emphasis.
_INLINE = re.compile(
    r"`(?P<code>[^`]+)`"
    r"|\*\*(?P<bold>.+?)\*\*"
    r"|(?<!\*)\*(?P<italic>[^*]+)\*(?!\*)"
    r"|\[(?P<link>[^\]]+)\]\([^)]+\)"
)


def render_markdown_line(line: str, palette: Optional[ColorPalette] = None) -> Text:
    """Convert one prose line to styled Rich Text.

    Handles headers, bullet and numbered lists, block quotes, horizontal
    rules, and inline code, bold, italic and links.
    """
    palette = palette or DEFAULT_PALETTE

    m = _HEADER.match(line)
    if m:
        style = f"bold {palette.text_bright}" if len(m.group(1)) <= 2 else f"bold {palette.text}"
        return Text(m.group(2), style=style)

    if _RULE.match(line):
        return Text("─" * 40, style=f"dim {palette.text_muted}")

    m = _BULLET.match(line)
    if m:
        t = Text(m.group(1))
        t.append(m.group(2), style=palette.text_dim)
        t.append_text(_inline_format(" " + m.group(3), palette))
        return t

    m = _NUMBERED.match(line)
    if m:
        t = Text(m.group(1), style=palette.text_dim)
        t.append_text(_inline_format(" " + m.group(2), palette))
        return t

    m = _QUOTE.match(line)
    if m:
        t = Text("▌ ", style=palette.text_muted)
        quoted = _inline_format(m.group(1), palette)
        quoted.stylize("italic")
        t.append_text(quoted)
        return t

    return _inline_format(line, palette)


def _inline_format(text: str, palette: ColorPalette) -> Text:
    result = Text()
    pos = 0
    for m in _INLINE.finditer(text):
        if m.start() > pos:
            result.append(text[pos:m.start()], style=palette.text)
        if m.group("code") is not None:
            result.append(f" {m.group('code')} ", style=f"on {palette.surface} {palette.inline_code}")
        elif m.group("bold") is not None:
            result.append(m.group("bold"), style=f"bold {palette.text_bright}")
        elif m.group("italic") is not None:
            result.append(m.group("italic"), style=f"italic {palette.text}")
        else:
            result.append(m.group("link"), style=f"underline {palette.inline_code}")
        pos = m.end()
    if pos < len(text):
        result.append(text[pos:], style=palette.text)
    return result
