"""Fenced code block extraction.

A single scanner serves both the streaming path (where the last block may
still be open) and the final-message path (closed blocks only), so the two
always agree on what counts as a fence.
"""

import re
from dataclasses import dataclass, replace
from typing import List, Optional

FENCE = "```"
DEFAULT_LANGUAGE = "text"

# Opening fence, info string up to a mandatory line break, then content up
# to the first closing fence or end of input. No nesting: the first fence
# after the opener always closes the block.
_FENCE_RE = re.compile(r"```([^`\n]*)\n(.*?)(```|\Z)", re.DOTALL)
_LANGUAGE_RE = re.compile(r"\w+", re.ASCII)


def _language(info: str) -> str:
    """Language tag from a fence info string; anything but a word token is text."""
    tag = info.strip()
    return tag if _LANGUAGE_RE.fullmatch(tag) else DEFAULT_LANGUAGE


@dataclass(frozen=True)
class FenceBlock:
    """A fenced region found in a piece of text.

    Offsets span the whole region, delimiters included. An open block
    (``closed=False``) runs to the end of the scanned text.
    """

    language: str
    content: str
    start_offset: int
    end_offset: int
    closed: bool = True


def extract_blocks(text: str, allow_trailing_open: bool = False) -> List[FenceBlock]:
    """Scan text for fenced blocks, in order of appearance.

    Args:
        text: The text to scan.
        allow_trailing_open: Keep a final block that has no closing fence
            yet. Used while a response is still streaming.

    Content is returned raw, exactly as it appears between the delimiters.
    """
    blocks: List[FenceBlock] = []
    for m in _FENCE_RE.finditer(text):
        closed = m.group(3) == FENCE
        if not closed and not allow_trailing_open:
            continue
        blocks.append(
            FenceBlock(
                language=_language(m.group(1)),
                content=m.group(2),
                start_offset=m.start(),
                end_offset=m.end(),
                closed=closed,
            )
        )
    return blocks


def detect_blocks(text: str) -> List[FenceBlock]:
    """Return the closed, non-empty blocks of a finished message.

    Content is stripped of surrounding whitespace; blocks with nothing
    left are dropped.
    """
    found = []
    for block in extract_blocks(text, allow_trailing_open=False):
        code = block.content.strip()
        if code:
            found.append(replace(block, content=code))
    return found


def first_block(text: str) -> Optional[FenceBlock]:
    """First closed block of a message, or None."""
    blocks = detect_blocks(text)
    return blocks[0] if blocks else None


def strip_blocks(text: str) -> str:
    """Remove every closed fenced region, keeping the prose around it."""
    parts = []
    pos = 0
    for block in extract_blocks(text, allow_trailing_open=False):
        parts.append(text[pos:block.start_offset])
        pos = block.end_offset
    parts.append(text[pos:])
    return "".join(parts)
