"""One-shot classification of finished assistant messages."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .blocks import FenceBlock, detect_blocks

_log = logging.getLogger(__name__)


class MessageKind(Enum):
    TEXT = "text"
    CODE = "code"


@dataclass(frozen=True)
class ProcessedMessage:
    """How a complete message should be rendered.

    For ``CODE`` messages ``text`` is the bare code of the single block.
    For ``TEXT`` messages ``text`` is the original message and ``blocks``
    lists the fenced regions the prose renderer should interleave.
    """

    text: str
    kind: MessageKind = MessageKind.TEXT
    blocks: Tuple[FenceBlock, ...] = field(default_factory=tuple)

    @property
    def is_code(self) -> bool:
        return self.kind is MessageKind.CODE

    @property
    def language(self) -> str:
        """Display language of the first block, empty when there is none."""
        return self.blocks[0].language if self.blocks else ""


def classify(text: str) -> ProcessedMessage:
    """Classify a finished message as pure code or text.

    A message is pure code when it holds exactly one closed block and
    nothing but whitespace around it. Anything else stays text, with the
    blocks (if any) attached.
    """
    blocks = detect_blocks(text)

    if not blocks:
        _log.debug("classify: no blocks in %d chars", len(text))
        return ProcessedMessage(text=text)

    if len(blocks) == 1:
        block = blocks[0]
        before = text[:block.start_offset].strip()
        after = text[block.end_offset:].strip()
        if not before and not after:
            _log.debug("classify: pure %s code block", block.language)
            return ProcessedMessage(
                text=block.content,
                kind=MessageKind.CODE,
                blocks=(block,),
            )

    _log.debug("classify: mixed content with %d block(s)", len(blocks))
    return ProcessedMessage(text=text, blocks=tuple(blocks))
