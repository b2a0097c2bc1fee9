"""codestream - fenced code detection for streamed assistant responses."""

__version__ = "0.1.0"

from .blocks import FenceBlock, extract_blocks, detect_blocks, first_block, strip_blocks
from .classify import MessageKind, ProcessedMessage, classify
from .stream import ChunkAccumulator, CodeBlockView, StreamPhase, StreamState
from .heuristics import has_code_patterns, guess_language
from .config import ConfigManager, BufferLimits, RenderSettings

__all__ = [
    "FenceBlock",
    "extract_blocks",
    "detect_blocks",
    "first_block",
    "strip_blocks",
    "MessageKind",
    "ProcessedMessage",
    "classify",
    "ChunkAccumulator",
    "CodeBlockView",
    "StreamPhase",
    "StreamState",
    "has_code_patterns",
    "guess_language",
    "ConfigManager",
    "BufferLimits",
    "RenderSettings",
]
