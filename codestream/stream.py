"""Live code block detection over a streamed response.

One ``ChunkAccumulator`` is owned by each streaming turn. Every chunk is
appended to the turn's buffer, the buffer is rescanned, and the most
recent fenced block becomes the new ``StreamState`` snapshot.

Usage:
    acc = ChunkAccumulator(listener=view.on_state)
    for chunk in provider.stream(prompt, system):
        acc.process_chunk(chunk)
    acc.reset()
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, TYPE_CHECKING

from .blocks import FenceBlock, extract_blocks

if TYPE_CHECKING:
    from .config import ConfigManager

_log = logging.getLogger(__name__)

DEFAULT_HIGH_WATER = 2000
DEFAULT_WINDOW = 1000


class StreamPhase(Enum):
    IDLE = auto()
    IN_BLOCK = auto()
    COMPLETE = auto()


@dataclass(frozen=True)
class StreamState:
    """Snapshot of the active block. Replaced whole, never mutated."""

    code: str = ""
    language: str = ""
    is_in_code_block: bool = False
    is_complete: bool = False

    @property
    def phase(self) -> StreamPhase:
        if self.is_complete:
            return StreamPhase.COMPLETE
        if self.is_in_code_block:
            return StreamPhase.IN_BLOCK
        return StreamPhase.IDLE


@dataclass(frozen=True)
class CodeBlockView:
    """Read-only projection handed to a code widget."""

    code: str
    language: str
    is_complete: bool


IDLE_STATE = StreamState()

StateListener = Callable[[StreamState], None]


class ChunkAccumulator:
    """Buffers one turn of streamed text and tracks its latest code block.

    Only the most recent block is tracked; earlier blocks in the same
    buffer are not re-surfaced. The buffer is capped: once it grows past
    ``high_water`` it is cut down to the trailing ``window``, except that
    a cut never lands inside a fenced region.

    If a ``listener`` is given it is called synchronously with every
    snapshot that differs from the previous one, before ``process_chunk``
    returns. A listener therefore always sees a COMPLETE snapshot before
    any later return to IDLE.

    Not thread-safe: callers serialize chunks for a given turn and use a
    separate instance per turn.
    """

    def __init__(
        self,
        high_water: int = DEFAULT_HIGH_WATER,
        window: int = DEFAULT_WINDOW,
        listener: Optional[StateListener] = None,
    ):
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        if window >= high_water:
            raise ValueError(
                f"window ({window}) must be smaller than high_water ({high_water})"
            )
        self._high_water = high_water
        self._window = window
        self._listener = listener
        self._buffer = ""
        self._seen = 0
        self._state = IDLE_STATE

    @classmethod
    def from_config(
        cls,
        config: "ConfigManager",
        listener: Optional[StateListener] = None,
    ) -> "ChunkAccumulator":
        limits = config.get_buffer_limits()
        return cls(
            high_water=limits.high_water,
            window=limits.window,
            listener=listener,
        )

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def high_water(self) -> int:
        return self._high_water

    @property
    def window(self) -> int:
        return self._window

    def process_chunk(self, chunk: str) -> StreamState:
        """Append a chunk, rescan, and return the new snapshot."""
        if not chunk:
            return self._state

        self._buffer += chunk
        self._seen += len(chunk)

        blocks = extract_blocks(self._buffer, allow_trailing_open=True)
        if blocks:
            last = blocks[-1]
            self._set_state(
                StreamState(
                    code=last.content,
                    language=last.language,
                    is_in_code_block=True,
                    is_complete=last.closed,
                )
            )
        else:
            self._set_state(IDLE_STATE)

        cut = self._truncate(blocks)
        if blocks and blocks[-1].start_offset < cut:
            # The cut never splits a block, so the last one is gone entirely.
            self._set_state(IDLE_STATE)
        return self._state

    def sync(self, cumulative_text: str) -> StreamState:
        """Feed whatever part of the turn's total text has not been seen yet.

        Text shorter than what was already consumed means a new turn.
        """
        if len(cumulative_text) < self._seen:
            self.reset()
        return self.process_chunk(cumulative_text[self._seen:])

    def reset(self) -> None:
        """Drop the buffer and return to IDLE (new turn or cancellation)."""
        _log.debug("reset after %d chars", self._seen)
        self._buffer = ""
        self._seen = 0
        self._set_state(IDLE_STATE)

    def get_code_block(self) -> Optional[CodeBlockView]:
        state = self._state
        if state.is_in_code_block or state.is_complete:
            return CodeBlockView(
                code=state.code,
                language=state.language,
                is_complete=state.is_complete,
            )
        return None

    def _set_state(self, state: StreamState) -> None:
        if state == self._state:
            return
        self._state = state
        if self._listener is not None:
            self._listener(state)

    def _truncate(self, blocks: List[FenceBlock]) -> int:
        """Cap the buffer and return how many leading chars were dropped."""
        size = len(self._buffer)
        if size <= self._high_water:
            return 0

        cut = size - self._window
        for block in blocks:
            # An open block ends at the end of the buffer, so it always
            # straddles a cut made after its start.
            if block.start_offset < cut < block.end_offset:
                _log.debug(
                    "truncation at %d would split a %s block; keeping from %d",
                    cut, block.language, block.start_offset,
                )
                cut = block.start_offset
                break

        if cut <= 0:
            _log.debug("truncation deferred, active block starts the buffer")
            return 0
        self._buffer = self._buffer[cut:]
        return cut
