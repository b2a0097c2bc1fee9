"""Rendering consumers for classified messages and live stream snapshots.

``render_message`` draws a finished message; ``LiveCodeView`` listens to a
``ChunkAccumulator`` while a response streams in.

Usage:
    view = LiveCodeView(console)
    acc = ChunkAccumulator(listener=view.on_state)
    with Live(view, console=console) as live:
        for chunk in chunks:
            acc.process_chunk(chunk)
            live.refresh()
"""

from typing import List, Optional

from rich.console import Console, Group, RenderableType
from rich.text import Text

from ..blocks import extract_blocks
from ..classify import ProcessedMessage, classify
from ..config import RenderSettings
from ..stream import IDLE_STATE, CodeBlockView, StreamPhase, StreamState
from .code_block import build_code_lines, render_code_container
from .markdown import render_markdown_line


def _print_prose(segment: str, console: Console) -> None:
    segment = segment.strip("\n")
    if not segment.strip():
        return
    for line in segment.split("\n"):
        console.print(render_markdown_line(line))


def render_message(
    text: str,
    console: Optional[Console] = None,
    settings: Optional[RenderSettings] = None,
) -> ProcessedMessage:
    """Render a complete message and return its classification.

    Pure code messages become a single code container. Mixed messages are
    printed prose-first, with each fenced block swapped for a container.
    """
    from .theme import console as default_console

    con = console or default_console
    settings = settings or RenderSettings()
    processed = classify(text)

    if processed.is_code:
        render_code_container(
            processed.text,
            processed.language,
            con,
            theme=settings.theme,
            line_numbers=settings.line_numbers,
        )
        return processed

    # Closed fences with empty bodies are not blocks to the classifier, but
    # they still render as (empty) containers rather than literal fences.
    pos = 0
    for block in extract_blocks(text):
        _print_prose(text[pos:block.start_offset], con)
        render_code_container(
            block.content.strip(),
            block.language,
            con,
            theme=settings.theme,
            line_numbers=settings.line_numbers,
        )
        pos = block.end_offset
    _print_prose(text[pos:], con)
    return processed


class LiveCodeView:
    """Listener that turns stream snapshots into terminal output.

    Each snapshot that enters COMPLETE is printed once as a finished
    container. While a block is still open the view renders (via
    ``__rich__``) a preview container with a pending footer, suitable for
    ``rich.live.Live``.

    Only the most recent block is tracked, so a block that opens and
    closes inside a single chunk alongside a later block is never seen.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        settings: Optional[RenderSettings] = None,
    ):
        from .theme import console as default_console

        self._console = console or default_console
        self._settings = settings or RenderSettings()
        self._state = IDLE_STATE
        self.completed: List[CodeBlockView] = []

    @property
    def state(self) -> StreamState:
        return self._state

    def on_state(self, state: StreamState) -> None:
        previous = self._state
        self._state = state
        if state.phase is StreamPhase.COMPLETE and state != previous:
            self.completed.append(
                CodeBlockView(code=state.code, language=state.language, is_complete=True)
            )
            render_code_container(
                state.code,
                state.language,
                self._console,
                theme=self._settings.theme,
                line_numbers=self._settings.line_numbers,
            )

    def preview(self) -> Optional[RenderableType]:
        """Renderable for the block being streamed, or None when idle/complete."""
        if self._state.phase is not StreamPhase.IN_BLOCK:
            return None
        rows = build_code_lines(
            self._state.code,
            self._state.language,
            width=self._console.width or 80,
            theme=self._settings.theme,
            line_numbers=self._settings.line_numbers,
            complete=False,
        )
        return Group(*rows)

    def __rich__(self) -> RenderableType:
        return self.preview() or Text("")
