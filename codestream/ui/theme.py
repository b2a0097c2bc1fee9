"""Terminal palette for the codestream renderers."""

from dataclasses import dataclass

from rich.console import Console


@dataclass(frozen=True)
class ColorPalette:
    """Colors shared by the prose and code renderers."""

    surface: str = "#121218"
    border: str = "#222233"
    text_bright: str = "#e8e8f0"
    text: str = "#b8b8cc"
    text_dim: str = "#4a4a60"
    text_muted: str = "#363648"
    inline_code: str = "#00d4e5"
    pending: str = "#e5c747"


DEFAULT_PALETTE = ColorPalette()

console = Console()
