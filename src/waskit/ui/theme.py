"""Terminal theme for waskit.

A small palette shared by every command so that success, warning and
error lines look the same wherever they are printed.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.style import Style
from rich.theme import Theme


@dataclass
class WaskitTheme:
    """waskit color palette."""

    PRIMARY = "#00BFFF"      # Deep sky blue - headers
    ACCENT = "#FF00FF"       # Magenta - template ids

    # Status colors
    SUCCESS = "#00FF41"
    WARNING = "#FFB000"
    ERROR = "#FF0040"
    INFO = "#00FFFF"

    TEXT_DIM = "#666666"


THEME = Theme({
    "success": Style(color=WaskitTheme.SUCCESS),
    "warning": Style(color=WaskitTheme.WARNING),
    "error": Style(color=WaskitTheme.ERROR, bold=True),
    "info": Style(color=WaskitTheme.INFO),
    "title": Style(color=WaskitTheme.PRIMARY, bold=True),
    "accent": Style(color=WaskitTheme.ACCENT),
    "text.dim": Style(color=WaskitTheme.TEXT_DIM),
})


class Symbols:
    """Status symbols used in step output."""

    COMPLETE = "✓"
    WARNING = "⚠"


def make_console(stderr: bool = False) -> Console:
    """Create a console using the waskit theme."""
    return Console(theme=THEME, stderr=stderr)
