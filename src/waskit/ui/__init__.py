"""waskit UI components."""

from waskit.ui.theme import WaskitTheme, THEME, Symbols, make_console

__all__ = [
    "WaskitTheme",
    "THEME",
    "Symbols",
    "make_console",
]
