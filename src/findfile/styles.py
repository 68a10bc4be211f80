"""Terminal style codes."""

from __future__ import annotations

from typing import Final

STYLE_NONE: Final[str] = "\u001b[0m"
STYLE_BOLD: Final[str] = "\u001b[1m"
STYLE_YELLOW: Final[str] = "\u001b[33m"
STYLE_BLUE: Final[str] = "\u001b[94m"
STYLE_GRAY: Final[str] = "\u001b[37m"


def styled(text: str, *styles: str) -> str:
    """Wrap text in the given styles, innermost first, each closed with a reset."""
    output = text
    for style in styles:
        output = f"{style}{output}{STYLE_NONE}"
    return output
