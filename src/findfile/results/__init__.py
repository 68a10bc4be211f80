"""Result parsing, rendering and selection."""

from .parser import ResultEntry, parse_results
from .render import RenderedLine, find_highlight_spans, render_entry
from .selection import ActionReport, Selection, apply_actions

__all__ = [
    "ActionReport",
    "RenderedLine",
    "ResultEntry",
    "Selection",
    "apply_actions",
    "find_highlight_spans",
    "parse_results",
    "render_entry",
]
