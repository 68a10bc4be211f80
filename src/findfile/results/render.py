"""Formatting of result entries into numbered, highlighted listing lines.

A line is built as plain text first. Styling is then described as a list of
non-overlapping spans over that text and applied in a single pass, so span
offsets always refer to the unstyled text.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final
from urllib.parse import quote

from findfile.query.compiler import FragmentOrder, LinkMode, OutputMode, SearchSpec
from findfile.results.parser import TIMESTAMP_FORMAT, ResultEntry
from findfile.styles import STYLE_BLUE, STYLE_BOLD, STYLE_GRAY, STYLE_NONE, STYLE_YELLOW, styled

FILE_LINK_SCHEME: Final[str] = "file://"
THOUSANDS_SEPARATOR: Final[str] = "'"
SIZE_COLUMN_WIDTH: Final[int] = 15
SIZE_UNIT_MARKER: Final[str] = "ᴮ"
NUMBER_PAD_CHAR: Final[str] = "·"


@dataclass(slots=True, frozen=True)
class StyleSpan:
    """Half-open range of plain text rendered in a style."""

    start: int
    end: int
    style: str


@dataclass(slots=True, frozen=True)
class RenderedLine:
    """Presentation forms of one result entry."""

    position: int
    display_text: str
    quoted_path: str
    link_encoded_path: str
    target_path: str


def group_thousands(value: int, separator: str = THOUSANDS_SEPARATOR) -> str:
    """Group decimal digits in threes from the right."""
    digits = str(value)
    groups: list[str] = []
    while digits:
        groups.append(digits[-3:])
        digits = digits[:-3]
    return separator.join(reversed(groups))


def format_metadata(entry: ResultEntry) -> str:
    """Return the timestamp and size columns, or an empty string without metadata."""
    if entry.size is None or entry.modified_at is None:
        return ""
    timestamp = entry.modified_at.strftime(TIMESTAMP_FORMAT)
    size = group_thousands(entry.size).rjust(SIZE_COLUMN_WIDTH)
    return f"{timestamp} {size}{SIZE_UNIT_MARKER} "


def encode_link_path(path: str) -> str:
    """Percent-encode characters unsafe in a file URI, keeping slashes."""
    return quote(path, safe="/")


def link_form(path: str, link_mode: LinkMode) -> tuple[str, bool]:
    """Return the path as displayed and whether it is shown as a file link."""
    if link_mode is LinkMode.NEVER:
        return path, False
    encoded = encode_link_path(path)
    if link_mode is LinkMode.ALWAYS or encoded != path:
        return FILE_LINK_SCHEME + encoded, True
    return path, False


def longest_prefix(path: str, prefixes: Iterable[str]) -> str:
    """Return the longest of the prefixes that starts the path."""
    matching = [prefix for prefix in prefixes if path.startswith(prefix)]
    return max(matching, key=len, default="")


def casefold_preserving_length(text: str) -> str:
    """Lowercase per character, keeping characters whose lowercase form is longer."""
    return "".join(char.lower() if len(char.lower()) == 1 else char for char in text)


def _merge_spans(spans: list[tuple[int, int]]) -> list[tuple[int, int]]:
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            continue
        merged.append((start, end))
    return merged


def find_highlight_spans(
    text: str,
    fragments: Sequence[str],
    fragment_order: FragmentOrder,
    min_position: int = 0,
) -> list[tuple[int, int]]:
    """Locate fragments case-insensitively at or after min_position.

    In sequential order each search starts where the previous match ended and
    a missing fragment leaves the cursor in place. In any order every fragment
    is searched from min_position and overlapping matches are merged.
    """
    haystack = casefold_preserving_length(text)
    spans: list[tuple[int, int]] = []
    cursor = min_position
    for fragment in fragments:
        needle = casefold_preserving_length(fragment)
        if not needle:
            continue
        start_from = cursor if fragment_order is FragmentOrder.SEQUENTIAL else min_position
        found = haystack.find(needle, start_from)
        if found < 0:
            continue
        spans.append((found, found + len(needle)))
        if fragment_order is FragmentOrder.SEQUENTIAL:
            cursor = found + len(needle)
    if fragment_order is FragmentOrder.ANY_ORDER:
        return _merge_spans(spans)
    return spans


def apply_spans(text: str, spans: Iterable[StyleSpan]) -> str:
    """Insert style codes for non-overlapping spans in one pass."""
    parts: list[str] = []
    position = 0
    for span in sorted(spans, key=lambda item: (item.start, item.end)):
        parts.append(text[position : span.start])
        parts.append(f"{span.style}{text[span.start : span.end]}{STYLE_NONE}")
        position = span.end
    parts.append(text[position:])
    return "".join(parts)


def number_label(position: int, total: int) -> str:
    """Return the styled result number padded to the width of the largest one."""
    width = len(f"[{styled(str(total), STYLE_BOLD, STYLE_BLUE)}]")
    return f"[{styled(str(position), STYLE_BOLD, STYLE_BLUE)}]".rjust(width, NUMBER_PAD_CHAR)


def target_path_for(path: str, output_mode: OutputMode) -> str:
    """Return the path acted upon: the result itself or its containing folder."""
    if output_mode is OutputMode.QUOTED_FOLDER:
        return path[: path.rfind("/") + 1]
    return path


def render_line_text(entry: ResultEntry, spec: SearchSpec) -> str:
    """Return the styled listing text for an entry, without its number."""
    metadata = format_metadata(entry) if spec.show_metadata else ""
    shown_path, is_link = link_form(entry.path, spec.link_mode)
    folder_prefix = longest_prefix(entry.path, spec.folders)
    if is_link:
        folder_prefix = FILE_LINK_SCHEME + encode_link_path(folder_prefix)
    plain = metadata + shown_path
    gray_end = len(metadata) + len(folder_prefix)
    spans = [StyleSpan(0, gray_end, STYLE_GRAY)]
    spans.extend(
        StyleSpan(start, end, STYLE_YELLOW)
        for start, end in find_highlight_spans(
            plain, spec.include_fragments, spec.fragment_order, min_position=gray_end
        )
    )
    return apply_spans(plain, spans)


def render_entry(entry: ResultEntry, spec: SearchSpec, total: int) -> RenderedLine:
    """Render one entry in the context of a listing of total entries."""
    line_text = render_line_text(entry, spec)
    target_path = target_path_for(entry.path, spec.output_mode)
    return RenderedLine(
        position=entry.position,
        display_text=f"{number_label(entry.position, total)} {line_text}",
        quoted_path=f'"{target_path}"',
        link_encoded_path=FILE_LINK_SCHEME + encode_link_path(entry.path),
        target_path=target_path,
    )
