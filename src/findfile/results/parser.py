"""Parsing of search pipeline output into result entries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Final

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
METADATA_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?P<size>[0-9]+)\t(?P<time>[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2})\t"
    r"(?P<path>.*/.*)$"
)


@dataclass(slots=True, frozen=True)
class ResultEntry:
    """One search result; position is the 1-based number shown to the user."""

    raw_line: str
    position: int
    path: str
    size: int | None = None
    modified_at: datetime | None = None

    @property
    def has_metadata(self) -> bool:
        return self.size is not None and self.modified_at is not None


def _parse_line(line: str) -> tuple[str, int | None, datetime | None] | None:
    if line.startswith("/"):
        return line, None, None
    match = METADATA_LINE_PATTERN.match(line)
    if match is None:
        return None
    try:
        modified_at = datetime.strptime(match.group("time"), TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return match.group("path"), int(match.group("size")), modified_at


def parse_results(text: str) -> list[ResultEntry]:
    """Parse output lines, dropping malformed lines and duplicate paths."""
    entries: list[ResultEntry] = []
    seen_paths: set[str] = set()
    for line in text.splitlines():
        if "/" not in line:
            continue
        parsed = _parse_line(line)
        if parsed is None:
            continue
        path, size, modified_at = parsed
        if path in seen_paths:
            continue
        seen_paths.add(path)
        entries.append(
            ResultEntry(
                raw_line=line,
                position=len(entries) + 1,
                path=path,
                size=size,
                modified_at=modified_at,
            )
        )
    return entries
