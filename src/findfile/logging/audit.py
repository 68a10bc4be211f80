"""Structured JSONL audit log of search invocations."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from findfile.query.tokens import Classification


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """Sanitized record of one invocation."""

    timestamp: str
    ok: bool
    error_code: str | None
    result_count: int
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def summarize_query(classification: Classification) -> dict[str, object]:
    """Describe a query without recording the path fragments themselves."""
    return {
        "folder_count": len(classification.folders),
        "include_count": len(classification.include_fragments),
        "exclude_count": len(classification.exclude_fragments),
        "flags": sorted(flag.value for flag in classification.flags),
        "selector_count": len(classification.selector_indices),
    }


class JsonlAuditLogger:
    """Append-only JSONL audit logger."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Location of the log file."""
        return self._path

    def append(self, event: AuditEvent) -> None:
        """Append an event as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")
