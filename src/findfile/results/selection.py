"""Result selection and the display, quote and open actions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from findfile.external.launcher import LaunchError, Launcher
from findfile.query.compiler import OutputMode, SearchSpec
from findfile.results.parser import ResultEntry
from findfile.results.render import render_entry


@dataclass(slots=True, frozen=True)
class Selection:
    """1-based result numbers chosen by the user; empty selects everything."""

    indices: tuple[int, ...] = ()

    def includes(self, position: int) -> bool:
        return not self.indices or position in self.indices

    def out_of_range(self, total: int) -> tuple[int, ...]:
        """Return selected numbers that do not name a result."""
        return tuple(index for index in self.indices if index < 1 or index > total)


@dataclass(slots=True)
class ActionReport:
    """Outcome of applying the selected actions."""

    shown: list[int] = field(default_factory=list)
    opened: list[int] = field(default_factory=list)
    missing: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


def missing_result_message(index: int, open_results: bool) -> str:
    if open_results:
        return f"No result {index} to open"
    return f"No result {index}"


def apply_actions(
    entries: Sequence[ResultEntry],
    spec: SearchSpec,
    out_stream: TextIO,
    launcher: Launcher | None = None,
) -> ActionReport:
    """Print or quote selected entries and open them when requested."""
    selection = Selection(indices=spec.selector_indices)
    report = ActionReport()
    total = len(entries)
    for entry in entries:
        if not selection.includes(entry.position):
            continue
        rendered = render_entry(entry, spec, total)
        if spec.output_mode is OutputMode.DISPLAY:
            out_stream.write(f"{rendered.display_text}\n")
        else:
            out_stream.write(f"{rendered.quoted_path}\n")
        report.shown.append(entry.position)
        if spec.open_results and launcher is not None:
            try:
                launcher.open(rendered.target_path)
            except LaunchError as error:
                out_stream.write(f"{error}\n")
                report.failed.append(entry.position)
                continue
            report.opened.append(entry.position)
    for index in selection.out_of_range(total):
        out_stream.write(f"{missing_result_message(index, spec.open_results)}\n")
        report.missing.append(index)
    return report
