"""Shell pipeline realizing a search specification with find, du and sort."""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from findfile.query.compiler import EntityKind, SearchSpec, SortKey

DU_METADATA_ARGS: Final[str] = '-b -s --time --time-style="+%Y-%m-%d %H:%M:%S"'
SORT_KEY_ARGS: Final[dict[SortKey, str]] = {
    SortKey.NAME: "-k 4",  # path starts at the fourth blank-separated field
    SortKey.SIZE: "-k 1 -n",
    SortKey.MODIFIED_TIME: "-k 2,3",
}

SearchRunner = Callable[[str], subprocess.CompletedProcess[str]]


@dataclass(slots=True, frozen=True)
class SearchCommandError(Exception):
    """Raised when the external search pipeline fails."""

    command: str
    status: int
    diagnostics: str

    def __str__(self) -> str:
        message = f"Command `{self.command}` failed with status {self.status}"
        if self.diagnostics.strip():
            return f"{message}: {self.diagnostics.strip()}"
        return message


def _quote_all(arguments: tuple[str, ...]) -> str:
    return " ".join(arg if arg == "!" else shlex.quote(arg) for arg in arguments)


def build_search_command(spec: SearchSpec) -> str:
    """Return the exact shell pipeline executed for a search."""
    predicates = [f"-type {spec.entity_kind.value}"]
    if spec.match_expression:
        predicates.append(_quote_all(spec.match_expression))
    if spec.exclusion_expression:
        predicates.append(_quote_all(spec.exclusion_expression))
    if spec.entity_kind is EntityKind.DIRECTORY:
        predicates.append("-prune")
    folders = " ".join(shlex.quote(folder) for folder in spec.folders)
    direction = "" if spec.sort_ascending else "-r "
    return (
        f"find {folders} {' '.join(predicates)} 2>/dev/null"
        f" -exec du {DU_METADATA_ARGS} {{}} +"
        f" | sort {direction}{SORT_KEY_ARGS[spec.sort_key]}"
    )


def shell_runner(command: str) -> subprocess.CompletedProcess[str]:
    """Run a pipeline through /bin/sh, draining its output."""
    return subprocess.run(
        command,
        shell=True,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
    )


def run_search(command: str, runner: SearchRunner = shell_runner) -> str:
    """Run the search pipeline and return its standard output."""
    try:
        completed = runner(command)
    except OSError as error:
        raise SearchCommandError(command=command, status=-1, diagnostics=str(error)) from error
    if completed.returncode != 0:
        raise SearchCommandError(
            command=command,
            status=completed.returncode,
            diagnostics=completed.stderr or "",
        )
    return completed.stdout
