"""Command-line entrypoint for the ff file search tool."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from typing import TextIO

from findfile.config import DEFAULT_DIR_ENV_VAR, FindFileConfig, load_effective_config
from findfile.external import (
    Launcher,
    SearchCommandError,
    build_search_command,
    run_search,
    shell_runner,
    spawn_detached,
)
from findfile.external.launcher import Spawner
from findfile.external.search import SearchRunner
from findfile.logging import AuditEvent, JsonlAuditLogger, summarize_query, utc_timestamp
from findfile.query import Classification, classify_tokens, compile_search, is_help_request
from findfile.results import ActionReport, apply_actions, parse_results
from findfile.styles import STYLE_GRAY, STYLE_NONE


def _gray(text: str) -> str:
    return f"{STYLE_GRAY}{text}{STYLE_NONE}"


def help_text(default_dir: str) -> str:
    """Return usage information."""
    return "\n".join(
        [
            "ff: search files by path parts, the way you would query a search engine.",
            _gray("    Wraps find, highlights matches and numbers the results."),
            f"    Looks for paths containing all given parts, under {default_dir} by default.",
            "    Parts with a leading dash exclude paths containing them.",
            "    Numbers with a leading dash select results from the list.",
            _gray("    Results can change between runs, so numbers refer to the current listing."),
            _gray("    Asterisks around parts are optional, they are added automatically."),
            _gray(f"    The default directory is read from {DEFAULT_DIR_ENV_VAR}."),
            _gray("    Pass flags separately, like -p -i -n: -pin is an excluded path part."),
            "Usage:",
            "    ff <part>",
            "    ff <dir> <dir> <part> <part> -<excluded> -<excluded> -<number>",
            "    ff <part> -- <number> <number>",
            "Sort " + _gray("(one at a time, uppercase reverses):"),
            "    -n (-N): by name           " + _gray("a to Z        (Z to a)"),
            "    -s (-S): by size           " + _gray("small to big  (big to small)"),
            "    -m (-M): by modified time  " + _gray("new to old    (old to new, default)"),
            "Filter:",
            "    -a: include hidden files, hidden and build directories",
            "    -r: match parts in any order, not only in the given one",
            "    -d: search directories instead of files, without descending into matches",
            "Select " + _gray("(one at a time):"),
            "    -q (-Q): print quoted file path (containing directory path)",
            "    -o (-O): print quoted and open each file (containing directory)",
            "Info:",
            "    -i: show modified times and sizes",
            "    -f (-F): show file:// links for paths that need escaping (always)",
            "    -p: print the underlying find command",
            "    -h: show this help",
        ]
    )


class FindFileCli:
    """One-shot search pipeline: classify, compile, search, render, act."""

    def __init__(
        self,
        config: FindFileConfig,
        runner: SearchRunner = shell_runner,
        spawn: Spawner = spawn_detached,
    ) -> None:
        self._config = config
        self._runner = runner
        self._launcher = Launcher(config.open_command, spawn=spawn)
        self._audit_logger = (
            JsonlAuditLogger(path=config.audit_log) if config.audit_log is not None else None
        )

    def run(self, tokens: Sequence[str], out_stream: TextIO, err_stream: TextIO) -> int:
        """Execute one invocation and return the process exit code."""
        if is_help_request(tokens):
            out_stream.write(f"{help_text(self._config.default_dir)}\n")
            return 0

        classification = classify_tokens(tokens, self._config)
        spec = compile_search(classification)
        command = build_search_command(spec)
        try:
            output = run_search(command, runner=self._runner)
        except SearchCommandError as error:
            err_stream.write(f"{error}\n")
            self._log(
                classification, command, ok=False, error_code="SEARCH_FAILED", result_count=0
            )
            return 1

        entries = parse_results(output)
        report = apply_actions(
            entries,
            spec,
            out_stream=out_stream,
            launcher=self._launcher if spec.open_results else None,
        )
        if spec.print_command:
            out_stream.write(f"{_gray(f'Used command: {command}')}\n")
        self._log(
            classification,
            command,
            ok=True,
            error_code=None,
            result_count=len(entries),
            report=report,
        )
        return 0

    def _log(
        self,
        classification: Classification,
        command: str,
        ok: bool,
        error_code: str | None,
        result_count: int,
        report: ActionReport | None = None,
    ) -> None:
        if self._audit_logger is None:
            return
        metadata = summarize_query(classification)
        metadata["command_length"] = len(command)
        if report is not None:
            metadata["shown_count"] = len(report.shown)
            metadata["opened_count"] = len(report.opened)
            metadata["missing_selectors"] = list(report.missing)
            metadata["failed_opens"] = len(report.failed)
        self._audit_logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                ok=ok,
                error_code=error_code,
                result_count=result_count,
                metadata=metadata,
            )
        )


def create_cli(
    environ: Mapping[str, str] | None = None,
    home_dir: str | None = None,
    current_dir: str | None = None,
    runner: SearchRunner = shell_runner,
    spawn: Spawner = spawn_detached,
) -> FindFileCli:
    """Create a configured CLI instance."""
    config = load_effective_config(environ=environ, home_dir=home_dir, current_dir=current_dir)
    return FindFileCli(config=config, runner=runner, spawn=spawn)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the ff command."""
    tokens = sys.argv[1:] if argv is None else argv
    try:
        cli = create_cli()
    except ValueError as error:
        sys.stderr.write(f"Invalid configuration: {error}\n")
        return 2
    return cli.run(tokens, out_stream=sys.stdout, err_stream=sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main())
