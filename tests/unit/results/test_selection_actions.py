from __future__ import annotations

import io

from findfile.config import FindFileConfig
from findfile.external import Launcher
from findfile.query import SearchSpec, classify_tokens, compile_search
from findfile.results import Selection, apply_actions, parse_results

CONFIG = FindFileConfig(
    default_dir="~",
    home_dir="/home/user",
    current_dir="/work/project",
    open_command=("xdg-open",),
)
ENTRIES = parse_results(
    "\n".join(
        [
            "10\t2023-01-01 00:00:00\t/home/user/a/one.txt",
            "20\t2023-01-02 00:00:00\t/home/user/b/two.txt",
            "30\t2023-01-03 00:00:00\t/home/user/c/three.txt",
        ]
    )
)


def _spec(*tokens: str) -> SearchSpec:
    return compile_search(classify_tokens(list(tokens), CONFIG))


def test_empty_selection_includes_everything() -> None:
    selection = Selection()

    assert selection.includes(1)
    assert selection.includes(99)
    assert selection.out_of_range(3) == ()


def test_out_of_range_indices() -> None:
    selection = Selection(indices=(0, 2, 4))

    assert selection.out_of_range(3) == (0, 4)
    assert not selection.includes(1)
    assert selection.includes(2)


def test_display_mode_prints_numbered_lines_for_all_entries() -> None:
    out = io.StringIO()

    report = apply_actions(ENTRIES, _spec("txt"), out_stream=out)

    lines = out.getvalue().splitlines()
    assert len(lines) == 3
    assert "one" in lines[0] and "three" in lines[2]
    assert report.shown == [1, 2, 3]


def test_quoted_mode_prints_only_selected_paths() -> None:
    out = io.StringIO()

    apply_actions(ENTRIES, _spec("txt", "-q", "-2"), out_stream=out)

    assert out.getvalue() == '"/home/user/b/two.txt"\n'


def test_quoted_folder_mode() -> None:
    out = io.StringIO()

    apply_actions(ENTRIES, _spec("txt", "-Q", "-3"), out_stream=out)

    assert out.getvalue() == '"/home/user/c/"\n'


def test_open_mode_launches_each_selected_entry() -> None:
    out = io.StringIO()
    calls: list[list[str]] = []
    launcher = Launcher(("xdg-open",), spawn=calls.append)

    report = apply_actions(ENTRIES, _spec("txt", "-o", "-1", "-3"), out, launcher=launcher)

    assert calls == [["xdg-open", "/home/user/a/one.txt"], ["xdg-open", "/home/user/c/three.txt"]]
    assert out.getvalue().splitlines() == [
        '"/home/user/a/one.txt"',
        '"/home/user/c/three.txt"',
    ]
    assert report.opened == [1, 3]


def test_out_of_range_selector_is_reported_and_valid_ones_still_run() -> None:
    out = io.StringIO()
    calls: list[list[str]] = []
    launcher = Launcher(("xdg-open",), spawn=calls.append)

    report = apply_actions(ENTRIES, _spec("txt", "-O", "-2", "-7"), out, launcher=launcher)

    assert calls == [["xdg-open", "/home/user/b/"]]
    assert out.getvalue().splitlines() == ['"/home/user/b/"', "No result 7 to open"]
    assert report.missing == [7]


def test_out_of_range_in_display_mode() -> None:
    out = io.StringIO()

    report = apply_actions(ENTRIES, _spec("txt", "-9"), out_stream=out)

    assert out.getvalue() == "No result 9\n"
    assert report.shown == []


def test_launcher_failure_is_reported_per_entry() -> None:
    out = io.StringIO()
    attempts: list[str] = []

    def spawn(argv: list[str]) -> object:
        attempts.append(argv[-1])
        if argv[-1].endswith("one.txt"):
            raise PermissionError(13, "Permission denied")
        return None

    launcher = Launcher(("opener",), spawn=spawn)

    report = apply_actions(ENTRIES, _spec("txt", "-o"), out, launcher=launcher)

    lines = out.getvalue().splitlines()
    assert lines[1] == 'Failed to open "/home/user/a/one.txt": Permission denied'
    assert len(attempts) == 3
    assert report.failed == [1]
    assert report.opened == [2, 3]
