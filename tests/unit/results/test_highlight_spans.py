from __future__ import annotations

import fnmatch

from findfile.config import FindFileConfig
from findfile.query import FragmentOrder, classify_tokens, compile_search
from findfile.results import find_highlight_spans

CONFIG = FindFileConfig(
    default_dir="~",
    home_dir="/home/user",
    current_dir="/work/project",
    open_command=("xdg-open",),
)


def _matches(path: str, match_expression: tuple[str, ...]) -> bool:
    patterns = [arg for arg in match_expression if arg != "-ipath"]
    return all(fnmatch.fnmatchcase(path.lower(), pattern.lower()) for pattern in patterns)


def test_sequential_search_starts_after_previous_match() -> None:
    spans = find_highlight_spans("/x/ab/", ["b", "a"], FragmentOrder.SEQUENTIAL)

    assert spans == [(4, 5)]


def test_sequential_repeated_fragment_does_not_overlap() -> None:
    spans = find_highlight_spans("/foo", ["o", "o"], FragmentOrder.SEQUENTIAL)

    assert spans == [(2, 3), (3, 4)]


def test_sequential_missing_fragment_keeps_cursor() -> None:
    spans = find_highlight_spans("/ab", ["a", "zzz", "b"], FragmentOrder.SEQUENTIAL)

    assert spans == [(1, 2), (2, 3)]


def test_sequential_spans_never_start_before_previous_end() -> None:
    text = "/docs/2023/report-final/report.txt"
    fragments = ["report", "final", "report", "txt"]

    spans = find_highlight_spans(text, fragments, FragmentOrder.SEQUENTIAL)

    for previous, current in zip(spans, spans[1:]):
        assert current[0] >= previous[1]
    assert len(spans) == 4


def test_any_order_fragments_are_independent() -> None:
    text = "/x/abc/y"
    together = find_highlight_spans(text, ["c", "a"], FragmentOrder.ANY_ORDER)
    alone = find_highlight_spans(text, ["a"], FragmentOrder.ANY_ORDER)

    assert alone == [(3, 4)]
    assert together == [(3, 4), (5, 6)]


def test_any_order_overlapping_matches_are_merged() -> None:
    spans = find_highlight_spans("/x/ab/", ["b", "ab"], FragmentOrder.ANY_ORDER)

    assert spans == [(3, 5)]


def test_matching_is_case_insensitive_and_respects_min_position() -> None:
    text = "/home/Src/lib/SRC.txt"

    spans = find_highlight_spans(text, ["src"], FragmentOrder.SEQUENTIAL, min_position=9)

    assert spans == [(14, 17)]
    assert text[14:17] == "SRC"


def test_length_changing_lowercase_characters_keep_offsets() -> None:
    text = "/İx/data"

    spans = find_highlight_spans(text, ["data"], FragmentOrder.SEQUENTIAL)

    assert spans == [(4, 8)]


def test_any_order_and_sequential_match_expressions() -> None:
    any_order = compile_search(classify_tokens(["b", "a", "-r"], CONFIG))
    sequential = compile_search(classify_tokens(["a", "b"], CONFIG))

    assert _matches("/home/user/abc/x", any_order.match_expression)
    assert _matches("/home/user/ba/x", any_order.match_expression)
    assert _matches("/home/user/ab/x", sequential.match_expression)
    assert not _matches("/home/user/ba/x", sequential.match_expression)
