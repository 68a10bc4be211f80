"""Compile a token classification into a declarative search specification."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final

from findfile.query.tokens import Classification, FlagId

DEFAULT_EXCLUSION_PATTERNS: Final[tuple[str, ...]] = ("*/.*", "*/build/*")


class EntityKind(Enum):
    FILE = "f"
    DIRECTORY = "d"


class SortKey(Enum):
    NAME = "name"
    SIZE = "size"
    MODIFIED_TIME = "modified_time"


class FragmentOrder(Enum):
    SEQUENTIAL = "sequential"
    ANY_ORDER = "any_order"


class OutputMode(Enum):
    DISPLAY = "display"
    QUOTED_FILE = "quoted_file"
    QUOTED_FOLDER = "quoted_folder"


class LinkMode(Enum):
    NEVER = "never"
    ON_DEMAND = "on_demand"
    ALWAYS = "always"


@dataclass(slots=True, frozen=True)
class SearchOptions:
    """Settings driven by flags, folded in argument order."""

    entity_kind: EntityKind = EntityKind.FILE
    sort_key: SortKey = SortKey.MODIFIED_TIME
    sort_ascending: bool = True
    show_metadata: bool = False
    fragment_order: FragmentOrder = FragmentOrder.SEQUENTIAL
    include_all: bool = False
    output_mode: OutputMode = OutputMode.DISPLAY
    open_results: bool = False
    link_mode: LinkMode = LinkMode.NEVER
    print_command: bool = False


# Later flags override earlier ones field by field.
FLAG_EFFECTS: Final[dict[FlagId, dict[str, object]]] = {
    FlagId.SORT_NAME: {"sort_key": SortKey.NAME, "sort_ascending": True},
    FlagId.SORT_NAME_REVERSED: {"sort_key": SortKey.NAME, "sort_ascending": False},
    FlagId.SORT_SIZE: {"sort_key": SortKey.SIZE, "sort_ascending": True},
    FlagId.SORT_SIZE_REVERSED: {"sort_key": SortKey.SIZE, "sort_ascending": False},
    FlagId.SORT_MODIFIED: {"sort_key": SortKey.MODIFIED_TIME, "sort_ascending": False},
    FlagId.SORT_MODIFIED_REVERSED: {"sort_key": SortKey.MODIFIED_TIME, "sort_ascending": True},
    FlagId.INCLUDE_ALL: {"include_all": True},
    FlagId.ANY_ORDER: {"fragment_order": FragmentOrder.ANY_ORDER},
    FlagId.DIRECTORIES: {"entity_kind": EntityKind.DIRECTORY},
    FlagId.QUOTED: {"output_mode": OutputMode.QUOTED_FILE},
    FlagId.QUOTED_FOLDER: {"output_mode": OutputMode.QUOTED_FOLDER},
    FlagId.OPEN: {"output_mode": OutputMode.QUOTED_FILE, "open_results": True},
    FlagId.OPEN_FOLDER: {"output_mode": OutputMode.QUOTED_FOLDER, "open_results": True},
    FlagId.INFO: {"show_metadata": True},
    FlagId.LINKS_ON_DEMAND: {"link_mode": LinkMode.ON_DEMAND},
    FlagId.LINKS_ALWAYS: {"link_mode": LinkMode.ALWAYS},
    FlagId.PRINT_COMMAND: {"print_command": True},
    FlagId.HELP: {},
}


@dataclass(slots=True, frozen=True)
class SearchSpec:
    """Immutable description of one search and how to present its results."""

    folders: tuple[str, ...]
    include_fragments: tuple[str, ...]
    match_expression: tuple[str, ...]
    exclusion_expression: tuple[str, ...]
    entity_kind: EntityKind
    sort_key: SortKey
    sort_ascending: bool
    show_metadata: bool
    fragment_order: FragmentOrder
    output_mode: OutputMode = OutputMode.DISPLAY
    open_results: bool = False
    link_mode: LinkMode = LinkMode.NEVER
    print_command: bool = False
    selector_indices: tuple[int, ...] = ()


def wildcard(fragment: str) -> str:
    return f"*{fragment}*"


def build_match_expression(
    include_fragments: tuple[str, ...], fragment_order: FragmentOrder
) -> tuple[str, ...]:
    """Return find predicates requiring the include fragments in the path."""
    if fragment_order is FragmentOrder.ANY_ORDER:
        expression: list[str] = []
        for fragment in include_fragments:
            expression.extend(("-ipath", wildcard(fragment)))
        return tuple(expression)
    return ("-ipath", wildcard("*".join(include_fragments)))


def build_exclusion_expression(
    exclude_fragments: tuple[str, ...], include_all: bool
) -> tuple[str, ...]:
    """Return negated find predicates for excluded fragments and default exclusions."""
    expression: list[str] = []
    for fragment in exclude_fragments:
        expression.extend(("!", "-ipath", wildcard(fragment)))
    if not include_all:
        for pattern in DEFAULT_EXCLUSION_PATTERNS:
            expression.extend(("!", "-ipath", pattern))
    return tuple(expression)


def resolve_options(flags: tuple[FlagId, ...]) -> SearchOptions:
    """Fold flag effects in argument order."""
    options = SearchOptions()
    for flag in flags:
        effect = FLAG_EFFECTS[flag]
        if effect:
            options = replace(options, **effect)
    return options


def compile_search(classification: Classification) -> SearchSpec:
    """Build the search specification for a classified query."""
    options = resolve_options(classification.flags)
    return SearchSpec(
        folders=classification.folders,
        include_fragments=classification.include_fragments,
        match_expression=build_match_expression(
            classification.include_fragments, options.fragment_order
        ),
        exclusion_expression=build_exclusion_expression(
            classification.exclude_fragments, options.include_all
        ),
        entity_kind=options.entity_kind,
        sort_key=options.sort_key,
        sort_ascending=options.sort_ascending,
        show_metadata=options.show_metadata,
        fragment_order=options.fragment_order,
        output_mode=options.output_mode,
        open_results=options.open_results,
        link_mode=options.link_mode,
        print_command=options.print_command,
        selector_indices=classification.selector_indices,
    )
