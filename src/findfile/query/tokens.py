"""Classification of raw command-line tokens."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from findfile.config import FindFileConfig

SELECTOR_SEPARATOR: Final[str] = "--"
FRAGMENT_SPLIT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\w.*-]+")
SELECTOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^-[0-9]+$")
BARE_SELECTOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^-?[0-9]+$")
FOLDER_PREFIXES: Final[tuple[str, ...]] = ("./", "../", "/", "~")


class FlagId(Enum):
    """Reserved single-token flags."""

    SORT_NAME = "-n"
    SORT_NAME_REVERSED = "-N"
    SORT_SIZE = "-s"
    SORT_SIZE_REVERSED = "-S"
    SORT_MODIFIED = "-m"
    SORT_MODIFIED_REVERSED = "-M"
    INCLUDE_ALL = "-a"
    ANY_ORDER = "-r"
    DIRECTORIES = "-d"
    QUOTED = "-q"
    QUOTED_FOLDER = "-Q"
    OPEN = "-o"
    OPEN_FOLDER = "-O"
    INFO = "-i"
    LINKS_ON_DEMAND = "-f"
    LINKS_ALWAYS = "-F"
    PRINT_COMMAND = "-p"
    HELP = "-h"


FLAGS_BY_LITERAL: Final[dict[str, FlagId]] = {flag.value: flag for flag in FlagId}


@dataclass(slots=True, frozen=True)
class Classification:
    """Partition of the argument list into query buckets."""

    folders: tuple[str, ...]
    include_fragments: tuple[str, ...]
    exclude_fragments: tuple[str, ...]
    flags: tuple[FlagId, ...]
    selector_indices: tuple[int, ...]

    def has(self, flag: FlagId) -> bool:
        """Return True when the flag was given."""
        return flag in self.flags


def is_search_folder(token: str) -> bool:
    """Return True for tokens naming a directory to search in."""
    return token in (".", "..") or token.startswith(FOLDER_PREFIXES)


def is_help_request(tokens: Sequence[str]) -> bool:
    """Return True when no query is given or only help flags are."""
    return all(token == FlagId.HELP.value for token in tokens)


def split_fragments(token: str) -> list[str]:
    """Split a token into non-empty sub-fragments."""
    return [part for part in FRAGMENT_SPLIT_PATTERN.split(token) if part]


def resolve_folder(folder: str, config: FindFileConfig) -> str:
    """Make a folder absolute and add a trailing slash.

    `~` expands to the home directory, a leading `..` to the parent directory and a
    leading `.` to the current directory. Other relative folders, such as a
    configured default, are taken relative to the current directory.
    """
    resolved = folder
    if resolved.startswith("~"):
        resolved = config.home_dir.rstrip("/") + resolved[1:]
    elif resolved == ".." or resolved.startswith("../"):
        resolved = config.parent_dir.rstrip("/") + resolved[2:]
    elif resolved == "." or resolved.startswith("./"):
        resolved = config.current_dir.rstrip("/") + resolved[1:]
    elif not resolved.startswith("/"):
        resolved = f"{config.current_dir.rstrip('/')}/{resolved}"
    if not resolved.endswith("/"):
        resolved += "/"
    return resolved


def classify_tokens(tokens: Sequence[str], config: FindFileConfig) -> Classification:
    """Partition raw tokens into folders, fragments, flags and selectors."""
    raw_folders: list[str] = []
    include_fragments: list[str] = []
    exclude_fragments: list[str] = []
    flags: list[FlagId] = []
    selectors: set[int] = set()

    after_separator = False
    for token in tokens:
        if after_separator:
            if BARE_SELECTOR_PATTERN.match(token):
                selectors.add(int(token.removeprefix("-")))
            continue
        if token == SELECTOR_SEPARATOR:
            after_separator = True
            continue
        if is_search_folder(token):
            raw_folders.append(token)
            continue
        for part in split_fragments(token):
            if SELECTOR_PATTERN.match(part):
                selectors.add(int(part[1:]))
                continue
            flag = FLAGS_BY_LITERAL.get(part)
            if flag is not None:
                if flag in flags:
                    flags.remove(flag)
                flags.append(flag)
                continue
            if part.startswith("-"):
                if len(part) > 1:
                    excluded = part[1:].lower()
                    if excluded not in exclude_fragments:
                        exclude_fragments.append(excluded)
                continue
            if part in (".", ".."):
                continue
            included = part.replace("*", "")
            if included.strip():
                include_fragments.append(included)

    folders = raw_folders or [config.default_dir]
    return Classification(
        folders=tuple(resolve_folder(folder, config) for folder in folders),
        include_fragments=tuple(include_fragments),
        exclude_fragments=tuple(exclude_fragments),
        flags=tuple(flags),
        selector_indices=tuple(sorted(selectors)),
    )
