"""External collaborators: the search pipeline and the launcher."""

from .launcher import LaunchError, Launcher, spawn_detached
from .search import SearchCommandError, build_search_command, run_search, shell_runner

__all__ = [
    "LaunchError",
    "Launcher",
    "SearchCommandError",
    "build_search_command",
    "run_search",
    "shell_runner",
    "spawn_detached",
]
