"""Detached launcher for opening results in a viewer or file manager."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

Spawner = Callable[[list[str]], object]


@dataclass(slots=True, frozen=True)
class LaunchError(Exception):
    """Raised when the launcher process cannot be started."""

    path: str
    cause: str

    def __str__(self) -> str:
        return f'Failed to open "{self.path}": {self.cause}'


def spawn_detached(argv: list[str]) -> subprocess.Popen[bytes]:
    """Start a process in its own session with all output discarded."""
    return subprocess.Popen(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class Launcher:
    """Opens paths with a configured command without waiting for it."""

    def __init__(self, command: Sequence[str], spawn: Spawner = spawn_detached) -> None:
        if not command:
            raise ValueError("Launcher command must not be empty.")
        self._command = tuple(command)
        self._spawn = spawn

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def open(self, path: str) -> None:
        """Fire and forget the launcher for one path."""
        try:
            self._spawn([*self._command, path])
        except OSError as error:
            raise LaunchError(path=path, cause=error.strerror or str(error)) from error
