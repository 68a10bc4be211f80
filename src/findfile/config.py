"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import os
import shlex
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DIR_ENV_VAR = "FF_DEFAULT_DIR"
OPEN_COMMAND_ENV_VAR = "FF_OPEN_COMMAND"
AUDIT_LOG_ENV_VAR = "FF_AUDIT_LOG"
CONFIG_PATH_ENV_VAR = "FF_CONFIG"

DEFAULT_DIR = "~"


@dataclass(slots=True, frozen=True)
class FindFileConfig:
    """Fully merged configuration for one invocation."""

    default_dir: str
    home_dir: str
    current_dir: str
    open_command: tuple[str, ...]
    audit_log: Path | None = None

    @property
    def parent_dir(self) -> str:
        """Return the parent of the current directory."""
        return os.path.dirname(self.current_dir.rstrip("/")) or "/"


def default_open_command(platform: str | None = None) -> tuple[str, ...]:
    """Return the platform file-opening command."""
    name = platform if platform is not None else sys.platform
    if name == "darwin":
        return ("open",)
    return ("xdg-open",)


def default_config(home_dir: str, current_dir: str) -> FindFileConfig:
    """Build default config for the given home and working directories."""
    return FindFileConfig(
        default_dir=DEFAULT_DIR,
        home_dir=home_dir,
        current_dir=current_dir,
        open_command=default_open_command(),
    )


def config_file_path(environ: Mapping[str, str], home_dir: str) -> Path:
    """Return the config file location honoring FF_CONFIG and XDG_CONFIG_HOME."""
    explicit = environ.get(CONFIG_PATH_ENV_VAR, "").strip()
    if explicit:
        return Path(explicit).expanduser()
    xdg_home = environ.get("XDG_CONFIG_HOME", "").strip()
    base = Path(xdg_home) if xdg_home else Path(home_dir) / ".config"
    return base / "findfile" / "config.toml"


def load_config_file(config_path: Path) -> dict[str, object]:
    """Load optional TOML config file."""
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{config_path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_string(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config field '{name}' must be a string.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not value:
        raise ValueError(f"Config field '{section}.{field}' must be a non-empty list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def merge_config(base: FindFileConfig, file_payload: dict[str, object]) -> FindFileConfig:
    """Merge defaults with values from the config file."""
    search_payload = _get_table(file_payload, "search")
    open_payload = _get_table(file_payload, "open")
    audit_payload = _get_table(file_payload, "audit")

    default_dir = _optional_string(
        search_payload.get("default_dir"), "search.default_dir", base.default_dir
    )
    if not default_dir.strip():
        default_dir = base.default_dir

    open_command = base.open_command
    if "command" in open_payload:
        open_command = _tuple_of_strings(open_payload["command"], "open", "command")

    audit_log = base.audit_log
    if "log_path" in audit_payload:
        raw_log_path = _optional_string(audit_payload["log_path"], "audit.log_path", "")
        audit_log = Path(raw_log_path).expanduser() if raw_log_path.strip() else None

    return FindFileConfig(
        default_dir=default_dir,
        home_dir=base.home_dir,
        current_dir=base.current_dir,
        open_command=open_command,
        audit_log=audit_log,
    )


def apply_env_overrides(config: FindFileConfig, environ: Mapping[str, str]) -> FindFileConfig:
    """Apply environment variables at highest precedence; blank values are ignored."""
    default_dir = environ.get(DEFAULT_DIR_ENV_VAR, "")
    raw_open_command = environ.get(OPEN_COMMAND_ENV_VAR, "")
    raw_audit_log = environ.get(AUDIT_LOG_ENV_VAR, "")

    open_command = config.open_command
    if raw_open_command.strip():
        open_command = tuple(shlex.split(raw_open_command))

    return FindFileConfig(
        default_dir=default_dir if default_dir.strip() else config.default_dir,
        home_dir=config.home_dir,
        current_dir=config.current_dir,
        open_command=open_command,
        audit_log=(
            Path(raw_audit_log).expanduser() if raw_audit_log.strip() else config.audit_log
        ),
    )


def load_effective_config(
    environ: Mapping[str, str] | None = None,
    home_dir: str | None = None,
    current_dir: str | None = None,
) -> FindFileConfig:
    """Load effective config using merge order defaults -> config file -> environment."""
    env = os.environ if environ is None else environ
    home = home_dir if home_dir is not None else str(Path.home())
    current = current_dir if current_dir is not None else os.getcwd()
    base = default_config(home_dir=home, current_dir=current)
    payload = load_config_file(config_file_path(env, home))
    return apply_env_overrides(merge_config(base, payload), env)
