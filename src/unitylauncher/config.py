"""Launcher configuration.

Settings are layered, later layers winning:

1. Built-in defaults (everything discovered from the platform).
2. A YAML file: ``--config``, ``$UNITYLAUNCHER_CONFIG``, or
   ``~/.config/unitylauncher/config.yaml`` if it exists.
3. ``UNITYLAUNCHER_*`` environment variables.

Example file::

    projects_root: ~/UnityProjects
    editor_roots:
      - D:/Unity/Editors
    hub_executable: C:/Program Files/Unity Hub/Unity Hub.exe
    max_workers: 4
    candidate_timeout: 1.5

Every path setting is optional. When unset, the value comes from the
Unity Hub's own metadata (see ``unitylauncher.stores``).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from unitylauncher.exceptions import ConfigError

ENV_PREFIX = "UNITYLAUNCHER_"
ENV_CONFIG_FILE = f"{ENV_PREFIX}CONFIG"
DEFAULT_CONFIG_FILE = Path("~/.config/unitylauncher/config.yaml")

_PATH_FIELDS = ("hub_data_dir", "projects_root", "hub_executable")


@dataclass(frozen=True)
class LauncherConfig:
    """Resolved launcher settings.

    Attributes:
        platform: ``sys.platform`` value whose layout to use.
        home: Home directory the per-user stores live under.
        hub_data_dir: Unity Hub data folder override.
        editor_roots: Editor install roots override, highest priority
            first. Empty means "ask the Hub".
        projects_root: Hub projects folder override.
        hub_executable: Fallback launcher override.
        max_workers: Concurrent project reads during a reload.
        candidate_timeout: Seconds allowed for reading one project.
    """

    platform: str = sys.platform
    home: Path = field(default_factory=Path.home)
    hub_data_dir: Path | None = None
    editor_roots: tuple[Path, ...] = ()
    projects_root: Path | None = None
    hub_executable: Path | None = None
    max_workers: int = 8
    candidate_timeout: float = 2.0

    def validate(self) -> None:
        """Check numeric settings.

        Raises:
            ConfigError: If a setting is out of range.
        """
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.candidate_timeout <= 0:
            raise ConfigError(
                f"candidate_timeout must be positive, got {self.candidate_timeout}"
            )


def _as_path(name: str, value: Any) -> Path:
    if not isinstance(value, (str, os.PathLike)):
        raise ConfigError(f"{name} must be a path, got {type(value).__name__}")
    return Path(value).expanduser()


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def _coerce(values: Mapping[str, Any]) -> dict[str, Any]:
    """Convert raw file/env values into ``LauncherConfig`` field types."""
    known = {f.name for f in fields(LauncherConfig)}
    out: dict[str, Any] = {}
    for name, value in values.items():
        if name not in known:
            raise ConfigError(f"Unknown setting: {name}")
        if value is None:
            continue
        if name in _PATH_FIELDS or name == "home":
            out[name] = _as_path(name, value)
        elif name == "editor_roots":
            if isinstance(value, (str, os.PathLike)):
                value = [value]
            if not isinstance(value, (list, tuple)):
                raise ConfigError("editor_roots must be a list of paths")
            out[name] = tuple(_as_path(name, v) for v in value)
        elif name == "max_workers":
            out[name] = _as_int(name, value)
        elif name == "candidate_timeout":
            out[name] = _as_float(name, value)
        elif name == "platform":
            out[name] = str(value)
    return out


def read_config_file(path: Path) -> dict[str, Any]:
    """Load the YAML settings file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or
            is not a mapping.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc.strerror or exc}") from exc
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return _coerce(data)


def _env_values(env: Mapping[str, str]) -> dict[str, Any]:
    raw: dict[str, Any] = {}
    for name in ("hub_data_dir", "projects_root", "hub_executable", "max_workers", "candidate_timeout"):
        value = env.get(ENV_PREFIX + name.upper())
        if value:
            raw[name] = value
    roots = env.get(f"{ENV_PREFIX}EDITOR_ROOTS")
    if roots:
        raw["editor_roots"] = [r for r in roots.split(os.pathsep) if r]
    return _coerce(raw)


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> LauncherConfig:
    """Build the effective configuration.

    Args:
        path: Explicit config file. Must exist if given.
        env: Environment to read; defaults to ``os.environ``.
        **overrides: Final field overrides (used by tests and the CLI).

    Returns:
        A validated ``LauncherConfig``.

    Raises:
        ConfigError: If any layer is malformed.
    """
    env = os.environ if env is None else env
    config = LauncherConfig()

    if path is not None:
        config_file: Path | None = Path(path).expanduser()
    elif env.get(ENV_CONFIG_FILE):
        config_file = Path(env[ENV_CONFIG_FILE]).expanduser()
    else:
        default = DEFAULT_CONFIG_FILE.expanduser()
        config_file = default if default.is_file() else None

    if config_file is not None:
        config = replace(config, **read_config_file(config_file))
    config = replace(config, **_env_values(env))
    if overrides:
        config = replace(config, **_coerce(overrides))
    config.validate()
    return config
