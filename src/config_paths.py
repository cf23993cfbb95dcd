"""Helpers to resolve the configuration file and paths declared inside it."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "TRIP_EMISSIONS_CONFIG_PATH"
CONFIG_ROOT_KEY = "_config_root"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring TRIP_EMISSIONS_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return default.resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def set_config_root(config: MutableMapping[str, object], root: Path) -> None:
    """Annotate a config mapping with its filesystem root for relative paths."""

    if not isinstance(config, MutableMapping):
        return
    config[CONFIG_ROOT_KEY] = str(root.resolve())


def get_config_root(config: Mapping[str, object], fallback: Path | None = None) -> Path:
    """Return the base directory that relative paths should resolve against."""

    if isinstance(config, Mapping):
        value = config.get(CONFIG_ROOT_KEY)
        if isinstance(value, str):
            try:
                return Path(value).expanduser().resolve()
            except OSError:
                pass
    return (fallback or REPO_ROOT).resolve()


def resolve_config_relative(
    value: str | Path,
    config: Mapping[str, object],
    *,
    data_subdir: str | None = None,
) -> Path:
    """Resolve ``value`` against the config root, falling back to ``data/<subdir>``.

    Resolution order:
      1. Absolute paths are returned unchanged.
      2. Relative paths are resolved against the directory of the config file.
      3. If that does not exist, ``<repo>/data/<data_subdir>/<basename>`` is tried.
    The first candidate is returned when nothing exists so the caller can
    report a meaningful path.
    """
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    primary = (get_config_root(config) / path).resolve()
    if primary.exists() or data_subdir is None:
        return primary
    candidate = REPO_ROOT / "data" / data_subdir / path.name
    if candidate.exists():
        return candidate
    return primary
