# easy-alias — Shell Command Alias Manager
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Configuration and filesystem resolution for easy-alias.

Handles:
- Packaged YAML defaults loading (easy_alias/defaults/system.yaml)
- Alias file location (EASY_ALIAS_CONFIG, <home>/.config/eaconfig)
- Data root resolution for the crash log (EASY_ALIAS_DATA_HOME, ~/.local/share)
- ANSI coloring constants
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

try:
    # Py3.9+
    from importlib import resources as importlib_resources
except Exception:  # pragma: no cover
    import importlib_resources  # type: ignore

from .errors import HomeDirectoryError

CONFIG_ENV = "EASY_ALIAS_CONFIG"
DATA_HOME_ENV = "EASY_ALIAS_DATA_HOME"

DEFAULT_STORE_DIRECTORY = ".config"
DEFAULT_STORE_FILENAME = "eaconfig"


# -----------------------
# UI constants
# -----------------------

ANSI_COLORS: dict[str, str] = {
    "cyan": "\033[38;5;69;1m",
    "pink": "\033[38;5;169;1m",
    "magenta": "\033[38;5;126;1m",
    "yellow": "\033[38;5;226;1m",
    "reset": "\033[0m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "red": "\033[31m",
}

TAG_COLORS: dict[str, str] = {
    "RUN": "green",
    "EXIT": "magenta",
    "ERROR": "red",
    "WARN": "yellow",
}


# -----------------------
# Config model wrapper
# -----------------------


class YAMLConfig:
    """Simple config wrapper that implements ConfigModel protocol."""

    def __init__(self, config_dict: dict[str, Any]):
        self._config = config_dict

    def _section(self, key: str) -> dict[str, Any]:
        val = self._config.get(key, {})
        return val if isinstance(val, dict) else {}

    @property
    def store(self) -> dict[str, Any]:
        return self._section("store")

    def get_path(self, path: str, default: Any = None) -> Any:
        """
        Nested lookup using dot-separated path.
        Example: get_path("execution.shell", "/bin/sh") -> "/bin/sh"
        """
        if not path:
            return default

        cur: Any = self._config
        for part in path.split("."):
            if not isinstance(cur, dict):
                return default
            if part not in cur:
                return default
            cur = cur[part]
        return cur


# -----------------------
# Alias file location
# -----------------------


@dataclass(frozen=True)
class StoreConfig:
    """Where the alias table lives. Passed explicitly into the store."""

    path: Path


def home_dir() -> Path:
    """Return the invoking user's home directory.

    Raises:
        HomeDirectoryError: if it cannot be determined
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError(str(e) or type(e).__name__) from e
    if str(home) in ("", "~"):
        raise HomeDirectoryError("HOME is not set")
    return home


def store_config(
    cfg: YAMLConfig | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> StoreConfig:
    """Resolve the alias file location once per invocation.

    Resolution order:
    1. EASY_ALIAS_CONFIG environment variable (full file path)
    2. <home>/<store.directory>/<store.filename> (default ~/.config/eaconfig)
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_ENV)
    if override:
        return StoreConfig(path=Path(override).expanduser())

    store_cfg = cfg.store if cfg is not None else {}
    directory = store_cfg.get("directory") or DEFAULT_STORE_DIRECTORY
    filename = store_cfg.get("filename") or DEFAULT_STORE_FILENAME

    base = home if home is not None else home_dir()
    return StoreConfig(path=base / directory / filename)


# -----------------------
# Data root (crash log)
# -----------------------


def get_data_root() -> Path:
    """Get the data root directory for easy-alias diagnostics.

    Resolution order:
    1. EASY_ALIAS_DATA_HOME environment variable (if set)
    2. ~/.local/share (default)

    Unlike the alias file, nothing is created here until a crash
    log actually has to be written.
    """
    data_home = os.getenv(DATA_HOME_ENV)
    if data_home:
        return Path(data_home)
    return home_dir() / ".local" / "share"


def crash_log_path(data_root: Path) -> Path:
    """<data_root>/easy-alias/logs/crash.log"""
    return data_root / "easy-alias" / "logs" / "crash.log"


def color_enabled(cfg: YAMLConfig | None) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    if cfg is None:
        return True
    return bool(cfg.get_path("ui.color", True))


# -----------------------
# Packaged defaults loading
# -----------------------


def _defaults_dir() -> Path:
    """Return the installed path to packaged defaults directory."""
    return Path(
        importlib_resources.files("easy_alias.defaults")
    )  # type: ignore[arg-type]


def load_defaults_yaml(filename: str) -> dict[str, Any]:
    """
    Load a YAML file from easy_alias/defaults/.
    """
    defaults_dir = _defaults_dir()
    path = defaults_dir / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Missing defaults YAML: {filename} "
            f"(looked in {defaults_dir})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Defaults YAML {filename} must load to a mapping/dict."
        )
    return data


def load_system_config() -> YAMLConfig:
    """
    Load system.yaml from packaged defaults and return a YAMLConfig wrapper.
    """
    return YAMLConfig(load_defaults_yaml("system.yaml"))
