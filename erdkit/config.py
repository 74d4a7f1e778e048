"""Locating and parsing the ``.erdtreerc`` configuration file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

ERDTREE_CONFIG_TOML = ".erdtree.toml"
ERDTREE_TOML_PATH = "ERDTREE_TOML_PATH"

ERDTREE_CONFIG_NAME = ".erdtreerc"
ERDTREE_CONFIG_PATH = "ERDTREE_CONFIG_PATH"

ERDTREE_DIR = "erdtree"

CONFIG_DIR = ".config"
HOME = "HOME"
XDG_CONFIG_HOME = "XDG_CONFIG_HOME"
APPDATA = "APPDATA"


def _read(path: Path) -> Optional[str]:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return None


def _from_env_dir(var: str, *parts: str) -> Optional[str]:
    base = os.environ.get(var)
    if base is None:
        return None
    return _read(Path(base).joinpath(*parts))


def _from_config_path() -> Optional[str]:
    path = os.environ.get(ERDTREE_CONFIG_PATH)
    return None if path is None else _read(Path(path))


def _from_xdg() -> Optional[str]:
    found = _from_env_dir(XDG_CONFIG_HOME, ERDTREE_DIR, ERDTREE_CONFIG_NAME)
    if found is None:
        found = _from_env_dir(XDG_CONFIG_HOME, ERDTREE_CONFIG_NAME)
    return found


def _from_home() -> Optional[str]:
    found = _from_env_dir(HOME, CONFIG_DIR, ERDTREE_DIR, ERDTREE_CONFIG_NAME)
    if found is None:
        found = _from_env_dir(HOME, ERDTREE_CONFIG_NAME)
    return found


def _from_appdata() -> Optional[str]:
    return _from_env_dir(APPDATA, ERDTREE_DIR, ERDTREE_CONFIG_NAME)


def read_config_to_string() -> Optional[str]:
    """Read the rc configuration, prefixed with ``"--\\n"``, or ``None`` if absent.

    Searched in order: ``$ERDTREE_CONFIG_PATH``, then on Unix
    ``$XDG_CONFIG_HOME/erdtree/.erdtreerc``, ``$XDG_CONFIG_HOME/.erdtreerc``,
    ``$HOME/.config/erdtree/.erdtreerc``, ``$HOME/.erdtreerc``; on Windows
    ``%APPDATA%/erdtree/.erdtreerc``.
    """
    if os.name == "nt":
        sources = (_from_config_path, _from_appdata)
    else:
        sources = (_from_config_path, _from_xdg, _from_home)

    for source in sources:
        contents = source()
        if contents is not None:
            return f"--\n{contents}"
    return None


def parse(config: str) -> list[str]:
    """Split configuration text into arguments, dropping comment lines."""
    args: list[str] = []
    for line in config.split("\n"):
        if line.lstrip().startswith("#"):
            continue
        args.extend(line.split())
    return args