"""Icons for files, chosen by file type, extension or file name."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Optional, Union

_ESC = "\x1b"
_RESET = "\x1b[0m"

_DEFAULT_ICON: tuple[int, str] = (66, "\uf15b")

_FILE_TYPE_ICONS: dict[str, str] = {
    "dir": "\uf413",
    "symlink": "\uf482",
}

_FILE_NAME_ICONS: dict[str, str] = {
    ".Trash": "\uf1f8",
    ".atom": "\ue764",
    ".bashprofile": "\ue615",
    ".bashrc": "\uf489",
    ".git": "\uf1d3",
    ".gitattributes": "\uf1d3",
    ".gitconfig": "\uf1d3",
    ".github": "\uf408",
    ".gitignore": "\uf1d3",
    ".gitmodules": "\uf1d3",
    ".rvm": "\ue21e",
    ".vimrc": "\ue62b",
    ".vscode": "\ue70c",
    ".zshrc": "\uf489",
    "Cargo.lock": "\ue7a8",
    "bin": "\ue5fc",
    "config": "\ue5fc",
    "docker-compose.yml": "\uf308",
    "Dockerfile": "\uf308",
    ".DS_Store": "\uf179",
    "gitignore_global": "\uf1d3",
    "go.mod": "\ue626",
    "go.sum": "\ue626",
    "gradle": "\ue256",
    "gruntfile.coffee": "\ue611",
    "gruntfile.js": "\ue611",
    "gruntfile.ls": "\ue611",
    "gulpfile.coffee": "\ue610",
    "gulpfile.js": "\ue610",
    "gulpfile.ls": "\ue610",
    "hidden": "\uf023",
    "include": "\ue5fc",
    "lib": "\uf121",
    "license": "\ue60a",
    "LICENSE": "\ue60a",
    "licence": "\ue60a",
    "LICENCE": "\ue60a",
    "localized": "\uf179",
    "Makefile": "\uf489",
    "node_modules": "\ue718",
    "npmignore": "\ue71e",
    "PKGBUILD": "\uf303",
    "rubydoc": "\ue73b",
    "yarn.lock": "\ue718",
}

_EXT_ICONS: dict[str, tuple[int, str]] = {
    "ai": (185, "\ue7b4"),
    "awk": (59, "\ue795"),
    "bash": (113, "\ue795"),
    "bat": (154, "\ue615"),
    "bmp": (140, "\ue60d"),
    "cbl": (25, "\u2699"),
    "c++": (204, "\ue61d"),
    "c": (75, "\ue61e"),
    "cc": (204, "\ue61d"),
    "cfg": (231, "\ue7a3"),
    "cljc": (107, "\ue768"),
    "clj": (107, "\ue768"),
    "cljd": (67, "\ue76a"),
    "cljs": (67, "\ue76a"),
    "cmake": (66, "\ue615"),
    "cob": (25, "\u2699"),
    "cobol": (25, "\u2699"),
    "coffee": (185, "\ue61b"),
    "conf": (66, "\ue615"),
    "config.ru": (52, "\ue791"),
    "cp": (67, "\ue61d"),
    "cpp": (67, "\ue61d"),
    "cpy": (25, "\u2699"),
    "cr": (16, "\ue24f"),
    "cs": (58, "\U000f031b"),
    "csh": (59, "\ue795"),
    "cson": (185, "\ue60b"),
    "css": (39, "\ue749"),
    "csv": (113, "\U000f0219"),
    "cxx": (67, "\ue61d"),
    "dart": (25, "\ue798"),
    "db": (188, "\ue706"),
    "d": (64, "\ue7af"),
    "desktop": (60, "\uf108"),
    "diff": (59, "\ue728"),
    "doc": (25, "\U000f022c"),
    "drl": (217, "\ue28c"),
    "dropbox": (27, "\ue707"),
    "dump": (188, "\ue706"),
    "edn": (67, "\ue76a"),
    "eex": (140, "\ue62d"),
    "ejs": (185, "\ue60e"),
    "elm": (67, "\ue62c"),
    "epp": (255, "\ue631"),
    "erb": (52, "\ue60e"),
    "erl": (132, "\ue7b1"),
    "ex": (140, "\ue62d"),
    "exs": (140, "\ue62d"),
    "f#": (67, "\ue7a7"),
    "fish": (59, "\ue795"),
    "fnl": (230, "\U0001f31c"),
    "fs": (67, "\ue7a7"),
    "fsi": (67, "\ue7a7"),
    "fsscript": (67, "\ue7a7"),
    "fsx": (67, "\ue7a7"),
    "GNUmakefile": (66, "\ue779"),
    "gd": (66, "\ue615"),
    "gemspec": (52, "\ue791"),
    "gif": (140, "\ue60d"),
    "git": (202, "\ue702"),
    "glb": (215, "\uf1b2"),
    "go": (67, "\ue627"),
    "godot": (66, "\ue7a3"),
    "gql": (199, "\uf20e"),
    "graphql": (199, "\uf20e"),
    "haml": (188, "\ue60e"),
    "hbs": (208, "\ue60f"),
    "h": (140, "\uf0fd"),
    "heex": (140, "\ue62d"),
    "hh": (140, "\uf0fd"),
    "hpp": (140, "\uf0fd"),
    "hrl": (132, "\ue7b1"),
    "hs": (140, "\ue61f"),
    "htm": (166, "\ue60e"),
    "html": (202, "\ue736"),
    "hxx": (140, "\uf0fd"),
    "ico": (185, "\ue60d"),
    "import": (231, "\uf0c6"),
    "ini": (66, "\ue615"),
    "java": (167, "\ue738"),
    "jl": (133, "\ue624"),
    "jpeg": (140, "\ue60d"),
    "jpg": (140, "\ue60d"),
    "js": (185, "\ue60c"),
    "json5": (185, "\U000f0626"),
    "json": (185, "\ue60b"),
    "jsx": (67, "\ue625"),
    "ksh": (59, "\ue795"),
    "kt": (99, "\ue634"),
    "kts": (99, "\ue634"),
    "leex": (140, "\ue62d"),
    "less": (60, "\ue614"),
    "lhs": (140, "\ue61f"),
    "license": (185, "\ue60a"),
    "licence": (185, "\ue60a"),
    "lock": (250, "\uf13e"),
    "log": (255, "\U000f0331"),
    "lua": (74, "\ue620"),
    "luau": (74, "\ue620"),
    "makefile": (66, "\ue779"),
    "markdown": (67, "\ue609"),
    "Makefile": (66, "\ue779"),
    "material": (132, "\U000f0509"),
    "md": (255, "\uf48a"),
    "mdx": (67, "\uf48a"),
    "mint": (108, "\U000f032a"),
    "mjs": (221, "\ue60c"),
    "mk": (66, "\ue779"),
    "ml": (173, "\u03bb"),
    "mli": (173, "\u03bb"),
    "mo": (99, "\u221e"),
    "mustache": (173, "\ue60f"),
    "nim": (220, "\ue677"),
    "nix": (110, "\uf313"),
    "opus": (208, "\U000f0223"),
    "otf": (231, "\uf031"),
    "pck": (66, "\uf487"),
    "pdf": (124, "\U000f0226"),
    "php": (140, "\ue608"),
    "pl": (67, "\ue769"),
    "pm": (67, "\ue769"),
    "png": (140, "\ue60d"),
    "pp": (255, "\ue631"),
    "ppt": (167, "\U000f0227"),
    "prisma": (255, "\ue684"),
    "pro": (179, "\ue7a1"),
    "ps1": (69, "\U000f0a0a"),
    "psb": (67, "\ue7b8"),
    "psd1": (105, "\U000f0a0a"),
    "psd": (67, "\ue7b8"),
    "psm1": (105, "\U000f0a0a"),
    "pyc": (67, "\ue606"),
    "py": (61, "\ue606"),
    "pyd": (67, "\ue606"),
    "pyo": (67, "\ue606"),
    "query": (154, "\ue21c"),
    "rake": (52, "\ue791"),
    "rb": (52, "\ue791"),
    "r": (65, "\U000f07d4"),
    "rlib": (180, "\ue7a8"),
    "rmd": (67, "\ue609"),
    "rproj": (65, "\U000f07d4"),
    "rs": (180, "\ue7a8"),
    "rss": (215, "\ue619"),
    "sass": (204, "\ue603"),
    "sbt": (167, "\ue737"),
    "scala": (167, "\ue737"),
    "scm": (16, "\U000f0627"),
    "scss": (204, "\ue603"),
    "sh": (59, "\ue795"),
    "sig": (173, "\u03bb"),
    "slim": (166, "\ue60e"),
    "sln": (98, "\ue70c"),
    "sml": (173, "\u03bb"),
    "sol": (67, "\U000f07bb"),
    "sql": (188, "\ue706"),
    "sqlite3": (188, "\ue706"),
    "sqlite": (188, "\ue706"),
    "styl": (107, "\ue600"),
    "sublime": (98, "\ue7aa"),
    "suo": (98, "\ue70c"),
    "sv": (29, "\U000f035b"),
    "svelte": (202, "\uf260"),
    "svg": (215, "\U000f0721"),
    "svh": (29, "\U000f035b"),
    "swift": (173, "\ue755"),
    "tbc": (67, "\U000f06d3"),
    "t": (67, "\ue769"),
    "tcl": (67, "\U000f06d3"),
    "terminal": (71, "\uf489"),
    "test.js": (173, "\ue60c"),
    "tex": (58, "\U000f0669"),
    "tf": (57, "\ue2a6"),
    "tfvars": (57, "\uf15b"),
    "toml": (66, "\ue615"),
    "tres": (185, "\ue706"),
    "ts": (67, "\ue628"),
    "tscn": (140, "\U000f0381"),
    "tsx": (67, "\ue7ba"),
    "twig": (107, "\ue61c"),
    "txt": (113, "\U000f0219"),
    "vala": (5, "\ue69e"),
    "v": (29, "\U000f035b"),
    "vh": (29, "\U000f035b"),
    "vhd": (29, "\U000f035b"),
    "vhdl": (29, "\U000f035b"),
    "vim": (29, "\ue62b"),
    "vue": (107, "\U000f0844"),
    "wasm": (99, "\ue6a1"),
    "webmanifest": (221, "\ue60b"),
    "webpack": (67, "\U000f072b"),
    "webp": (140, "\ue60d"),
    "xcplayground": (173, "\ue755"),
    "xls": (23, "\U000f021b"),
    "xml": (173, "\U000f05c0"),
    "xul": (173, "\ue745"),
    "yaml": (66, "\ue615"),
    "yml": (66, "\ue615"),
    "zig": (208, "\uf0e7"),
    "zsh": (113, "\ue795"),
}

Foreground = Union[int, str]


def icon_from_ext(ext) -> Optional[tuple[int, str]]:
    """Icon and its default 8-bit colour code for a file extension, if known."""
    if ext is None:
        return None
    return _EXT_ICONS.get(ext)


def icon_from_file_type(mode: Optional[int]) -> Optional[str]:
    """Icon for a directory or symlink given its ``st_mode``; ``None`` otherwise."""
    if mode is None:
        return None
    if stat.S_ISDIR(mode):
        return _FILE_TYPE_ICONS["dir"]
    if stat.S_ISLNK(mode):
        return _FILE_TYPE_ICONS["symlink"]
    return None


def icon_from_file_name(name) -> Optional[str]:
    """Icon for a specially named file, if known."""
    return _FILE_NAME_ICONS.get(name)


def default_icon() -> tuple[int, str]:
    """The fallback icon with its colour code."""
    return _DEFAULT_ICON


def col(num: int, code: str) -> str:
    """Paint ``code`` with the fixed 8-bit colour ``num``."""
    return f"{_ESC}[38;5;{num}m{code}{_RESET}"


def _paint_bold(foreground: Foreground, icon: str) -> str:
    params = f"38;5;{foreground}" if isinstance(foreground, int) else foreground
    return f"{_ESC}[1;{params}m{icon}{_RESET}"


def _file_name(path: Path) -> str:
    return path.name or str(path)


def _extension(path) -> Optional[str]:
    name = Path(path).name
    if not name or name == "..":
        return None
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return None
    return after


def _file_mode(path: Path, link_target) -> Optional[int]:
    # A provided link target means symlinks are followed.
    try:
        if link_target is not None:
            return os.stat(path).st_mode
        return os.lstat(path).st_mode
    except OSError:
        if link_target is not None:
            try:
                return os.lstat(path).st_mode
            except OSError:
                return None
        return None


def _ext_for(path: Path, link_target) -> Optional[str]:
    if link_target is not None and os.path.islink(path):
        return _extension(link_target)
    return _extension(path)


def compute(path, link_target=None) -> str:
    """Plain icon for the entry at ``path``.

    File type takes precedence, then extension, then file name, then the default.
    For a symlink with ``link_target`` given, the target decides type and extension.
    """
    path = Path(path)

    icon = icon_from_file_type(_file_mode(path, link_target))
    if icon is not None:
        return icon

    found = icon_from_ext(_ext_for(path, link_target))
    if found is not None:
        return found[1]

    icon = icon_from_file_name(_file_name(path))
    if icon is not None:
        return icon

    return default_icon()[1]


def compute_with_color(path, link_target=None, foreground: Optional[Foreground] = None) -> str:
    """Coloured icon for the entry at ``path``; see :func:`compute`.

    Type and name icons are painted bold with ``foreground`` (an 8-bit colour
    number or an SGR parameter string) when one is given; extension and default
    icons use their own fixed colours.
    """
    path = Path(path)

    def paint(icon: str) -> str:
        return icon if foreground is None else _paint_bold(foreground, icon)

    icon = icon_from_file_type(_file_mode(path, link_target))
    if icon is not None:
        return paint(icon)

    found = icon_from_ext(_ext_for(path, link_target))
    if found is not None:
        return col(*found)

    icon = icon_from_file_name(_file_name(path))
    if icon is not None:
        return paint(icon)

    return col(*default_icon())