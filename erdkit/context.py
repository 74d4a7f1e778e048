"""Command-line definition and the run context built from it."""

from __future__ import annotations

import argparse
import os
import re
import stat
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath
from typing import Callable, Optional, Sequence

from .file_size import DiskUsage
from .options import (
    ArgParseError,
    Coloring,
    ColumnProperties,
    DirOrder,
    FileTypeFilter,
    InvalidPatternError,
    Layout,
    PatternNotProvidedError,
    SortType,
    TimeFormat,
    TimeStamp,
)
from .units import PrefixKind

VERSION = "3.1.1"

SHELLS = ("bash", "elvish", "fish", "powershell", "zsh")

Predicate = Callable[[object], bool]


def _default_threads() -> int:
    return os.cpu_count() or 3


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        raise ArgParseError(message)


def _enum_type(enum_cls):
    def convert(value: str):
        try:
            return enum_cls(value)
        except ValueError:
            choices = ", ".join(member.value for member in enum_cls)
            raise argparse.ArgumentTypeError(
                f"invalid value {value!r} (choose from {choices})"
            ) from None

    convert.__name__ = enum_cls.__name__
    return convert


def _time_stamp(value: str) -> TimeStamp:
    try:
        return TimeStamp.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """The command-line interface definition."""
    parser = _Parser(
        prog="erdtree",
        description=(
            "erdtree (erd) is a cross-platform, multi-threaded, and general purpose "
            "filesystem and disk usage utility."
        ),
    )
    add = parser.add_argument
    add("dir", nargs="?", type=Path, default=None,
        help="Directory to traverse; defaults to current working directory")
    add("-V", "--version", action="version", version=f"erdtree {VERSION}")
    add("-c", "--config", default=None,
        help="Use configuration of named table rather than the top-level table in .erdtree.toml")
    add("-C", "--color", type=_enum_type(Coloring), default=Coloring.AUTO,
        help="Mode of coloring output")
    add("-d", "--disk-usage", type=_enum_type(DiskUsage), default=DiskUsage.PHYSICAL,
        help="Print physical or logical file size")
    add("-f", "--follow", action="store_true", help="Follow symlinks")
    add("-H", "--human", action="store_true", help="Print disk usage in human-readable format")
    add("-i", "--no-ignore", action="store_true", help="Do not respect .gitignore files")
    add("-I", "--icons", action="store_true", help="Display file icons")
    add("-l", "--long", action="store_true", help="Show extended metadata and attributes")
    add("--group", action="store_true", help="Show file's groups")
    add("--ino", action="store_true", help="Show each file's ino")
    add("--nlink", action="store_true",
        help="Show the total number of hardlinks to the underlying inode")
    add("--octal", action="store_true",
        help="Show permissions in numeric octal format instead of symbolic")
    add("--time", type=_time_stamp, default=None,
        help="Which kind of timestamp to use; modified by default")
    add("--time-format", type=_enum_type(TimeFormat), default=None,
        help="Which format to use for the timestamp; default by default")
    add("-L", "--level", type=_non_negative_int, default=None, metavar="NUM",
        help="Maximum depth to display")
    add("-p", "--pattern", default=None,
        help="Regular expression (or glob if '--glob' or '--iglob' is used) used to match files")
    searching = parser.add_mutually_exclusive_group()
    searching.add_argument("--glob", action="store_true", help="Enables glob based searching")
    searching.add_argument("--iglob", action="store_true",
                           help="Enables case-insensitive glob based searching")
    add("-t", "--file-type", type=_enum_type(FileTypeFilter), default=None,
        help="Restrict regex or glob search to a particular file-type")
    add("-P", "--prune", action="store_true", help="Remove empty directories from output")
    add("-s", "--sort", type=_enum_type(SortType), default=SortType.SIZE,
        help="How to sort entries")
    add("--dir-order", type=_enum_type(DirOrder), default=DirOrder.NONE,
        help="Sort directories before or after all other file types")
    add("-T", "--threads", type=_non_negative_int, default=None,
        help="Number of threads to use")
    add("-u", "--unit", type=_enum_type(PrefixKind), default=PrefixKind.BIN,
        help="Report disk usage in binary or SI units")
    add("-x", "--one-file-system", dest="same_fs", action="store_true",
        help="Prevent traversal into directories that are on different filesystems")
    add("-y", "--layout", type=_enum_type(Layout), default=Layout.REGULAR,
        help="Which kind of layout to use when rendering the output")
    add("-.", "--hidden", dest="hidden", action="store_true", help="Show hidden files")
    add("--no-git", action="store_true",
        help="Disable traversal of .git directory when traversing hidden files")
    add("--completions", choices=SHELLS, default=None,
        help="Print completions for a given shell to stdout")
    add("--dirs-only", action="store_true", help="Only print directories")
    add("--no-config", action="store_true", help="Don't read configuration file")
    add("--no-progress", action="store_true", help="Hides the progress indicator")
    add("--suppress-size", action="store_true", help="Omit disk usage from output")
    add("--truncate", action="store_true",
        help="Truncate output to fit terminal emulator window")
    return parser


_REQUIREMENTS = (
    ("octal", "long", "--octal", "--long"),
    ("time", "long", "--time", "--long"),
    ("time_format", "long", "--time-format", "--long"),
    ("glob", "pattern", "--glob", "--pattern"),
    ("iglob", "pattern", "--iglob", "--pattern"),
    ("file_type", "pattern", "--file-type", "--pattern"),
    ("no_git", "hidden", "--no-git", "--hidden"),
)


def _check_requirements(ns: argparse.Namespace) -> None:
    for dest, needed, flag, needed_flag in _REQUIREMENTS:
        value = getattr(ns, dest)
        if value not in (None, False) and getattr(ns, needed) in (None, False):
            raise ArgParseError(f"the argument '{flag}' requires '{needed_flag}'")


def _isatty(stream) -> bool:
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError):
        return False


# --- path matching -------------------------------------------------------


class _Match(Enum):
    NONE = "none"
    IGNORE = "ignore"
    WHITELIST = "whitelist"

    def is_none(self) -> bool:
        return self is _Match.NONE

    def is_ignore(self) -> bool:
        return self is _Match.IGNORE

    def is_whitelist(self) -> bool:
        return self is _Match.WHITELIST


def _translate_glob(glob: str) -> str:
    out: list[str] = []
    pos = 0
    length = len(glob)
    while pos < length:
        ch = glob[pos]
        at_segment_start = pos == 0 or glob[pos - 1] == "/"
        if glob.startswith("**/", pos) and at_segment_start:
            out.append("(?:.*/)?")
            pos += 3
        elif glob.startswith("/**", pos) and pos + 3 == length:
            out.append("/.*")
            pos += 3
        elif glob.startswith("**", pos):
            out.append(".*")
            pos += 2
        elif ch == "*":
            out.append("[^/]*")
            pos += 1
        elif ch == "?":
            out.append("[^/]")
            pos += 1
        elif ch == "[":
            start = pos + 1
            negate = start < length and glob[start] in "!^"
            if negate:
                start += 1
            close = glob.find("]", start + 1 if start < length and glob[start] == "]" else start)
            if close == -1:
                raise InvalidPatternError(f"unclosed character class in glob: {glob!r}")
            body = "".join("-" if c == "-" else re.escape(c) for c in glob[start:close])
            out.append(f"[{'^' if negate else ''}{body}]")
            pos = close + 1
        elif ch == "\\" and pos + 1 < length:
            out.append(re.escape(glob[pos + 1]))
            pos += 2
        else:
            out.append(re.escape(ch))
            pos += 1
    return "".join(out)


@dataclass(frozen=True)
class _Glob:
    regex: "re.Pattern[str]"
    whitelist: bool
    dir_only: bool

    @classmethod
    def compile(cls, glob: str, case_insensitive: bool) -> _Glob:
        whitelist = not glob.startswith("!")
        body = glob[1:] if not whitelist else glob
        dir_only = body.endswith("/")
        body = body.rstrip("/") if dir_only else body
        anchored = body.startswith("/")
        body = body.lstrip("/") if anchored else body
        anchored = anchored or "/" in body
        pattern = _translate_glob(body)
        if not anchored and not body.startswith("**/"):
            pattern = "(?:.*/)?" + pattern
        flags = re.IGNORECASE if case_insensitive else 0
        try:
            regex = re.compile(pattern, flags)
        except re.error as exc:
            raise InvalidPatternError(str(exc)) from None
        return cls(regex, whitelist, dir_only)

    def matches(self, rel: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        return self.regex.fullmatch(rel) is not None


class _Override:
    """Globs anchored at a root that whitelist or ignore paths; the last match wins."""

    def __init__(self, root, globs: Sequence[str] = (), case_insensitive: bool = False):
        self.root = PurePath(root)
        self._globs = [
            _Glob.compile(glob, case_insensitive) for glob in globs if glob.strip()
        ]
        self._has_whitelist = any(glob.whitelist for glob in self._globs)

    def _relative(self, path) -> str:
        pure = PurePath(path)
        try:
            pure = pure.relative_to(self.root)
        except ValueError:
            pass
        rel = pure.as_posix()
        while rel.startswith("./"):
            rel = rel[2:]
        return "" if rel == "." else rel

    def matched(self, path, is_dir: bool) -> _Match:
        rel = self._relative(path)
        for glob in reversed(self._globs):
            if glob.matches(rel, is_dir):
                return _Match.WHITELIST if glob.whitelist else _Match.IGNORE
        return _Match.IGNORE if self._has_whitelist else _Match.NONE


def _components(path) -> list[str]:
    text = os.fspath(path)
    parts = list(PurePath(text).parts)
    if text == "." or text.startswith("." + os.sep) or text.startswith("./"):
        parts.insert(0, ".")
    return parts


def _ancestor_glob_match(path, override: _Override, skip: int) -> bool:
    components = list(reversed(_components(path)))[skip:]
    return any(override.matched(c, False).is_whitelist() for c in components)


def _ancestor_regex_match(path, regex: "re.Pattern[str]", skip: int) -> bool:
    components = list(reversed(_components(path)))[skip:]
    return any(regex.search(c) for c in components)


def _entry_path(entry):
    return entry.path if isinstance(entry, os.DirEntry) else entry


def _entry_mode(path, follow: bool) -> Optional[int]:
    try:
        return (os.stat(path) if follow else os.lstat(path)).st_mode
    except OSError:
        return None


def _entry_name(path) -> str:
    return PurePath(path).name or os.fspath(path)


def _type_excluded(file_type: FileTypeFilter, mode: Optional[int]) -> bool:
    if file_type is FileTypeFilter.FILE:
        return mode is None or not stat.S_ISREG(mode)
    if file_type is FileTypeFilter.LINK:
        return mode is None or not stat.S_ISLNK(mode)
    return False


def _is_dir(mode: Optional[int]) -> bool:
    return mode is not None and stat.S_ISDIR(mode)


# --- context -------------------------------------------------------------


@dataclass
class Context:
    """Settings for a run, taken from the command line."""

    directory: Optional[Path] = None
    config: Optional[str] = None
    color: Coloring = Coloring.AUTO
    disk_usage: DiskUsage = DiskUsage.PHYSICAL
    follow: bool = False
    human: bool = False
    no_ignore: bool = False
    icons: bool = False
    long: bool = False
    group: bool = False
    ino: bool = False
    nlink: bool = False
    octal: bool = False
    time_stamp: Optional[TimeStamp] = None
    time_fmt: Optional[TimeFormat] = None
    max_level: Optional[int] = None
    pattern: Optional[str] = None
    glob: bool = False
    iglob: bool = False
    file_type_filter: Optional[FileTypeFilter] = None
    prune: bool = False
    sort: SortType = SortType.SIZE
    dir_order: DirOrder = DirOrder.NONE
    threads: int = field(default_factory=_default_threads)
    unit: PrefixKind = PrefixKind.BIN
    same_fs: bool = False
    layout: Layout = Layout.REGULAR
    hidden: bool = False
    no_git: bool = False
    completions: Optional[str] = None
    dirs_only: bool = False
    no_config: bool = False
    no_progress: bool = False
    suppress_size: bool = False
    truncate: bool = False
    stdin_is_tty: bool = False
    stdout_is_tty: bool = False
    max_size_width: int = 0
    max_size_unit_width: int = 0
    max_nlink_width: int = 0
    max_ino_width: int = 0
    max_block_width: int = 0
    max_owner_width: int = 0
    max_group_width: int = 0
    window_width: Optional[int] = None

    @classmethod
    def from_argv(cls, argv: Optional[Sequence[str]] = None) -> Context:
        """Build a context from command-line arguments; raises ArgParseError."""
        args = list(sys.argv[1:] if argv is None else argv)
        ns = build_parser().parse_args(args)
        _check_requirements(ns)
        return cls(
            directory=ns.dir,
            config=ns.config,
            color=ns.color,
            disk_usage=ns.disk_usage,
            follow=ns.follow,
            human=ns.human,
            no_ignore=ns.no_ignore,
            icons=ns.icons,
            long=ns.long,
            group=ns.group,
            ino=ns.ino,
            nlink=ns.nlink,
            octal=ns.octal,
            time_stamp=ns.time,
            time_fmt=ns.time_format,
            max_level=ns.level,
            pattern=ns.pattern,
            glob=ns.glob,
            iglob=ns.iglob,
            file_type_filter=ns.file_type,
            prune=ns.prune,
            sort=ns.sort,
            dir_order=ns.dir_order,
            threads=_default_threads() if ns.threads is None else ns.threads,
            unit=ns.unit,
            same_fs=ns.same_fs,
            layout=ns.layout,
            hidden=ns.hidden,
            no_git=ns.no_git,
            completions=ns.completions,
            dirs_only=ns.dirs_only,
            no_config=ns.no_config,
            no_progress=ns.no_progress,
            suppress_size=ns.suppress_size,
            truncate=ns.truncate,
            stdin_is_tty=_isatty(sys.stdin),
            stdout_is_tty=_isatty(sys.stdout),
        )

    def no_color(self) -> bool:
        """Whether output should be plain; a set ``NO_COLOR`` decides first."""
        var = os.environ.get("NO_COLOR")
        if var is not None:
            return var != ""
        if self.color is Coloring.NONE:
            return True
        if self.color is Coloring.AUTO:
            return not self.stdout_is_tty
        return False

    def dir(self) -> Path:
        """Root directory to traverse."""
        return Path(".") if self.directory is None else Path(self.directory)

    def dir_canonical(self) -> Path:
        """Canonical root directory, or the directory as given if it cannot be resolved."""
        try:
            return self.dir().resolve(strict=True)
        except (OSError, RuntimeError):
            return self.dir()

    def level(self) -> int:
        """Maximum depth to print."""
        return sys.maxsize if self.max_level is None else self.max_level

    def time(self) -> TimeStamp:
        """Timestamp kind for long view; modified by default."""
        return self.time_stamp or TimeStamp.MOD

    def time_format(self) -> TimeFormat:
        """Timestamp format for long view."""
        return self.time_fmt or TimeFormat.DEFAULT

    def file_type(self) -> FileTypeFilter:
        """File type searches are restricted to; regular files by default."""
        return self.file_type_filter or FileTypeFilter.FILE

    def regex_predicate(self) -> Predicate:
        """Predicate over paths matching ``pattern`` as a regular expression.

        Directories always pass unless searching for directories, since matched
        files must be bridged back to the root.
        """
        if self.pattern is None:
            raise PatternNotProvidedError()
        try:
            regex = re.compile(self.pattern)
        except re.error as exc:
            raise InvalidPatternError(str(exc)) from None

        file_type = self.file_type()
        follow = self.follow

        if file_type is FileTypeFilter.DIR:
            def dir_predicate(entry) -> bool:
                path = _entry_path(entry)
                skip = 0 if _is_dir(_entry_mode(path, follow)) else 1
                return _ancestor_regex_match(path, regex, skip)

            return dir_predicate

        def predicate(entry) -> bool:
            path = _entry_path(entry)
            mode = _entry_mode(path, follow)
            if _is_dir(mode):
                return True
            if _type_excluded(file_type, mode):
                return False
            return regex.search(_entry_name(path)) is not None

        return predicate

    def glob_predicate(self) -> Predicate:
        """Predicate over paths matching ``pattern`` as a glob; a leading ``!`` negates."""
        negated = False
        globs: list[str] = []
        if self.pattern is not None:
            trimmed = self.pattern.lstrip()
            negated = trimmed.startswith("!")
            globs.append(trimmed.lstrip("!") if negated else trimmed)
        override = _Override(self.dir(), globs, case_insensitive=self.iglob)

        file_type = self.file_type()
        follow = self.follow

        if file_type is FileTypeFilter.DIR:
            def dir_predicate(entry) -> bool:
                path = _entry_path(entry)
                skip = 0 if _is_dir(_entry_mode(path, follow)) else 1
                matched = _ancestor_glob_match(path, override, skip)
                return not matched if negated else matched

            return dir_predicate

        def predicate(entry) -> bool:
            path = _entry_path(entry)
            mode = _entry_mode(path, follow)
            if _is_dir(mode):
                return True
            if _type_excluded(file_type, mode):
                return False
            matched = override.matched(path, False).is_whitelist()
            return not matched if negated else matched

        return predicate

    def no_git_override(self) -> _Override:
        """Override that ignores ``.git`` when ``no_git`` is set."""
        return _Override(self.dir(), ["!.git"] if self.no_git else [])

    def update_column_properties(self, col_props: ColumnProperties) -> None:
        """Copy column widths from ``col_props``."""
        self.max_size_width = col_props.max_size_width
        self.max_size_unit_width = col_props.max_size_unit_width
        self.max_owner_width = col_props.max_owner_width
        self.max_group_width = col_props.max_group_width
        self.max_nlink_width = col_props.max_nlink_width
        self.max_block_width = col_props.max_block_width
        self.max_ino_width = col_props.max_ino_width

    def byte_metric(self) -> bool:
        """Whether disk usage is reported in bytes."""
        return self.disk_usage in (DiskUsage.LOGICAL, DiskUsage.PHYSICAL)

    @staticmethod
    def num_threads() -> int:
        """Default number of threads for disk reads and parallel work."""
        return _default_threads()