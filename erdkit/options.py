"""Option values accepted on the command line, column widths and context errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .units import PrefixKind


class Coloring(Enum):
    """How the output should be colourised; ``AUTO`` by default."""

    NONE = "none"
    AUTO = "auto"
    FORCE = "force"


class DirOrder(Enum):
    """How directories are ordered relative to other files; ``NONE`` by default."""

    NONE = "none"
    FIRST = "first"
    LAST = "last"


class FileTypeFilter(Enum):
    """File types a search can be restricted to; ``FILE`` by default."""

    FILE = "file"
    DIR = "dir"
    LINK = "link"


class Layout(Enum):
    """Layout used to render the tree; ``REGULAR`` by default."""

    REGULAR = "regular"
    INVERTED = "inverted"
    FLAT = "flat"
    IFLAT = "iflat"


class SortType(Enum):
    """Order in which entries are printed; ``SIZE`` by default."""

    NAME = "name"
    RNAME = "rname"
    SIZE = "size"
    RSIZE = "rsize"
    ACCESS = "access"
    RACCESS = "raccess"
    CREATE = "create"
    RCREATE = "rcreate"
    MOD = "mod"
    RMOD = "rmod"


class TimeStamp(Enum):
    """Which timestamp long view shows; ``MOD`` by default."""

    CREATE = "create"
    ACCESS = "access"
    MOD = "mod"

    @classmethod
    def parse(cls, value: str) -> TimeStamp:
        """Parse a timestamp name or one of its aliases ``ctime``, ``atime``, ``mtime``."""
        name = _TIME_STAMP_ALIASES.get(value, value)
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"invalid timestamp kind: {value!r}") from None


_TIME_STAMP_ALIASES = {
    "ctime": "create",
    "atime": "access",
    "mtime": "mod",
}


class TimeFormat(Enum):
    """How timestamps are formatted; ``DEFAULT`` by default."""

    ISO = "iso"
    ISO_STRICT = "iso-strict"
    SHORT = "short"
    DEFAULT = "default"


@dataclass
class ColumnProperties:
    """Maximum column widths, in terminal columns, for attributes of each node."""

    max_size_width: int = 0
    max_size_unit_width: int = 1
    max_nlink_width: int = 0
    max_ino_width: int = 0
    max_block_width: int = 0
    max_owner_width: int = 0
    max_group_width: int = 0

    @classmethod
    def from_context(cls, ctx) -> ColumnProperties:
        """Initial widths for a context exposing ``unit`` and ``human``."""
        if ctx.human and ctx.unit is PrefixKind.BIN:
            unit_width = 3
        elif ctx.human and ctx.unit is PrefixKind.SI:
            unit_width = 2
        else:
            unit_width = 1
        return cls(max_size_unit_width=unit_width)


class ContextError(Exception):
    """Base class of errors raised while setting up a run."""


class ArgParseError(ContextError):
    """Command-line arguments could not be parsed."""


class ConfigParseError(ContextError):
    """A configuration file was found but its arguments could not be parsed."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"A configuration file was found but failed to parse: {cause}")
        self.cause = cause


class EmptyGlobError(ContextError):
    """A glob search was requested without a glob."""

    def __init__(self, message: str = "No glob was provided") -> None:
        super().__init__(message)


class InvalidPatternError(ContextError):
    """A regular expression or glob could not be compiled."""


class PatternNotProvidedError(ContextError):
    """A search was requested without ``--pattern``."""

    def __init__(self, message: str = "Missing '--pattern' argument") -> None:
        super().__init__(message)


class NoTomlError(ContextError):
    """``--config`` was given but no TOML configuration exists."""

    def __init__(
        self,
        message: str = "'--config' was specified but a `.erdtree.toml` file could not be found",
    ) -> None:
        super().__init__(message)


class RcError(ContextError):
    """``--config`` was given while an rc configuration file is in use."""

    def __init__(
        self,
        message: str = (
            "Please migrate from `erdtreerc` to `.erdtree.toml` to make use of `--config`"
        ),
    ) -> None:
        super().__init__(message)