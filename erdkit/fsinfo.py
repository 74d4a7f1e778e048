"""Filesystem queries: inodes, symlink targets, owners and extended attributes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

try:
    import grp
    import pwd
except ImportError:  # not available on every platform
    grp = None
    pwd = None


class InodeError(Exception):
    """Raised when a stat result lacks what is needed to identify an inode."""

    def __init__(self, message: str = "Insufficient information to compute inode") -> None:
        super().__init__(message)


class UserGroupError(Exception):
    """Raised when the owner or group of a file cannot be resolved."""


@dataclass(frozen=True)
class Inode:
    """A file's underlying inode."""

    ino: int
    dev: int
    nlink: int

    @classmethod
    def from_stat(cls, stat_result) -> Inode:
        """Inode identified by a stat result."""
        try:
            return cls(stat_result.st_ino, stat_result.st_dev, stat_result.st_nlink)
        except AttributeError:
            raise InodeError() from None


def symlink_target(path) -> Optional[Path]:
    """Target of the symlink at ``path``; ``None`` if it is not a readable symlink."""
    try:
        if not os.path.islink(path):
            return None
        return Path(os.readlink(path))
    except OSError:
        return None


def _user_name(uid: int) -> str:
    if pwd is None:
        raise UserGroupError("Invalid user")
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        raise UserGroupError("Invalid user") from None


def _group_name(gid: int) -> str:
    if grp is None:
        raise UserGroupError("Invalid group")
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        raise UserGroupError("Invalid group") from None


def try_get_owner(stat_result) -> str:
    """Name of the user owning the file described by ``stat_result``."""
    return _user_name(stat_result.st_uid)


def try_get_owner_and_group(stat_result) -> tuple[str, str]:
    """Names of the owning user and group of the file described by ``stat_result``."""
    return _user_name(stat_result.st_uid), _group_name(stat_result.st_gid)


def has_xattrs(path) -> bool:
    """Whether the file at ``path`` (following symlinks) has extended attributes."""
    listxattr = getattr(os, "listxattr", None)
    if listxattr is None:
        return False
    try:
        return len(listxattr(path, follow_symlinks=True)) > 0
    except OSError:
        return False