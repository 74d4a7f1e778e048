"""Unix file permissions in symbolic and octal notation."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_S_IFMT = 0o170000


class PermissionsError(Exception):
    """Raised when a mode cannot be interpreted as file permissions."""

    def __init__(self, message: str = "Encountered an unknown file type.") -> None:
        super().__init__(message)


class FileType(Enum):
    """Unix file types, valued by their ``ls -l`` identifier."""

    DIRECTORY = "d"
    FILE = "."
    SYMLINK = "l"
    FIFO = "p"
    SOCKET = "s"
    CHAR_DEVICE = "c"
    BLOCK_DEVICE = "b"

    def identifier(self) -> str:
        """The character ``ls -l`` shows for this file type."""
        return self.value

    @classmethod
    def from_mode(cls, mode: int) -> FileType:
        """File type encoded in the ``st_mode`` bits; raises on an unknown type."""
        try:
            return _FILE_TYPES[mode & _S_IFMT]
        except KeyError:
            raise PermissionsError() from None


_FILE_TYPES = {
    stat.S_IFIFO: FileType.FIFO,
    stat.S_IFCHR: FileType.CHAR_DEVICE,
    stat.S_IFDIR: FileType.DIRECTORY,
    stat.S_IFBLK: FileType.BLOCK_DEVICE,
    stat.S_IFREG: FileType.FILE,
    stat.S_IFLNK: FileType.SYMLINK,
    stat.S_IFSOCK: FileType.SOCKET,
}


class PermissionClass(Enum):
    """The class a permission triad applies to."""

    USER = "user"
    GROUP = "group"
    OTHER = "other"


class Attribute(Enum):
    """Special attributes: setuid, setgid and the sticky bit."""

    SUID = "suid"
    SGID = "sgid"
    STICKY = "sticky"


class PermissionsTriad(Enum):
    """Read, write and execute permissions, valued by their ``(r, w, x)`` flags."""

    READ = (True, False, False)
    WRITE = (False, True, False)
    EXECUTE = (False, False, True)
    READ_WRITE = (True, True, False)
    READ_EXECUTE = (True, False, True)
    WRITE_EXECUTE = (False, True, True)
    READ_WRITE_EXECUTE = (True, True, True)
    NONE = (False, False, False)

    @property
    def readable(self) -> bool:
        return self.value[0]

    @property
    def writable(self) -> bool:
        return self.value[1]

    @property
    def executable(self) -> bool:
        return self.value[2]


def _enabled(st_mode: int, mask: int) -> bool:
    return st_mode & mask == mask


@dataclass(frozen=True)
class Permissions:
    """The permissions of one class: user, group or other."""

    permission_class: PermissionClass
    attr: Optional[Attribute]
    triad: PermissionsTriad

    @classmethod
    def _from_bits(
        cls,
        st_mode: int,
        permission_class: PermissionClass,
        masks: tuple[int, int, int],
        special: int,
        attribute: Attribute,
    ) -> Permissions:
        triad = PermissionsTriad(tuple(_enabled(st_mode, mask) for mask in masks))
        attr = attribute if _enabled(st_mode, special) else None
        return cls(permission_class, attr, triad)

    @classmethod
    def user_permissions_from(cls, st_mode: int) -> Permissions:
        """User permissions, with the setuid bit as attribute."""
        return cls._from_bits(
            st_mode,
            PermissionClass.USER,
            (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR),
            stat.S_ISUID,
            Attribute.SUID,
        )

    @classmethod
    def group_permissions_from(cls, st_mode: int) -> Permissions:
        """Group permissions, with the setgid bit as attribute."""
        return cls._from_bits(
            st_mode,
            PermissionClass.GROUP,
            (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP),
            stat.S_ISGID,
            Attribute.SGID,
        )

    @classmethod
    def other_permissions_from(cls, st_mode: int) -> Permissions:
        """Other permissions, with the sticky bit as attribute."""
        return cls._from_bits(
            st_mode,
            PermissionClass.OTHER,
            (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH),
            stat.S_ISVTX,
            Attribute.STICKY,
        )

    def attr_is_sticky(self) -> bool:
        """Whether the sticky bit is the attribute set on this class."""
        return self.attr is Attribute.STICKY

    def __str__(self) -> str:
        triad = self.triad
        read = "r" if triad.readable else "-"
        write = "w" if triad.writable else "-"
        if self.permission_class is PermissionClass.OTHER and self.attr_is_sticky():
            execute = "t" if triad.executable else "T"
        elif self.attr is not None:
            execute = "s" if triad.executable else "S"
        else:
            execute = "x" if triad.executable else "-"
        return f"{read}{write}{execute}"


@dataclass(frozen=True)
class FileMode:
    """File type and permissions decoded from ``st_mode``.

    ``str()`` gives symbolic notation; ``format(mode, "o")`` gives octal.
    """

    st_mode: int
    file_type: FileType
    user_permissions: Permissions
    group_permissions: Permissions
    other_permissions: Permissions

    @classmethod
    def from_mode(cls, st_mode: int) -> FileMode:
        """Decode ``st_mode``; raises :class:`PermissionsError` on an unknown file type."""
        return cls(
            st_mode,
            FileType.from_mode(st_mode),
            Permissions.user_permissions_from(st_mode),
            Permissions.group_permissions_from(st_mode),
            Permissions.other_permissions_from(st_mode),
        )

    def with_xattrs(self) -> str:
        """Symbolic notation marked as having extended attributes."""
        return f"{self}@"

    def octal(self) -> str:
        """Permission bits, including special attributes, in octal."""
        return format(self.st_mode & ~_S_IFMT, "o")

    def __str__(self) -> str:
        return (
            f"{self.file_type.identifier()}{self.user_permissions}"
            f"{self.group_permissions}{self.other_permissions}"
        )

    def __format__(self, spec: str) -> str:
        if spec == "o":
            return self.octal()
        return format(str(self), spec)


def mode_symbolic_notation(mode: int) -> FileMode:
    """Decode a file mode so it can be shown in symbolic notation."""
    return FileMode.from_mode(mode)