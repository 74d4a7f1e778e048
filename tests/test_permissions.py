import os
import stat

import pytest

from erdkit.permissions import (
    Attribute,
    FileMode,
    FileType,
    Permissions,
    PermissionsError,
    PermissionsTriad,
    mode_symbolic_notation,
)


def test_symbolic_notation():
    file_mode = mode_symbolic_notation(0o100644)

    assert file_mode.file_type == FileType.FILE
    assert file_mode.user_permissions.triad == PermissionsTriad.READ_WRITE
    assert file_mode.group_permissions.triad == PermissionsTriad.READ
    assert file_mode.other_permissions.triad == PermissionsTriad.READ

    assert str(file_mode) == ".rw-r--r--"
    assert f"{file_mode:o}" == "644"


def test_symbolic_notation_of_real_file(tmp_path):
    path = tmp_path / "yogsothoth.hpl"
    path.write_text("")
    os.chmod(path, 0o644)

    file_mode = mode_symbolic_notation(os.stat(path).st_mode)
    assert file_mode.file_type == FileType.FILE
    assert str(file_mode) == ".rw-r--r--"
    assert file_mode.octal() == "644"


@pytest.mark.parametrize(
    "mode, symbolic, octal",
    [
        (0o101644, ".rw-r--r-T", "1644"),
        (0o102644, ".rw-r-Sr--", "2644"),
        (0o104644, ".rwSr--r--", "4644"),
        (0o107644, ".rwSr-Sr-T", "7644"),
        (0o107777, ".rwsrwsrwt", "7777"),
    ],
)
def test_symbolic_notation_special_attr(mode, symbolic, octal):
    file_mode = mode_symbolic_notation(mode)
    assert str(file_mode) == symbolic
    assert f"{file_mode:o}" == octal


def test_unknown_file_type_raises():
    with pytest.raises(PermissionsError, match="unknown file type"):
        FileMode.from_mode(0o644)


@pytest.mark.parametrize(
    "fmt, expected",
    [
        (stat.S_IFDIR, "d"),
        (stat.S_IFREG, "."),
        (stat.S_IFLNK, "l"),
        (stat.S_IFIFO, "p"),
        (stat.S_IFSOCK, "s"),
        (stat.S_IFCHR, "c"),
        (stat.S_IFBLK, "b"),
    ],
)
def test_file_type_identifier(fmt, expected):
    assert FileType.from_mode(fmt | 0o755).identifier() == expected


def test_sticky_detection():
    other = Permissions.other_permissions_from(0o41777)
    assert other.attr_is_sticky()
    assert other.attr == Attribute.STICKY
    assert not Permissions.user_permissions_from(0o41777).attr_is_sticky()


def test_directory_with_xattrs():
    file_mode = FileMode.from_mode(0o40755)
    assert str(file_mode) == "drwxr-xr-x"
    assert file_mode.with_xattrs() == "drwxr-xr-x@"


def test_no_permissions():
    file_mode = FileMode.from_mode(0o100000)
    assert str(file_mode) == ".---------"
    assert file_mode.user_permissions.triad == PermissionsTriad.NONE
    assert file_mode.octal() == "0"