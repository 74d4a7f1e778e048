"""Building blocks for a filesystem and disk usage tree viewer: size metrics, permissions, icons, ANSI truncation, rc configuration and command-line context."""

__version__ = "3.1.1"

__all__ = [
    "ansi",
    "units",
    "file_size",
    "permissions",
    "fsinfo",
    "icons",
    "options",
    "config",
    "context",
]