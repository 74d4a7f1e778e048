"""The different metrics by which the size of a file can be measured."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .units import BinPrefix, PrefixKind, SiPrefix

BLOCK_SIZE_BYTES = 512

# Characters with the Unicode White_Space property.
_WHITESPACE = re.compile(
    "[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


class DiskUsage(Enum):
    """How file size is measured; physical by default."""

    LOGICAL = "logical"
    PHYSICAL = "physical"
    LINE = "line"
    WORD = "word"
    BLOCK = "block"


class MetricKind(Enum):
    """Whether bytes are counted as file contents or as space used on disk."""

    LOGICAL = "logical"
    PHYSICAL = "physical"


@dataclass
class ByteMetric:
    """File size in bytes, rendered with binary or SI prefixes.

    The rendered text is cached the first time it is produced.
    """

    value: int
    human_readable: bool
    kind: MetricKind
    prefix_kind: PrefixKind
    _cached_display: str = field(default="", init=False, repr=False, compare=False)

    @classmethod
    def logical(cls, stat_result, prefix_kind: PrefixKind, human_readable: bool) -> ByteMetric:
        """Metric holding the number of bytes a file contains."""
        return cls(stat_result.st_size, human_readable, MetricKind.LOGICAL, prefix_kind)

    @classmethod
    def physical(
        cls, path, stat_result, prefix_kind: PrefixKind, human_readable: bool
    ) -> ByteMetric:
        """Metric holding the number of bytes used to store a file on disk.

        Falls back to the logical size where the platform reports no block count.
        ``path`` identifies the file the stat result belongs to.
        """
        blocks = getattr(stat_result, "st_blocks", None)
        value = stat_result.st_size if blocks is None else blocks * BLOCK_SIZE_BYTES
        return cls(value, human_readable, MetricKind.PHYSICAL, prefix_kind)

    @classmethod
    def empty_logical(cls, human_readable: bool, prefix_kind: PrefixKind) -> ByteMetric:
        """Zero-valued logical metric."""
        return cls(0, human_readable, MetricKind.LOGICAL, prefix_kind)

    @classmethod
    def empty_physical(cls, human_readable: bool, prefix_kind: PrefixKind) -> ByteMetric:
        """Zero-valued physical metric."""
        return cls(0, human_readable, MetricKind.PHYSICAL, prefix_kind)

    @property
    def cached_display(self) -> str:
        """The cached rendering, empty until the metric has been rendered."""
        return self._cached_display

    def __str__(self) -> str:
        if self._cached_display:
            return self._cached_display

        prefix_cls = SiPrefix if self.prefix_kind is PrefixKind.SI else BinPrefix

        if self.human_readable:
            unit = prefix_cls.from_value(self.value)
            if unit is prefix_cls.BASE:
                display = f"{self.value} {unit}"
            else:
                display = f"{self.value / unit.base_value():.1f} {unit}"
        else:
            display = f"{self.value} {prefix_cls.BASE}"

        self._cached_display = display
        return display


def _read_utf8(path) -> Optional[str]:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return None


@dataclass
class LineCountMetric:
    """File size measured in lines."""

    value: int = 0

    @classmethod
    def from_path(cls, path) -> Optional[LineCountMetric]:
        """Count the lines of a UTF-8 file; ``None`` if it cannot be read as UTF-8."""
        data = _read_utf8(path)
        if data is None:
            return None
        lines = data.count("\n") + (1 if data and not data.endswith("\n") else 0)
        return cls(lines)

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class WordCountMetric:
    """File size measured in whitespace-delimited words."""

    value: int = 0

    @classmethod
    def from_path(cls, path) -> Optional[WordCountMetric]:
        """Count the words of a UTF-8 file; ``None`` if it cannot be read as UTF-8."""
        data = _read_utf8(path)
        if data is None:
            return None
        return cls(sum(1 for word in _WHITESPACE.split(data) if word))

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BlockMetric:
    """File size measured in allocated blocks."""

    value: int = 0

    @classmethod
    def from_stat(cls, stat_result) -> BlockMetric:
        """Block count taken from a stat result."""
        return cls(stat_result.st_blocks)

    def __str__(self) -> str:
        return str(self.value)


Metric = Union[ByteMetric, LineCountMetric, WordCountMetric, BlockMetric]


@dataclass
class FileSize:
    """A file size under one of the available metrics."""

    metric: Metric

    @classmethod
    def for_usage(
        cls, disk_usage: DiskUsage, human: bool, prefix_kind: PrefixKind
    ) -> FileSize:
        """Zero-valued size for the metric that ``disk_usage`` selects."""
        if disk_usage is DiskUsage.LOGICAL:
            return cls(ByteMetric.empty_logical(human, prefix_kind))
        if disk_usage is DiskUsage.PHYSICAL:
            return cls(ByteMetric.empty_physical(human, prefix_kind))
        if disk_usage is DiskUsage.LINE:
            return cls(LineCountMetric())
        if disk_usage is DiskUsage.WORD:
            return cls(WordCountMetric())
        return cls(BlockMetric())

    @property
    def value(self) -> int:
        """The raw numeric size."""
        return self.metric.value

    def __iadd__(self, other: FileSize) -> FileSize:
        self.metric.value += other.value
        return self

    def __str__(self) -> str:
        return str(self.metric)


__all__ = [
    "BLOCK_SIZE_BYTES",
    "BlockMetric",
    "ByteMetric",
    "DiskUsage",
    "FileSize",
    "LineCountMetric",
    "MetricKind",
    "WordCountMetric",
    "os",
]