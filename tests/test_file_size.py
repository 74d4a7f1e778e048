import os
from types import SimpleNamespace

import pytest

from erdkit.file_size import (
    BLOCK_SIZE_BYTES,
    BlockMetric,
    ByteMetric,
    DiskUsage,
    FileSize,
    LineCountMetric,
    MetricKind,
    WordCountMetric,
)
from erdkit.units import PrefixKind


@pytest.mark.parametrize(
    "value, human, prefix_kind, expected",
    [
        (100, False, PrefixKind.BIN, "100 B"),
        (1000, True, PrefixKind.SI, "1.0 KB"),
        (1000, True, PrefixKind.BIN, "1000 B"),
        (1024, True, PrefixKind.BIN, "1.0 KiB"),
        (2**20, True, PrefixKind.BIN, "1.0 MiB"),
        (123_454, False, PrefixKind.BIN, "123454 B"),
    ],
)
def test_byte_metric_display(value, human, prefix_kind, expected):
    metric = ByteMetric(value, human, MetricKind.LOGICAL, prefix_kind)
    assert str(metric) == expected


def test_byte_metric_display_is_cached():
    metric = ByteMetric(100, False, MetricKind.LOGICAL, PrefixKind.BIN)
    assert metric.cached_display == ""
    first = str(metric)
    metric.value = 5000
    assert str(metric) == first
    assert metric.cached_display == "100 B"


def test_byte_metric_logical_from_stat(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"x" * 123)
    metric = ByteMetric.logical(os.stat(path), PrefixKind.BIN, False)
    assert metric.value == 123
    assert metric.kind is MetricKind.LOGICAL
    assert str(metric) == "123 B"


def test_byte_metric_physical_uses_blocks():
    stat = SimpleNamespace(st_size=100, st_blocks=1)
    metric = ByteMetric.physical("f", stat, PrefixKind.BIN, False)
    assert metric.value == BLOCK_SIZE_BYTES
    assert metric.kind is MetricKind.PHYSICAL


def test_byte_metric_physical_falls_back_to_length():
    stat = SimpleNamespace(st_size=100)
    metric = ByteMetric.physical("f", stat, PrefixKind.SI, False)
    assert metric.value == 100


def test_empty_metrics():
    logical = ByteMetric.empty_logical(True, PrefixKind.SI)
    physical = ByteMetric.empty_physical(False, PrefixKind.BIN)
    assert (logical.value, logical.kind) == (0, MetricKind.LOGICAL)
    assert (physical.value, physical.kind) == (0, MetricKind.PHYSICAL)
    assert str(physical) == "0 B"


def test_line_count(tmp_path):
    path = tmp_path / "text.txt"
    path.write_text("one two\nthree\nfour five six\n", encoding="utf-8")
    metric = LineCountMetric.from_path(path)
    assert metric.value == 3
    assert str(metric) == "3"


def test_line_count_without_trailing_newline(tmp_path):
    path = tmp_path / "text.txt"
    path.write_bytes(b"a\r\nb")
    assert LineCountMetric.from_path(path).value == 2


def test_line_count_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert LineCountMetric.from_path(path).value == 0


def test_word_count(tmp_path):
    path = tmp_path / "text.txt"
    path.write_text("one two\nthree\n\tfour  five six\n", encoding="utf-8")
    metric = WordCountMetric.from_path(path)
    assert metric.value == 6
    assert str(metric) == "6"


def test_word_count_unicode_whitespace(tmp_path):
    path = tmp_path / "text.txt"
    path.write_text("alpha\u3000beta\u00a0gamma", encoding="utf-8")
    assert WordCountMetric.from_path(path).value == 3


@pytest.mark.parametrize("metric_cls", [LineCountMetric, WordCountMetric])
def test_non_utf8_returns_none(tmp_path, metric_cls):
    path = tmp_path / "image.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0\x00\x10")
    assert metric_cls.from_path(path) is None


@pytest.mark.parametrize("metric_cls", [LineCountMetric, WordCountMetric])
def test_missing_file_returns_none(tmp_path, metric_cls):
    assert metric_cls.from_path(tmp_path / "missing.txt") is None


def test_block_metric_from_stat():
    metric = BlockMetric.from_stat(SimpleNamespace(st_blocks=8))
    assert metric.value == 8
    assert str(metric) == "8"


@pytest.mark.parametrize(
    "usage, metric_cls",
    [
        (DiskUsage.LOGICAL, ByteMetric),
        (DiskUsage.PHYSICAL, ByteMetric),
        (DiskUsage.LINE, LineCountMetric),
        (DiskUsage.WORD, WordCountMetric),
        (DiskUsage.BLOCK, BlockMetric),
    ],
)
def test_for_usage_selects_metric(usage, metric_cls):
    size = FileSize.for_usage(usage, False, PrefixKind.BIN)
    assert isinstance(size.metric, metric_cls)
    assert size.value == 0


def test_for_usage_byte_kinds():
    assert FileSize.for_usage(DiskUsage.LOGICAL, True, PrefixKind.SI).metric.kind is MetricKind.LOGICAL
    assert FileSize.for_usage(DiskUsage.PHYSICAL, True, PrefixKind.SI).metric.kind is MetricKind.PHYSICAL


def test_file_size_add_assign():
    total = FileSize.for_usage(DiskUsage.LINE, False, PrefixKind.BIN)
    total += FileSize(LineCountMetric(3))
    total += FileSize(LineCountMetric(4))
    assert total.value == 7
    assert str(total) == "7"


def test_file_size_display_delegates_to_metric():
    size = FileSize(ByteMetric(1024, True, MetricKind.LOGICAL, PrefixKind.BIN))
    assert str(size) == "1.0 KiB"


def test_disk_usage_names():
    assert DiskUsage("physical") is DiskUsage.PHYSICAL
    with pytest.raises(ValueError):
        DiskUsage("bytes")