"""Binary and SI unit prefixes used to report disk usage."""

from __future__ import annotations

import math
from enum import Enum


class PrefixKind(Enum):
    """Whether disk usage is reported with binary or SI prefixes."""

    BIN = "bin"
    SI = "si"


def _log_or_neg_inf(func, value: int) -> float:
    return func(value) if value > 0 else -math.inf


class BinPrefix(Enum):
    """Binary prefixes."""

    BASE = "B"
    KIBI = "KiB"
    MEBI = "MiB"
    GIBI = "GiB"
    TEBI = "TiB"

    def as_str(self) -> str:
        """Human readable representation of the prefix."""
        return self.value

    def base_value(self) -> int:
        """Number of bytes one unit of this prefix represents."""
        return _BIN_BASES[self]

    @classmethod
    def from_value(cls, value: int) -> BinPrefix:
        """Closest human-readable prefix for ``value``."""
        log = _log_or_neg_inf(math.log2, value)
        for member, limit in zip(cls, (10.0, 20.0, 30.0, 40.0)):
            if log < limit:
                return member
        return cls.TEBI

    def __str__(self) -> str:
        return self.as_str()


class SiPrefix(Enum):
    """SI prefixes."""

    BASE = "B"
    KILO = "KB"
    MEGA = "MB"
    GIGA = "GB"
    TERA = "TB"

    def as_str(self) -> str:
        """Human readable representation of the prefix."""
        return self.value

    def base_value(self) -> int:
        """Number of bytes one unit of this prefix represents."""
        return _SI_BASES[self]

    @classmethod
    def from_value(cls, value: int) -> SiPrefix:
        """Closest human-readable prefix for ``value``."""
        log = _log_or_neg_inf(math.log10, value)
        for member, limit in zip(cls, (3.0, 6.0, 9.0, 12.0)):
            if log < limit:
                return member
        return cls.TERA

    def __str__(self) -> str:
        return self.as_str()


_BIN_BASES = {
    BinPrefix.BASE: 1,
    BinPrefix.KIBI: 2**10,
    BinPrefix.MEBI: 2**20,
    BinPrefix.GIBI: 2**30,
    BinPrefix.TEBI: 2**40,
}

_SI_BASES = {
    SiPrefix.BASE: 1,
    SiPrefix.KILO: 10**3,
    SiPrefix.MEGA: 10**6,
    SiPrefix.GIGA: 10**9,
    SiPrefix.TERA: 10**12,
}