# iphits/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from iphits.errors import MissingParameterError

FILE_LOG = "file-log"
FILE_OUTPUT = "file-output"
TIME_START = "time-start"
TIME_END = "time-end"
ADDRESS_START = "address-start"
ADDRESS_MASK = "address-mask"
CONFIG_FILE = "config-file"

REQUIRED_KEYS = (FILE_LOG, FILE_OUTPUT, TIME_START, TIME_END)


@dataclass(frozen=True)
class ParameterSet:
    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def __getitem__(self, key: str) -> str:
        return self.values[key]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def require(self, *keys: str) -> None:
        missing = [k for k in keys if k not in self.values]
        if missing:
            raise MissingParameterError(missing)

    def as_dict(self) -> dict[str, str]:
        return dict(self.values)


@dataclass(frozen=True)
class LogRecord:
    address: str            # field 1, verbatim; not checked as an IP
    date: str               # "2024-01-15"
    time: str               # "10:00:00"
    line: str               # the raw line, kept for diagnostics

    @classmethod
    def from_line(cls, line: str) -> "LogRecord":
        address, date, time = line.split(" ")
        return cls(address=address, date=date, time=time, line=line)

    @property
    def timestamp_text(self) -> str:
        return f"{self.date} {self.time}"


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AddressRange:
    network: bytes          # 4 bytes
    mask: bytes             # 4 bytes, need not be contiguous

    def matches(self, address: bytes) -> bool:
        return all(
            (a & m) == (n & m)
            for a, n, m in zip(address, self.network, self.mask)
        )


@dataclass(frozen=True)
class FrequencyTable:
    """Address -> hit count, in first-seen order."""
    entries: tuple[tuple[str, int], ...] = ()

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def as_dict(self) -> dict[str, int]:
        return dict(self.entries)

    def lines(self) -> Iterator[str]:
        for address, count in self.entries:
            yield f"{address}: {count}"
