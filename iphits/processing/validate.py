# iphits/processing/validate.py

from __future__ import annotations
from typing import Iterable

from iphits.errors import LogFormatError
from iphits.models import LogRecord
from iphits.utils.logging import get_logger
from iphits.utils.timestamps import parse_log_timestamp

log = get_logger(__name__)


def is_valid_line(line: str) -> bool:
    """
    A line is valid when it splits on single spaces into exactly three
    fields and fields 2 and 3 form a ``yyyy-MM-dd HH:mm:ss`` timestamp.

    The first field is not checked; it is only read as an address later.
    """
    parts = line.split(" ")
    if len(parts) != 3:
        return False
    return parse_log_timestamp(f"{parts[1]} {parts[2]}") is not None


def validate_lines(lines: Iterable[str]) -> list[LogRecord]:
    """
    Check every line and build records.

    Raises:
        LogFormatError: on the first invalid line; later lines are not
            looked at.
    """
    records = []
    for line in lines:
        if not is_valid_line(line):
            raise LogFormatError(f"Invalid log line format: {line}")
        records.append(LogRecord.from_line(line))
    log.debug("Validated %d line(s)", len(records))
    return records
