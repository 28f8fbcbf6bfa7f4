# iphits/utils/timestamps.py

from __future__ import annotations
from datetime import datetime
from typing import Optional
import re

# strptime alone accepts unpadded fields ("2024-1-5"), so the shape is
# pinned by regex first and the calendar checked by strptime second.
LOG_TIMESTAMP_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"
)
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

DATE_BOUND_PATTERN = re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4}")
DATE_BOUND_FORMAT = "%d.%m.%Y"


def _parse_strict(value: str, pattern: re.Pattern, fmt: str) -> Optional[datetime]:
    if not pattern.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        return None


def parse_log_timestamp(value: str) -> Optional[datetime]:
    """
    Parse a log timestamp of the exact form ``yyyy-MM-dd HH:mm:ss``.

    Returns:
        The datetime, or None if the value is malformed or not a real
        calendar date/time.
    """
    return _parse_strict(value, LOG_TIMESTAMP_PATTERN, LOG_TIMESTAMP_FORMAT)


def parse_date_bound(value: str) -> Optional[datetime]:
    """
    Parse a ``dd.MM.yyyy`` date into a datetime at midnight, or None.
    """
    return _parse_strict(value, DATE_BOUND_PATTERN, DATE_BOUND_FORMAT)
