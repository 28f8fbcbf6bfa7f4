# iphits/processing/time_window.py

from __future__ import annotations
from datetime import datetime

import pandas as pd

from iphits.errors import LogFormatError
from iphits.models import TIME_END, TIME_START, TimeWindow
from iphits.utils.logging import get_logger
from iphits.utils.timestamps import (
    LOG_TIMESTAMP_FORMAT,
    LOG_TIMESTAMP_PATTERN,
    parse_date_bound,
)

log = get_logger(__name__)


def parse_time_window(start_text: str, end_text: str) -> TimeWindow:
    """
    Parse ``dd.MM.yyyy`` bounds into a window from midnight of the start
    day to midnight of the end day, both inclusive.
    """
    start = parse_date_bound(start_text)
    if start is None:
        raise LogFormatError(f"Invalid {TIME_START} format: {start_text!r} (expected dd.MM.yyyy)")
    end = parse_date_bound(end_text)
    if end is None:
        raise LogFormatError(f"Invalid {TIME_END} format: {end_text!r} (expected dd.MM.yyyy)")
    if start > end:
        log.warning("%s is after %s; no records can match", TIME_START, TIME_END)
    return TimeWindow(start=start, end=end)


def in_window(timestamp: datetime, start: datetime, end: datetime) -> bool:
    return start <= timestamp <= end


def filter_by_time(df: pd.DataFrame, window: TimeWindow) -> pd.DataFrame:
    """
    Keep rows whose timestamp lies in the window.

    Rows whose timestamp does not parse are dropped with a warning rather
    than failing the run. Timestamps pandas cannot represent count as
    unparseable here.
    """
    if df.empty:
        return df

    stamps = df["date"].astype(str) + " " + df["time"].astype(str)
    # to_datetime accepts unpadded fields, so the shape is checked first
    shaped = stamps.str.fullmatch(LOG_TIMESTAMP_PATTERN.pattern)
    parsed = pd.to_datetime(stamps.where(shaped), format=LOG_TIMESTAMP_FORMAT, errors="coerce")

    for line in df.loc[parsed.isna(), "line"]:
        log.warning("Invalid timestamp format in line: %s", line)

    out = df.loc[parsed.between(window.start, window.end)]
    log.info("Time window kept %d of %d record(s)", len(out), len(df))
    return out
