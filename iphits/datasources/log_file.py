# iphits/datasources/log_file.py

from __future__ import annotations
import re
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from iphits.errors import LogIOError
from iphits.models import LogRecord
from iphits.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]

RECORD_COLUMNS = ["address", "date", "time", "line"]

# Only these three end a line; str.splitlines() also breaks on \x1c, \x85, \u2028 etc.
LINE_BREAK_REGEX = re.compile(r"\r\n|\r|\n")


def read_log_lines(path: PathLike, encoding: str = "utf-8-sig") -> list[str]:
    """
    Read the whole log file into memory and release the handle.

    Line terminators (\\n, \\r\\n, \\r) are stripped; a trailing newline
    does not produce an empty record. A leading UTF-8 BOM is dropped.
    """
    log_path = Path(path).expanduser()
    if not log_path.is_file():
        raise LogIOError("Log file does not exist or cannot be accessed.")

    try:
        with open(log_path, "r", encoding=encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LogIOError(f"Error reading log file: {e}") from e

    lines = LINE_BREAK_REGEX.split(text)
    if lines[-1] == "":
        lines.pop()
    log.info("Read %d line(s) from %s", len(lines), log_path)
    return lines


def records_to_dataframe(records: Iterable[LogRecord]) -> pd.DataFrame:
    """
    Turn parsed records into a DataFrame with one row per record,
    preserving input order.
    """
    rows = [(r.address, r.date, r.time, r.line) for r in records]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)
