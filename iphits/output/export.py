# iphits/output/export.py

from __future__ import annotations
from pathlib import Path
from typing import Union

from iphits.errors import LogIOError
from iphits.models import FrequencyTable
from iphits.utils.logging import get_logger

log = get_logger(__name__)


PathLike = Union[str, Path]


def format_frequency_table(table: FrequencyTable) -> str:
    """
    Render one ``<address>: <count>`` line per address, newline-terminated,
    in first-seen order.
    """
    return "".join(f"{line}\n" for line in table.lines())


def save_frequency_table(table: FrequencyTable, path: PathLike) -> Path:
    """
    Write the table to ``path``.

    If writing fails after the file was opened, the partial file is
    removed, so a failed run leaves no output behind.

    Parameters
    ----------
    table : FrequencyTable
        Counts to write.
    path : str | Path
        Output file. Its directory must already exist.

    Returns
    -------
    Path
        The output path.
    """
    out_path = Path(path).expanduser()
    log.info("Saving %d address count(s) to %s", len(table), out_path)

    opened = False
    try:
        with open(out_path, "w", encoding="utf-8", newline="\n") as f:
            opened = True
            f.write(format_frequency_table(table))
    except OSError as e:
        if opened:
            out_path.unlink(missing_ok=True)
        raise LogIOError(f"Error writing output file: {e}") from e

    log.debug("Output written successfully to %s", out_path)
    return out_path
