# iphits/processing/stats.py

from __future__ import annotations

import pandas as pd

from iphits.models import FrequencyTable
from iphits.utils.logging import get_logger

log = get_logger(__name__)


def aggregate_hits(df: pd.DataFrame, address_col: str = "address") -> FrequencyTable:
    """
    Count rows per distinct address string.

    ``groupby(sort=False)`` keeps groups in order of first appearance, which
    is the order the output is written in. Addresses are compared verbatim.
    """
    if df.empty:
        return FrequencyTable()

    counts = df.groupby(address_col, sort=False).size()
    table = FrequencyTable(
        entries=tuple((str(address), int(count)) for address, count in counts.items())
    )
    log.info("Aggregated %d record(s) into %d address(es)", len(df), len(table))
    return table
