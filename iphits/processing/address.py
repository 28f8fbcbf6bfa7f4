# iphits/processing/address.py

from __future__ import annotations
from typing import Optional

import pandas as pd

from iphits.errors import LogFormatError
from iphits.models import ADDRESS_MASK, ADDRESS_START, AddressRange
from iphits.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_MASK = "255.255.255.255"


def parse_dotted_quad(text: str, name: str = "address") -> bytes:
    """
    Parse four dot-separated decimal bytes (0-255).

    Raises:
        LogFormatError: wrong segment count, non-numeric segment, or a
            segment out of range.
    """
    segments = text.split(".")
    if len(segments) != 4:
        raise LogFormatError(f"Invalid {name}: {text!r} (expected four dot-separated bytes)")
    values = []
    for seg in segments:
        # ASCII digits only
        if not (seg.isascii() and seg.isdigit()):
            raise LogFormatError(f"Invalid {name}: {text!r} (non-numeric segment {seg!r})")
        value = int(seg)
        if value > 255:
            raise LogFormatError(f"Invalid {name}: {text!r} (segment {seg!r} out of range)")
        values.append(value)
    return bytes(values)


def parse_address_range(start: str, mask: Optional[str] = None) -> AddressRange:
    return AddressRange(
        network=parse_dotted_quad(start, ADDRESS_START),
        mask=parse_dotted_quad(mask if mask is not None else DEFAULT_MASK, ADDRESS_MASK),
    )


def in_address_range(address: str, address_range: AddressRange) -> bool:
    return address_range.matches(parse_dotted_quad(address, "source address"))


def filter_by_address(df: pd.DataFrame, address_range: AddressRange) -> pd.DataFrame:
    """Keep rows whose source address matches the network under the mask."""
    if df.empty:
        return df
    keep = df["address"].map(lambda address: in_address_range(address, address_range))
    out = df.loc[keep.astype(bool)]
    log.info("Address range kept %d of %d record(s)", len(out), len(df))
    return out
