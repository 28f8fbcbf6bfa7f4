import logging
from datetime import datetime

import pytest

from iphits.datasources.log_file import records_to_dataframe
from iphits.errors import LogFormatError
from iphits.models import LogRecord
from iphits.processing.time_window import filter_by_time, in_window, parse_time_window


def _df(*lines):
    return records_to_dataframe(LogRecord.from_line(line) for line in lines)


def test_parse_time_window():
    window = parse_time_window("01.01.2024", "31.01.2024")
    assert window.start == datetime(2024, 1, 1)
    assert window.end == datetime(2024, 1, 31)


@pytest.mark.parametrize("start,end", [
    ("2024-01-01", "31.01.2024"),
    ("01.01.2024", "1.2.2024"),
    ("32.01.2024", "31.01.2024"),
])
def test_parse_time_window_rejects_bad_bounds(start, end):
    with pytest.raises(LogFormatError):
        parse_time_window(start, end)


def test_in_window_is_inclusive():
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)
    assert in_window(start, start, end)
    assert in_window(end, start, end)
    assert not in_window(datetime(2023, 12, 31, 23, 59, 59), start, end)
    assert not in_window(datetime(2024, 1, 31, 0, 0, 1), start, end)


def test_filter_keeps_boundary_records():
    df = _df(
        "1.1.1.1 2024-01-01 00:00:00",
        "2.2.2.2 2024-01-31 00:00:00",
        "3.3.3.3 2024-02-01 00:00:00",
    )
    out = filter_by_time(df, parse_time_window("01.01.2024", "31.01.2024"))
    assert list(out["address"]) == ["1.1.1.1", "2.2.2.2"]


def test_inverted_window_matches_nothing():
    df = _df("1.1.1.1 2024-01-15 10:00:00")
    out = filter_by_time(df, parse_time_window("31.01.2024", "01.01.2024"))
    assert out.empty


def test_unparseable_timestamp_is_dropped_with_warning(caplog):
    df = records_to_dataframe([
        LogRecord.from_line("1.1.1.1 2024-01-15 10:00:00"),
        LogRecord(address="2.2.2.2", date="2024-13-01", time="10:00:00",
                  line="2.2.2.2 2024-13-01 10:00:00"),
    ])
    with caplog.at_level(logging.WARNING, logger="iphits"):
        out = filter_by_time(df, parse_time_window("01.01.2024", "31.12.2024"))
    assert list(out["address"]) == ["1.1.1.1"]
    assert "2.2.2.2 2024-13-01 10:00:00" in caplog.text


def test_unpadded_timestamp_is_dropped(caplog):
    df = records_to_dataframe([
        LogRecord(address="1.1.1.1", date="2024-1-15", time="10:00:00",
                  line="1.1.1.1 2024-1-15 10:00:00"),
        LogRecord.from_line("2.2.2.2 2024-01-15 10:00:00"),
    ])
    with caplog.at_level(logging.WARNING, logger="iphits"):
        out = filter_by_time(df, parse_time_window("01.01.2024", "31.01.2024"))
    assert list(out["address"]) == ["2.2.2.2"]
    assert "1.1.1.1 2024-1-15 10:00:00" in caplog.text
