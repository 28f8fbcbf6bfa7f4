# iphits/pipeline.py
"""
Runs the stages in order:

    check required params -> parse time bounds -> read log -> validate
    -> filter by time -> filter by address (optional) -> aggregate -> write

Every stage raises an ``IphitsError`` subclass on failure, so a run either
completes and writes the output file or stops without writing anything.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from iphits.datasources.log_file import read_log_lines, records_to_dataframe
from iphits.models import (
    ADDRESS_MASK,
    ADDRESS_START,
    FILE_LOG,
    FILE_OUTPUT,
    TIME_END,
    TIME_START,
    FrequencyTable,
    ParameterSet,
)
from iphits.output.export import save_frequency_table
from iphits.params import require_parameters
from iphits.processing.address import filter_by_address, parse_address_range
from iphits.processing.stats import aggregate_hits
from iphits.processing.time_window import filter_by_time, parse_time_window
from iphits.processing.validate import validate_lines
from iphits.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    table: FrequencyTable
    output_path: Path


def count_hits(params: ParameterSet) -> FrequencyTable:
    """Everything up to, but not including, writing the output file."""
    require_parameters(params)
    window = parse_time_window(params[TIME_START], params[TIME_END])

    lines = read_log_lines(params[FILE_LOG])
    records = validate_lines(lines)

    df = records_to_dataframe(records)
    df = filter_by_time(df, window)

    if ADDRESS_START in params:
        address_range = parse_address_range(params[ADDRESS_START], params.get(ADDRESS_MASK))
        df = filter_by_address(df, address_range)

    return aggregate_hits(df)


def run(params: ParameterSet) -> PipelineResult:
    table = count_hits(params)
    output_path = save_frequency_table(table, params[FILE_OUTPUT])
    log.info("Done: %d address(es) written to %s", len(table), output_path)
    return PipelineResult(table=table, output_path=output_path)
