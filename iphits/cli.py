from __future__ import annotations

import sys
from typing import Optional

import typer

from iphits.errors import IphitsError
from iphits.models import (
    ADDRESS_MASK,
    ADDRESS_START,
    CONFIG_FILE,
    FILE_LOG,
    FILE_OUTPUT,
    TIME_END,
    TIME_START,
)
from iphits.params import resolve_parameters
from iphits.pipeline import run
from iphits.utils.logging import get_logger, set_verbosity

app = typer.Typer(help="Count hits per source address in a time-filtered access log.")

log = get_logger(__name__)


def _extra_pairs(tokens: list[str]) -> dict[str, str]:
    """
    Read leftover ``--key value`` pairs that are not declared options.

    Raises:
        typer.BadParameter: a token without the ``--`` prefix, or a key
            with no value after it.
    """
    pairs = {}
    for i in range(0, len(tokens), 2):
        key = tokens[i]
        if not key.startswith("--") or i + 1 >= len(tokens):
            raise typer.BadParameter(f"Invalid argument format: {key!r}")
        pairs[key[2:]] = tokens[i + 1]
    return pairs


def _given(**values: Optional[str]) -> dict[str, str]:
    """Map option values back to their dashed names, dropping options not given."""
    return {
        name.replace("_", "-"): value
        for name, value in values.items()
        if value is not None
    }


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def count(
        ctx: typer.Context,
        file_log: Optional[str] = typer.Option(
            None,
            f"--{FILE_LOG}",
            help="Access log to read: one '<address> <yyyy-MM-dd> <HH:mm:ss>' record per line.",
        ),
        file_output: Optional[str] = typer.Option(
            None,
            f"--{FILE_OUTPUT}",
            help="File to write '<address>: <count>' lines to.",
        ),
        time_start: Optional[str] = typer.Option(
            None,
            f"--{TIME_START}",
            help="Lower bound of the time window (dd.MM.yyyy, inclusive).",
        ),
        time_end: Optional[str] = typer.Option(
            None,
            f"--{TIME_END}",
            help="Upper bound of the time window (dd.MM.yyyy, inclusive).",
        ),
        address_start: Optional[str] = typer.Option(
            None,
            f"--{ADDRESS_START}",
            help="Network address to filter on (dotted quad). Omit to count all addresses.",
        ),
        address_mask: Optional[str] = typer.Option(
            None,
            f"--{ADDRESS_MASK}",
            help="Mask applied with --address-start (dotted quad, default 255.255.255.255).",
        ),
        config_file: Optional[str] = typer.Option(
            None,
            f"--{CONFIG_FILE}",
            help="Flat JSON object of option name -> string value. Command-line options win.",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Log pipeline progress to stderr.",
        ),
):
    """
    Validate the log, keep records inside the time window (and address
    range, if given), and write per-address hit counts in first-seen order.

    Example:

        iphits --file-log access.log --file-output hits.txt --time-start 01.01.2024 --time-end 31.01.2024
        iphits --config-file iphits.json --address-start 10.0.0.0 --address-mask 255.255.255.0
    """
    set_verbosity(verbose)

    cli_values = _given(
        file_log=file_log,
        file_output=file_output,
        time_start=time_start,
        time_end=time_end,
        address_start=address_start,
        address_mask=address_mask,
        config_file=config_file,
    )
    for key, value in _extra_pairs(ctx.args).items():
        cli_values.setdefault(key, value)

    try:
        params = resolve_parameters(cli_values)
        result = run(params)
    except IphitsError as e:
        log.debug("Run aborted: %s", type(e).__name__)
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Analysis completed. Results written to {result.output_path}.")


def main() -> None:
    """Entry point for console_scripts."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
