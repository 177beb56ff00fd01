"""Command-line interface for streamcmp."""

from __future__ import annotations

import os
import sys

import click

from . import __version__
from .comparator import ReportingMode, compare_sources
from .config import get_buffer_size, get_chunk_size
from .errors import OffsetError, StreamCmpError
from .offsets import parse_offset
from .sources import STDIN_NAME, open_sources


class CmpFailure(click.ClickException):
    """Fatal error; exits with 2 so it is never mistaken for a difference."""

    exit_code = 2


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-l",
    "long_format",
    is_flag=True,
    help="Print the byte number (decimal) and the differing bytes (octal) for each difference.",
)
@click.option(
    "-L",
    "line_numbers",
    is_flag=True,
    help="Print the line number of the first differing byte.",
)
@click.option(
    "-s",
    "silent",
    is_flag=True,
    help="Print nothing for differing files, but set the exit status.",
)
@click.argument("file1")
@click.argument("file2")
@click.argument("offset1", required=False)
@click.argument("offset2", required=False)
@click.version_option(__version__, prog_name="streamcmp")
@click.pass_context
def cli(
    ctx: click.Context,
    long_format: bool,
    line_numbers: bool,
    silent: bool,
    file1: str,
    file2: str,
    offset1: str | None,
    offset2: str | None,
) -> None:
    """Compare FILE1 and FILE2 byte by byte.

    Comparison starts at OFFSET1 and OFFSET2 in the respective files.
    Offsets starting with 0x are hexadecimal, with 0 octal, otherwise
    decimal. Use - to read standard input. Exit status is 0 when the
    files are equal, 1 when they differ and 2 on error.
    """
    offsets = [0, 0]
    try:
        for index, token in enumerate((offset1, offset2)):
            if token is not None:
                offsets[index] = parse_offset(token, f"offset{index + 1}")
    except OffsetError as e:
        raise click.UsageError(str(e), ctx=ctx)

    if file1 == STDIN_NAME and file2 == STDIN_NAME:
        raise click.UsageError("standard input can be used for only one file", ctx=ctx)

    mode = ReportingMode.from_flags(silent=silent, line=line_numbers, long=long_format)

    try:
        capacity = get_buffer_size()
        chunk_size = get_chunk_size()
        with open_sources([file1, file2], offsets) as (first, second):
            status = compare_sources(first, second, mode, capacity=capacity, chunk_size=chunk_size)
    except StreamCmpError as e:
        raise CmpFailure(str(e))

    ctx.exit(status)

def main() -> None:
    """Console-script entry point.

    Readers left blocked on standard input would deadlock interpreter
    shutdown, so the process ends with ``os._exit`` once the status is known.
    """
    try:
        cli()
        status = 0
    except SystemExit as e:
        if e.code is None:
            status = 0
        elif isinstance(e.code, int):
            status = e.code
        else:
            click.echo(e.code, err=True)
            status = 1
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(status)
