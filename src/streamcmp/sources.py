"""Opening the two byte sources being compared."""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Sequence

import click

from .errors import SourceOpenError

STDIN_NAME = "-"


@dataclass(frozen=True)
class Source:
    """A byte stream to compare, started at ``offset``."""

    name: str
    stream: BinaryIO
    offset: int = 0


def open_source(name: str) -> BinaryIO:
    """Open ``name`` for binary reading, mapping ``-`` to standard input."""
    if name == STDIN_NAME:
        return click.get_binary_stream("stdin")
    try:
        return open(name, "rb")
    except OSError as e:
        raise SourceOpenError(name, e) from e


@contextmanager
def open_sources(names: Sequence[str], offsets: Sequence[int]) -> Iterator[list[Source]]:
    """Open every named source and close the opened files on exit.

    Standard input is handed out as-is and never closed here.
    """
    with ExitStack() as stack:
        sources = []
        for name, offset in zip(names, offsets):
            stream = open_source(name)
            if name != STDIN_NAME:
                stack.enter_context(stream)
            sources.append(Source(name=name, stream=stream, offset=offset))
        yield sources
