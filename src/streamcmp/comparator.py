"""Lockstep comparison of two byte channels.

The comparator takes one item from each channel per iteration and turns the
pair into a ``Decision``: keep going, or stop with an exit status. Messages
for the operator are produced by the decision and written by the caller,
so ``decide`` can be exercised without threads or a terminal.
"""

from __future__ import annotations

import enum
import queue
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import click

from .errors import SourceReadError
from .reader import END_OF_STREAM, ChannelItem, ReadFailure, start_reader
from .sources import Source

NEWLINE = ord("\n")


class ReportingMode(enum.Enum):
    """How differences are reported, fixed once per run."""

    QUIET = "quiet"
    LINE = "line"
    LONG = "long"
    DEFAULT = "default"

    @classmethod
    def from_flags(cls, silent: bool = False, line: bool = False, long: bool = False) -> "ReportingMode":
        """Resolve command-line flags, quiet taking priority over line over long."""
        if silent:
            return cls.QUIET
        if line:
            return cls.LINE
        if long:
            return cls.LONG
        return cls.DEFAULT


class Outcome(enum.Enum):
    """Result of deciding one byte pair."""

    CONTINUE = "continue"
    EQUAL = "equal"
    DIFFER = "differ"

    @property
    def exit_status(self) -> int:
        """Process exit status for a finished comparison."""
        if self is Outcome.EQUAL:
            return 0
        if self is Outcome.DIFFER:
            return 1
        raise ValueError("comparison has not finished")


@dataclass(frozen=True)
class Decision:
    """What to do after one byte pair, with an optional report line."""

    outcome: Outcome
    message: Optional[str] = None

    @property
    def finished(self) -> bool:
        """True once the comparison must stop."""
        return self.outcome is not Outcome.CONTINUE


@dataclass
class Cursor:
    """Position of the next byte pair, relative to the starting offsets."""

    char_number: int = 1
    line_number: int = 1
    differed: bool = False

    def advance(self, first: int) -> None:
        self.char_number += 1
        # Lines are counted on the first source only.
        if first == NEWLINE:
            self.line_number += 1


def decide(
    mode: ReportingMode,
    names: Sequence[str],
    cursor: Cursor,
    first: ChannelItem,
    second: ChannelItem,
) -> Decision:
    """Decide what to do with one pair of channel items.

    ``first`` and ``second`` are data bytes or ``END_OF_STREAM``; read
    failures are handled by the caller before a pair is decided.
    """
    if first is END_OF_STREAM and second is END_OF_STREAM:
        if cursor.differed:
            return Decision(Outcome.DIFFER)
        return Decision(Outcome.EQUAL)

    if first == second:
        return Decision(Outcome.CONTINUE)

    if mode is ReportingMode.QUIET:
        return Decision(Outcome.DIFFER)

    if mode is ReportingMode.LINE:
        return Decision(
            Outcome.DIFFER,
            f"{names[0]} {names[1]} differ: char {cursor.char_number} line {cursor.line_number}",
        )

    if mode is ReportingMode.LONG:
        if first is END_OF_STREAM:
            return Decision(Outcome.DIFFER, f"EOF on {names[0]}")
        if second is END_OF_STREAM:
            return Decision(Outcome.DIFFER, f"EOF on {names[1]}")
        return Decision(Outcome.CONTINUE, f"{cursor.char_number:8d} {first:02o} {second:02o}")

    return Decision(Outcome.DIFFER, f"{names[0]} {names[1]} differ: char {cursor.char_number}")


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


class Comparator:
    """Consume two channels in lockstep and report according to ``mode``."""

    def __init__(
        self,
        names: Sequence[str],
        mode: ReportingMode = ReportingMode.DEFAULT,
        echo: Optional[Callable[[str], None]] = None,
    ) -> None:
        if len(names) != 2:
            raise ValueError(f"expected two source names, got {len(names)}")
        self.names = list(names)
        self.mode = mode
        self.echo = echo if echo is not None else _echo_err
        self.cursor = Cursor()

    def receive(self, channels: Sequence[queue.Queue], index: int) -> ChannelItem:
        item = channels[index].get()
        if isinstance(item, ReadFailure):
            raise SourceReadError(self.names[index], item.error)
        return item

    def step(self, first: ChannelItem, second: ChannelItem) -> Decision:
        """Decide one pair, emit its message and move the cursor on."""
        decision = decide(self.mode, self.names, self.cursor, first, second)
        if decision.message is not None:
            self.echo(decision.message)
        if not decision.finished:
            if first != second:
                self.cursor.differed = True
            self.cursor.advance(first)
        return decision

    def run(self, channels: Sequence[queue.Queue]) -> int:
        """Compare until a terminal decision and return its exit status."""
        while True:
            first = self.receive(channels, 0)
            second = self.receive(channels, 1)
            decision = self.step(first, second)
            if decision.finished:
                return decision.outcome.exit_status


def compare_sources(
    first: Source,
    second: Source,
    mode: ReportingMode = ReportingMode.DEFAULT,
    echo: Optional[Callable[[str], None]] = None,
    capacity: Optional[int] = None,
    chunk_size: Optional[int] = None,
) -> int:
    """Compare two sources and return 0 when equal, 1 when they differ.

    Both readers run on daemon threads; once a result is known they are
    left behind rather than joined.
    """
    channels = [
        start_reader(first, capacity, chunk_size),
        start_reader(second, capacity, chunk_size),
    ]
    comparator = Comparator([first.name, second.name], mode, echo)
    return comparator.run(channels)
