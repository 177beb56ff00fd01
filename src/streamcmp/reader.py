"""Stream readers feeding bounded byte channels.

Each source gets its own daemon thread that positions the stream at the
requested offset and then puts every remaining byte on a ``queue.Queue``.
Items on a channel are tagged: data bytes are ``int`` values, exhaustion is
the ``END_OF_STREAM`` marker and a failed read is a ``ReadFailure``. Exactly
one of the two terminal items ends every channel.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Union

from .config import get_buffer_size, get_chunk_size
from .sources import Source


class _EndOfStream:
    def __repr__(self) -> str:
        return "END_OF_STREAM"


END_OF_STREAM = _EndOfStream()


@dataclass(frozen=True)
class ReadFailure:
    """Terminal channel item carrying the error that stopped a reader."""

    error: BaseException


ChannelItem = Union[int, _EndOfStream, ReadFailure]


class StreamReader(threading.Thread):
    """Emit the bytes of ``source`` from its offset onto ``channel``."""

    def __init__(self, source: Source, channel: queue.Queue, chunk_size: int = 8192) -> None:
        super().__init__(name=f"streamcmp-reader[{source.name}]", daemon=True)
        self.source = source
        self.channel = channel
        self.chunk_size = chunk_size

    def skip_to_offset(self) -> None:
        """Position the stream at the source offset.

        Seekable streams seek to the absolute offset; pipes and terminals
        have the leading bytes read and discarded instead.
        """
        offset = self.source.offset
        if offset <= 0:
            return
        stream = self.source.stream
        if stream.seekable():
            stream.seek(offset)
            return
        remaining = offset
        while remaining > 0:
            discarded = stream.read(min(remaining, self.chunk_size))
            if not discarded:
                break
            remaining -= len(discarded)

    def run(self) -> None:
        stream = self.source.stream
        read = getattr(stream, "read1", stream.read)
        try:
            self.skip_to_offset()
            while True:
                chunk = read(self.chunk_size)
                if not chunk:
                    break
                for value in chunk:
                    self.channel.put(value)
        except (OSError, ValueError) as e:
            self.channel.put(ReadFailure(e))
            return
        self.channel.put(END_OF_STREAM)


def start_reader(
    source: Source, capacity: int | None = None, chunk_size: int | None = None
) -> queue.Queue:
    """Start a reader for ``source`` and return the channel it feeds."""
    if capacity is None:
        capacity = get_buffer_size()
    if chunk_size is None:
        chunk_size = get_chunk_size()
    channel: queue.Queue = queue.Queue(maxsize=capacity)
    StreamReader(source, channel, chunk_size).start()
    return channel
