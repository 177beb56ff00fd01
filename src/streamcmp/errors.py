"""Exception types raised by the streamcmp library layer."""

from __future__ import annotations


class StreamCmpError(Exception):
    """Base class for streamcmp failures."""


class ConfigError(StreamCmpError, ValueError):
    """An environment setting could not be used."""


class OffsetError(StreamCmpError, ValueError):
    """An offset token is not a non-negative integer."""


class SourceOpenError(StreamCmpError, OSError):
    """A named source could not be opened."""

    def __init__(self, name: str, error: OSError) -> None:
        super().__init__(f"failed to open {name}: {error.strerror or error}")
        self.name = name
        self.error = error


class SourceReadError(StreamCmpError, OSError):
    """A source became unreadable after comparison started."""

    def __init__(self, name: str, error: BaseException) -> None:
        super().__init__(f"read error on {name}: {error}")
        self.name = name
        self.error = error
