"""Environment configuration for streamcmp."""

from __future__ import annotations

import os

from .errors import ConfigError

DEFAULT_BUFFER_SIZE = 8192
DEFAULT_CHUNK_SIZE = 8192


def _positive_int_from_env(variable: str, default: int) -> int:
    raw = os.getenv(variable)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{variable} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ConfigError(f"{variable} must be positive, got {value}")
    return value


def get_buffer_size() -> int:
    """Return the per-source channel capacity from STREAMCMP_BUFFER_SIZE.

    The capacity bounds how far a fast reader may run ahead of the
    comparator. Defaults to 8192 bytes.
    """
    return _positive_int_from_env("STREAMCMP_BUFFER_SIZE", DEFAULT_BUFFER_SIZE)


def get_chunk_size() -> int:
    """Return the reader chunk size from STREAMCMP_CHUNK_SIZE."""
    return _positive_int_from_env("STREAMCMP_CHUNK_SIZE", DEFAULT_CHUNK_SIZE)
