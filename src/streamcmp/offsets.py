"""Parsing of starting-offset arguments."""

from __future__ import annotations

from .errors import OffsetError


def parse_offset(token: str, label: str = "offset") -> int:
    """Parse an offset token with base auto-detection.

    ``0x`` selects hexadecimal, any other leading ``0`` selects octal and
    everything else is decimal, so ``0x1A``, ``032`` and ``26`` are all 26.
    """
    text = token.strip()
    if text.startswith("-"):
        raise OffsetError(f"bad {label}: {token}: offset must not be negative")
    if text[:2] in ("0x", "0X"):
        digits, base = text[2:], 16
    elif len(text) > 1 and text.startswith("0"):
        digits, base = text[1:], 8
        if digits[:1] in ("o", "O"):
            digits = digits[1:]
    else:
        digits, base = text, 10

    if not digits or not digits.isascii() or not digits.isalnum():
        raise OffsetError(f"bad {label}: {token}: invalid syntax")
    try:
        value = int(digits, base)
    except ValueError:
        raise OffsetError(f"bad {label}: {token}: invalid syntax") from None
    return value
