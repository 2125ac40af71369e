"""Formatting routines for hand-assembled JSON documents.

Each routine renders one kind of field exactly as it must appear on the
wire. Documents are built by concatenating these fragments so that member
order and numeric rendering stay fixed.
"""

import json
import math
from datetime import UTC, datetime, timedelta

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def escape_json(value: str | None) -> str:
    """Escape text for use inside a JSON string literal.

    Escapes backslash, double quote and control characters as standard JSON
    does, plus U+2028 and U+2029 which some JSON consumers treat as line
    terminators. The surrounding quotes are not included.

    Args:
        value: Raw text. None is treated as the empty string.

    Returns:
        The escaped text.
    """
    if not value:
        return ""
    escaped = json.dumps(value, ensure_ascii=False)[1:-1]
    return escaped.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def format_float(value: float) -> str:
    """Render a float field, always with a fractional part.

    Args:
        value: A finite number.

    Returns:
        Text such as "0.0", "123.0", "0.25" or "1.0e+16".

    Raises:
        ValueError: If value is NaN or infinite.
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"cannot render non-finite value {value!r} as JSON")
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return mantissa + sep + exponent


def format_int(value: int) -> str:
    """Render an integer field, never with a fractional part."""
    return str(int(value))


def format_timestamp(epoch_ms: int) -> str:
    """Render an epoch-millisecond instant as an ISO-8601 UTC timestamp.

    Milliseconds are shown with exactly three digits when non-zero and
    omitted otherwise.

    Args:
        epoch_ms: Milliseconds since 1970-01-01T00:00:00Z.

    Returns:
        Text such as "1970-01-01T00:00:00Z" or "1970-01-01T00:00:00.001Z".
    """
    instant = _EPOCH + timedelta(milliseconds=epoch_ms)
    text = (
        f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
        f"T{instant.hour:02d}:{instant.minute:02d}:{instant.second:02d}"
    )
    millis = instant.microsecond // 1000
    if millis:
        text += f".{millis:03d}"
    return text + "Z"
