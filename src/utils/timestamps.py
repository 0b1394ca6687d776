"""
Timestamp helpers shared by the OCR and sync packages.

Upstream capture data carries ISO-8601 strings; everything inside the engine
works on timezone-aware ``datetime`` values. Naive values are taken as UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Union

TimestampLike = Union[datetime, str, int, float]

_ONE_MS = timedelta(milliseconds=1)


class InvalidTimestampError(ValueError):
    """Raised when upstream data carries a timestamp that cannot be parsed."""

    def __init__(self, value, reason: str = "not a valid ISO-8601 timestamp"):
        self.value = value
        super().__init__(f"Invalid timestamp {value!r}: {reason}")


def parse_timestamp(value: TimestampLike) -> datetime:
    """
    Parse an upstream timestamp into an aware UTC datetime.

    Accepts ``datetime`` objects, ISO-8601 strings (a trailing ``Z`` is
    allowed) and epoch seconds as int/float.
    Any fractional-second precision is accepted (Python 3.11+ fromisoformat).

    Raises:
        InvalidTimestampError: value is not parseable
    """
    if isinstance(value, bool):
        raise InvalidTimestampError(value, "booleans are not timestamps")

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidTimestampError(value, str(e)) from e
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidTimestampError(value, "empty string")
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidTimestampError(value) from e
    else:
        raise InvalidTimestampError(value, f"unsupported type {type(value).__name__}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def gap_ms(a: datetime, b: datetime) -> float:
    """Absolute distance between two timestamps in milliseconds."""
    return abs(a - b) / _ONE_MS


def to_milliseconds(duration: Union[int, float, timedelta]) -> float:
    """Accept a duration as milliseconds or ``timedelta``; negatives clamp to 0."""
    if isinstance(duration, timedelta):
        duration = duration / _ONE_MS
    return max(0.0, float(duration))


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return dt.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
