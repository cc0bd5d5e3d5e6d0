"""Date keys: canonical ``Y-M-D`` strings used to identify calendar days."""

import re
from datetime import date

_KEY_RE = re.compile(r"^(-?\d+)-(\d{1,2})-(\d{1,2})$")


class MalformedKeyError(ValueError):
    """Raised when a string is not a valid ``year-month-day`` key."""


def date_key(year: int, month: int, day: int) -> str:
    """Return the key for 1-based month/day fields (no zero padding)."""
    return f"{year}-{month}-{day}"


def encode_date_key(d: date) -> str:
    """Return the key for a date (time-of-day, if any, is dropped)."""
    return date_key(d.year, d.month, d.day)


def key_sort_tuple(key: str) -> tuple[int, int, int]:
    """Return ``(year, month, day)`` for ordering keys."""
    m = _KEY_RE.match(key) if isinstance(key, str) else None
    if m is None:
        raise MalformedKeyError(f"malformed date key: {key!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def decode_date_key(key: str) -> date:
    """Return the date a key denotes.

    Raises MalformedKeyError when the key does not have the ``Y-M-D`` shape
    or names a day that does not exist (e.g. ``2023-2-29``).
    """
    year, month, day = key_sort_tuple(key)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedKeyError(f"malformed date key: {key!r}") from exc
