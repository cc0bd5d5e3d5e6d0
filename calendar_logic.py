"""Pure calendar calculations: no UI dependencies.

Months are 0-based (0 = January) and weekdays use 0 = Sunday throughout,
matching the locale tables.
"""

import calendar
from datetime import date


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) with ``month`` folded into 0–11.

    ``(2024, -1)`` becomes ``(2023, 11)`` and ``(2024, 12)`` becomes
    ``(2025, 0)``.
    """
    carry, month = divmod(month, 12)
    return year + carry, month


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return (year, month) moved by ``delta`` months."""
    return normalize_month(year, month + delta)


def days_in_month(year: int, month: int) -> int:
    year, month = normalize_month(year, month)
    return calendar.monthrange(year, month + 1)[1]


def last_day_of_month(year: int, month: int) -> date:
    """Return the last day of the given (possibly out-of-range) month."""
    year, month = normalize_month(year, month)
    return date(year, month + 1, days_in_month(year, month))


def add_months_clamped(d: date, delta: int) -> date:
    """Return ``d`` moved by ``delta`` months, keeping the day-of-month.

    If the target month is shorter, the result is its last day instead of
    overflowing into the month after (March 30 minus one month is the end
    of February).
    """
    year, month = shift_month(d.year, d.month - 1, delta)
    day = min(d.day, days_in_month(year, month))
    return date(year, month + 1, day)


def is_supported_month(year: int, month: int) -> bool:
    """Return True if the (possibly out-of-range) month is within ``date.min``..``date.max``."""
    year, _ = normalize_month(year, month)
    return date.min.year <= year <= date.max.year


def build_weeks(year: int, month: int, first_day: int = 0) -> list[list[date | None]]:
    """Return the week rows for the given month.

    Each row holds exactly 7 cells and starts on ``first_day`` (0 = Sunday).
    Leading and trailing days come from the neighbouring months, so the
    grid has 4-6 complete rows depending on the month. In January of year 1
    and December of year 9999 the padding cells that fall outside
    ``date.min``..``date.max`` are ``None``; every other cell is a date.
    Months outside that range have no rows at all.
    """
    year, month = normalize_month(year, month)
    if not is_supported_month(year, month):
        return []
    first_day %= 7
    first = date(year, month + 1, 1)
    last = last_day_of_month(year, month)
    lead = (sunday_weekday(first) - first_day) % 7
    trail = (first_day - sunday_weekday(last) - 1) % 7

    cells: list[date | None] = []
    for ordinal in range(first.toordinal() - lead, last.toordinal() + trail + 1):
        if 1 <= ordinal <= date.max.toordinal():
            cells.append(date.fromordinal(ordinal))
        else:
            cells.append(None)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def as_day(d: date) -> date:
    """Return ``d`` as a plain date (a datetime loses its time fields)."""
    return date(d.year, d.month, d.day)


def sunday_weekday(d: date) -> int:
    """Return the weekday of ``d`` with 0 = Sunday."""
    return (d.weekday() + 1) % 7


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday
