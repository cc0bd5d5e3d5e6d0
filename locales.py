"""Locale data for the date picker: month/day names and week layout."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocaleDescriptor:
    """Names and week-layout rules for one locale.

    ``day_names_min`` always starts on Sunday; ``first_day`` and
    ``week_end`` are weekday indexes with 0 = Sunday.
    """

    month_names: tuple[str, ...]
    day_names_min: tuple[str, ...]
    first_day: int
    week_end: int
    is_rtl: bool


DEFAULT_LOCALE = LocaleDescriptor(
    month_names=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    day_names_min=("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"),
    first_day=0,
    week_end=0,
    is_rtl=False,
)

_FIELD_NAMES = tuple(f.name for f in fields(LocaleDescriptor))


# --- Locale table: id -> partial field dict ---------------------------------
# Entries may leave fields out; they are filled from DEFAULT_LOCALE.

LOCALE_DATA: dict[str, dict] = {
    "nl": {
        "month_names": (
            "januari", "februari", "maart", "april", "mei", "juni",
            "juli", "augustus", "september", "oktober", "november", "december",
        ),
        "day_names_min": ("zo", "ma", "di", "wo", "do", "vr", "za"),
        "first_day": 1,
        "week_end": 0,
        "is_rtl": False,
    },
    "ar": {
        "month_names": (
            "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
            "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
        ),
        "day_names_min": ("ح", "ن", "ث", "ر", "خ", "ج", "س"),
        "first_day": 6,
        "week_end": 5,
        "is_rtl": True,
    },
    "he": {
        "month_names": (
            "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
            "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
        ),
        "day_names_min": ("א'", "ב'", "ג'", "ד'", "ה'", "ו'", "שבת"),
        "first_day": 0,
        "week_end": 6,
        "is_rtl": True,
    },
    "fr": {
        "month_names": (
            "janvier", "février", "mars", "avril", "mai", "juin",
            "juillet", "août", "septembre", "octobre", "novembre", "décembre",
        ),
        "day_names_min": ("D", "L", "M", "M", "J", "V", "S"),
        "first_day": 1,
        "week_end": 0,
        "is_rtl": False,
    },
    "zh-CN": {
        "month_names": (
            "一月", "二月", "三月", "四月", "五月", "六月",
            "七月", "八月", "九月", "十月", "十一月", "十二月",
        ),
        "day_names_min": ("日", "一", "二", "三", "四", "五", "六"),
        "first_day": 1,
        "week_end": 0,
        "is_rtl": False,
    },
}


def _merge(entry: dict) -> LocaleDescriptor:
    overrides = {}
    for name in _FIELD_NAMES:
        if entry.get(name) is None:
            continue
        value = entry[name]
        if name in ("month_names", "day_names_min"):
            value = tuple(value)
        overrides[name] = value
    return replace(DEFAULT_LOCALE, **overrides)


def register_locale(locale_id: str, **locale_fields) -> LocaleDescriptor:
    """Add or replace a table entry; missing fields fall back to English."""
    unknown = set(locale_fields) - set(_FIELD_NAMES)
    if unknown:
        raise TypeError(f"unknown locale fields: {', '.join(sorted(unknown))}")
    LOCALE_DATA[locale_id] = dict(locale_fields)
    return _merge(LOCALE_DATA[locale_id])


def resolve_locale(locale_id: str | None) -> LocaleDescriptor:
    """Return the descriptor for ``locale_id``, or the English default."""
    if locale_id is None:
        return DEFAULT_LOCALE
    entry = LOCALE_DATA.get(locale_id)
    if entry is None:
        logger.debug("Unknown locale '%s', using default", locale_id)
        return DEFAULT_LOCALE
    return _merge(entry)


def week_header(locale: LocaleDescriptor) -> list[tuple[str, bool]]:
    """Return the day-name row as ``[(name, is_weekend), ...]``.

    Names are rotated to start at ``first_day`` and reversed for
    right-to-left locales.
    """
    first = locale.first_day
    names = list(locale.day_names_min[first:]) + list(locale.day_names_min[:first])
    weekend_index = (locale.week_end - first) % 7
    if locale.is_rtl:
        names.reverse()
        weekend_index = 6 - weekend_index
    return [(name, i == weekend_index) for i, name in enumerate(names)]
