"""Date picker props, calendar state and value ownership.

A picker's selected date is owned in one of three ways:

* ``Uncontrolled``: the picker keeps the value itself (seeded from
  ``default_value``).
* ``ControlledValue``: the host passes ``value`` and updates it in
  response to ``on_update``; the picker never writes it.
* ``ControlledLink``: the host passes a ``ValueLink``; changes are
  requested through ``value_link.request_change``.

``resolve_binding`` picks the mode once per props update, and each mode's
``write`` is the only place a new selection is applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from calendar_logic import normalize_month

logger = logging.getLogger(__name__)


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass
class ValueLink:
    """A controlled value paired with its change-request callback."""

    value: date | None
    request_change: Callable[[date | None], None]


@dataclass
class DatePickerProps:
    value: date | None | _Unset = UNSET
    value_link: ValueLink | None = None
    default_value: date | None | _Unset = UNSET
    min_date: date | None = None
    max_date: date | None = None
    locale: str | None = None
    month: int | None = None          # 1-12
    default_month: int | None = None  # 1-12
    year: int | None = None
    default_year: int | None = None
    disabled: bool = False
    read_only: bool = False
    show_other_month_date: bool = True
    prevent_focus_style_for_touch_and_click: bool | None = None
    tab_index: int = 0
    on_update: Callable[[date | None], None] | None = None
    on_month_update: Callable[[int, int], None] | None = None

    def has_value(self) -> bool:
        return self.value is not UNSET


@dataclass
class CalendarState:
    """Per-instance picker state. ``month`` is 0-based."""

    month: int
    year: int
    selected_date: date | None = None
    focused_date_key: str | None = None
    active_day: str | None = None
    last_hovered_day: str | None = None
    is_focused: bool = False
    is_active: bool = False


# ------------------------------------------------------------------
# Ownership modes
# ------------------------------------------------------------------
@dataclass(frozen=True)
class Uncontrolled:
    def effective_value(self, current: date | None) -> date | None:
        return current

    def write(self, value: date | None, month: int, year: int,
              state: CalendarState) -> None:
        state.selected_date = value
        state.month = month
        state.year = year


@dataclass(frozen=True)
class ControlledValue:
    value: date | None

    def effective_value(self, current: date | None) -> date | None:
        return self.value

    def write(self, value: date | None, month: int, year: int,
              state: CalendarState) -> None:
        # The host owns the value; it reflects the change via new props.
        logger.debug("Controlled value: not applying %s locally", value)


@dataclass(frozen=True)
class ControlledLink:
    link: ValueLink

    def effective_value(self, current: date | None) -> date | None:
        return self.link.value

    def write(self, value: date | None, month: int, year: int,
              state: CalendarState) -> None:
        self.link.request_change(value)


ValueBinding = Uncontrolled | ControlledValue | ControlledLink


def resolve_binding(props: DatePickerProps) -> ValueBinding:
    """Return the ownership mode for ``props`` (a link wins over a value)."""
    if props.value_link is not None:
        return ControlledLink(props.value_link)
    if props.has_value():
        return ControlledValue(props.value)
    return Uncontrolled()


def _initial_selection(props: DatePickerProps) -> date | None:
    if props.value_link is not None:
        return props.value_link.value
    if props.has_value():
        return props.value
    if props.default_value is not UNSET:
        return props.default_value
    return None


def initial_state(props: DatePickerProps, today: date) -> CalendarState:
    """Build the state a picker starts with.

    The displayed month comes from ``month``, then ``default_month``, then
    the selected date, then today; the year is chosen the same way. A month
    outside 1-12 rolls over into the neighbouring years.
    """
    selected = _initial_selection(props)

    if props.month:
        month = props.month - 1
    elif props.default_month:
        month = props.default_month - 1
    elif selected:
        month = selected.month - 1
    else:
        month = today.month - 1

    if props.year:
        year = props.year
    elif props.default_year:
        year = props.default_year
    elif selected:
        year = selected.year
    else:
        year = today.year

    year, month = normalize_month(year, month)
    return CalendarState(month=month, year=year, selected_date=selected)
