"""Date picker engine: focus, navigation and selection, no UI dependencies.

The engine owns the displayed month, the focused/active/hovered day and the
wrapper focus flags. The selected date is owned according to the props'
value binding (see value_binding.py). Renderers feed input events into the
operations below and read back ``weeks()``, ``day_flags()`` and friends.

Gating: ``disabled`` blocks every interaction; ``read_only`` blocks
selection but keeps focus and navigation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable

from calendar_logic import (
    add_months_clamped,
    as_day,
    build_weeks,
    is_supported_month,
    last_day_of_month,
    normalize_month,
    shift_month,
    sunday_weekday,
)
from date_keys import date_key, decode_date_key, encode_date_key
from locales import LocaleDescriptor, resolve_locale, week_header
from settings import PREVENT_FOCUS_STYLE_FOR_TOUCH_AND_CLICK
from value_binding import (
    CalendarState,
    DatePickerProps,
    Uncontrolled,
    ValueBinding,
    initial_state,
    resolve_binding,
)

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0

_ARROW_OFFSETS = {"ArrowDown": 7, "ArrowUp": -7, "ArrowLeft": -1, "ArrowRight": 1}
_SPACE_KEYS = (" ", "Space", "Spacebar")


@dataclass(frozen=True)
class DayFlags:
    """Everything a renderer needs to style one day cell."""

    date_key: str
    day: int
    is_selected: bool
    is_focused: bool
    is_active: bool
    is_disabled_by_range: bool
    is_other_month: bool
    is_today: bool
    is_weekend: bool
    is_hidden: bool


@dataclass(frozen=True)
class WrapperFlags:
    is_focused: bool
    is_active: bool
    show_focus_style: bool
    disabled: bool
    read_only: bool
    tab_index: int | None


class DatePickerEngine:
    """State machine behind one date picker instance."""

    def __init__(self, props: DatePickerProps | None = None, *,
                 today: Callable[[], date] = date.today) -> None:
        self.props = props if props is not None else DatePickerProps()
        self._today = today
        self.binding: ValueBinding = resolve_binding(self.props)
        self.locale: LocaleDescriptor = resolve_locale(self.props.locale)
        self.state: CalendarState = initial_state(self.props, today())
        # Native focus, regardless of whether it came from a click
        self._has_focus = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def displayed_month(self) -> int:
        return self.state.month

    @property
    def displayed_year(self) -> int:
        return self.state.year

    @property
    def selected_date(self) -> date | None:
        return self.state.selected_date

    @property
    def focused_date_key(self) -> str | None:
        return self.state.focused_date_key

    @property
    def prevent_focus_style(self) -> bool:
        if self.props.prevent_focus_style_for_touch_and_click is None:
            return PREVENT_FOCUS_STYLE_FOR_TOUCH_AND_CLICK
        return self.props.prevent_focus_style_for_touch_and_click

    def is_within_min_and_max(self, d: date) -> bool:
        d = as_day(d)
        lo, hi = self.props.min_date, self.props.max_date
        if lo is not None and d < as_day(lo):
            return False
        if hi is not None and d > as_day(hi):
            return False
        return True

    def _is_displayed(self, d: date) -> bool:
        return d.year == self.state.year and d.month - 1 == self.state.month

    # ------------------------------------------------------------------
    # Wrapper focus / pointer
    # ------------------------------------------------------------------
    def focus_wrapper(self) -> None:
        """Handle the wrapper receiving focus and seed a focused day."""
        if self.props.disabled:
            return
        self._has_focus = True
        if self.state.is_active:
            # Focus that arrives with a pressed pointer comes from a click
            return
        self.state.is_focused = True
        if self.state.focused_date_key is None:
            self.state.focused_date_key = self._initial_focus_key()

    def _initial_focus_key(self) -> str:
        selected = self.state.selected_date
        today = as_day(self._today())
        if selected is not None and self._is_displayed(selected):
            return encode_date_key(selected)
        if self._is_displayed(today):
            return encode_date_key(today)
        return date_key(self.state.year, self.state.month + 1, 1)

    def blur_wrapper(self) -> None:
        if self.props.disabled:
            return
        self._has_focus = False
        self.state.is_focused = False
        self.state.focused_date_key = None

    def wrapper_pointer_down(self, button: int = PRIMARY_BUTTON) -> None:
        if not self.props.disabled and button == PRIMARY_BUTTON:
            self.state.is_active = True

    def wrapper_pointer_up(self, button: int = PRIMARY_BUTTON) -> None:
        if not self.props.disabled and button == PRIMARY_BUTTON:
            self.state.is_active = False

    def wrapper_touch_start(self, touches: int = 1) -> None:
        if not self.props.disabled and touches == 1:
            self.state.is_active = True

    def wrapper_touch_end(self) -> None:
        if not self.props.disabled:
            self.state.is_active = False

    def wrapper_touch_cancel(self) -> None:
        self.state.is_active = False

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> bool:
        """Dispatch a key name; return True if the picker consumed it.

        Key names follow the DOM ``KeyboardEvent.key`` values (``Home``,
        ``ArrowLeft``, ``PageUp``, ``Enter``, ``" "``...).
        """
        if self.props.disabled:
            return False
        if key == "Home":
            self.navigate_home()
            return True
        if key == "End":
            self.navigate_end()
            return True
        if key in _ARROW_OFFSETS:
            if self.state.focused_date_key is None:
                self.focus_fallback_day()
            else:
                self.move_focus_by_days(self._arrow_offset(key))
            return True
        if self.state.focused_date_key is None:
            return False
        if key == "PageUp":
            self.page_up()
        elif key == "PageDown":
            self.page_down()
        elif key == "Enter":
            self.select_focused_date()
        elif key in _SPACE_KEYS:
            self.toggle_focused_date()
        else:
            return False
        return True

    def _arrow_offset(self, key: str) -> int:
        offset = _ARROW_OFFSETS[key]
        if self.locale.is_rtl and key in ("ArrowLeft", "ArrowRight"):
            return -offset
        return offset

    def navigate_home(self) -> None:
        if self.props.disabled:
            return
        self.state.focused_date_key = date_key(self.state.year, self.state.month + 1, 1)

    def navigate_end(self) -> None:
        if self.props.disabled:
            return
        last = last_day_of_month(self.state.year, self.state.month)
        self.state.focused_date_key = encode_date_key(last)

    def focus_fallback_day(self) -> None:
        """Focus the last hovered day, or the first of the month."""
        if self.props.disabled:
            return
        if self.state.last_hovered_day is not None:
            self.state.focused_date_key = self.state.last_hovered_day
        else:
            self.navigate_home()

    def move_focus_by_days(self, days: int) -> None:
        """Move the focused day, paging the displayed month when it leaves it."""
        if self.props.disabled or self.state.focused_date_key is None:
            return
        try:
            target = decode_date_key(self.state.focused_date_key) + timedelta(days=days)
        except OverflowError:
            logger.debug("Focus move by %d days leaves the supported date range", days)
            return
        target_ym = (target.year, target.month - 1)
        if target_ym != (self.state.year, self.state.month):
            # Tuple order makes December -> January forward and the reverse backward
            direction = 1 if target_ym > (self.state.year, self.state.month) else -1
            while (self.state.year, self.state.month) != target_ym:
                self._change_month(direction)
        self.state.focused_date_key = encode_date_key(target)

    # ------------------------------------------------------------------
    # Month paging
    # ------------------------------------------------------------------
    def page_month(self, direction: int) -> None:
        """Show the previous (direction < 0) or next month."""
        if self.props.disabled or direction == 0:
            return
        self._change_month(1 if direction > 0 else -1)

    def prev_month(self) -> None:
        self.page_month(-1)

    def next_month(self) -> None:
        self.page_month(1)

    def _change_month(self, step: int) -> None:
        year, month = shift_month(self.state.year, self.state.month, step)
        if not is_supported_month(year, month):
            logger.debug("Month %d/%d is outside the supported date range", month + 1, year)
            return
        self.state.year, self.state.month = year, month
        self.state.focused_date_key = None
        self.state.last_hovered_day = None
        self._notify_month()

    def _notify_month(self) -> None:
        logger.debug("Displayed month is now %d/%d", self.state.month + 1, self.state.year)
        if self.props.on_month_update is not None:
            self.props.on_month_update(self.state.month + 1, self.state.year)

    def page_up(self) -> None:
        """Focus the same day one month earlier (clamped to that month's end)."""
        self._page_focused(-1)

    def page_down(self) -> None:
        """Focus the same day one month later (clamped to that month's end)."""
        self._page_focused(1)

    def _page_focused(self, delta: int) -> None:
        if self.props.disabled or self.state.focused_date_key is None:
            return
        focused = decode_date_key(self.state.focused_date_key)
        if not is_supported_month(focused.year, focused.month - 1 + delta):
            logger.debug("Paging %+d months leaves the supported date range", delta)
            return
        target = add_months_clamped(focused, delta)
        moved = not self._is_displayed(target)
        self.state.focused_date_key = encode_date_key(target)
        self.state.month = target.month - 1
        self.state.year = target.year
        self.state.last_hovered_day = None
        if moved:
            self._notify_month()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_focused_date(self) -> None:
        """Commit the focused day if it lies within min/max."""
        if self.state.focused_date_key is None:
            return
        d = decode_date_key(self.state.focused_date_key)
        if not self.is_within_min_and_max(d):
            logger.debug("Selection of %s blocked by min/max", d)
            return
        self.commit_selection(d.day, d.month - 1, d.year)

    def toggle_focused_date(self) -> None:
        """Select the focused day, or clear the selection if it is selected."""
        if self.state.focused_date_key is None:
            return
        d = decode_date_key(self.state.focused_date_key)
        if not self.is_within_min_and_max(d):
            logger.debug("Toggle of %s blocked by min/max", d)
            return
        selected = self.state.selected_date
        if selected is not None and as_day(selected) == d:
            self.commit_selection(None, self.state.month, self.state.year)
        else:
            self.commit_selection(d.day, d.month - 1, d.year)

    def commit_selection(self, day: int | None, month: int, year: int) -> None:
        """Apply a new selection (``day=None`` clears it); month is 0-based."""
        if self.props.disabled or self.props.read_only:
            logger.debug("Selection blocked (disabled=%s, read_only=%s)",
                         self.props.disabled, self.props.read_only)
            return
        value = date(year, month + 1, day) if day else None
        before = (self.state.year, self.state.month)
        self.binding.write(value, month, year, self.state)
        if isinstance(self.binding, Uncontrolled) and before != (self.state.year, self.state.month):
            self._notify_month()
        if self.props.on_update is not None:
            self.props.on_update(value)

    # ------------------------------------------------------------------
    # Day pointer / touch events
    # ------------------------------------------------------------------
    def _is_hidden(self, d: date) -> bool:
        return not self.props.show_other_month_date and not self._is_displayed(d)

    def _accepts_press(self, key: str) -> bool:
        if self.props.disabled or self.props.read_only:
            return False
        d = decode_date_key(key)
        return self.is_within_min_and_max(d) and not self._is_hidden(d)

    def day_pointer_down(self, key: str, button: int = PRIMARY_BUTTON) -> None:
        if button == PRIMARY_BUTTON and self._accepts_press(key):
            self.state.active_day = key

    def day_pointer_up(self, key: str, button: int = PRIMARY_BUTTON) -> None:
        """Select the day if the press started on it."""
        if button != PRIMARY_BUTTON or self.state.active_day != key:
            return
        if not self._accepts_press(key):
            return
        d = decode_date_key(key)
        self.commit_selection(d.day, d.month - 1, d.year)
        self.state.focused_date_key = key
        self.state.active_day = None

    def day_pointer_release(self, key: str | None, button: int = PRIMARY_BUTTON) -> None:
        """Handle a button release reported at ``key`` (None: outside any day).

        A release over the pressed day selects it; anywhere else it drops
        the pressed day.
        """
        if button != PRIMARY_BUTTON:
            return
        if key is not None and key == self.state.active_day:
            self.day_pointer_up(key, button)
        else:
            self.day_touch_cancel()

    def day_pointer_enter(self, key: str) -> None:
        if self.props.disabled:
            return
        if self._is_hidden(decode_date_key(key)):
            return
        self.state.focused_date_key = key

    def day_pointer_leave(self, key: str) -> None:
        if self.props.disabled or self.state.focused_date_key != key:
            return
        self.state.last_hovered_day = key
        self.state.focused_date_key = None

    def day_touch_start(self, key: str, touches: int = 1) -> None:
        if touches == 1 and self._accepts_press(key):
            self.state.active_day = key

    def day_touch_end(self, key: str) -> None:
        if self.state.active_day != key or not self._accepts_press(key):
            return
        d = decode_date_key(key)
        self.commit_selection(d.day, d.month - 1, d.year)
        self.state.active_day = None

    def day_touch_cancel(self, key: str | None = None) -> None:
        self.state.active_day = None

    # ------------------------------------------------------------------
    # Props updates
    # ------------------------------------------------------------------
    def props_changed(self, props: DatePickerProps) -> None:
        """Adopt new props; controlled values overwrite the selection."""
        previous = self.props
        self.props = props
        self.binding = resolve_binding(props)
        self.locale = resolve_locale(props.locale)
        if props.value_link is not None or props.has_value():
            self.state.selected_date = self.binding.effective_value(self.state.selected_date)
        year, month = self.state.year, self.state.month
        if props.month and props.month != previous.month:
            month = props.month - 1
        if props.year and props.year != previous.year:
            year = props.year
        self.state.year, self.state.month = normalize_month(year, month)

    # ------------------------------------------------------------------
    # Rendering queries
    # ------------------------------------------------------------------
    def weeks(self) -> list[list[date | None]]:
        """Week rows for the displayed month, in visual (left-to-right) order.

        Cells past the ends of the supported date range are None.
        """
        weeks = build_weeks(self.state.year, self.state.month, self.locale.first_day)
        if self.locale.is_rtl:
            return [list(reversed(row)) for row in weeks]
        return weeks

    def week_header(self) -> list[tuple[str, bool]]:
        return week_header(self.locale)

    def month_label(self) -> str:
        return f"{self.locale.month_names[self.state.month]} {self.state.year}"

    def day_flags(self, d: date) -> DayFlags:
        key = encode_date_key(d)
        d = as_day(d)
        selected = self.state.selected_date
        interactive = not self.props.disabled and not self.props.read_only
        return DayFlags(
            date_key=key,
            day=d.day,
            is_selected=selected is not None and as_day(selected) == d,
            is_focused=self.state.focused_date_key == key,
            is_active=interactive and self.state.active_day == key,
            is_disabled_by_range=not self.is_within_min_and_max(d),
            is_other_month=not self._is_displayed(d),
            is_today=d == as_day(self._today()),
            is_weekend=sunday_weekday(d) == self.locale.week_end,
            is_hidden=self._is_hidden(d),
        )

    def wrapper_flags(self) -> WrapperFlags:
        if self.prevent_focus_style:
            show_focus = self.state.is_focused
        else:
            show_focus = self._has_focus
        return WrapperFlags(
            is_focused=self.state.is_focused,
            is_active=self.state.is_active,
            show_focus_style=show_focus,
            disabled=self.props.disabled,
            read_only=self.props.read_only,
            tab_index=None if self.props.disabled else self.props.tab_index,
        )
