from datetime import date

from value_binding import (
    UNSET,
    CalendarState,
    ControlledLink,
    ControlledValue,
    DatePickerProps,
    Uncontrolled,
    ValueLink,
    initial_state,
    resolve_binding,
)

TODAY = date(2026, 10, 19)


def test_resolve_binding_modes() -> None:
    link = ValueLink(value=date(2024, 1, 1), request_change=lambda v: None)
    assert isinstance(resolve_binding(DatePickerProps()), Uncontrolled)
    assert isinstance(resolve_binding(DatePickerProps(value=None)), ControlledValue)
    assert isinstance(resolve_binding(DatePickerProps(value=date(2024, 1, 1))), ControlledValue)
    # A link takes priority over a plain value
    binding = resolve_binding(DatePickerProps(value=date(2020, 5, 5), value_link=link))
    assert isinstance(binding, ControlledLink)
    assert binding.effective_value(None) == date(2024, 1, 1)


def test_unset_is_distinct_from_none() -> None:
    assert DatePickerProps().has_value() is False
    assert DatePickerProps(value=None).has_value() is True
    assert not UNSET


def test_uncontrolled_write_updates_state() -> None:
    state = CalendarState(month=0, year=2024)
    Uncontrolled().write(date(2024, 5, 6), 4, 2024, state)
    assert state.selected_date == date(2024, 5, 6)
    assert (state.month, state.year) == (4, 2024)


def test_controlled_value_write_leaves_state() -> None:
    state = CalendarState(month=0, year=2024, selected_date=date(2024, 1, 2))
    ControlledValue(date(2024, 1, 2)).write(date(2024, 5, 6), 4, 2024, state)
    assert state.selected_date == date(2024, 1, 2)
    assert (state.month, state.year) == (0, 2024)


def test_link_write_only_requests_change() -> None:
    requested = []
    link = ValueLink(value=None, request_change=requested.append)
    state = CalendarState(month=0, year=2024)
    ControlledLink(link).write(date(2024, 5, 6), 4, 2024, state)
    assert requested == [date(2024, 5, 6)]
    assert state.selected_date is None
    assert (state.month, state.year) == (0, 2024)


def test_initial_state_from_default_value() -> None:
    state = initial_state(DatePickerProps(default_value=date(2024, 3, 15)), TODAY)
    assert state.selected_date == date(2024, 3, 15)
    assert (state.month, state.year) == (2, 2024)


def test_initial_state_month_precedence() -> None:
    props = DatePickerProps(default_value=date(2024, 3, 15), default_month=7, default_year=2020)
    state = initial_state(props, TODAY)
    assert (state.month, state.year) == (6, 2020)
    props = DatePickerProps(month=12, year=1999, default_month=7, default_year=2020)
    state = initial_state(props, TODAY)
    assert (state.month, state.year) == (11, 1999)


def test_initial_state_normalizes_month() -> None:
    state = initial_state(DatePickerProps(month=13, year=2024), TODAY)
    assert (state.month, state.year) == (0, 2025)
    state = initial_state(DatePickerProps(default_month=14, default_year=2020), TODAY)
    assert (state.month, state.year) == (1, 2021)


def test_initial_state_defaults_to_today() -> None:
    state = initial_state(DatePickerProps(), TODAY)
    assert state.selected_date is None
    assert (state.month, state.year) == (9, 2026)
    assert state.focused_date_key is None
    assert not state.is_focused and not state.is_active


def test_initial_state_prefers_link_then_value() -> None:
    link = ValueLink(value=date(2022, 8, 1), request_change=lambda v: None)
    props = DatePickerProps(value=date(2021, 1, 1), value_link=link, default_value=date(2020, 1, 1))
    assert initial_state(props, TODAY).selected_date == date(2022, 8, 1)
    props = DatePickerProps(value=None, default_value=date(2020, 1, 1))
    assert initial_state(props, TODAY).selected_date is None
