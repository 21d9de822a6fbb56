# test_controller.py
import datetime

import pytest

from models import Mode, RangeValue, JalaliDate, DisplayedMonth, Effect, EffectKind
from logic import InvalidDateError, to_gregorian
from controller import CalendarController, External, Internal


def j(y, m, d):
    return to_gregorian(JalaliDate(y, m, d))


TODAY = j(1403, 1, 1)


def make(**kwargs):
    kwargs.setdefault("today", lambda: TODAY)
    return CalendarController(**kwargs)


def test_initial_month_defaults_to_today():
    assert make().displayed_month == DisplayedMonth(1403, 1)


def test_initial_month_from_single_value():
    cal = make(default_value=j(1403, 5, 3))
    assert cal.displayed_month == DisplayedMonth(1403, 5)


def test_initial_month_prefers_default_month():
    cal = make(default_value=j(1403, 5, 3), default_month=(1402, 11))
    assert cal.displayed_month == DisplayedMonth(1402, 11)


def test_snapshot_contents():
    cal = make(week_starts_on=6, show_outside_days=True)
    snap = cal.get_snapshot()
    assert len(snap.cells) == 35
    assert snap.displayed_month == DisplayedMonth(1403, 1)
    assert snap.title == "فروردین ۱۴۰۳"
    assert snap.weekdays[0] == "ش"
    assert snap.selection is None
    assert snap.is_today(TODAY)
    assert len(snap.rows) == 5


def test_title_without_persian_digits():
    assert make(to_persian_digits=False).get_snapshot().title == "فروردین 1403"


def test_activate_single_emits_change():
    cal = make()
    result = cal.activate_day(j(1403, 1, 15))
    assert result.value == j(1403, 1, 15)
    assert result.effects == (Effect(EffectKind.change, j(1403, 1, 15)),)
    assert cal.value == j(1403, 1, 15)
    assert cal.get_snapshot().is_selected(j(1403, 1, 15))


def test_activate_disabled_day_is_noop():
    cal = make(min_date=j(1403, 1, 10), default_value=j(1403, 1, 12))
    result = cal.activate_day(j(1403, 1, 5))
    assert result.effects == ()
    assert cal.value == j(1403, 1, 12)


def test_activate_placeholder_is_noop():
    cal = make(show_outside_days=False)
    assert cal.activate_day(None).effects == ()


def test_disabled_days_never_change_selection():
    blocked = {j(1403, 1, d) for d in (3, 4, 5)}
    cal = make(mode="range", max_date=j(1403, 1, 28), is_date_disabled=lambda d: d in blocked)
    cal.activate_day(j(1403, 1, 2))
    before = cal.value
    for d in list(blocked) + [j(1403, 1, 29), j(1403, 2, 1)]:
        assert cal.activate_day(d).effects == ()
        assert cal.value == before


def test_range_flow_and_predicates():
    cal = make(mode=Mode.range)
    cal.activate_day(j(1403, 2, 10))
    cal.activate_day(j(1403, 2, 5))
    assert cal.value == RangeValue(start=j(1403, 2, 5), end=None)
    cal.activate_day(j(1403, 2, 20))
    assert cal.value == RangeValue(start=j(1403, 2, 5), end=j(1403, 2, 20))

    snap = cal.get_snapshot()
    assert snap.is_selected(j(1403, 2, 5))
    assert snap.is_selected(j(1403, 2, 20))
    assert snap.is_range_start(j(1403, 2, 5))
    assert snap.is_range_end(j(1403, 2, 20))
    assert snap.is_in_range(j(1403, 2, 6))
    assert not snap.is_in_range(j(1403, 2, 5))
    assert not snap.is_in_range(j(1403, 2, 20))
    assert not snap.is_selected(j(1403, 2, 6))


def test_pending_range_has_no_span():
    cal = make(mode="range", default_value=RangeValue(start=j(1403, 2, 5)))
    snap = cal.get_snapshot()
    assert snap.is_selected(j(1403, 2, 5))
    assert not snap.is_in_range(j(1403, 2, 6))


def test_navigate_month_rollover():
    cal = make(default_month=(1403, 12))
    result = cal.navigate_month(1)
    assert result.value == DisplayedMonth(1404, 1)
    assert result.effects == (Effect(EffectKind.month_change, DisplayedMonth(1404, 1)),)
    cal.navigate_month(-1)
    cal.navigate_month(-12)
    assert cal.displayed_month == DisplayedMonth(1402, 12)


def test_navigation_leaves_selection_alone():
    cal = make(default_value=j(1403, 1, 15))
    cal.navigate_month(3)
    assert cal.value == j(1403, 1, 15)
    assert cal.get_snapshot().selection == j(1403, 1, 15)


def test_navigate_zero_does_nothing():
    assert make().navigate_month(0).effects == ()


def test_set_month_and_today():
    cal = make()
    cal.set_month(1399, 12)
    assert cal.displayed_month == DisplayedMonth(1399, 12)
    with pytest.raises(InvalidDateError):
        cal.set_month(1399, 13)
    assert cal.go_to_today().value == DisplayedMonth(1403, 1)


def test_controlled_value_is_read_only():
    state = {"value": j(1403, 3, 3)}
    cal = make(value=lambda: state["value"])
    result = cal.activate_day(j(1403, 3, 9))
    assert result.effects == (Effect(EffectKind.change, j(1403, 3, 9)),)
    # the owner has not applied the change yet
    assert cal.value == j(1403, 3, 3)
    state["value"] = result.value
    assert cal.value == j(1403, 3, 9)


def test_controlled_month_only_echoes():
    state = {"month": DisplayedMonth(1403, 6)}
    cal = make(month=lambda: state["month"])
    result = cal.navigate_month(1)
    assert result.value == DisplayedMonth(1403, 7)
    assert cal.displayed_month == DisplayedMonth(1403, 6)
    state["month"] = result.value
    assert cal.get_snapshot().displayed_month == DisplayedMonth(1403, 7)


def test_ownership_objects_can_be_passed_directly():
    cell = Internal(j(1403, 1, 2))
    cal = make(value=cell)
    cal.activate_day(j(1403, 1, 3))
    assert cell.get() == j(1403, 1, 3)
    fixed = External(lambda: None)
    assert make(value=fixed).value is None


def test_non_callable_controlled_value_rejected():
    with pytest.raises(TypeError):
        make(month=(1403, 1))


def test_invalid_week_start_rejected():
    with pytest.raises(ValueError):
        make(week_starts_on=7)


def test_datetime_today_is_normalized():
    cal = CalendarController(today=lambda: datetime.datetime(2024, 3, 20, 22, 0))
    assert cal.get_snapshot().today == datetime.date(2024, 3, 20)
