# controller.py
# Calendar controller: month navigation + selection + disabled days, behind one surface.
import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

import pytz

from config import TIMEZONE, WEEK_STARTS_ON, SHOW_OUTSIDE_DAYS, TO_PERSIAN_DIGITS
from models import (
    Mode, RangeValue, DisplayedMonth, Effect, EffectKind, Transition, empty_value,
)
from logic import (
    InvalidDateError, clamp_to_day, compare_days, same_day, add_months, month_of,
)
from grid import build_month_cells, month_rows, weekday_labels, weekday_offset
from selection import next_value
from disablement import DisablementPolicy
from formatting import month_title

logger = logging.getLogger(__name__)


def today_local(tz_name=None):
    tz = pytz.timezone(tz_name or TIMEZONE)
    return datetime.datetime.now(tz).date()


class External:
    """The value lives with the caller; reads go through `accessor`, writes are dropped."""

    def __init__(self, accessor):
        self.accessor = accessor

    def get(self):
        return self.accessor()

    def set(self, value):
        # the owner learns about the change from the returned effects
        pass


class Internal:
    """The controller owns the value. Initialized once, never re-seeded."""

    def __init__(self, initial=None):
        self._value = initial

    def get(self):
        return self._value

    def set(self, value):
        self._value = value


def ownership(controlled, default):
    """
    controlled: None, an External/Internal, or a zero-arg callable returning the value
    default: initial value when nothing is controlled
    """
    if isinstance(controlled, (External, Internal)):
        return controlled
    if controlled is not None:
        if not callable(controlled):
            raise TypeError("a controlled value must be given as a callable accessor")
        return External(controlled)
    return Internal(default)


@dataclass(frozen=True)
class CalendarSnapshot:
    cells: Tuple[Any, ...]
    selection: Any
    displayed_month: DisplayedMonth
    mode: Mode
    today: datetime.date
    title: str
    weekdays: Tuple[str, ...]
    policy: DisablementPolicy = field(repr=False, compare=False)

    @property
    def rows(self):
        return month_rows(list(self.cells))

    def is_disabled(self, d):
        return self.policy.is_disabled(d)

    def is_today(self, d):
        return same_day(d, self.today)

    def _range(self):
        if self.mode is Mode.range and isinstance(self.selection, RangeValue):
            return self.selection
        return RangeValue()

    def is_selected(self, d):
        if self.mode is Mode.single:
            return self.selection is not None and same_day(d, self.selection)
        r = self._range()
        return same_day(d, r.start) or same_day(d, r.end)

    def is_in_range(self, d):
        # strictly between the endpoints of a finished range
        r = self._range()
        if not r.is_complete:
            return False
        return compare_days(r.start, d) < 0 < compare_days(r.end, d)

    def is_range_start(self, d):
        return same_day(d, self._range().start)

    def is_range_end(self, d):
        return same_day(d, self._range().end)


class CalendarController:
    """
    Composes the month grid, selection and disabled-day rules.

    value / month: pass a zero-arg callable (or an External) to control them
    from outside; otherwise the controller keeps its own copy seeded from
    default_value / default_month.
    Operations return a Transition; the host dispatches its effects.
    """

    def __init__(self, mode=Mode.single, value=None, default_value=None,
                 month=None, default_month=None,
                 min_date=None, max_date=None, is_date_disabled=None,
                 week_starts_on=WEEK_STARTS_ON, show_outside_days=SHOW_OUTSIDE_DAYS,
                 to_persian_digits=TO_PERSIAN_DIGITS,
                 today: Optional[Callable[[], datetime.date]] = None):
        self.mode = Mode(mode)
        weekday_offset(week_starts_on)  # validates 0..6
        self.week_starts_on = week_starts_on
        self.show_outside_days = show_outside_days
        self.to_persian_digits = to_persian_digits
        self.policy = DisablementPolicy(min_date, max_date, is_date_disabled)
        self._today = today or today_local

        if default_value is None:
            default_value = empty_value(self.mode)
        self._value = ownership(value, default_value)

        initial_month = None
        if month is None:
            initial_month = self._initial_month(default_month)
        self._month = ownership(month, initial_month)

    def _initial_month(self, default_month):
        if default_month is not None:
            return DisplayedMonth(*default_month)
        current = self._value.get()
        if self.mode is Mode.single and current is not None:
            return month_of(current)
        return month_of(self._today())

    # reads

    @property
    def value(self):
        current = self._value.get()
        return empty_value(self.mode) if current is None else current

    @property
    def displayed_month(self):
        return DisplayedMonth(*self._month.get())

    def is_disabled(self, d):
        return self.policy.is_disabled(d)

    def get_snapshot(self):
        jy, jm = self.displayed_month
        cells = build_month_cells(jy, jm, self.week_starts_on, self.show_outside_days)
        return CalendarSnapshot(
            cells=tuple(cells),
            selection=self.value,
            displayed_month=DisplayedMonth(jy, jm),
            mode=self.mode,
            today=clamp_to_day(self._today()),
            title=month_title(jy, jm, self.to_persian_digits),
            weekdays=tuple(weekday_labels(self.week_starts_on)),
            policy=self.policy,
        )

    # updates

    def activate_day(self, d):
        current = self.value
        if d is None or self.is_disabled(d):
            return Transition(current, ())
        new = next_value(self.mode, current, d)
        self._value.set(new)
        logger.debug("day activated %s -> %r", d, new)
        return Transition(new, (Effect(EffectKind.change, new),))

    def _move_to(self, target):
        self._month.set(target)
        logger.debug("month -> %s/%s", target.jy, target.jm)
        return Transition(target, (Effect(EffectKind.month_change, target),))

    def navigate_month(self, delta):
        if delta == 0:
            return Transition(self.displayed_month, ())
        jy, jm = self.displayed_month
        return self._move_to(add_months(jy, jm, delta))

    def set_month(self, jy, jm):
        if not (1 <= jm <= 12):
            raise InvalidDateError(f"month out of range: {jm}")
        return self._move_to(DisplayedMonth(jy, jm))

    def go_to_today(self):
        return self._move_to(month_of(self._today()))
