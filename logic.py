# logic.py
# Jalali <-> Gregorian conversion and month arithmetic. Pure functions, no state.
import datetime
import logging

import jdatetime

from models import JalaliDate, DisplayedMonth

logger = logging.getLogger(__name__)

# Farvardin..Shahrivar have 31 days, Mehr..Bahman 30, Esfand 29 (30 in leap years)
MONTHS_31 = range(1, 7)
MONTHS_30 = range(7, 12)


class InvalidDateError(ValueError):
    """Raised when a Jalali year/month/day does not name a real day."""


def clamp_to_day(value):
    """
    value: datetime.date or datetime.datetime
    returns: datetime.date (time of day dropped)
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    raise TypeError(f"expected a date, got {type(value).__name__}")


def compare_days(a, b):
    """Negative, zero or positive like a classic cmp, at day granularity."""
    a, b = clamp_to_day(a), clamp_to_day(b)
    return (a > b) - (a < b)


def same_day(a, b):
    if a is None or b is None:
        return False
    return compare_days(a, b) == 0


def is_leap_year(jy):
    return jdatetime.date(jy, 1, 1).isleap()


def month_length(jy, jm):
    if jm in MONTHS_31:
        return 31
    if jm in MONTHS_30:
        return 30
    if jm == 12:
        return 30 if is_leap_year(jy) else 29
    raise InvalidDateError(f"month out of range: {jm}")


def is_valid_jalali_date(jy, jm, jd):
    # never raises; anything that is not three in-range ints is just invalid
    try:
        if not all(isinstance(x, int) and not isinstance(x, bool) for x in (jy, jm, jd)):
            return False
        if not (jdatetime.MINYEAR <= jy <= jdatetime.MAXYEAR):
            return False
        if not (1 <= jm <= 12):
            return False
        return 1 <= jd <= month_length(jy, jm)
    except (ValueError, OverflowError):
        return False


def to_gregorian(jalali):
    """
    jalali: JalaliDate (or any (jy, jm, jd) triple)
    returns: datetime.date
    """
    jy, jm, jd = jalali
    if not is_valid_jalali_date(jy, jm, jd):
        raise InvalidDateError(f"invalid jalali date: {jy}/{jm}/{jd}")
    return jdatetime.date(jy, jm, jd).togregorian()


def to_jalali(gregorian):
    j = jdatetime.date.fromgregorian(date=clamp_to_day(gregorian))
    return JalaliDate(j.year, j.month, j.day)


def weekday_index(gregorian):
    """Day of week with Saturday == 0 ... Friday == 6."""
    # date.weekday(): Monday == 0, so shift by two to land Saturday on 0
    return (clamp_to_day(gregorian).weekday() + 2) % 7


def add_months(jy, jm, months):
    """
    Move a Jalali (year, month) by `months` (may be negative).
    returns: DisplayedMonth
    """
    if not (1 <= jm <= 12):
        raise InvalidDateError(f"month out of range: {jm}")
    total = jm + months
    new_y = jy + (total - 1) // 12
    new_m = (total - 1) % 12 + 1
    return DisplayedMonth(new_y, new_m)


def month_of(gregorian):
    j = to_jalali(gregorian)
    return DisplayedMonth(j.jy, j.jm)
