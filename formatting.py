# formatting.py
# Display strings: Persian digits, month titles, picker text.
from models import RangeValue
from logic import to_jalali

PERSIAN_MONTHS = [
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
]

_FA_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")

RANGE_SEPARATOR = " – "


def to_fa_digits(text):
    return str(text).translate(_FA_DIGITS)


def month_title(jy, jm, to_fa=True):
    title = f"{PERSIAN_MONTHS[jm - 1]} {jy}"
    return to_fa_digits(title) if to_fa else title


def format_date(d, to_fa=True):
    """Gregorian date -> Jalali yyyy/mm/dd."""
    j = to_jalali(d)
    text = f"{j.jy:04d}/{j.jm:02d}/{j.jd:02d}"
    return to_fa_digits(text) if to_fa else text


def default_format(value, to_fa=True):
    """
    None -> ""
    date -> "1403/01/01"
    RangeValue -> "start – end", or just "start" while the end is pending
    """
    if value is None:
        return ""
    if isinstance(value, RangeValue):
        if value.is_empty:
            return ""
        start = format_date(value.start, False) if value.start is not None else ""
        if value.end is None:
            out = start
        else:
            out = start + RANGE_SEPARATOR + format_date(value.end, False)
        return to_fa_digits(out) if to_fa else out
    return format_date(value, to_fa)
