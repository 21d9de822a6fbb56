# grid.py
# Month grid for a Jalali month, laid out in weeks of 7 cells.
import logging

from models import DayCell, JalaliDate
from logic import month_length, to_gregorian, weekday_index, add_months

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["ش", "ی", "د", "س", "چ", "پ", "ج"]  # Sat..Fri short

# weekStartsOn follows the 0=Sunday .. 6=Saturday numbering
SATURDAY = 6


def weekday_offset(week_starts_on):
    """
    Column of `week_starts_on` in a Saturday-first week.
    Saturday -> 0, Sunday -> 1, ... Friday -> 6.
    """
    if not isinstance(week_starts_on, int) or not (0 <= week_starts_on <= 6):
        raise ValueError(f"week_starts_on must be 0..6, got {week_starts_on!r}")
    return (week_starts_on + 1) % 7


def leading_shift(jy, jm, week_starts_on=SATURDAY):
    """Number of cells before day 1 of the month under the given week start."""
    first = to_gregorian(JalaliDate(jy, jm, 1))
    return (weekday_index(first) - weekday_offset(week_starts_on)) % 7


def _cell(jy, jm, jd, outside):
    j = JalaliDate(jy, jm, jd)
    return DayCell(gregorian=to_gregorian(j), jalali=j, is_outside_month=outside)


def build_month_cells(jy, jm, week_starts_on=SATURDAY, show_outside_days=True):
    """
    Returns the list of cells for the displayed month, row-major, length a
    multiple of 7. Adjacent-month days are tagged outside; when
    show_outside_days is False they are replaced by None placeholders.
    """
    shift = leading_shift(jy, jm, week_starts_on)
    days = month_length(jy, jm)
    cells = []

    if shift:
        prev_y, prev_m = add_months(jy, jm, -1)
        prev_len = month_length(prev_y, prev_m)
        for d in range(prev_len - shift + 1, prev_len + 1):
            cells.append(_cell(prev_y, prev_m, d, True) if show_outside_days else None)

    for d in range(1, days + 1):
        cells.append(_cell(jy, jm, d, False))

    # trailing days never exceed 6, so day numbers stay valid for any month
    next_y, next_m = add_months(jy, jm, 1)
    d = 1
    while len(cells) % 7:
        cells.append(_cell(next_y, next_m, d, True) if show_outside_days else None)
        d += 1

    logger.debug("grid %s/%s ws=%s outside=%s -> %d cells",
                 jy, jm, week_starts_on, show_outside_days, len(cells))
    return cells


def month_rows(cells):
    """Chunk a flat cell list into weeks."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def weekday_labels(week_starts_on=SATURDAY):
    start = weekday_offset(week_starts_on)
    return [WEEKDAY_LABELS[(start + i) % 7] for i in range(7)]
