# selection.py
# Single-date / date-range selection state machine.
import logging

from models import Mode, RangeValue, empty_value
from logic import clamp_to_day, compare_days

logger = logging.getLogger(__name__)


def next_value(mode, value, d):
    """
    mode: Mode
    value: current value (date/None for single, RangeValue for range)
    d: the activated day
    returns: the next value. Never raises and never mutates `value`.
    """
    d = clamp_to_day(d)
    if Mode(mode) is Mode.single:
        return d

    current = value if isinstance(value, RangeValue) else RangeValue()
    start, end = current.start, current.end

    # nothing picked yet, or a finished range: start over
    if start is None or end is not None:
        return RangeValue(start=d, end=None)

    # pending start: an earlier day moves the start instead of closing the range
    if compare_days(d, start) < 0:
        return RangeValue(start=d, end=None)
    return RangeValue(start=start, end=d)


class SelectionModel:
    """
    Holds the current value for a mode. Used directly when the caller owns
    nothing; the calendar controller uses `next_value` with its own ownership.
    """

    def __init__(self, mode=Mode.single, value=None):
        self.mode = Mode(mode)
        self.value = empty_value(self.mode) if value is None else value

    def activate(self, d):
        self.value = next_value(self.mode, self.value, d)
        logger.debug("selection (%s) -> %r", self.mode.value, self.value)
        return self.value
