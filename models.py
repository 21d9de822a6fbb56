# models.py
# Value types shared by the calendar engine. Everything here is immutable.
import enum
import datetime
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Any


class Mode(enum.Enum):
    single = "single"
    range = "range"


class JalaliDate(NamedTuple):
    jy: int
    jm: int
    jd: int

    def __str__(self):
        return f"{self.jy:04d}/{self.jm:02d}/{self.jd:02d}"


class DisplayedMonth(NamedTuple):
    jy: int
    jm: int


@dataclass(frozen=True)
class DayCell:
    gregorian: datetime.date
    jalali: JalaliDate
    is_outside_month: bool = False


@dataclass(frozen=True)
class RangeValue:
    """
    A date range. `end` is only ever set together with `start`, and never
    earlier than it. Controlled values that break this are the caller's problem.
    """
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None

    @property
    def is_complete(self):
        return self.start is not None and self.end is not None

    @property
    def is_empty(self):
        return self.start is None and self.end is None


class EffectKind(enum.Enum):
    change = "change"
    month_change = "month_change"
    open_change = "open_change"


class Effect(NamedTuple):
    kind: EffectKind
    payload: Any


class Transition(NamedTuple):
    # value: the state produced by the operation
    # effects: notifications for the host, in the order they happened
    value: Any
    effects: Tuple[Effect, ...] = ()


def empty_value(mode):
    """Unset value for a mode: None for single, an empty RangeValue for range."""
    return None if Mode(mode) is Mode.single else RangeValue()
