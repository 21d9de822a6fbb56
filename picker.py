# picker.py
# Date picker: a text field surface plus a calendar surface that opens on demand.
import logging
from dataclasses import dataclass
from typing import Any, Optional

from config import TO_PERSIAN_DIGITS
from models import Mode, Effect, EffectKind, Transition, empty_value
from controller import CalendarController, CalendarSnapshot, External, ownership
from formatting import default_format

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "انتخاب تاریخ"


@dataclass(frozen=True)
class PickerSnapshot:
    is_open: bool
    display: str
    placeholder: str
    disabled: bool
    show_clear: bool
    # only present while the calendar surface is showing
    calendar: Optional[CalendarSnapshot]
    value: Any = None


class DatePickerController:
    """
    Wraps a CalendarController with an open/closed flag and a display string.

    value / open follow the same rule as the calendar: a zero-arg callable
    means the caller owns it, otherwise the picker keeps its own copy.
    Any other keyword arguments (min_date, week_starts_on, ...) go to the calendar.
    """

    def __init__(self, mode=Mode.single, value=None, default_value=None,
                 open=None, default_open=False, format=None,
                 to_persian_digits=TO_PERSIAN_DIGITS, placeholder=DEFAULT_PLACEHOLDER,
                 disabled=False, clearable=True, **calendar_options):
        self.mode = Mode(mode)
        if default_value is None:
            default_value = empty_value(self.mode)
        self._value = ownership(value, default_value)
        self._open = ownership(open, bool(default_open))
        self.to_persian_digits = to_persian_digits
        self.format = format
        self.placeholder = placeholder
        self.disabled = disabled
        self.clearable = clearable
        # one source of truth: the calendar reads the picker's value
        self.calendar = CalendarController(
            mode=self.mode,
            value=External(self._value.get),
            to_persian_digits=to_persian_digits,
            **calendar_options,
        )

    @property
    def value(self):
        current = self._value.get()
        return empty_value(self.mode) if current is None else current

    @property
    def is_open(self):
        return bool(self._open.get())

    @property
    def formatted_display(self):
        if self.format is not None:
            return self.format(self.value)
        return default_format(self.value, self.to_persian_digits)

    def get_snapshot(self):
        display = self.formatted_display
        showing = self.is_open and not self.disabled
        return PickerSnapshot(
            is_open=self.is_open,
            display=display,
            placeholder=self.placeholder,
            disabled=self.disabled,
            show_clear=bool(self.clearable and display and not self.disabled),
            calendar=self.calendar.get_snapshot() if showing else None,
            value=self.value,
        )

    def set_open(self, is_open):
        is_open = bool(is_open)
        if is_open and self.disabled:
            return Transition(self.is_open, ())
        self._open.set(is_open)
        logger.debug("picker open -> %s", is_open)
        return Transition(is_open, (Effect(EffectKind.open_change, is_open),))

    def open(self):
        return self.set_open(True)

    def close(self):
        return self.set_open(False)

    def toggle(self):
        return self.set_open(not self.is_open)

    def activate_day(self, d):
        # the calendar surface is hidden while disabled
        if self.disabled:
            return Transition(self.value, ())
        result = self.calendar.activate_day(d)
        if not result.effects:
            return Transition(self.value, ())
        self._value.set(result.value)
        effects = list(result.effects)
        # a single pick is complete on its own; a range may take several visits
        if self.mode is Mode.single:
            effects.extend(self.set_open(False).effects)
        return Transition(result.value, tuple(effects))

    def navigate_month(self, delta):
        return self.calendar.navigate_month(delta)

    def go_to_today(self):
        return self.calendar.go_to_today()

    def clear(self):
        if self.disabled or not self.clearable:
            return Transition(self.value, ())
        cleared = empty_value(self.mode)
        self._value.set(cleared)
        logger.debug("picker cleared")
        return Transition(cleared, (Effect(EffectKind.change, cleared),))
