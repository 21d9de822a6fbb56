# calendar_helper.py
# Inline Jalali calendar for telegram InlineKeyboardMarkup, driven by a CalendarSnapshot
import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from models import EffectKind, JalaliDate
from logic import to_gregorian
from formatting import to_fa_digits

logger = logging.getLogger(__name__)

NOOP = "noop"
ACTIONS = ("day", "prev", "next", "today", "clear", "close")


def _label(n, to_fa):
    return to_fa_digits(n) if to_fa else str(n)


def build_month_keyboard(snapshot, prefix="cal", to_fa=True, show_clear=True):
    keyboard = []
    # header with month/year and prev/next; tapping the title jumps to today
    header = [
        InlineKeyboardButton("⟨", callback_data=f"{prefix}|prev"),
        InlineKeyboardButton(snapshot.title, callback_data=f"{prefix}|today"),
        InlineKeyboardButton("⟩", callback_data=f"{prefix}|next"),
    ]
    keyboard.append(header)
    keyboard.append([InlineKeyboardButton(n, callback_data=NOOP) for n in snapshot.weekdays])

    for week in snapshot.rows:
        row = []
        for cell in week:
            if cell is None:
                row.append(InlineKeyboardButton(" ", callback_data=NOOP))
                continue
            g = cell.gregorian
            text = _label(cell.jalali.jd, to_fa)
            if snapshot.is_disabled(g):
                row.append(InlineKeyboardButton("·", callback_data=NOOP))
                continue
            if snapshot.is_selected(g):
                text = f"[{text}]"
            elif snapshot.is_in_range(g):
                text = f"({text})"
            elif snapshot.is_today(g):
                text = f"*{text}"
            j = cell.jalali
            row.append(InlineKeyboardButton(
                text, callback_data=f"{prefix}|day|{j.jy:04d}-{j.jm:02d}-{j.jd:02d}"))
        keyboard.append(row)

    footer = [InlineKeyboardButton("بستن", callback_data=f"{prefix}|close")]
    if show_clear:
        footer.insert(0, InlineKeyboardButton("پاک کردن", callback_data=f"{prefix}|clear"))
    keyboard.append(footer)
    return InlineKeyboardMarkup(keyboard)


def parse_callback(data, prefix="cal"):
    """
    "cal|day|1403-08-25" -> ("day", datetime.date(2024, 11, 15))
    "cal|next"           -> ("next", None)
    "noop"               -> ("noop", None)
    Raises ValueError for anything else.
    """
    if data == NOOP:
        return NOOP, None
    parts = (data or "").split("|")
    if len(parts) < 2 or parts[0] != prefix or parts[1] not in ACTIONS:
        raise ValueError(f"unknown calendar callback: {data!r}")
    action = parts[1]
    if action != "day":
        return action, None
    if len(parts) != 3:
        raise ValueError(f"day callback without a date: {data!r}")
    try:
        y, m, d = [int(x) for x in parts[2].split("-")]
    except ValueError:
        raise ValueError(f"bad jalali date in callback: {data!r}")
    # InvalidDateError is a ValueError too
    return action, to_gregorian(JalaliDate(y, m, d))


def dispatch(effects, on_change=None, on_month_change=None, on_open_change=None):
    """Call the host callback for each effect, in order."""
    handlers = {
        EffectKind.change: on_change,
        EffectKind.month_change: on_month_change,
        EffectKind.open_change: on_open_change,
    }
    for effect in effects:
        handler = handlers.get(effect.kind)
        if handler is not None:
            handler(effect.payload)
