# main.py
# Telegram host for the Jalali date picker: /date picks one day, /range picks a span.
import logging

from telegram import Update
from telegram.error import BadRequest
from telegram.ext import Application, CommandHandler, ContextTypes, CallbackQueryHandler

from config import BOT_TOKEN, LOG_LEVEL, WEEK_STARTS_ON, SHOW_OUTSIDE_DAYS, TO_PERSIAN_DIGITS
from models import Mode
from picker import DatePickerController
from calendar_helper import build_month_keyboard, parse_callback, dispatch, NOOP

logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

PREFIX = "cal"
EXPIRED_TEXT = "این تقویم منقضی شده؛ دوباره /date یا /range را بزن."


def new_picker(mode):
    return DatePickerController(
        mode=mode,
        default_open=True,
        to_persian_digits=TO_PERSIAN_DIGITS,
        week_starts_on=WEEK_STARTS_ON,
        show_outside_days=SHOW_OUTSIDE_DAYS,
    )


def picker_text(picker):
    display = picker.formatted_display or picker.placeholder
    if picker.mode is Mode.range:
        return f"📅 بازه: {display}"
    return f"📅 تاریخ: {display}"


def picker_markup(picker):
    snap = picker.get_snapshot()
    if snap.calendar is None:
        return None
    return build_month_keyboard(
        snap.calendar, prefix=PREFIX, to_fa=picker.to_persian_digits, show_clear=snap.show_clear)


def apply_action(picker, action, arg):
    """Route one parsed callback to the picker. Returns a Transition."""
    if action == "day":
        return picker.activate_day(arg)
    if action == "prev":
        return picker.navigate_month(-1)
    if action == "next":
        return picker.navigate_month(1)
    if action == "today":
        return picker.go_to_today()
    if action == "clear":
        return picker.clear()
    if action == "close":
        return picker.close()
    raise ValueError(f"unsupported action: {action}")


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        "سلام! 👋\n/date برای انتخاب یک تاریخ و /range برای انتخاب بازه‌ی تاریخ."
    )


def active_picker(user_data, message_id):
    """The picker behind `message_id`, or None if that keyboard is stale."""
    picker = user_data.get("picker")
    if picker is None or user_data.get("picker_message_id") != message_id:
        return None
    return picker


async def _open_picker(update: Update, context: ContextTypes.DEFAULT_TYPE, mode):
    picker = new_picker(mode)
    message = await update.message.reply_text(picker_text(picker), reply_markup=picker_markup(picker))
    # only this message drives the picker; older keyboards count as expired
    context.user_data["picker"] = picker
    context.user_data["picker_message_id"] = message.message_id


async def date_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _open_picker(update, context, Mode.single)


async def range_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _open_picker(update, context, Mode.range)


async def calendar_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()
    try:
        action, arg = parse_callback(query.data, prefix=PREFIX)
    except ValueError as e:
        logger.warning("Ignoring calendar callback: %s", e)
        return
    if action == NOOP:
        return

    picker = active_picker(context.user_data, query.message.message_id)
    if picker is None:
        await query.edit_message_text(EXPIRED_TEXT)
        return

    result = apply_action(picker, action, arg)
    dispatch(
        result.effects,
        on_change=lambda v: logger.info("chat %s value -> %r", query.message.chat.id, v),
        on_month_change=lambda m: logger.debug("month -> %s/%s", m.jy, m.jm),
        on_open_change=lambda o: logger.debug("open -> %s", o),
    )

    try:
        await query.edit_message_text(picker_text(picker), reply_markup=picker_markup(picker))
    except BadRequest as e:
        # "message is not modified" when nothing visible changed
        logger.debug("edit skipped: %s", e)


def main():
    app = Application.builder().token(BOT_TOKEN).build()

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("date", date_command))
    app.add_handler(CommandHandler("range", range_command))
    app.add_handler(CallbackQueryHandler(calendar_callback, pattern=rf"^({PREFIX}\||{NOOP}$)"))

    logger.info("Bot started")
    app.run_polling()


if __name__ == "__main__":
    main()
