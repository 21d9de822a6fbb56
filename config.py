# config.py
import os


def _flag(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


BOT_TOKEN = os.environ.get("BOT_TOKEN", "")
TIMEZONE = os.environ.get("TIMEZONE", "Asia/Tehran")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# 0 = Sunday ... 6 = Saturday
WEEK_STARTS_ON = int(os.environ.get("WEEK_STARTS_ON", "6"))
SHOW_OUTSIDE_DAYS = _flag("SHOW_OUTSIDE_DAYS", True)
TO_PERSIAN_DIGITS = _flag("TO_PERSIAN_DIGITS", True)
