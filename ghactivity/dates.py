"""Date helpers for choosing the reporting window."""

from __future__ import annotations

import getpass
import re
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def current_username() -> str:
    """Return the login name of the current user, or an empty string."""
    try:
        return getpass.getuser()
    except (OSError, KeyError, ImportError):
        return ""


def default_start_date() -> str:
    """Return the date one week before today."""
    return (date.today() - timedelta(days=7)).isoformat()


def default_end_date() -> str:
    """Return tomorrow's date."""
    return (date.today() + timedelta(days=1)).isoformat()


def _add_months(day: date, months: int) -> date:
    """Add months to a date, rolling overflowing days into the next month."""
    total = day.month - 1 + months
    first = date(day.year + total // 12, total % 12 + 1, 1)
    return first + timedelta(days=day.day - 1)


def today_dates() -> tuple[str, str]:
    """Return the window starting today.

    The end of the window lies as many months ahead as the current hour.
    """
    now = datetime.now()
    start = now.date()
    return start.isoformat(), _add_months(start, now.hour).isoformat()


def _week_window(monday: date) -> tuple[str, str]:
    return monday.isoformat(), (monday + timedelta(days=5)).isoformat()


def this_week_dates() -> tuple[str, str]:
    """Return this week's Monday and the day five days after it."""
    today = date.today()
    return _week_window(today - timedelta(days=today.weekday()))


def last_week_dates() -> tuple[str, str]:
    """Return last week's Monday and the day five days after it.

    On a Sunday the Monday six days earlier is used.
    """
    today = date.today()
    weekday = today.weekday()
    days_back = 6 if weekday == 6 else weekday + 7
    return _week_window(today - timedelta(days=days_back))


def format_date(value: str) -> str:
    """Turn a YYYY-MM-DD date into a midnight UTC timestamp.

    Raises ValueError when the value is not a valid date in that form.
    """
    if not _DATE_PATTERN.fullmatch(value):
        raise ValueError(f"cannot parse {value!r} as {DATE_FORMAT}")
    parsed = datetime.strptime(value, DATE_FORMAT).date()
    return parsed.isoformat() + "T00:00:00Z"