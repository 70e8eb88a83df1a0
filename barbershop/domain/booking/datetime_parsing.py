"""
Date and time normalization for booking input.

Canonical forms stored on every reservation and used for all comparisons:
dates as ``YYYY-MM-DD`` and times as ``H:MM AM|PM`` (e.g. ``6:30 PM``).
Parsing is lenient and value-returning: unparseable input yields ``None``
and the caller decides whether that is fatal.
"""

import logging
import re
from datetime import date, timedelta
from typing import Optional

from ... import config

logger = logging.getLogger(__name__)

DATE_ORDERS = ("DMY", "MDY")

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
ANY_SEPARATOR_DATE_RE = re.compile(r"^(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{2,4})$")

SUFFIXED_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)$", re.IGNORECASE)
TIME_24H_RE = re.compile(r"^(\d{1,2})[:.](\d{2})$")
BARE_HOUR_RE = re.compile(r"^(\d{1,2})$")
TIME_LABEL_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)


def calendar_date(year: int, month: int, day: int) -> date:
    """
    Build a date with lenient rollover: month 13 is January of the next year,
    day 30 of February is the 1st or 2nd of March, day 0 is the previous day.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def _to_ymd(year: int, month: int, day: int) -> Optional[str]:
    try:
        return calendar_date(year, month, day).strftime("%Y-%m-%d")
    except (ValueError, OverflowError):
        return None


def parse_date(raw: Optional[str], order: Optional[str] = None) -> Optional[str]:
    """
    Normalize a textual date to ``YYYY-MM-DD``.

    Accepts ``YYYY-M-D`` and ``A-B-Y`` with ``-``, ``/`` or ``.`` separators
    (two-digit years are 20YY). For ``A-B-Y``: a first component above 12 is
    the day, otherwise a second component above 12 is the day, otherwise
    ``order`` decides (defaults to ``DATE_ORDER`` from config).
    """
    s = (raw or "").strip()
    if not s:
        return None

    order = (order or config.DATE_ORDER).upper()
    if order not in DATE_ORDERS:
        raise ValueError(f"Unsupported date order: {order}")

    match = ISO_DATE_RE.match(s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _to_ymd(year, month, day)

    match = ANY_SEPARATOR_DATE_RE.match(s)
    if match:
        first, second, year = (int(g) for g in match.groups())
        if year < 100:
            year += 2000

        if first > 12:
            day, month = first, second
        elif second > 12:
            month, day = first, second
        elif order == "MDY":
            month, day = first, second
        else:
            day, month = first, second

        if 1 <= month <= 12 and 1 <= day <= 31:
            return _to_ymd(year, month, day)

    return None


def format_time_label(hour: int, minute: int) -> str:
    """Format a 24-hour clock time as the canonical 12-hour label"""
    period = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {period}"


def parse_time(raw: Optional[str], passthrough: Optional[bool] = None) -> Optional[str]:
    """
    Normalize a textual time to ``H:MM AM|PM``.

    Accepts ``H[:MM] am/pm`` in any case, 24-hour ``HH:MM`` / ``HH.MM`` and a
    bare hour. Any other non-empty string is returned unchanged when
    ``passthrough`` is enabled (defaults to ``TIME_PASSTHROUGH``), else None.
    """
    s = (raw or "").strip()
    if not s:
        return None

    if passthrough is None:
        passthrough = config.TIME_PASSTHROUGH

    match = SUFFIXED_TIME_RE.match(s)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        if hour > 12 or minute > 59:
            return None
        return f"{hour % 12 or 12}:{minute:02d} {match.group(3).upper()}"

    match = TIME_24H_RE.match(s)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        return format_time_label(hour, minute)

    match = BARE_HOUR_RE.match(s)
    if match:
        hour = int(match.group(1))
        if hour > 23:
            return None
        return format_time_label(hour, 0)

    if passthrough:
        logger.warning(f"⚠️ Unrecognised time format kept as-is: {s!r}")
        return s

    logger.warning(f"⚠️ Unrecognised time format rejected: {s!r}")
    return None


def time_label_to_minutes(label: str) -> Optional[int]:
    """Minutes after midnight for a canonical label, None if it is not one"""
    match = TIME_LABEL_RE.match((label or "").strip())
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if not 1 <= hour <= 12 or minute > 59:
        return None

    hour = hour % 12
    if match.group(3).upper() == "PM":
        hour += 12
    return hour * 60 + minute
