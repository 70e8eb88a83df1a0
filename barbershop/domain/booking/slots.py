"""Bookable time slots for a calendar day, derived from business settings"""

from datetime import date, datetime, time
from typing import NamedTuple, Union

from .datetime_parsing import format_time_label


class Slot(NamedTuple):
    time: str
    is_past: bool


def as_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, a datetime or a canonical YYYY-MM-DD string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def generate_slots(settings, day: Union[date, str], now: datetime) -> list[Slot]:
    """
    Ordered slots from startHour up to endHour for ``day``.

    Offsets step by ``appointment_duration`` within each hour; a slot that
    would run past closing time ends that hour's run. ``is_past`` is only set
    on ``now``'s calendar day, for slots that have already started. ``now`` is
    a naive local wall-clock datetime.
    """
    day = as_date(day)
    duration = settings.appointment_duration
    closing = settings.end_hour * 60
    is_today = day == now.date()

    slots = []
    for hour in range(settings.start_hour, settings.end_hour):
        for minute in range(0, 60, duration):
            if hour * 60 + minute + duration > closing:
                break

            is_past = False
            if is_today:
                is_past = datetime.combine(day, time(hour, minute)) < now

            slots.append(Slot(format_time_label(hour, minute), is_past))

    return slots
