"""
Booking rules: working days, slot conflicts and past-slot protection.

All checks run over snapshots supplied by the caller (settings plus the
reservations known for a date) and return values instead of raising.
Reservations are any objects exposing ``id``, ``date``, ``time`` and
``client_name``.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Iterable, Optional, Union

from ..settings.schemas import WEEKDAY_NAMES
from .datetime_parsing import time_label_to_minutes
from .slots import as_date


class RejectionReason(str, Enum):
    PARSE_FAILURE = "parse_failure"
    NON_WORKING_DAY = "non_working_day"
    SLOT_TAKEN = "slot_taken"
    PAST_SLOT = "past_slot"


@dataclass(frozen=True)
class BookingDecision:
    """Outcome of can_book; ``taken_by`` is set for SLOT_TAKEN"""

    allowed: bool
    reason: Optional[RejectionReason] = None
    date: Optional[str] = None
    time: Optional[str] = None
    taken_by: Optional[str] = None

    @property
    def message(self) -> str:
        if self.allowed:
            return "Time slot is available"
        if self.reason == RejectionReason.NON_WORKING_DAY:
            return "Appointments cannot be booked on non-working days. Please select a working day."
        if self.reason == RejectionReason.SLOT_TAKEN:
            return f"Time slot {self.time} on {self.date} is already booked by {self.taken_by}"
        if self.reason == RejectionReason.PAST_SLOT:
            return "You cannot create a new reservation at this time because the time has passed."
        return "Invalid date or time"


def is_working_day(settings, day: Union[date, str]) -> bool:
    """True when the weekday of ``day`` is enabled in settings.working_days"""
    weekday_name = WEEKDAY_NAMES[as_date(day).weekday()]
    return bool(getattr(settings.working_days, weekday_name))


def find_conflict(reservations: Iterable, day: Union[date, str], slot_time: str, exclude_id=None):
    """First reservation occupying (day, slot_time) other than ``exclude_id``"""
    day_str = as_date(day).isoformat()
    for reservation in reservations:
        if reservation.date != day_str or reservation.time != slot_time:
            continue
        if exclude_id is not None and reservation.id == exclude_id:
            continue
        return reservation
    return None


def can_book(
    settings,
    reservations: Iterable,
    day: Union[date, str],
    slot_time: str,
    now: datetime,
    exclude_id=None,
) -> BookingDecision:
    """
    Decide whether (day, slot_time) may be booked.

    Checks run in order: non-working day, conflict with another reservation,
    then - only for new bookings (no ``exclude_id``) - a slot on today's date
    that has already started. Moving or re-saving an existing reservation is
    never rejected for being in the past.
    """
    day = as_date(day)
    day_str = day.isoformat()

    if not is_working_day(settings, day):
        return BookingDecision(False, RejectionReason.NON_WORKING_DAY, day_str, slot_time)

    conflict = find_conflict(reservations, day, slot_time, exclude_id)
    if conflict is not None:
        return BookingDecision(
            False, RejectionReason.SLOT_TAKEN, day_str, slot_time, taken_by=conflict.client_name
        )

    if exclude_id is None and day == now.date():
        minutes = time_label_to_minutes(slot_time)
        if minutes is not None:
            slot_start = datetime.combine(day, time(minutes // 60, minutes % 60))
            if slot_start <= now:
                return BookingDecision(False, RejectionReason.PAST_SLOT, day_str, slot_time)

    return BookingDecision(True, date=day_str, time=slot_time)
