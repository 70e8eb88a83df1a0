"""
Booking rules shared by the reservation API and the CSV importer.

- datetime_parsing: canonical date/time normalization
- slots: bookable slots for a day from business settings
- availability: working days, conflicts and past-slot checks
- clients: client reconciliation for new bookings
"""

from .availability import BookingDecision, RejectionReason, can_book, find_conflict, is_working_day
from .clients import ClientIndex, ClientUpsert, upsert_client_for_booking
from .datetime_parsing import format_time_label, parse_date, parse_time, time_label_to_minutes
from .slots import Slot, generate_slots

__all__ = [
    "BookingDecision",
    "ClientIndex",
    "ClientUpsert",
    "RejectionReason",
    "Slot",
    "can_book",
    "find_conflict",
    "format_time_label",
    "generate_slots",
    "is_working_day",
    "parse_date",
    "parse_time",
    "time_label_to_minutes",
    "upsert_client_for_booking",
]
