"""Reservation domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...schemas import CamelModel


class ReservationCreate(CamelModel):
    """
    Schema for booking a new reservation.

    ``date`` and ``time`` are accepted in any format the normalizer
    understands (``15/03/2025``, ``18:30``, ``6pm``...) and stored canonically.
    """

    client_name: str = Field(min_length=1)
    client_phone: str = ""
    service: str = ""
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)
    notes: str = ""

    @field_validator("client_name")
    @classmethod
    def strip_client_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Client name is required")
        return v


class ReservationUpdate(CamelModel):
    """Schema for editing or moving a reservation; omitted fields are kept"""

    client_phone: Optional[str] = None
    service: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    notes: Optional[str] = None


class ReservationResponse(CamelModel):
    """Schema for reservation response"""

    id: str
    client_id: Optional[str] = None
    client_name: str
    client_phone: str = ""
    service: str = ""
    date: str
    time: str
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SlotResponse(CamelModel):
    """One slot of the day view"""

    time: str
    is_past: bool
    booked: bool
    reservation_id: Optional[str] = None
    client_name: Optional[str] = None


class DaySlotsResponse(CamelModel):
    """Calendar day view: every bookable slot with its booked/free status"""

    date: str
    is_working_day: bool
    slots: list[SlotResponse]


class BookingCheckResponse(CamelModel):
    allowed: bool
    reason: Optional[str] = None
    message: str
    date: Optional[str] = None
    time: Optional[str] = None
    taken_by: Optional[str] = None
