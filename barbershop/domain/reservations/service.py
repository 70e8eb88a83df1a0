"""Reservation service - Business logic for booking, moving and cancelling"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import CLIENTS, RESERVATIONS, Cache
from ...config import CACHE_TTL_RESERVATIONS
from ...models import Reservation
from ...shared.clock import Clock
from ...shared.validators import clean_text, validate_uuid
from ..booking import (
    BookingDecision,
    ClientIndex,
    RejectionReason,
    can_book,
    generate_slots,
    is_working_day,
    parse_date,
    parse_time,
    upsert_client_for_booking,
)
from ..clients.repository import ClientRepository
from ..settings.service import SettingsService
from .repository import ReservationRepository
from .schemas import (
    BookingCheckResponse,
    DaySlotsResponse,
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
    SlotResponse,
)

logger = logging.getLogger(__name__)


def decision_status_code(decision: BookingDecision) -> int:
    """HTTP status for a rejected booking: 409 for a taken slot, 422 otherwise"""
    if decision.reason == RejectionReason.SLOT_TAKEN:
        return 409
    return 422


def is_slot_conflict(error: IntegrityError) -> bool:
    """Whether an integrity error comes from the unique (date, time) constraint"""
    message = str(error.orig)
    # PostgreSQL names the constraint, SQLite lists its columns
    return "uq_reservations_slot" in message or "reservations.date" in message


def is_on_slot_grid(settings, day: str, slot_time: str, now) -> bool:
    """Only times on the day's slot grid can be booked through the API"""
    return slot_time in {slot.time for slot in generate_slots(settings, day, now)}


class ReservationService:
    """Service layer for reservation business logic"""

    def __init__(self, db: Session, cache: Cache, clock: Clock):
        self.db = db
        self.cache = cache
        self.clock = clock
        self.repo = ReservationRepository()
        self.settings_service = SettingsService(db, cache)

    def _normalize_date(self, raw: str) -> str:
        day = parse_date(raw)
        if day is None:
            raise HTTPException(status_code=422, detail=f"Invalid date: {raw}")
        return day

    def _normalize_time(self, raw: str) -> str:
        slot_time = parse_time(raw)
        if slot_time is None:
            raise HTTPException(status_code=422, detail=f"Invalid time: {raw}")
        return slot_time

    def _get_reservation(self, reservation_id: str) -> Reservation:
        if not validate_uuid(reservation_id):
            raise HTTPException(status_code=400, detail="Invalid reservation ID format")

        reservation = self.repo.get_reservation_by_id(self.db, reservation_id)
        if not reservation:
            raise HTTPException(status_code=404, detail="Reservation not found")
        return reservation

    def _check_booking(self, day: str, slot_time: str, exclude_id: Optional[str] = None) -> None:
        settings = self.settings_service.get_settings()
        reservations = self.repo.get_reservations(self.db, date=day)
        now = self.clock()
        decision = can_book(settings, reservations, day, slot_time, now, exclude_id=exclude_id)
        if not decision.allowed:
            logger.warning(f"⚠️ Booking rejected ({decision.reason.value}): {day} {slot_time}")
            raise HTTPException(status_code=decision_status_code(decision), detail=decision.message)

        if not is_on_slot_grid(settings, day, slot_time, now):
            logger.warning(f"⚠️ Booking rejected (not a slot): {day} {slot_time}")
            raise HTTPException(status_code=422, detail=f"Time {slot_time} is not a bookable slot on {day}")

    def _commit_slot(self, day: str, slot_time: str) -> None:
        """Commit, reporting a (date, time) unique-constraint violation as a taken slot"""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not is_slot_conflict(e):
                logger.warning(f"⚠️ Client name conflict at commit: {e.orig}")
                raise HTTPException(status_code=409, detail="A client with this name already exists") from e
            logger.warning(f"⚠️ Slot taken at commit: {day} {slot_time}")
            raise HTTPException(
                status_code=409, detail=f"Time slot {slot_time} on {day} is already booked"
            ) from e

    def list_reservations(
        self, date: Optional[str] = None, client_id: Optional[str] = None
    ) -> list[ReservationResponse]:
        """Get reservations, optionally filtered by date and/or client"""
        if date:
            date = self._normalize_date(date)

        cache_key = f"list:{date or '*'}:{client_id or '*'}"
        cached = self.cache.get(RESERVATIONS, cache_key)
        if cached is not None:
            return [ReservationResponse.model_validate(r) for r in cached]

        reservations = [
            ReservationResponse.model_validate(r)
            for r in self.repo.get_reservations(self.db, date=date, client_id=client_id)
        ]
        self.cache.set(
            RESERVATIONS,
            cache_key,
            [r.model_dump(mode="json", by_alias=True) for r in reservations],
            CACHE_TTL_RESERVATIONS,
        )
        return reservations

    def get_reservation(self, reservation_id: str) -> Reservation:
        """Get a specific reservation"""
        return self._get_reservation(reservation_id)

    def get_day_slots(self, date: str) -> DaySlotsResponse:
        """Every slot of a day with its booked/free status"""
        day = self._normalize_date(date)
        settings = self.settings_service.get_settings()
        booked = {r.time: r for r in self.repo.get_reservations(self.db, date=day)}

        slots = []
        for slot in generate_slots(settings, day, self.clock()):
            reservation = booked.get(slot.time)
            slots.append(
                SlotResponse(
                    time=slot.time,
                    is_past=slot.is_past,
                    booked=reservation is not None,
                    reservation_id=reservation.id if reservation else None,
                    client_name=reservation.client_name if reservation else None,
                )
            )

        return DaySlotsResponse(date=day, is_working_day=is_working_day(settings, day), slots=slots)

    def check_slot(self, date: str, time: str, exclude_id: Optional[str] = None) -> BookingCheckResponse:
        """Dry-run of the booking rules for one slot"""
        day = parse_date(date)
        slot_time = parse_time(time)
        if day is None or slot_time is None:
            decision = BookingDecision(False, RejectionReason.PARSE_FAILURE, day, slot_time)
        else:
            settings = self.settings_service.get_settings()
            reservations = self.repo.get_reservations(self.db, date=day)
            now = self.clock()
            decision = can_book(settings, reservations, day, slot_time, now, exclude_id=exclude_id)
            if decision.allowed and not is_on_slot_grid(settings, day, slot_time, now):
                return BookingCheckResponse(
                    allowed=False,
                    reason="not_a_slot",
                    message=f"Time {slot_time} is not a bookable slot on {day}",
                    date=day,
                    time=slot_time,
                )

        return BookingCheckResponse(
            allowed=decision.allowed,
            reason=decision.reason.value if decision.reason else None,
            message=decision.message,
            date=decision.date,
            time=decision.time,
            taken_by=decision.taken_by,
        )

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        """
        Book a new reservation.

        The date and time are normalized, the booking rules are applied and
        the client is found by name (or created) with its visit count and
        last visit updated. Client and reservation are committed together.
        """
        day = self._normalize_date(data.date)
        slot_time = self._normalize_time(data.time)
        self._check_booking(day, slot_time)

        index = ClientIndex(ClientRepository.get_clients_by_name(self.db, data.client_name))
        client, created = upsert_client_for_booking(
            index, data.client_name, data.client_phone, data.notes, day
        )
        if created:
            self.db.add(client)

        reservation = Reservation(
            client_id=client.id,
            client_name=data.client_name,
            client_phone=clean_text(data.client_phone) or client.phone,
            service=clean_text(data.service),
            date=day,
            time=slot_time,
            notes=clean_text(data.notes),
        )
        self.repo.add_reservation(self.db, reservation)
        self._commit_slot(day, slot_time)
        self.db.refresh(reservation)

        self.cache.invalidate(RESERVATIONS, CLIENTS)
        logger.info(f"✅ Reservation booked: {reservation.client_name} on {day} at {slot_time}")
        return reservation

    def update_reservation(self, reservation_id: str, data: ReservationUpdate) -> Reservation:
        """Edit or move a reservation; the client record is left untouched"""
        reservation = self._get_reservation(reservation_id)

        day = self._normalize_date(data.date) if data.date is not None else reservation.date
        slot_time = self._normalize_time(data.time) if data.time is not None else reservation.time
        self._check_booking(day, slot_time, exclude_id=reservation.id)

        reservation.date = day
        reservation.time = slot_time
        if data.client_phone is not None:
            reservation.client_phone = clean_text(data.client_phone)
        if data.service is not None:
            reservation.service = clean_text(data.service)
        if data.notes is not None:
            reservation.notes = clean_text(data.notes)

        self._commit_slot(day, slot_time)
        self.db.refresh(reservation)

        self.cache.invalidate(RESERVATIONS)
        logger.info(f"✅ Reservation {reservation.id} updated: {day} at {slot_time}")
        return reservation

    def delete_reservation(self, reservation_id: str) -> None:
        """Cancel a reservation"""
        reservation = self._get_reservation(reservation_id)
        self.repo.delete_reservation(self.db, reservation)
        self.cache.invalidate(RESERVATIONS)
        logger.info(f"✅ Reservation deleted: {reservation_id}")
