"""Reservation router - FastAPI endpoints for reservation operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import User, get_current_user
from ...cache import Cache, get_cache
from ...database import get_db
from ...schemas import SuccessResponse
from ...shared.clock import Clock, get_clock
from .schemas import (
    BookingCheckResponse,
    DaySlotsResponse,
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
)
from .service import ReservationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def get_reservation_service(
    db: Session = Depends(get_db),
    cache: Cache = Depends(get_cache),
    clock: Clock = Depends(get_clock),
) -> ReservationService:
    """Dependency injection for ReservationService"""
    return ReservationService(db, cache, clock)


@router.get("", response_model=list[ReservationResponse])
async def get_reservations(
    date: Optional[str] = None,
    client_id: Optional[str] = Query(None, alias="clientId"),
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservations, optionally for one date and/or one client"""
    return service.list_reservations(date=date, client_id=client_id)


@router.get("/slots", response_model=DaySlotsResponse)
async def get_day_slots(
    date: str,
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Day view: all slots with booked/free status"""
    return service.get_day_slots(date)


@router.get("/check", response_model=BookingCheckResponse)
async def check_slot(
    date: str,
    time: str,
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Check whether a slot can be booked without booking it"""
    return service.check_slot(date, time, exclude_id)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: str,
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Get a specific reservation"""
    return service.get_reservation(reservation_id)


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    data: ReservationCreate,
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Book a new reservation"""
    return service.create_reservation(data)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: str,
    data: ReservationUpdate,
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Edit or move a reservation"""
    return service.update_reservation(reservation_id, data)


@router.delete("/{reservation_id}", response_model=SuccessResponse)
async def delete_reservation(
    reservation_id: str,
    current_user: User = Depends(get_current_user),
    service: ReservationService = Depends(get_reservation_service),
):
    """Cancel a reservation"""
    service.delete_reservation(reservation_id)
    return SuccessResponse()
