"""Reservation repository - Database operations for reservations"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import Reservation


class ReservationRepository:
    """Repository for reservation database operations"""

    @staticmethod
    def get_reservations(
        db: Session, date: Optional[str] = None, client_id: Optional[str] = None
    ) -> list[Reservation]:
        """Get reservations, optionally for one date and/or one client"""
        query = db.query(Reservation)

        if date:
            query = query.filter(Reservation.date == date)

        if client_id:
            query = query.filter(Reservation.client_id == client_id)

        return query.order_by(Reservation.date.asc(), Reservation.created_at.asc()).all()

    @staticmethod
    def get_reservation_by_id(db: Session, reservation_id: str) -> Optional[Reservation]:
        """Get a specific reservation by ID"""
        return db.query(Reservation).filter(Reservation.id == reservation_id).first()

    @staticmethod
    def get_client_history(db: Session, client_id: str, client_name_key: str) -> list[Reservation]:
        """Reservations linked to a client by id or by case-insensitive name, newest first"""
        return (
            db.query(Reservation)
            .filter(
                or_(
                    Reservation.client_id == client_id,
                    func.lower(Reservation.client_name) == client_name_key,
                )
            )
            .order_by(Reservation.date.desc(), Reservation.created_at.desc())
            .all()
        )

    @staticmethod
    def add_reservation(db: Session, reservation: Reservation) -> Reservation:
        """Stage a reservation in the session (caller commits)"""
        db.add(reservation)
        return reservation

    @staticmethod
    def delete_reservation(db: Session, reservation: Reservation) -> None:
        """Delete a reservation"""
        db.delete(reservation)
        db.commit()
