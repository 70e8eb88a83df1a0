import uuid

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate an opaque identifier for clients and reservations"""
    return str(uuid.uuid4())


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)  # Display form, as first entered
    # Lower-cased name; unique so the same person cannot be stored twice
    name_key = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    total_appointments = Column(Integer, nullable=False, default=0)
    last_visit = Column(String(10), nullable=True)  # YYYY-MM-DD, only moves forward
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Client {self.name}>"


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (UniqueConstraint("date", "time", name="uq_reservations_slot"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    # Relation only - the client record is not owned by the reservation
    client_id = Column(String(36), index=True, nullable=True)
    client_name = Column(String(255), nullable=False)  # Snapshot at booking time
    client_phone = Column(String(50), nullable=False, default="")  # Snapshot at booking time
    service = Column(String(255), nullable=False)
    time = Column(String(16), nullable=False)  # e.g. "6:30 PM"
    date = Column(String(10), index=True, nullable=False)  # YYYY-MM-DD
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Reservation {self.date} {self.time} {self.client_name}>"


class BusinessSettingsRecord(Base):
    """Singleton row holding the shop configuration (id is always 1)"""

    __tablename__ = "business_settings"

    id = Column(Integer, primary_key=True, default=1)
    business_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    address = Column(String(500), nullable=False, default="")
    start_hour = Column(Integer, nullable=False)
    end_hour = Column(Integer, nullable=False)
    appointment_duration = Column(Integer, nullable=False)  # minutes
    working_days = Column(JSON, nullable=False)  # {"monday": true, ...}
    services = Column(JSON, nullable=False, default=list)  # [{id, name, duration, price}]
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
