"""Client service - Business logic for client operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import CLIENTS, Cache
from ...config import CACHE_TTL_CLIENTS
from ...models import Client, Reservation
from ...shared.validators import clean_text, validate_uuid
from ..booking.clients import name_key
from ..reservations.repository import ReservationRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientResponse, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session, cache: Cache):
        self.db = db
        self.cache = cache
        self.repo = ClientRepository()

    def get_clients(self) -> list[ClientResponse]:
        """Get all clients"""
        cached = self.cache.get(CLIENTS, "all")
        if cached is not None:
            return [ClientResponse.model_validate(c) for c in cached]

        clients = [ClientResponse.model_validate(c) for c in self.repo.get_clients(self.db)]
        self.cache.set(
            CLIENTS,
            "all",
            [c.model_dump(mode="json", by_alias=True) for c in clients],
            CACHE_TTL_CLIENTS,
        )
        return clients

    def get_client(self, client_id: str) -> Client:
        """Get a specific client"""
        if not validate_uuid(client_id):
            raise HTTPException(status_code=400, detail="Invalid client ID format")

        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def _ensure_name_available(self, name: str, client_id: str = None) -> None:
        for existing in self.repo.get_clients_by_name(self.db, name):
            if existing.id != client_id:
                logger.warning(f"⚠️ Client name already in use: {name}")
                raise HTTPException(
                    status_code=409, detail=f"A client named {existing.name} already exists"
                )

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new client; names are unique regardless of case"""
        self._ensure_name_available(data.name)

        try:
            client = self.repo.create_client(
                self.db,
                name=data.name,
                phone=clean_text(data.phone),
                notes=clean_text(data.notes),
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="A client with this name already exists") from e

        self.cache.invalidate(CLIENTS)
        logger.info(f"✅ Client created: {client.name}")
        return client

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """Update a client's name, phone or notes"""
        client = self.get_client(client_id)

        if data.name is not None and name_key(data.name) != client.name_key:
            self._ensure_name_available(data.name, client.id)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.phone is not None:
            updates["phone"] = clean_text(data.phone)
        if data.notes is not None:
            updates["notes"] = clean_text(data.notes)

        try:
            client = self.repo.update_client(self.db, client, **updates)
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="A client with this name already exists") from e

        self.cache.invalidate(CLIENTS)
        return client

    def get_client_history(self, client_id: str) -> list[Reservation]:
        """Reservations for a client, newest date first"""
        client = self.get_client(client_id)
        return ReservationRepository.get_client_history(self.db, client.id, client.name_key)
