"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client
from ..booking.clients import name_key


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session) -> list[Client]:
        """Get all clients, oldest first"""
        return db.query(Client).order_by(Client.created_at.asc(), Client.name.asc()).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: str) -> Optional[Client]:
        """Get a specific client by ID"""
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_clients_by_name(db: Session, name: str) -> list[Client]:
        """Clients whose name matches case-insensitively"""
        return db.query(Client).filter(Client.name_key == name_key(name)).all()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        """Create a new client"""
        client = Client(name_key=name_key(client_data["name"]), **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)
        if "name" in updates and updates["name"] is not None:
            client.name_key = name_key(updates["name"])

        db.commit()
        db.refresh(client)
        return client
