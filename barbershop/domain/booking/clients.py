"""
Client reconciliation for new bookings.

Every path that creates a reservation (interactive booking and CSV import)
goes through upsert_client_for_booking so visit counts and last-visit dates
are maintained in one place.
"""

import logging
from typing import Iterable, NamedTuple, Optional, Union

from ...models import Client, generate_id
from ...shared.validators import clean_text

logger = logging.getLogger(__name__)


def name_key(name: str) -> str:
    """Case-insensitive lookup key for a client name"""
    return (name or "").strip().lower()


class ClientIndex:
    """In-memory name -> client map. The first client seen for a name wins."""

    def __init__(self, clients: Iterable[Client] = ()):
        self._by_name: dict[str, Client] = {}
        for client in clients:
            self.add(client)

    def find(self, name: str) -> Optional[Client]:
        return self._by_name.get(name_key(name))

    def add(self, client: Client) -> None:
        self._by_name.setdefault(name_key(client.name), client)

    def __len__(self):
        return len(self._by_name)

    def __contains__(self, name):
        return name_key(name) in self._by_name


class ClientUpsert(NamedTuple):
    client: Client
    created: bool


def upsert_client_for_booking(
    clients: Union[ClientIndex, Iterable[Client]],
    name: str,
    phone: Optional[str],
    notes: Optional[str],
    booking_date: str,
    new_client_notes: Optional[str] = None,
) -> ClientUpsert:
    """
    Find the client by case-insensitive name and record one more booking,
    or build a new client for it.

    Existing clients: non-empty phone/notes overwrite the stored values, the
    appointment count goes up by one and ``last_visit`` only moves forward.
    New clients start at one appointment with ``last_visit = booking_date``
    and get ``new_client_notes`` when given. New clients are added to the
    index but not persisted.
    """
    index = clients if isinstance(clients, ClientIndex) else ClientIndex(clients)
    name = clean_text(name)
    phone = clean_text(phone)
    notes = clean_text(notes)

    client = index.find(name)
    if client is not None:
        if phone:
            client.phone = phone
        if notes:
            client.notes = notes
        client.total_appointments = (client.total_appointments or 0) + 1
        # Canonical YYYY-MM-DD strings compare correctly as text
        if not client.last_visit or booking_date > client.last_visit:
            client.last_visit = booking_date
        return ClientUpsert(client, False)

    client = Client(
        id=generate_id(),
        name=name,
        name_key=name_key(name),
        phone=phone,
        notes=notes if new_client_notes is None else new_client_notes,
        total_appointments=1,
        last_visit=booking_date,
    )
    index.add(client)
    logger.debug(f"New client for booking: {name}")
    return ClientUpsert(client, True)
