"""
Client service for business logic following SOLID principles.

This service:
- Keeps business rules separate from presentation and storage (Single Responsibility)
- Depends on abstractions (IBarbershopStore) not concrete implementations (Dependency Inversion)
- Works with domain entities, not database models
"""

import logging
from typing import List, Optional

from barbershop.domain.entities import Appointment, Client, normalize_key
from barbershop.domain.interfaces import IBarbershopStore
from barbershop.schemas.dtos import ClientRequest

logger = logging.getLogger(__name__)


class ClientService:
    """Application service for client-related use-cases."""

    def __init__(self, store: IBarbershopStore) -> None:
        self.store = store

    def register_client(self, request: ClientRequest) -> Client:
        """Register a client, reusing the stored record when the name exists.

        Registration is idempotent: registering a known name again keeps the
        existing contact details. Use ``update_client`` to change them.
        """
        request.validate()

        existing = self.store.find_client(request.name)
        if existing:
            logger.info(
                "Client already registered",
                extra={"context": {"client": existing.name}},
            )
            return existing

        client = Client(
            name=request.name,
            phone=request.phone,
            email=request.email,
            national_id=request.national_id,
        )
        self.store.save_client(client)
        logger.info("Client registered", extra={"context": {"client": client.name}})
        return client

    def update_client(self, name: str, request: ClientRequest) -> Optional[Client]:
        """Replace a client's record. Returns None when ``name`` is unknown."""
        request.validate()

        existing = self.store.find_client(name)
        if not existing:
            return None

        renamed = existing.key != normalize_key(request.name)
        if renamed and self.store.find_client(request.name):
            raise ValueError(f"A client named {request.name!r} already exists")
        # Appointments refer to the client by name
        if renamed and self.store.client_has_appointments(existing.name):
            raise ValueError("Cannot rename a client that has appointments")

        client = Client(
            name=request.name,
            phone=request.phone,
            email=request.email,
            national_id=request.national_id,
            id=existing.id,
        )
        if renamed:
            self.store.delete_client(existing.name)
        self.store.save_client(client)
        return client

    def get_client(self, name: str) -> Optional[Client]:
        """Get a specific client by name."""
        return self.store.find_client(name)

    def list_clients(self) -> List[Client]:
        """Get all clients ordered by name."""
        return self.store.list_clients()

    def remove_client(self, name: str) -> bool:
        """Delete a client. Refused (False) while appointments reference it."""
        removed = self.store.delete_client(name)
        if not removed and self.store.client_has_appointments(name):
            logger.warning(
                "Client has appointments and was not deleted",
                extra={"context": {"client": name}},
            )
        return removed

    def appointment_history(self, name: str) -> List[Appointment]:
        """Get a client's appointments in ascending date-time order."""
        return self.store.list_appointments_for_client(name)
