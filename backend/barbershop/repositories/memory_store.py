"""In-memory store for clients, services and appointments.

Clients and services are keyed by ``normalize_key(name)``; appointments by
integer id. Each table has its own lock so every single read or write is
atomic, and listings work on a snapshot taken under the lock. The store is
a plain object: hosts build one and pass it to whoever needs it.

Records are copied on the way in and on the way out, so editing an entity
after saving it (or after reading it back) never changes the stored value.
"""

import logging
import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional

from barbershop.domain.entities import Appointment, Client, Service, normalize_key
from barbershop.domain.interfaces import IBarbershopStore

logger = logging.getLogger(__name__)


def _as_date(day: date) -> date:
    return day.date() if isinstance(day, datetime) else day


def _copy_appointment(appointment: Appointment) -> Appointment:
    return Appointment.restore(
        client=replace(appointment.client),
        service=replace(appointment.service),
        scheduled_at=appointment.scheduled_at,
        id=appointment.id,
    )


class InMemoryStore(IBarbershopStore):
    """Process-local store. Contents live as long as the instance."""

    def __init__(self) -> None:
        self._clients: Dict[str, Client] = {}
        self._services: Dict[str, Service] = {}
        self._appointments: Dict[int, Appointment] = {}
        self._clients_lock = threading.Lock()
        self._services_lock = threading.Lock()
        self._appointments_lock = threading.Lock()
        self._last_appointment_id = 0

    # --- Clients ---

    def save_client(self, client: Client) -> None:
        with self._clients_lock:
            self._clients[client.key] = replace(client)
        logger.debug("Client saved", extra={"context": {"client": client.name}})

    def find_client(self, name: str) -> Optional[Client]:
        with self._clients_lock:
            client = self._clients.get(normalize_key(name))
        return replace(client) if client else None

    def list_clients(self) -> List[Client]:
        with self._clients_lock:
            clients = [replace(c) for c in self._clients.values()]
        return sorted(clients, key=lambda c: (c.key, c.name))

    def delete_client(self, name: str) -> bool:
        # Check and removal are separate steps; see client_has_appointments
        if self.client_has_appointments(name):
            logger.info(
                "Client deletion refused: appointments exist",
                extra={"context": {"client": name}},
            )
            return False

        with self._clients_lock:
            removed = self._clients.pop(normalize_key(name), None)
        return removed is not None

    # --- Services ---

    def save_service(self, service: Service) -> None:
        with self._services_lock:
            self._services[service.key] = replace(service)
        logger.debug(
            "Service saved",
            extra={"context": {"service": service.name, "price": str(service.price)}},
        )

    def find_service(self, name: str) -> Optional[Service]:
        with self._services_lock:
            service = self._services.get(normalize_key(name))
        return replace(service) if service else None

    def list_services(self) -> List[Service]:
        with self._services_lock:
            services = [replace(s) for s in self._services.values()]
        return sorted(services, key=lambda s: (s.key, s.name))

    def delete_service(self, name: str) -> bool:
        with self._services_lock:
            removed = self._services.pop(normalize_key(name), None)
        return removed is not None

    # --- Appointments ---

    def save_appointment(self, appointment: Appointment) -> Appointment:
        """Store the appointment, registering its client and service when unknown."""
        with self._clients_lock:
            self._clients.setdefault(appointment.client_key, replace(appointment.client))
        with self._services_lock:
            self._services.setdefault(
                appointment.service.key, replace(appointment.service)
            )

        with self._appointments_lock:
            if appointment.id is None:
                self._last_appointment_id += 1
                appointment.id = self._last_appointment_id
            else:
                self._last_appointment_id = max(
                    self._last_appointment_id, appointment.id
                )
            self._appointments[appointment.id] = _copy_appointment(appointment)
        logger.debug(
            "Appointment saved",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "scheduled_at": appointment.scheduled_at.isoformat(),
                }
            },
        )
        return appointment

    def find_appointment(self, appointment_id: int) -> Optional[Appointment]:
        with self._appointments_lock:
            appointment = self._appointments.get(appointment_id)
        return _copy_appointment(appointment) if appointment else None

    def delete_appointment(self, appointment_id: int) -> bool:
        with self._appointments_lock:
            removed = self._appointments.pop(appointment_id, None)
        return removed is not None

    def _appointments_snapshot(self) -> List[Appointment]:
        with self._appointments_lock:
            return list(self._appointments.values())

    def list_appointments(self) -> List[Appointment]:
        return sorted(
            map(_copy_appointment, self._appointments_snapshot()),
            key=lambda a: a.scheduled_at,
        )

    def list_appointments_on_day(self, day: date) -> List[Appointment]:
        target = _as_date(day)
        return sorted(
            (
                _copy_appointment(a)
                for a in self._appointments_snapshot()
                if a.scheduled_at.date() == target
            ),
            key=lambda a: a.scheduled_at,
        )

    def list_appointments_for_client(self, client_name: str) -> List[Appointment]:
        key = normalize_key(client_name)
        return sorted(
            (
                _copy_appointment(a)
                for a in self._appointments_snapshot()
                if a.client_key == key
            ),
            key=lambda a: a.scheduled_at,
        )

    def client_has_appointments(self, client_name: str) -> bool:
        key = normalize_key(client_name)
        if not key:
            return False
        return any(a.client_key == key for a in self._appointments_snapshot())
