"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing. Clients and services are
addressed by name (compared case-insensitively, surrounding whitespace
ignored); appointments by integer id.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from .entities import Appointment, Client, Service


class IClientReader(ABC):
    """Interface for client read operations - Interface Segregation Principle."""

    @abstractmethod
    def find_client(self, name: str) -> Optional[Client]:
        """Get client by name."""
        pass

    @abstractmethod
    def list_clients(self) -> List[Client]:
        """Get all clients ordered by name."""
        pass


class IClientWriter(ABC):
    """Interface for client write operations - Interface Segregation Principle."""

    @abstractmethod
    def save_client(self, client: Client) -> None:
        """Insert or replace a client under its name."""
        pass

    @abstractmethod
    def delete_client(self, name: str) -> bool:
        """Delete a client unless appointments still reference it."""
        pass


class IClientRepository(IClientReader, IClientWriter):
    """Complete client repository interface combining read/write operations."""

    pass


class IServiceReader(ABC):
    """Interface for service (price list) read operations."""

    @abstractmethod
    def find_service(self, name: str) -> Optional[Service]:
        """Get service by name."""
        pass

    @abstractmethod
    def list_services(self) -> List[Service]:
        """Get all services ordered by name."""
        pass


class IServiceWriter(ABC):
    """Interface for service (price list) write operations."""

    @abstractmethod
    def save_service(self, service: Service) -> None:
        """Insert or replace a service under its name."""
        pass

    @abstractmethod
    def delete_service(self, name: str) -> bool:
        """Delete a service. No dependency check."""
        pass


class IServiceRepository(IServiceReader, IServiceWriter):
    """Complete service repository interface."""

    pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def find_appointment(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def list_appointments(self) -> List[Appointment]:
        """Get all appointments in ascending date-time order."""
        pass

    @abstractmethod
    def list_appointments_on_day(self, day: date) -> List[Appointment]:
        """Get the appointments of one calendar day in ascending order."""
        pass

    @abstractmethod
    def list_appointments_for_client(self, client_name: str) -> List[Appointment]:
        """Get a client's appointments in ascending order."""
        pass

    @abstractmethod
    def client_has_appointments(self, client_name: str) -> bool:
        """Check whether any appointment references the client."""
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def save_appointment(self, appointment: Appointment) -> Appointment:
        """Insert or replace an appointment, assigning an id when missing."""
        pass

    @abstractmethod
    def delete_appointment(self, appointment_id: int) -> bool:
        """Delete (cancel) an appointment."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass


class IBarbershopStore(IClientRepository, IServiceRepository, IAppointmentRepository):
    """Store exposing every entity kind of the barbershop."""

    pass
