"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- validators.py: Booking-window rule for appointments
- interfaces.py: Repository contracts

Following SOLID principles:
- Single Responsibility: Each module has one purpose
- Open/Closed: Extensible without modification
- Dependency Inversion: Interfaces define contracts
"""

from .entities import Appointment, Client, Service, normalize_key
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IBarbershopStore,
    IClientReader,
    IClientRepository,
    IClientWriter,
    IServiceReader,
    IServiceRepository,
    IServiceWriter,
)
from .validators import BOOKING_WINDOW, validate_appointment_datetime

__all__ = [
    # Domain entities
    "Client",
    "Service",
    "Appointment",
    "normalize_key",
    # Business rules
    "BOOKING_WINDOW",
    "validate_appointment_datetime",
    # Repository interfaces
    "IBarbershopStore",
    "IClientRepository",
    "IServiceRepository",
    "IAppointmentRepository",
    # Segregated interfaces
    "IClientReader",
    "IClientWriter",
    "IServiceReader",
    "IServiceWriter",
    "IAppointmentReader",
    "IAppointmentWriter",
]
