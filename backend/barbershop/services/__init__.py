from .appointment_service import AppointmentService
from .catalog_service import CatalogService
from .client_service import ClientService

__all__ = ["AppointmentService", "CatalogService", "ClientService"]
