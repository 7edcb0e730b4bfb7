"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Requests carry raw form/console input; ``validate()`` checks it and fills
in cleaned values. Responses are flat, display-ready views of domain
entities.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from barbershop.core.validation import (
    validate_appointment_request,
    validate_client,
    validate_service,
)


@dataclass
class ClientRequest:
    """DTO for client registration and update requests."""

    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    national_id: Optional[str] = None

    def validate(self) -> None:
        """Validate the request data."""
        result = validate_client(
            {
                "name": self.name,
                "phone": self.phone,
                "email": self.email,
                "national_id": self.national_id,
            }
        )
        result.raise_if_invalid()
        self.name = result.cleaned_data["name"]
        self.phone = result.cleaned_data.get("phone")
        self.email = result.cleaned_data.get("email")
        self.national_id = result.cleaned_data.get("national_id")


@dataclass
class ServiceRequest:
    """DTO for service creation and update requests."""

    name: str
    price: Union[Decimal, str, int, float]
    description: Optional[str] = None
    duration_minutes: Optional[Any] = None
    is_active: bool = True

    def validate(self) -> None:
        """Validate the request data against the stored-record bounds."""
        result = validate_service(
            {
                "name": self.name,
                "price": self.price,
                "description": self.description,
                "duration_minutes": self.duration_minutes,
                "is_active": self.is_active,
            }
        )
        result.raise_if_invalid()
        self.name = result.cleaned_data["name"]
        self.price = result.cleaned_data["price"]
        self.description = result.cleaned_data.get("description")
        self.duration_minutes = result.cleaned_data.get("duration_minutes")
        self.is_active = result.cleaned_data["is_active"]


@dataclass
class AppointmentCreateRequest:
    """DTO for appointment creation requests.

    ``phone`` and ``email`` are only used when the client does not exist
    yet and is created as part of the booking.
    """

    client_name: str
    service_name: str
    scheduled_at: Union[datetime, str]
    phone: Optional[str] = None
    email: Optional[str] = None

    def validate(self) -> None:
        """Validate the request data (the booking window is checked later)."""
        result = validate_appointment_request(
            {
                "client_name": self.client_name,
                "service_name": self.service_name,
                "scheduled_at": self.scheduled_at,
            }
        )
        result.raise_if_invalid()
        self.client_name = result.cleaned_data["client_name"]
        self.service_name = result.cleaned_data["service_name"]
        self.scheduled_at = result.cleaned_data["scheduled_at"]


@dataclass
class ServiceResponse:
    """DTO for price list views."""

    name: str
    price: Decimal
    description: Optional[str]
    duration_minutes: Optional[int]
    is_active: bool

    @classmethod
    def from_domain(cls, service) -> "ServiceResponse":
        """Create response from domain entity."""
        return cls(
            name=service.name,
            price=service.price,
            description=service.description,
            duration_minutes=service.duration_minutes,
            is_active=service.is_active,
        )


@dataclass
class AppointmentResponse:
    """DTO for appointment views."""

    id: int
    client_name: str
    service_name: str
    price: Decimal
    scheduled_at: datetime
    display: str

    @classmethod
    def from_domain(cls, appointment) -> "AppointmentResponse":
        """Create response from domain entity."""
        return cls(
            id=appointment.id,
            client_name=appointment.client.name,
            service_name=appointment.service.name,
            price=appointment.service.price,
            scheduled_at=appointment.scheduled_at,
            display=str(appointment),
        )
