"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import InitVar, dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from barbershop.core.validation import ValidationError

from .validators import validate_appointment_datetime


def normalize_key(name: str) -> str:
    """Lookup key for names: surrounding whitespace and case are ignored."""
    return (name or "").strip().casefold()


def _to_price(value: Any) -> Decimal:
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Price must be a number", "price") from None
    if not price.is_finite() or price <= 0:
        raise ValidationError("Price must be greater than zero", "price")
    return price


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class Client:
    """Domain entity representing a barbershop Client.

    Stores key clients by ``normalize_key(name)``; ``id`` is only populated
    by the SQL backend.
    """

    name: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    national_id: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.name or not self.name.strip():
            raise ValidationError("Client name is required", "name")
        self.name = self.name.strip()
        self.phone = _clean_optional(self.phone)
        self.email = _clean_optional(self.email)
        self.national_id = _clean_optional(self.national_id)

    @property
    def key(self) -> str:
        return normalize_key(self.name)

    def summary(self) -> str:
        """One-line description used by listings."""
        return (
            f"{self.name} - Tel: {self.phone or ''} - Email: {self.email or ''}"
            f" - ID: {self.national_id or ''}"
        )


@dataclass
class Service:
    """Domain entity for an entry of the service price list."""

    name: str = ""
    price: Decimal = Decimal("0")
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    is_active: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        """Validate business rules."""
        if not self.name or not self.name.strip():
            raise ValidationError("Service name is required", "name")
        self.name = self.name.strip()
        self.price = _to_price(self.price)
        self.description = _clean_optional(self.description)

    @property
    def key(self) -> str:
        return normalize_key(self.name)

    def update(
        self,
        name: str,
        price: Any,
        description: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        is_active: bool = True,
    ) -> None:
        """Replace every editable field at once, with the constructor's checks."""
        if not name or not name.strip():
            raise ValidationError("Service name is required", "name")
        new_price = _to_price(price)

        self.name = name.strip()
        self.price = new_price
        self.description = _clean_optional(description)
        self.duration_minutes = duration_minutes
        self.is_active = is_active


@dataclass
class Appointment:
    """Domain entity for a booked appointment.

    The booking window is checked once, here; pass ``now`` to pin the
    reference instant. Stored records are rebuilt through ``restore``.
    """

    client: Client
    service: Service
    scheduled_at: datetime
    id: Optional[int] = None
    now: InitVar[Optional[datetime]] = None

    def __post_init__(self, now: Optional[datetime]):
        """Validate business rules."""
        if self.client is None:
            raise ValidationError("Client is required", "client")
        if self.service is None:
            raise ValidationError("Service is required", "service")
        if not isinstance(self.scheduled_at, datetime):
            raise ValidationError("A date and time are required", "scheduled_at")
        validate_appointment_datetime(self.scheduled_at, now)

    @classmethod
    def restore(
        cls,
        client: Client,
        service: Service,
        scheduled_at: datetime,
        id: Optional[int] = None,
    ) -> "Appointment":
        """Rebuild a stored appointment without re-checking the booking window."""
        appointment = cls.__new__(cls)
        appointment.client = client
        appointment.service = service
        appointment.scheduled_at = scheduled_at
        appointment.id = id
        return appointment

    @property
    def client_key(self) -> str:
        return normalize_key(self.client.name) if self.client else ""

    def __str__(self) -> str:
        return (
            f"{self.scheduled_at:%Y-%m-%d %H:%M} | {self.client.name} | "
            f"{self.service.name} (₡{self.service.price:,.2f})"
        )
