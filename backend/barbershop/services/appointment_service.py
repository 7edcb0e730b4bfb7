"""
Appointment service following SOLID principles.
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from barbershop.core.exceptions import AppointmentDateError
from barbershop.domain.entities import Appointment, Client
from barbershop.domain.interfaces import IBarbershopStore
from barbershop.schemas.dtos import AppointmentCreateRequest, AppointmentResponse

logger = logging.getLogger(__name__)


class AppointmentService:
    """Application service for appointment-related use-cases.

    This service demonstrates:
    - Single Responsibility: Handles only appointment business logic
    - Dependency Inversion: Depends on the store interface, not a backend
    - Testability: ``clock`` supplies the reference "now" for the booking rule
    """

    def __init__(
        self,
        store: IBarbershopStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.clock = clock

    def create_appointment(
        self, request: AppointmentCreateRequest
    ) -> AppointmentResponse:
        """Create a new appointment with business rule validation.

        Business Rules:
        - Service must exist
        - Client is created on the fly when the name is unknown
        - Appointment must be after now and at most 7 days ahead
        - Double booking of a time slot is allowed
        """
        request.validate()

        service = self.store.find_service(request.service_name)
        if not service:
            raise ValueError("Service not found")

        client = self.store.find_client(request.client_name)
        if not client:
            client = Client(
                name=request.client_name, phone=request.phone, email=request.email
            )

        try:
            appointment = Appointment(
                client=client,
                service=service,
                scheduled_at=request.scheduled_at,
                now=self.clock(),
            )
        except AppointmentDateError as e:
            logger.warning(
                "Appointment rejected",
                extra={
                    "context": {
                        "client": request.client_name,
                        "scheduled_at": request.scheduled_at.isoformat(),
                        "reason": str(e),
                    }
                },
            )
            raise

        # Client and appointment are two separate writes
        self.store.save_client(client)
        created = self.store.save_appointment(appointment)
        logger.info(
            "Appointment created",
            extra={
                "context": {
                    "appointment_id": created.id,
                    "client": client.name,
                    "service": service.name,
                }
            },
        )

        return AppointmentResponse.from_domain(created)

    def get_appointment(self, appointment_id: int) -> Optional[AppointmentResponse]:
        appointment = self.store.find_appointment(appointment_id)
        return AppointmentResponse.from_domain(appointment) if appointment else None

    def cancel_appointment(self, appointment_id: int) -> bool:
        """Cancel (delete) an appointment. False when the id is unknown."""
        cancelled = self.store.delete_appointment(appointment_id)
        if cancelled:
            logger.info(
                "Appointment cancelled",
                extra={"context": {"appointment_id": appointment_id}},
            )
        return cancelled

    def list_appointments(self) -> List[AppointmentResponse]:
        return [AppointmentResponse.from_domain(a) for a in self.store.list_appointments()]

    def get_daily_schedule(self, day: date) -> List[AppointmentResponse]:
        """Get all appointments for a specific calendar day."""
        return [
            AppointmentResponse.from_domain(a)
            for a in self.store.list_appointments_on_day(day)
        ]

    def get_client_appointments(self, client_name: str) -> List[AppointmentResponse]:
        """Get a client's appointment history."""
        return [
            AppointmentResponse.from_domain(a)
            for a in self.store.list_appointments_for_client(client_name)
        ]
