"""SQLAlchemy-backed store following SOLID principles.

Same contract and semantics as ``InMemoryStore``: clients and services are
upserted by normalized name, deleting a client with appointments is refused
with ``False``, listings are ordered the same way. Integer ids come from the
database.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from barbershop.db.base import AppointmentModel, ClientModel, ServiceModel
from barbershop.domain.entities import Appointment, Client, Service, normalize_key
from barbershop.domain.interfaces import IBarbershopStore

logger = logging.getLogger(__name__)


class SqlAlchemyStore(IBarbershopStore):
    """Repository for barbershop persistence operations."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    # --- Clients ---

    def _client_row(self, name: str) -> Optional[ClientModel]:
        return self.db.scalar(
            select(ClientModel).where(ClientModel.name_key == normalize_key(name))
        )

    def save_client(self, client: Client) -> None:
        row = self._client_row(client.name)
        if row is None:
            row = ClientModel(name_key=client.key)
            self.db.add(row)
        row.name = client.name
        row.phone = client.phone
        row.email = client.email
        row.national_id = client.national_id
        self._commit()
        client.id = row.id

    def find_client(self, name: str) -> Optional[Client]:
        row = self._client_row(name)
        return self._client_to_domain(row) if row else None

    def list_clients(self) -> List[Client]:
        query = select(ClientModel).order_by(ClientModel.name_key, ClientModel.name)
        rows = self.db.scalars(query).all()
        return [self._client_to_domain(r) for r in rows]

    def delete_client(self, name: str) -> bool:
        if self.client_has_appointments(name):
            logger.info(
                "Client deletion refused: appointments exist",
                extra={"context": {"client": name}},
            )
            return False
        row = self._client_row(name)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    # --- Services ---

    def _service_row(self, name: str) -> Optional[ServiceModel]:
        return self.db.scalar(
            select(ServiceModel).where(ServiceModel.name_key == normalize_key(name))
        )

    def save_service(self, service: Service) -> None:
        row = self._service_row(service.name)
        if row is None:
            row = ServiceModel(name_key=service.key)
            self.db.add(row)
        row.name = service.name
        row.price = service.price
        row.description = service.description
        row.duration_minutes = service.duration_minutes
        row.is_active = service.is_active
        self._commit()
        service.id = row.id

    def find_service(self, name: str) -> Optional[Service]:
        row = self._service_row(name)
        return self._service_to_domain(row) if row else None

    def list_services(self) -> List[Service]:
        query = select(ServiceModel).order_by(ServiceModel.name_key, ServiceModel.name)
        rows = self.db.scalars(query).all()
        return [self._service_to_domain(r) for r in rows]

    def delete_service(self, name: str) -> bool:
        row = self._service_row(name)
        if row is None:
            return False
        self.db.execute(
            update(AppointmentModel)
            .where(AppointmentModel.service_id == row.id)
            .values(service_id=None)
        )
        self.db.delete(row)
        self._commit()
        return True

    # --- Appointments ---

    def _get_or_create_client_row(self, client: Client) -> ClientModel:
        row = self._client_row(client.name)
        if row is None:
            row = ClientModel(
                name=client.name,
                name_key=client.key,
                phone=client.phone,
                email=client.email,
                national_id=client.national_id,
            )
            self.db.add(row)
        return row

    def _get_or_create_service_row(self, service: Service) -> ServiceModel:
        row = self._service_row(service.name)
        if row is None:
            row = ServiceModel(
                name=service.name,
                name_key=service.key,
                price=service.price,
                description=service.description,
                duration_minutes=service.duration_minutes,
                is_active=service.is_active,
            )
            self.db.add(row)
        return row

    def save_appointment(self, appointment: Appointment) -> Appointment:
        row = None
        if appointment.id is not None:
            row = self.db.get(AppointmentModel, appointment.id)
        if row is None:
            row = AppointmentModel(id=appointment.id)
            self.db.add(row)

        row.client = self._get_or_create_client_row(appointment.client)
        row.service = self._get_or_create_service_row(appointment.service)
        row.service_name = appointment.service.name
        row.service_price = appointment.service.price
        row.scheduled_at = appointment.scheduled_at
        self._commit()

        appointment.id = row.id
        logger.debug(
            "Appointment saved",
            extra={
                "context": {
                    "appointment_id": row.id,
                    "scheduled_at": row.scheduled_at.isoformat(),
                }
            },
        )
        return appointment

    def find_appointment(self, appointment_id: int) -> Optional[Appointment]:
        row = self.db.get(AppointmentModel, appointment_id)
        return self._appointment_to_domain(row) if row else None

    def delete_appointment(self, appointment_id: int) -> bool:
        row = self.db.get(AppointmentModel, appointment_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        return True

    def _appointments_query(self):
        return (
            select(AppointmentModel)
            .options(selectinload(AppointmentModel.client))
            .order_by(AppointmentModel.scheduled_at, AppointmentModel.id)
        )

    def list_appointments(self) -> List[Appointment]:
        rows = self.db.scalars(self._appointments_query()).all()
        return [self._appointment_to_domain(r) for r in rows]

    def list_appointments_on_day(self, day: date) -> List[Appointment]:
        if isinstance(day, datetime):
            day = day.date()
        start = datetime.combine(day, time.min)
        end = start + timedelta(days=1)
        query = self._appointments_query().where(
            AppointmentModel.scheduled_at >= start,
            AppointmentModel.scheduled_at < end,
        )
        return [self._appointment_to_domain(r) for r in self.db.scalars(query).all()]

    def list_appointments_for_client(self, client_name: str) -> List[Appointment]:
        query = (
            self._appointments_query()
            .join(AppointmentModel.client)
            .where(ClientModel.name_key == normalize_key(client_name))
        )
        return [self._appointment_to_domain(r) for r in self.db.scalars(query).all()]

    def client_has_appointments(self, client_name: str) -> bool:
        query = (
            select(AppointmentModel.id)
            .join(AppointmentModel.client)
            .where(ClientModel.name_key == normalize_key(client_name))
            .limit(1)
        )
        return self.db.scalar(query) is not None

    # --- Helpers ---

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error("Database commit failed; rolled back", exc_info=True)
            raise

    def _client_to_domain(self, row: ClientModel) -> Client:
        """Convert DB model to domain entity."""
        return Client(
            name=row.name,
            phone=row.phone,
            email=row.email,
            national_id=row.national_id,
            id=row.id,
        )

    def _service_to_domain(self, row: ServiceModel) -> Service:
        """Convert DB model to domain entity."""
        return Service(
            name=row.name,
            price=row.price,
            description=row.description,
            duration_minutes=row.duration_minutes,
            is_active=row.is_active,
            id=row.id,
        )

    def _appointment_to_domain(self, row: AppointmentModel) -> Appointment:
        """Convert DB model to domain entity without re-running the booking rule."""
        return Appointment.restore(
            client=self._client_to_domain(row.client),
            service=Service(
                name=row.service_name,
                price=row.service_price,
                id=row.service_id,
            ),
            scheduled_at=row.scheduled_at,
            id=row.id,
        )
