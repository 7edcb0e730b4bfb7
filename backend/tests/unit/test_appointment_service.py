"""
Unit tests for AppointmentService.

This module tests appointment creation with the booking-window rule,
implicit client creation, cancellation and the schedule queries.
The store is either a Mock with the store interface or a fresh
InMemoryStore, depending on what the test observes.
"""

from datetime import date, datetime, timedelta
from unittest.mock import Mock

import pytest

from barbershop.core.exceptions import PastDateError, TooFarAheadError
from barbershop.core.validation import ValidationError
from barbershop.domain.entities import Client, Service
from barbershop.domain.interfaces import IBarbershopStore
from barbershop.schemas import AppointmentCreateRequest, AppointmentResponse
from barbershop.services import AppointmentService


@pytest.fixture
def service(memory_store, reference_now):
    """AppointmentService over an in-memory store with a fixed clock."""
    memory_store.save_service(Service(name="Corte", price=3500))
    memory_store.save_service(Service(name="Barba", price=2500))
    return AppointmentService(memory_store, clock=lambda: reference_now)


@pytest.fixture
def mock_store():
    return Mock(spec=IBarbershopStore)


def _request(client="Juan Pérez", service="Corte", when=datetime(2025, 10, 24, 10, 0), **kwargs):
    return AppointmentCreateRequest(
        client_name=client, service_name=service, scheduled_at=when, **kwargs
    )


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.appointment
class TestAppointmentCreation:
    """Test appointment creation business rules."""

    def test_create_appointment_success(self, service, memory_store):
        """Test successful creation inside the booking window."""
        result = service.create_appointment(_request())

        assert isinstance(result, AppointmentResponse)
        assert result.id == 1
        assert result.client_name == "Juan Pérez"
        assert result.service_name == "Corte"
        assert result.price == 3500
        assert result.scheduled_at == datetime(2025, 10, 24, 10, 0)
        assert result.display == "2025-10-24 10:00 | Juan Pérez | Corte (₡3,500.00)"
        assert len(memory_store.list_appointments()) == 1

    def test_create_appointment_in_the_past(self, service, memory_store):
        """Test that 09:55 with now at 10:00 is rejected and nothing is stored."""
        with pytest.raises(PastDateError):
            service.create_appointment(_request(when=datetime(2025, 10, 22, 9, 55)))

        assert memory_store.list_appointments() == []
        assert memory_store.find_client("Juan Pérez") is None

    def test_create_appointment_too_far_ahead(self, service):
        with pytest.raises(TooFarAheadError):
            service.create_appointment(_request(when=datetime(2025, 10, 30, 10, 0)))

    def test_rejection_is_logged(self, service, caplog):
        with caplog.at_level("WARNING", logger="barbershop.services.appointment_service"):
            with pytest.raises(PastDateError):
                service.create_appointment(
                    _request(when=datetime(2025, 10, 21, 10, 0))
                )

        assert "Appointment rejected" in caplog.text

    def test_unknown_service(self, service):
        with pytest.raises(ValueError, match="Service not found"):
            service.create_appointment(_request(service="Tinte"))

    def test_invalid_request(self, service):
        with pytest.raises(ValidationError):
            service.create_appointment(_request(client=" ", when=None))

    def test_accepts_iso_string(self, service):
        result = service.create_appointment(_request(when="2025-10-23T15:30"))
        assert result.scheduled_at == datetime(2025, 10, 23, 15, 30)

    def test_rejects_time_with_utc_offset(self, service, memory_store):
        with pytest.raises(ValidationError) as exc_info:
            service.create_appointment(_request(when="2025-10-23T10:00:00+00:00"))

        assert exc_info.value.field == "scheduled_at"
        assert memory_store.list_appointments() == []

    def test_creates_unknown_client(self, service, memory_store):
        """Test implicit client creation with the optional contact details."""
        service.create_appointment(
            _request(client="Pedro", phone="7777-1234", email="pedro@example.com")
        )

        pedro = memory_store.find_client("pedro")
        assert pedro is not None
        assert pedro.phone == "7777-1234"
        assert pedro.email == "pedro@example.com"

    def test_reuses_existing_client(self, service, memory_store):
        memory_store.save_client(Client(name="Mario", phone="1111"))

        result = service.create_appointment(
            _request(client="MARIO", service="barba", phone="9999")
        )

        assert result.client_name == "Mario"
        assert result.service_name == "Barba"
        assert memory_store.find_client("Mario").phone == "1111"
        assert len(memory_store.list_clients()) == 1

    def test_clock_is_read_per_call(self, memory_store):
        memory_store.save_service(Service(name="Corte", price=3500))
        clock = Mock(
            side_effect=[datetime(2025, 10, 22, 10, 0), datetime(2025, 10, 25, 10, 0)]
        )
        service = AppointmentService(memory_store, clock=clock)
        when = datetime(2025, 10, 24, 10, 0)

        service.create_appointment(_request(when=when))
        with pytest.raises(PastDateError):
            service.create_appointment(_request(when=when))

        assert clock.call_count == 2

    def test_store_calls(self, mock_store, reference_now):
        """Test the store interactions of a successful booking."""
        mock_store.find_service.return_value = Service(name="Corte", price=3500)
        mock_store.find_client.return_value = None
        mock_store.save_appointment.side_effect = lambda a: setattr(a, "id", 5) or a
        service = AppointmentService(mock_store, clock=lambda: reference_now)

        result = service.create_appointment(_request())

        assert result.id == 5
        mock_store.find_service.assert_called_once_with("Corte")
        mock_store.find_client.assert_called_once_with("Juan Pérez")
        saved_client = mock_store.save_client.call_args.args[0]
        assert saved_client.name == "Juan Pérez"
        mock_store.save_appointment.assert_called_once()

    def test_nothing_saved_when_service_missing(self, mock_store, reference_now):
        mock_store.find_service.return_value = None
        service = AppointmentService(mock_store, clock=lambda: reference_now)

        with pytest.raises(ValueError):
            service.create_appointment(_request())

        mock_store.save_client.assert_not_called()
        mock_store.save_appointment.assert_not_called()


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.appointment
class TestAppointmentQueries:
    def test_get_and_cancel(self, service):
        created = service.create_appointment(_request())

        assert service.get_appointment(created.id).display == created.display
        assert service.cancel_appointment(created.id) is True
        assert service.get_appointment(created.id) is None
        assert service.cancel_appointment(created.id) is False

    def test_daily_schedule(self, service):
        service.create_appointment(_request(when=datetime(2025, 10, 23, 16, 0)))
        service.create_appointment(
            _request(client="Mario", service="Barba", when=datetime(2025, 10, 23, 9, 0))
        )
        service.create_appointment(_request(when=datetime(2025, 10, 24, 9, 0)))

        schedule = service.get_daily_schedule(date(2025, 10, 23))

        assert [a.client_name for a in schedule] == ["Mario", "Juan Pérez"]
        assert service.get_daily_schedule(date(2025, 10, 28)) == []

    def test_list_and_client_history(self, service, reference_now):
        for hours in (30, 2, 20):
            service.create_appointment(_request(when=reference_now + timedelta(hours=hours)))
        service.create_appointment(
            _request(client="Mario", service="Barba", when=reference_now + timedelta(hours=1))
        )

        everything = service.list_appointments()
        history = service.get_client_appointments("juan pérez")

        assert [a.client_name for a in everything] == [
            "Mario",
            "Juan Pérez",
            "Juan Pérez",
            "Juan Pérez",
        ]
        assert [a.scheduled_at for a in history] == [
            reference_now + timedelta(hours=2),
            reference_now + timedelta(hours=20),
            reference_now + timedelta(hours=30),
        ]
