"""
Unit tests for InMemoryStore.

Behaviour shared with the SQL backend lives in
tests/integration/test_store_contract.py; this module covers what is
specific to the in-memory implementation: id assignment, instance
isolation and thread safety.
"""

import threading
from datetime import datetime, timedelta

import pytest

from barbershop.domain.entities import Appointment, Client, Service
from barbershop.repositories import InMemoryStore


def _appointment(now, client, service, hours=2, id=None):
    return Appointment(client, service, now + timedelta(hours=hours), id=id, now=now)


@pytest.mark.unit
@pytest.mark.repositories
class TestAppointmentIds:
    def test_ids_start_at_one_and_increase(
        self, memory_store, reference_now, client_mario, service_barba
    ):
        first = memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba, hours=1)
        )
        second = memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba, hours=2)
        )

        assert first.id == 1
        assert second.id == 2

    def test_assigned_id_is_written_back(
        self, memory_store, reference_now, client_mario, service_barba
    ):
        appointment = _appointment(reference_now, client_mario, service_barba)

        stored = memory_store.save_appointment(appointment)

        assert stored is appointment
        assert appointment.id == 1
        assert memory_store.find_appointment(1) == appointment

    def test_explicit_id_is_honoured_and_not_reused(
        self, memory_store, reference_now, client_mario, service_barba
    ):
        memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba, id=10)
        )
        later = memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba, hours=3)
        )

        assert memory_store.find_appointment(10) is not None
        assert later.id == 11

    def test_ids_are_not_reused_after_delete(
        self, memory_store, reference_now, client_mario, service_barba
    ):
        first = memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba)
        )
        assert memory_store.delete_appointment(first.id) is True

        second = memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba)
        )

        assert second.id == 2

    def test_saving_same_id_replaces(
        self, memory_store, reference_now, client_mario, service_barba, service_corte
    ):
        memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba, id=3)
        )
        memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_corte, id=3)
        )

        appointments = memory_store.list_appointments()
        assert len(appointments) == 1
        assert appointments[0].service.name == "Corte"


@pytest.mark.unit
@pytest.mark.repositories
class TestInstances:
    def test_stores_do_not_share_state(self, client_mario):
        first = InMemoryStore()
        second = InMemoryStore()

        first.save_client(client_mario)

        assert first.find_client("Mario") is not None
        assert second.find_client("Mario") is None

    def test_appointment_keeps_service_price_after_list_change(
        self, memory_store, reference_now, client_mario
    ):
        memory_store.save_service(Service(name="Afeitado", price=2500))
        booked = memory_store.save_appointment(
            _appointment(
                reference_now, client_mario, memory_store.find_service("Afeitado")
            )
        )

        memory_store.save_service(Service(name="Afeitado", price=3000))

        assert memory_store.find_appointment(booked.id).service.price == 2500
        assert memory_store.find_service("Afeitado").price == 3000

    def test_saved_appointment_is_detached_from_caller(
        self, memory_store, reference_now, client_mario, service_barba
    ):
        appointment = memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba)
        )

        service_barba.update("Barba Premium", 4000)
        appointment.scheduled_at = reference_now + timedelta(days=3)
        memory_store.find_appointment(appointment.id).client.name = "Luigi"

        stored = memory_store.find_appointment(appointment.id)
        assert stored.service.name == "Barba"
        assert stored.service.price == 2500
        assert stored.scheduled_at == reference_now + timedelta(hours=2)
        assert stored.client.name == "Mario"

    def test_day_listing_accepts_datetime(
        self, memory_store, reference_now, client_mario, service_barba
    ):
        memory_store.save_appointment(
            _appointment(reference_now, client_mario, service_barba, hours=2)
        )

        result = memory_store.list_appointments_on_day(datetime(2025, 10, 22, 23, 59))

        assert len(result) == 1


@pytest.mark.unit
@pytest.mark.repositories
class TestConcurrency:
    def test_concurrent_saves_lose_no_records(self, memory_store, reference_now):
        service = Service(name="Corte", price=3500)
        errors = []

        def worker(index):
            try:
                for n in range(25):
                    client = Client(name=f"Client {index}-{n}")
                    memory_store.save_client(client)
                    memory_store.save_appointment(
                        Appointment(
                            client,
                            service,
                            reference_now + timedelta(minutes=index * 25 + n + 1),
                            now=reference_now,
                        )
                    )
            except Exception as exc:  # surfaced by the assertion below
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(memory_store.list_clients()) == 200
        appointments = memory_store.list_appointments()
        assert len(appointments) == 200
        assert sorted(a.id for a in appointments) == list(range(1, 201))
