"""
Catalog (price list) service following SOLID principles.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional, Union

from barbershop.domain.entities import Service, normalize_key
from barbershop.domain.interfaces import IBarbershopStore
from barbershop.schemas.dtos import ServiceRequest

logger = logging.getLogger(__name__)


class CatalogService:
    """Application service for the service price list.

    Updates are full replacements: a new ``Service`` value is built from the
    request and saved under its name.
    """

    def __init__(self, store: IBarbershopStore) -> None:
        self.store = store

    def _build(self, request: ServiceRequest) -> Service:
        request.validate()
        return Service(
            name=request.name,
            price=request.price,
            description=request.description,
            duration_minutes=request.duration_minutes,
            is_active=request.is_active,
        )

    def add_service(self, request: ServiceRequest) -> Service:
        """Add a service (or replace the one with the same name)."""
        service = self._build(request)
        self.store.save_service(service)
        logger.info(
            "Service saved",
            extra={"context": {"service": service.name, "price": str(service.price)}},
        )
        return service

    def update_service(self, name: str, request: ServiceRequest) -> Optional[Service]:
        """Replace an existing service. Returns None when ``name`` is unknown.

        Raises:
            ValueError: the new name already belongs to another service
        """
        existing = self.store.find_service(name)
        if not existing:
            return None

        service = self._build(request)
        renamed = existing.key != normalize_key(service.name)
        if renamed and self.store.find_service(service.name):
            raise ValueError(f"A service named {service.name!r} already exists")

        if renamed:
            self.store.delete_service(existing.name)
        self.store.save_service(service)
        logger.info(
            "Service updated",
            extra={"context": {"service": service.name, "previous": existing.name}},
        )
        return service

    def update_price(
        self, name: str, price: Union[Decimal, str, int, float]
    ) -> Optional[Service]:
        """Change only the price of a listed service.

        The new price goes through the same checks as a full update; booked
        appointments keep the price they were booked at.
        """
        existing = self.store.find_service(name)
        if not existing:
            return None

        service = self._build(
            ServiceRequest(
                name=existing.name,
                price=price,
                description=existing.description,
                duration_minutes=existing.duration_minutes,
                is_active=existing.is_active,
            )
        )
        self.store.save_service(service)
        logger.info(
            "Service price changed",
            extra={
                "context": {
                    "service": service.name,
                    "previous_price": str(existing.price),
                    "price": str(service.price),
                }
            },
        )
        return service

    def toggle_active(self, name: str) -> Optional[Service]:
        """Flip whether a service is offered. Returns None when unknown."""
        existing = self.store.find_service(name)
        if not existing:
            return None

        service = replace(existing, is_active=not existing.is_active)
        self.store.save_service(service)
        logger.info(
            "Service availability changed",
            extra={"context": {"service": service.name, "is_active": service.is_active}},
        )
        return service

    def get_service(self, name: str) -> Optional[Service]:
        return self.store.find_service(name)

    def list_services(self) -> List[Service]:
        return self.store.list_services()

    def list_active_services(self) -> List[Service]:
        """Services that can be offered to clients."""
        return [s for s in self.store.list_services() if s.is_active]

    def remove_service(self, name: str) -> bool:
        return self.store.delete_service(name)
