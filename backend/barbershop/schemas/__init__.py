"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the caller-facing contracts
and handle validation following SOLID principles.
"""

from .dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    ClientRequest,
    ServiceRequest,
    ServiceResponse,
)

__all__ = [
    # Client DTOs
    "ClientRequest",
    # Service DTOs
    "ServiceRequest",
    "ServiceResponse",
    # Appointment DTOs
    "AppointmentCreateRequest",
    "AppointmentResponse",
]
