"""
Custom exceptions for the barbershop core.
Following SOLID principles - centralized error handling.
"""


class AppointmentDateError(ValueError):
    """
    Base exception for booking-window violations.
    Raised while an Appointment is being constructed; callers are expected
    to re-prompt or re-render the form.
    """

    pass


class PastDateError(AppointmentDateError):
    """Raised when an appointment is requested at or before the reference now."""

    pass


class TooFarAheadError(AppointmentDateError):
    """Raised when an appointment is requested more than 7 days ahead."""

    pass
