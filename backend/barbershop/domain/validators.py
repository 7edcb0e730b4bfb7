"""
Booking-window rule for appointments.

Pure function, no state: the same two inputs always give the same outcome.
"""

from datetime import datetime, timedelta
from typing import Optional

from barbershop.core.exceptions import PastDateError, TooFarAheadError

MAX_DAYS_AHEAD = 7
BOOKING_WINDOW = timedelta(days=MAX_DAYS_AHEAD)


def validate_appointment_datetime(
    scheduled_at: datetime, now: Optional[datetime] = None
) -> None:
    """Check that ``scheduled_at`` falls inside the booking window.

    Args:
        scheduled_at: Requested date and time of the appointment.
        now: Reference instant. When omitted the current wall-clock time is
            used (in ``scheduled_at``'s timezone when it is aware). Tests pass
            a fixed value.

    Raises:
        PastDateError: ``scheduled_at`` is at or before ``now``.
        TooFarAheadError: ``scheduled_at`` is more than 7x24h after ``now``.
    """
    if now is None:
        now = datetime.now(scheduled_at.tzinfo)

    if scheduled_at <= now:
        raise PastDateError("Appointments cannot be booked in the past.")

    if scheduled_at > now + BOOKING_WINDOW:
        raise TooFarAheadError(
            f"Appointments can be booked at most {MAX_DAYS_AHEAD} days in advance."
        )
