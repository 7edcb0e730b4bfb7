"""
Form-level validation for barbershop input.

Validators collect every problem in a ``ValidationResult`` instead of
stopping at the first one, and put the converted values in
``cleaned_data``. Request DTOs turn a failed result into a single
``ValidationError``.

The service bounds below describe the stored price list record and apply
to caller input only; entity constructors check presence and positivity.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

SERVICE_NAME_MIN_LENGTH = 3
SERVICE_NAME_MAX_LENGTH = 100
SERVICE_MIN_PRICE = Decimal("0.01")
SERVICE_MAX_PRICE = Decimal("1000.00")
SERVICE_DESCRIPTION_MAX_LENGTH = 500
SERVICE_MIN_DURATION = 1
SERVICE_MAX_DURATION = 600
CONTACT_FIELD_MAX_LENGTH = 100


class ValidationError(ValueError):
    """Invalid input; ``field`` names the (first) offending field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


@dataclass
class ValidationResult:
    """Errors, warnings and converted values of one validation run."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    cleaned_data: Dict[str, Any] = field(default_factory=dict)
    error_fields: List[Optional[str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str, field: Optional[str] = None) -> None:
        text = f"{field}: {message}" if field else message
        self.errors.append(text)
        self.error_fields.append(field)
        logger.debug("Validation error", extra={"context": {"error": text}})

    def add_warning(self, message: str, field: Optional[str] = None) -> None:
        self.warnings.append(f"{field}: {message}" if field else message)

    def raise_if_invalid(self) -> None:
        """Raise one ValidationError carrying every collected message."""
        if self.errors:
            raise ValidationError("; ".join(self.errors), self.error_fields[0])


# --- Field parsers ---
# Each returns the converted value, or None after recording an error.
# Empty input (None or "") is not an error here; use ``require`` for that.


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(value: Any, name: str, result: ValidationResult) -> bool:
    if _is_blank(value):
        result.add_error(f"{name} is required", name)
        return False
    return True


def parse_text(
    value: Any,
    name: str,
    result: ValidationResult,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if min_length is not None and len(text) < min_length:
        result.add_error(f"Must have at least {min_length} characters", name)
        return None
    if max_length is not None and len(text) > max_length:
        result.add_error(f"Must have at most {max_length} characters", name)
        return None
    return text or None


def _check_range(number, name, result, minimum, maximum):
    if minimum is not None and number < minimum:
        result.add_error(f"Value must be at least {minimum}", name)
        return None
    if maximum is not None and number > maximum:
        result.add_error(f"Value must be at most {maximum}", name)
        return None
    return number


def _number_text(text: str) -> str:
    """'3,500.00' -> '3500.00' and '35,50' -> '35.50'."""
    text = "".join(text.split())
    if "," in text:
        text = text.replace(",", "") if "." in text else text.replace(",", ".")
    return text


def parse_decimal(
    value: Any,
    name: str,
    result: ValidationResult,
    minimum: Optional[Decimal] = None,
    maximum: Optional[Decimal] = None,
) -> Optional[Decimal]:
    if _is_blank(value):
        return None
    try:
        number = (
            value
            if isinstance(value, Decimal)
            else Decimal(_number_text(value) if isinstance(value, str) else str(value))
        )
    except (InvalidOperation, ValueError):
        number = None
    if number is None or not number.is_finite():
        result.add_error("Invalid value. Use a numeric format", name)
        return None
    return _check_range(number, name, result, minimum, maximum)


def parse_integer(
    value: Any,
    name: str,
    result: ValidationResult,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    if _is_blank(value):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        result.add_error("Value must be an integer", name)
        return None
    return _check_range(number, name, result, minimum, maximum)


def parse_datetime(value: Any, name: str, result: ValidationResult) -> Optional[datetime]:
    """Accept a datetime or an ISO 8601 string; a bare date has no time of day."""
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        result.add_error("A time of day is required", name)
        return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            result.add_error("Invalid date-time. Use format YYYY-MM-DD HH:MM", name)
            return None
    result.add_error("Invalid date-time format", name)
    return None


# --- Validators ---


class BaseValidator:
    """Validates one kind of input dict."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        raise NotImplementedError


class ClientValidator(BaseValidator):
    """Client registration and update data."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if require(data.get("name"), "name", result):
            result.cleaned_data["name"] = parse_text(
                data["name"], "name", result, max_length=CONTACT_FIELD_MAX_LENGTH
            )

        for name in ("phone", "email", "national_id"):
            value = parse_text(
                data.get(name), name, result, max_length=CONTACT_FIELD_MAX_LENGTH
            )
            if value:
                result.cleaned_data[name] = value

        if "@" not in result.cleaned_data.get("email", "@"):
            result.add_error("Invalid email format", "email")

        return result


class ServiceValidator(BaseValidator):
    """Price list entries, checked against the stored-record bounds."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        cleaned = result.cleaned_data

        require(data.get("name"), "name", result)
        require(data.get("price"), "price", result)

        name = parse_text(
            data.get("name"),
            "name",
            result,
            SERVICE_NAME_MIN_LENGTH,
            SERVICE_NAME_MAX_LENGTH,
        )
        price = parse_decimal(
            data.get("price"), "price", result, SERVICE_MIN_PRICE, SERVICE_MAX_PRICE
        )
        description = parse_text(
            data.get("description") or None,
            "description",
            result,
            max_length=SERVICE_DESCRIPTION_MAX_LENGTH,
        )
        duration = parse_integer(
            data.get("duration_minutes"),
            "duration_minutes",
            result,
            SERVICE_MIN_DURATION,
            SERVICE_MAX_DURATION,
        )

        if name:
            cleaned["name"] = name
        if price is not None:
            cleaned["price"] = price
        if description:
            cleaned["description"] = description
        if duration is not None:
            cleaned["duration_minutes"] = duration
        cleaned["is_active"] = bool(data.get("is_active", True))

        return result


class AppointmentRequestValidator(BaseValidator):
    """Booking form data; the booking window is checked by the entity."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        for name in ("client_name", "service_name"):
            if require(data.get(name), name, result):
                result.cleaned_data[name] = parse_text(data[name], name, result)

        if require(data.get("scheduled_at"), "scheduled_at", result):
            scheduled_at = parse_datetime(data["scheduled_at"], "scheduled_at", result)
            if scheduled_at is not None and scheduled_at.tzinfo is not None:
                # compared against a naive local clock
                result.add_error(
                    "Use local time without a UTC offset", "scheduled_at"
                )
            elif scheduled_at is not None:
                result.cleaned_data["scheduled_at"] = scheduled_at

        return result


VALIDATORS = {
    "client": ClientValidator,
    "service": ServiceValidator,
    "appointment": AppointmentRequestValidator,
}


def get_validator(entity_type: str) -> BaseValidator:
    try:
        return VALIDATORS[entity_type.lower()]()
    except KeyError:
        raise ValueError(f"No validator for {entity_type!r}") from None


def validate_client(data: Dict[str, Any]) -> ValidationResult:
    return get_validator("client").validate(data)


def validate_service(data: Dict[str, Any]) -> ValidationResult:
    return get_validator("service").validate(data)


def validate_appointment_request(data: Dict[str, Any]) -> ValidationResult:
    return get_validator("appointment").validate(data)
