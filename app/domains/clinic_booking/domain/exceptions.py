"""
Booking Domain Exceptions

Client-input errors raised while validating and committing a booking.
Every error carries an actionable message that can be shown to the patient.
"""

from typing import Any

from app.core.domain import ConflictException, DomainException


class BookingException(DomainException):
    """Base class for every rejected booking request."""

    user_message: str = "The booking request could not be completed."

    def __init__(self, message: str | None = None, code: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message or self.user_message, code, details)


class MissingFieldException(BookingException):
    """A required request field is absent or blank."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"Please provide '{field}' to book an appointment.",
            "MISSING_FIELD",
            {"field": field},
        )


class UnknownTreatmentException(BookingException):
    """The requested treatment is not offered by the clinic."""

    def __init__(self, treatment_type: str, allowed: list[str]):
        self.treatment_type = treatment_type
        super().__init__(
            f"Unknown treatment '{treatment_type}'. Choose one of: {', '.join(allowed)}.",
            "UNKNOWN_TREATMENT",
            {"treatment_type": treatment_type, "allowed": allowed},
        )


class MalformedTimeLabelException(BookingException):
    """A time label is not of the form 'H:MM AM' / 'H:MM PM'."""

    def __init__(self, label: str | None, reason: str):
        self.label = label
        self.reason = reason
        super().__init__(
            f"Invalid appointment time '{label}': {reason}. Use a time such as '10:00 AM'.",
            "MALFORMED_TIME_LABEL",
            {"label": label, "reason": reason},
        )


class SlotInPastException(BookingException):
    """The requested slot starts before the booking moment."""

    def __init__(self, doctor_name: str, appointment_date: str, appointment_time: str):
        super().__init__(
            "This time has already passed. Please select a future date and time.",
            "SLOT_IN_PAST",
            {
                "doctor_name": doctor_name,
                "appointment_date": appointment_date,
                "appointment_time": appointment_time,
            },
        )


class SlotConflictException(BookingException, ConflictException):
    """The requested slot is taken, blocked, or not part of the schedule."""

    def __init__(self, doctor_name: str, appointment_date: str, appointment_time: str, message: str | None = None):
        self.doctor_name = doctor_name
        self.appointment_date = appointment_date
        self.appointment_time = appointment_time
        super().__init__(
            message or "This slot was just taken. Please select a different time.",
            "SLOT_CONFLICT",
            {
                "doctor_name": doctor_name,
                "appointment_date": appointment_date,
                "appointment_time": appointment_time,
            },
        )
