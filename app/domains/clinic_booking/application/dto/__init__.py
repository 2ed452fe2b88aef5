"""
Clinic Booking Application DTOs

Data Transfer Objects for the booking use cases.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from app.domains.clinic_booking.domain.entities.appointment import Appointment
from app.domains.clinic_booking.domain.value_objects.appointment_status import DisplayStatus

# Returns the current local instant; injected so tests can freeze time
Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current naive local time with second precision."""
    return datetime.now().replace(microsecond=0)


# ==================== Booking DTOs ====================


@dataclass
class BookAppointmentRequest:
    """Raw booking request; presence and membership are checked by the use case."""

    doctor_name: str | None = None
    treatment_type: str | None = None
    appointment_date: date | None = None
    appointment_time: str | None = None
    patient_id: str | None = None
    notes: str | None = None


# ==================== Appointment DTOs ====================


@dataclass
class AppointmentView:
    """
    Appointment together with its effective status at read time.

    ``integrity_error`` is set instead of ``effective_status`` when the stored
    record cannot be interpreted (e.g. an unparsable time label).
    """

    appointment: Appointment
    effective_status: DisplayStatus | None = None
    integrity_error: str | None = None

    @property
    def display_status(self) -> str | None:
        return self.effective_status.label if self.effective_status else None

    def to_dict(self) -> dict[str, Any]:
        data = self.appointment.to_dict()
        data["effective_status"] = self.effective_status.value if self.effective_status else None
        data["display_status"] = self.display_status
        data["integrity_error"] = self.integrity_error
        return data


@dataclass
class CleanupResult:
    """Outcome of cancelling missed appointments."""

    cancelled: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cancelled)


__all__ = [
    "Clock",
    "local_now",
    "BookAppointmentRequest",
    "AppointmentView",
    "CleanupResult",
]
