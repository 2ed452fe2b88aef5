"""
Calendar Export

Projects an appointment into the semantic fields of an external calendar
event. Rendering to a concrete format lives in the infrastructure layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..entities.appointment import Appointment
from ..value_objects.time_label import add_hours, to_instant

DEFAULT_LOCATION = "Dental Clinic"


@dataclass(frozen=True)
class CalendarEvent:
    """Provider-neutral event description."""

    title: str
    start: datetime
    end: datetime
    description: str
    location: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "description": self.description,
            "location": self.location,
        }


def to_calendar_event(
    appointment: Appointment,
    location: str = DEFAULT_LOCATION,
    duration_hours: int = 1,
) -> CalendarEvent:
    """
    Build the calendar event for an appointment.

    Args:
        appointment: Appointment to export
        location: Event location shown by the calendar
        duration_hours: Fixed appointment length

    Returns:
        CalendarEvent spanning ``duration_hours`` from the slot start

    Raises:
        MalformedTimeLabelException: If the stored time cannot be parsed
    """
    start = to_instant(appointment.appointment_date, appointment.appointment_time)
    treatment = appointment.treatment_type.display_name
    return CalendarEvent(
        title=f"Dental Appointment - {treatment}",
        start=start,
        end=add_hours(start, duration_hours),
        description=f"Appointment with {appointment.doctor_name} for {treatment}",
        location=location,
    )
