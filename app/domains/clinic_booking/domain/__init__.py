"""
Clinic Booking Domain Layer

Core business rules for booking clinic appointments.

Components:
- Entities: Appointment (Aggregate Root with status transitions)
- Value Objects: TimeLabel, SlotKey, TimeSlot, SlotBlock, AppointmentStatus, DisplayStatus, TreatmentType
- Domain Services: SlotAvailabilityIndex, effective_status, to_calendar_event
"""

from app.domains.clinic_booking.domain.entities import Appointment
from app.domains.clinic_booking.domain.exceptions import (
    BookingException,
    MalformedTimeLabelException,
    MissingFieldException,
    SlotConflictException,
    SlotInPastException,
    UnknownTreatmentException,
)
from app.domains.clinic_booking.domain.services import (
    CalendarEvent,
    OperatingTemplate,
    SlotAvailabilityIndex,
    effective_status,
    is_missed,
    to_calendar_event,
)
from app.domains.clinic_booking.domain.value_objects import (
    AppointmentStatus,
    DisplayStatus,
    SlotBlock,
    SlotKey,
    TimeLabel,
    TimeSlot,
    TreatmentType,
    add_hours,
    normalize_label,
    to_instant,
)

__all__ = [
    # Entities
    "Appointment",
    # Exceptions
    "BookingException",
    "MissingFieldException",
    "UnknownTreatmentException",
    "MalformedTimeLabelException",
    "SlotInPastException",
    "SlotConflictException",
    # Services
    "CalendarEvent",
    "OperatingTemplate",
    "SlotAvailabilityIndex",
    "effective_status",
    "is_missed",
    "to_calendar_event",
    # Value Objects
    "AppointmentStatus",
    "DisplayStatus",
    "SlotBlock",
    "SlotKey",
    "TimeLabel",
    "TimeSlot",
    "TreatmentType",
    "add_hours",
    "normalize_label",
    "to_instant",
]
