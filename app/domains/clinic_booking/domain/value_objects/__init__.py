"""
Clinic Booking Value Objects
"""

from .appointment_status import AppointmentStatus, DisplayStatus, TreatmentType
from .time_label import TimeLabel, add_hours, normalize_label, to_instant
from .time_slot import SlotBlock, SlotKey, TimeSlot

__all__ = [
    "AppointmentStatus",
    "DisplayStatus",
    "TreatmentType",
    "TimeLabel",
    "to_instant",
    "add_hours",
    "normalize_label",
    "SlotKey",
    "TimeSlot",
    "SlotBlock",
]
