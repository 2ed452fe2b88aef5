"""
Clinic Booking Domain Services
"""

from .calendar_export import CalendarEvent, to_calendar_event
from .slot_availability import WEEKDAY_NAMES, OperatingTemplate, SlotAvailabilityIndex
from .status_resolver import effective_status, is_missed

__all__ = [
    "CalendarEvent",
    "to_calendar_event",
    "OperatingTemplate",
    "WEEKDAY_NAMES",
    "SlotAvailabilityIndex",
    "effective_status",
    "is_missed",
]
