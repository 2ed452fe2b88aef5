"""
Clinic Booking Use Cases

Application layer use cases for the booking domain.
"""

from app.domains.clinic_booking.application.use_cases.book_appointment import BookAppointmentUseCase
from app.domains.clinic_booking.application.use_cases.export_calendar_event import ExportCalendarEventUseCase
from app.domains.clinic_booking.application.use_cases.get_available_slots import GetAvailableSlotsUseCase
from app.domains.clinic_booking.application.use_cases.manage_appointments import (
    CleanupMissedAppointmentsUseCase,
    GetAppointmentUseCase,
    ListAppointmentsUseCase,
    UpdateAppointmentStatusUseCase,
    build_view,
)
from app.domains.clinic_booking.application.use_cases.manage_slot_blocks import (
    BlockDayUseCase,
    BlockSlotUseCase,
    ListSlotBlocksUseCase,
    UnblockDayUseCase,
    UnblockSlotUseCase,
)

__all__ = [
    # Booking
    "BookAppointmentUseCase",
    # Availability
    "GetAvailableSlotsUseCase",
    # Appointments
    "ListAppointmentsUseCase",
    "GetAppointmentUseCase",
    "UpdateAppointmentStatusUseCase",
    "CleanupMissedAppointmentsUseCase",
    "build_view",
    # Calendar
    "ExportCalendarEventUseCase",
    # Slot blocks
    "BlockSlotUseCase",
    "UnblockSlotUseCase",
    "ListSlotBlocksUseCase",
    "BlockDayUseCase",
    "UnblockDayUseCase",
]
