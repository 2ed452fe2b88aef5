"""
Clinic Booking Ports

Interfaces (ports) for the booking domain following Clean Architecture.
"""

from app.domains.clinic_booking.application.ports.appointment_repository import IAppointmentRepository
from app.domains.clinic_booking.application.ports.slot_block_repository import ISlotBlockRepository
from app.domains.clinic_booking.application.ports.slot_lock import ISlotLockRegistry

__all__ = [
    "IAppointmentRepository",
    "ISlotBlockRepository",
    "ISlotLockRegistry",
]
