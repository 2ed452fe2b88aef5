"""
Clinic Booking Repository Implementations
"""

from app.domains.clinic_booking.infrastructure.repositories.appointment_repository import (
    SQLAlchemyAppointmentRepository,
)
from app.domains.clinic_booking.infrastructure.repositories.in_memory import (
    InMemoryAppointmentRepository,
    InMemorySlotBlockRepository,
)
from app.domains.clinic_booking.infrastructure.repositories.slot_block_repository import (
    SQLAlchemySlotBlockRepository,
)

__all__ = [
    "SQLAlchemyAppointmentRepository",
    "SQLAlchemySlotBlockRepository",
    "InMemoryAppointmentRepository",
    "InMemorySlotBlockRepository",
]
