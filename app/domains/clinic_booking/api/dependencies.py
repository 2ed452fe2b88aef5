"""
Clinic Booking API Dependencies

FastAPI dependencies for the booking domain.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import get_container
from app.database.async_db import get_async_db
from app.domains.clinic_booking.application.dto import Clock, local_now
from app.domains.clinic_booking.application.use_cases import (
    BlockDayUseCase,
    BlockSlotUseCase,
    BookAppointmentUseCase,
    CleanupMissedAppointmentsUseCase,
    ExportCalendarEventUseCase,
    GetAppointmentUseCase,
    GetAvailableSlotsUseCase,
    ListAppointmentsUseCase,
    ListSlotBlocksUseCase,
    UnblockDayUseCase,
    UnblockSlotUseCase,
    UpdateAppointmentStatusUseCase,
)


async def get_optional_db() -> AsyncGenerator[AsyncSession | None, None]:
    """Database session, or None when the in-memory storage backend is active."""
    if get_container().base.uses_memory_storage:
        yield None
        return
    async for session in get_async_db():
        yield session


def get_clock() -> Clock:
    """Source of "now" for booking and status rules (overridden in tests)."""
    return local_now


# Type aliases for shared dependencies
DbSession = Annotated[AsyncSession | None, Depends(get_optional_db)]
ClockDep = Annotated[Clock, Depends(get_clock)]


def get_book_appointment_use_case(db: DbSession, clock: ClockDep) -> BookAppointmentUseCase:
    """Get BookAppointmentUseCase instance with database session."""
    return get_container().clinic_booking.create_book_appointment_use_case(db, clock=clock)


def get_available_slots_use_case(db: DbSession, clock: ClockDep) -> GetAvailableSlotsUseCase:
    """Get GetAvailableSlotsUseCase instance with database session."""
    return get_container().clinic_booking.create_get_available_slots_use_case(db, clock=clock)


def get_list_appointments_use_case(db: DbSession, clock: ClockDep) -> ListAppointmentsUseCase:
    return get_container().clinic_booking.create_list_appointments_use_case(db, clock=clock)


def get_appointment_use_case(db: DbSession, clock: ClockDep) -> GetAppointmentUseCase:
    return get_container().clinic_booking.create_get_appointment_use_case(db, clock=clock)


def get_update_appointment_status_use_case(db: DbSession) -> UpdateAppointmentStatusUseCase:
    return get_container().clinic_booking.create_update_appointment_status_use_case(db)


def get_cleanup_missed_appointments_use_case(db: DbSession, clock: ClockDep) -> CleanupMissedAppointmentsUseCase:
    return get_container().clinic_booking.create_cleanup_missed_appointments_use_case(db, clock=clock)


def get_export_calendar_event_use_case(db: DbSession) -> ExportCalendarEventUseCase:
    return get_container().clinic_booking.create_export_calendar_event_use_case(db)


def get_block_slot_use_case(db: DbSession) -> BlockSlotUseCase:
    return get_container().clinic_booking.create_block_slot_use_case(db)


def get_unblock_slot_use_case(db: DbSession) -> UnblockSlotUseCase:
    return get_container().clinic_booking.create_unblock_slot_use_case(db)


def get_list_slot_blocks_use_case(db: DbSession) -> ListSlotBlocksUseCase:
    return get_container().clinic_booking.create_list_slot_blocks_use_case(db)


def get_block_day_use_case(db: DbSession) -> BlockDayUseCase:
    return get_container().clinic_booking.create_block_day_use_case(db)


def get_unblock_day_use_case(db: DbSession) -> UnblockDayUseCase:
    return get_container().clinic_booking.create_unblock_day_use_case(db)


__all__ = [
    "get_optional_db",
    "get_clock",
    "get_book_appointment_use_case",
    "get_available_slots_use_case",
    "get_list_appointments_use_case",
    "get_appointment_use_case",
    "get_update_appointment_status_use_case",
    "get_cleanup_missed_appointments_use_case",
    "get_export_calendar_event_use_case",
    "get_block_slot_use_case",
    "get_unblock_slot_use_case",
    "get_list_slot_blocks_use_case",
    "get_block_day_use_case",
    "get_unblock_day_use_case",
]
