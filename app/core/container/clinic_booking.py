"""
Clinic Booking Domain Container.

Single Responsibility: Wire all booking domain dependencies.
"""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.clinic_booking.application.dto import Clock, local_now
from app.domains.clinic_booking.application.ports import IAppointmentRepository, ISlotBlockRepository
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
from app.domains.clinic_booking.infrastructure.repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemySlotBlockRepository,
)

if TYPE_CHECKING:
    from app.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class ClinicBookingContainer:
    """
    Clinic booking domain container.

    Single Responsibility: Create booking repositories and use cases.
    ``db`` is ignored (and may be None) with the in-memory storage backend.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize clinic booking container.

        Args:
            base: BaseContainer with shared singletons
        """
        self._base = base

    # ==================== REPOSITORIES ====================

    def create_appointment_repository(self, db: AsyncSession | None) -> IAppointmentRepository:
        """Create Appointment Repository."""
        if self._base.uses_memory_storage:
            return self._base.get_memory_appointment_repository()
        return SQLAlchemyAppointmentRepository(session=db)

    def create_slot_block_repository(self, db: AsyncSession | None) -> ISlotBlockRepository:
        """Create Slot Block Repository."""
        if self._base.uses_memory_storage:
            return self._base.get_memory_slot_block_repository()
        return SQLAlchemySlotBlockRepository(session=db)

    # ==================== USE CASES ====================

    def create_book_appointment_use_case(self, db, clock: Clock = local_now) -> BookAppointmentUseCase:
        """Create BookAppointmentUseCase with dependencies."""
        return BookAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            slot_block_repository=self.create_slot_block_repository(db),
            availability_index=self._base.get_availability_index(),
            slot_locks=self._base.get_slot_locks(),
            clock=clock,
        )

    def create_get_available_slots_use_case(self, db, clock: Clock = local_now) -> GetAvailableSlotsUseCase:
        """Create GetAvailableSlotsUseCase with dependencies."""
        return GetAvailableSlotsUseCase(
            appointment_repository=self.create_appointment_repository(db),
            slot_block_repository=self.create_slot_block_repository(db),
            availability_index=self._base.get_availability_index(),
            clock=clock,
        )

    def create_list_appointments_use_case(self, db, clock: Clock = local_now) -> ListAppointmentsUseCase:
        return ListAppointmentsUseCase(self.create_appointment_repository(db), clock=clock)

    def create_get_appointment_use_case(self, db, clock: Clock = local_now) -> GetAppointmentUseCase:
        return GetAppointmentUseCase(self.create_appointment_repository(db), clock=clock)

    def create_update_appointment_status_use_case(self, db) -> UpdateAppointmentStatusUseCase:
        return UpdateAppointmentStatusUseCase(self.create_appointment_repository(db))

    def create_cleanup_missed_appointments_use_case(
        self, db, clock: Clock = local_now
    ) -> CleanupMissedAppointmentsUseCase:
        return CleanupMissedAppointmentsUseCase(self.create_appointment_repository(db), clock=clock)

    def create_export_calendar_event_use_case(self, db) -> ExportCalendarEventUseCase:
        settings = self._base.settings
        return ExportCalendarEventUseCase(
            self.create_appointment_repository(db),
            location=settings.CLINIC_LOCATION,
            duration_hours=settings.APPOINTMENT_DURATION_HOURS,
        )

    def create_block_slot_use_case(self, db) -> BlockSlotUseCase:
        return BlockSlotUseCase(self.create_slot_block_repository(db))

    def create_unblock_slot_use_case(self, db) -> UnblockSlotUseCase:
        return UnblockSlotUseCase(self.create_slot_block_repository(db))

    def create_list_slot_blocks_use_case(self, db) -> ListSlotBlocksUseCase:
        return ListSlotBlocksUseCase(self.create_slot_block_repository(db))

    def create_block_day_use_case(self, db) -> BlockDayUseCase:
        return BlockDayUseCase(self.create_slot_block_repository(db), self._base.get_availability_index())

    def create_unblock_day_use_case(self, db) -> UnblockDayUseCase:
        return UnblockDayUseCase(self.create_slot_block_repository(db))
